"""Simple API for running cloudsched simulations."""

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from cloudsched.config import (
    BASE_EXECUTION_QUANTUM,
    DEFAULT_MAX_STEPS,
    DEFAULT_POLICY,
    DEFAULT_SERVER_COUNT,
    DEFAULT_TIME_STEP,
    DEFAULT_WORKLOADS_DIR,
)
from cloudsched.data_models.result import SimulationResult
from cloudsched.data_models.task import TaskDescriptor
from cloudsched.environment.loader import WorkloadLoader
from cloudsched.environment.scheduler import Scheduler
from cloudsched.runner.simulation import SimulationRunner
from cloudsched.validation.validator import TaskValidator

logger = logging.getLogger("cloudsched.api")


def run_simulation(
    tasks: Iterable[TaskDescriptor | Mapping[str, Any]],
    servers: int = DEFAULT_SERVER_COUNT,
    policy: str = DEFAULT_POLICY,
    base_quantum: float = BASE_EXECUTION_QUANTUM,
    time_step: float = DEFAULT_TIME_STEP,
    max_steps: int = DEFAULT_MAX_STEPS,
    validate: bool = True,
    verbose: bool = False,
    output_path: Optional[str] = None,
) -> SimulationResult:
    """
    Simulate a batch of tasks on a fresh cluster.

    This is the main entry point for running cloudsched without a workload file.

    Args:
        tasks: Task descriptors (TaskDescriptor objects or raw mappings)
        servers: Server pool size (default: 4)
        policy: Placement policy, "round-robin" or "least-loaded"
        base_quantum: Simulated time each task runs once started (default: 5)
        time_step: Simulated time advanced per step (default: 1.0)
        max_steps: Upper bound on steps before giving up (default: 1000)
        validate: Run raw mappings through TaskValidator first (default: True)
        verbose: Log every step report (default: False)
        output_path: Path to save the result JSON, or None to skip saving

    Returns:
        SimulationResult with final metrics, time series and violations

    Example:
        ```python
        from cloudsched import run_simulation

        result = run_simulation(
            [{"name": "etl", "cpu": 60, "ram": 1024}] * 6,
            servers=2,
            policy="least-loaded",
        )
        print(result.metrics.display())
        ```

    Raises:
        ValueError: If a descriptor is invalid or parameters are out of range
    """
    validator = TaskValidator()
    scheduler = Scheduler(server_count=servers, policy=policy, base_quantum=base_quantum)

    for raw in tasks:
        if validate and not isinstance(raw, TaskDescriptor):
            raw = validator.validate_or_raise(raw)
        scheduler.submit(raw)

    runner = SimulationRunner(scheduler, time_step=time_step, max_steps=max_steps)
    result = runner.run(verbose=verbose)

    if output_path is not None:
        save_result(result, output_path)

    return result


def run_workload(
    path: str | Path,
    workloads_dir: str | Path = DEFAULT_WORKLOADS_DIR,
    policy: Optional[str] = None,
    servers: Optional[int] = None,
    max_steps: int = DEFAULT_MAX_STEPS,
    verbose: bool = False,
    output_path: Optional[str] = None,
) -> SimulationResult:
    """
    Load a workload file and simulate it.

    Args:
        path: Workload JSON file (absolute, or relative to workloads_dir)
        workloads_dir: Directory containing workload files
        policy: Override the workload's placement policy
        servers: Override the workload's pool size
        max_steps: Upper bound on steps
        verbose: Log every step report
        output_path: Path to save the result JSON, or None to skip saving

    Returns:
        SimulationResult for the workload
    """
    loader = WorkloadLoader.for_path(path, workloads_dir)
    config = loader.load(path)
    logger.info(f"Loaded workload {path}: {len(config.tasks)} tasks")

    return run_simulation(
        config.descriptors(),
        servers=servers if servers is not None else config.servers,
        policy=policy or config.policy,
        base_quantum=config.base_quantum,
        time_step=config.time_step,
        max_steps=max_steps,
        validate=False,
        verbose=verbose,
        output_path=output_path,
    )


def save_result(result: SimulationResult, output_path: str | Path) -> Path:
    """
    Write a simulation result to JSON.

    Returns:
        The path written
    """
    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, "w") as f:
        f.write(result.model_dump_json(indent=2))
    logger.info(f"Results saved to: {output_file}")
    return output_file
