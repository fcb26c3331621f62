"""Simulation runner for driving a scheduler to completion."""

import logging
import time

from cloudsched.config import DEFAULT_MAX_STEPS, DEFAULT_TIME_STEP
from cloudsched.data_models.result import SimulationResult
from cloudsched.data_models.violation import Violation
from cloudsched.environment.scheduler import Scheduler
from cloudsched.metrics.accumulator import MetricsAccumulator
from cloudsched.validation.checker import ConstraintChecker

logger = logging.getLogger(__name__)


class SimulationRunner:
    """
    Runs a scheduler until all work drains or the step limit is reached.

    Orchestrates the interaction between:
    - Scheduler (environment)
    - MetricsAccumulator (records the time series)
    - ConstraintChecker (checks invariants after every step)
    """

    def __init__(
        self,
        scheduler: Scheduler,
        time_step: float = DEFAULT_TIME_STEP,
        max_steps: int = DEFAULT_MAX_STEPS,
        check_invariants: bool = True,
    ):
        """
        Initialize simulation runner.

        Args:
            scheduler: Scheduler with tasks already submitted
            time_step: Simulated time advanced per step
            max_steps: Upper bound on the number of steps
            check_invariants: If True, run the ConstraintChecker after each step
        """
        if time_step <= 0:
            raise ValueError(f"time_step must be positive, got {time_step}")
        if max_steps < 0:
            raise ValueError(f"max_steps cannot be negative, got {max_steps}")

        self.scheduler = scheduler
        self.time_step = float(time_step)
        self.max_steps = max_steps
        self.check_invariants = check_invariants

        self.metrics = MetricsAccumulator()
        self.checker = ConstraintChecker()
        self.violations: list[Violation] = []

    def run(self, verbose: bool = False) -> SimulationResult:
        """
        Run the simulation.

        Args:
            verbose: If True, log every step report at INFO level

        Returns:
            SimulationResult with final metrics, samples and violations
        """
        start_time = time.time()
        scheduler = self.scheduler

        logger.info(
            f"Starting simulation: {len(scheduler.servers)} servers, "
            f"policy={scheduler.policy}, {len(scheduler.pending)} pending tasks"
        )

        steps = 0
        while steps < self.max_steps and not scheduler.is_drained:
            report = scheduler.step(self.time_step)
            steps += 1

            self.metrics.record_step(scheduler, report)

            if self.check_invariants:
                step_violations = self.checker.check(scheduler)
                for violation in step_violations:
                    logger.error(f"Invariant violated: {violation}")
                self.violations.extend(step_violations)

            if verbose:
                logger.info(str(report))

            if any(d.type == "pool_empty" for d in report.diagnostics):
                logger.warning(
                    f"No servers available; {len(scheduler.pending)} tasks cannot be admitted"
                )
                break

        drained = scheduler.is_drained
        if not drained and steps >= self.max_steps:
            logger.warning(f"Step limit {self.max_steps} reached before the cluster drained")

        metrics = scheduler.metrics()
        logger.info(f"Simulation finished after {steps} steps: {metrics}")

        return SimulationResult(
            policy=scheduler.policy,
            server_count=len(scheduler.servers),
            steps=steps,
            drained=drained,
            metrics=metrics,
            summary=self.metrics.finalize(),
            samples=list(self.metrics.samples),
            servers=scheduler.server_snapshots(),
            completed=scheduler.completed_tasks(),
            violations=list(self.violations),
            execution_time=time.time() - start_time,
        )
