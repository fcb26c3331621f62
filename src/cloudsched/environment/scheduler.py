"""Scheduler - core cluster scheduling engine for cloudsched."""

import logging
from collections import deque
from typing import Any, Iterable, Mapping

from cloudsched.config import (
    BASE_EXECUTION_QUANTUM,
    DEFAULT_POLICY,
    DEFAULT_SERVER_COUNT,
    SERVER_MEMORY_CAPACITY_MB,
)
from cloudsched.data_models.result import Metrics, StepReport
from cloudsched.data_models.server import Server, ServerSnapshot
from cloudsched.data_models.task import Task, TaskDescriptor
from cloudsched.data_models.violation import Diagnostic
from cloudsched.environment.policies import get_policy, server_load, server_status
from cloudsched.metrics.aggregate import compute_metrics

logger = logging.getLogger(__name__)


class Scheduler:
    """
    Discrete-time scheduler for a pool of servers.

    Owns every piece of mutable simulation state: the task arena, the pending
    admission queue, the server pool, the completed history and the clock.
    Collections hold task IDs; ``self.tasks`` is the only place Task records
    live. At any time each submitted task is in exactly one of: the pending
    queue, a server's running slot, a server's backlog, or the completed history.
    """

    def __init__(
        self,
        server_count: int = DEFAULT_SERVER_COUNT,
        policy: str = DEFAULT_POLICY,
        base_quantum: float = BASE_EXECUTION_QUANTUM,
    ) -> None:
        """
        Initialize the scheduler with an idle server pool.

        Args:
            server_count: Number of servers in the pool
            policy: Placement policy name ("round-robin" or "least-loaded")
            base_quantum: Simulated time a task runs once started

        Raises:
            ValueError: If any argument is out of range or the policy is unknown
        """
        if base_quantum <= 0:
            raise ValueError(f"base_quantum must be positive, got {base_quantum}")
        get_policy(policy)

        self.policy = policy
        self.base_quantum = float(base_quantum)

        # State variables
        self.current_time = 0.0
        self.task_counter = 0
        self.tasks: dict[int, Task] = {}
        self.servers: list[Server] = []

        # Admission queue (FIFO by submission) and completion history
        self.pending: deque[int] = deque()
        self.completed: list[int] = []

        self.init_servers(server_count)

    def init_servers(self, count: int) -> None:
        """
        Replace the server pool with ``count`` idle servers.

        Tasks already placed on the old pool are not migrated; call this
        only on a fresh or reset scheduler.
        """
        if count < 0:
            raise ValueError(f"server count cannot be negative, got {count}")
        self.servers = [Server.create(i) for i in range(count)]

    def set_policy(self, policy: str) -> None:
        """Switch the placement policy. Takes effect on the next step."""
        get_policy(policy)
        if policy != self.policy:
            logger.info(f"Placement policy changed: {self.policy} -> {policy}")
        self.policy = policy

    def submit(self, descriptor: TaskDescriptor | Mapping[str, Any]) -> Task:
        """
        Submit a task for admission.

        Ranges are not validated here; missing or unparseable numeric
        fields fall back to defaults.

        Args:
            descriptor: TaskDescriptor or a mapping with descriptor fields

        Returns:
            The new pending task
        """
        if not isinstance(descriptor, TaskDescriptor):
            descriptor = TaskDescriptor.model_validate(dict(descriptor))

        task = Task.from_descriptor(self.task_counter, descriptor)
        self.task_counter += 1

        self.tasks[task.id] = task
        self.pending.append(task.id)
        return task

    def submit_many(self, descriptors: Iterable[TaskDescriptor | Mapping[str, Any]]) -> list[Task]:
        return [self.submit(d) for d in descriptors]

    def step(self, delta_time: float) -> StepReport:
        """
        Advance simulated time by one step.

        Process flow:
        1. Advance the clock
        2. Admit eligible pending tasks per the active policy
        3. Run every occupied server for delta_time (pool order); usage
           mirrors the running task, CPU clamped to 0-100 and memory as a
           percentage of SERVER_MEMORY_CAPACITY_MB capped at 100
        4. Complete finished tasks and promote backlog heads

        Args:
            delta_time: Simulated time to advance (must be positive)

        Returns:
            StepReport describing admissions, completions and diagnostics
        """
        if not delta_time > 0:
            raise ValueError(f"delta_time must be positive, got {delta_time}")

        self.current_time += delta_time
        report = StepReport(time=self.current_time)

        self._admit(report)

        for server in self.servers:
            if server.running_task is None:
                continue

            task = self.tasks[server.running_task]
            task.remaining_time -= delta_time
            server.cpu_usage = float(min(max(task.cpu, 0), 100))
            server.ram_usage = min(max(task.ram, 0) / SERVER_MEMORY_CAPACITY_MB * 100, 100.0)

            if task.remaining_time <= 0:
                self._complete(server, task, report)

        return report

    def _admit(self, report: StepReport) -> None:
        """
        Place pending tasks on servers, head of queue first.

        Admission stops at the first task that has not arrived yet (the
        queue is never reordered) or when the policy finds no server.
        """
        select = get_policy(self.policy)

        while self.pending:
            task = self.tasks[self.pending[0]]

            if task.arrival_time > self.current_time:
                report.diagnostics.append(Diagnostic(
                    time=self.current_time,
                    type="arrival_blocked",
                    details={
                        "task_id": task.id,
                        "arrival_time": task.arrival_time,
                        "blocked": len(self.pending),
                    }
                ))
                logger.debug(f"Admission blocked at t={self.current_time:g} by task {task.id}")
                break

            server = select(self.servers)
            if server is None:
                report.diagnostics.append(Diagnostic(
                    time=self.current_time,
                    type="pool_empty",
                    details={"blocked": len(self.pending)}
                ))
                logger.debug(f"Admission stalled at t={self.current_time:g}: no servers")
                break

            self.pending.popleft()

            if server.running_task is None:
                task.mark_running(self.current_time, self.base_quantum)
                server.running_task = task.id
                report.admitted.append(task.id)
                logger.debug(f"Task {task.id} running on {server.name}")
            else:
                task.mark_queued()
                server.backlog.append(task.id)
                report.queued.append(task.id)
                logger.debug(f"Task {task.id} queued on {server.name}")

    def _complete(self, server: Server, task: Task, report: StepReport) -> None:
        """Finish the running task on a server and pull the next one from its backlog."""
        task.mark_completed(self.current_time)
        self.completed.append(task.id)
        report.completed.append(task.id)

        server.total_processed += 1
        server.running_task = None
        server.cpu_usage = 0.0
        server.ram_usage = 0.0
        logger.debug(f"Task {task.id} completed on {server.name} at t={self.current_time:g}")

        if server.backlog:
            next_id = server.backlog.pop(0)
            # Promoted tasks start exactly like directly admitted ones
            self.tasks[next_id].mark_running(self.current_time, self.base_quantum)
            server.running_task = next_id
            report.promoted.append(next_id)

    def reset(self, server_count: int | None = None) -> None:
        """
        Clear all simulation state.

        The task-id counter is kept so IDs stay unique across resets.

        Args:
            server_count: If given, rebuild the pool with this many servers;
                otherwise keep the existing servers and clear them
        """
        self.current_time = 0.0
        self.tasks.clear()
        self.pending.clear()
        self.completed.clear()

        if server_count is not None:
            self.init_servers(server_count)
        else:
            for server in self.servers:
                server.reset()

    def metrics(self) -> Metrics:
        """Compute aggregate metrics for the current state."""
        return compute_metrics(
            (self.tasks[uid] for uid in self.completed),
            total_submitted=len(self.tasks),
            pending_count=len(self.pending),
            current_time=self.current_time,
        )

    def server_snapshots(self) -> list[ServerSnapshot]:
        return [
            ServerSnapshot(
                id=server.id,
                name=server.name,
                status=server_status(server),
                load=server_load(server),
                cpu_usage=server.cpu_usage,
                ram_usage=server.ram_usage,
                running_task=server.running_task,
                backlog_size=len(server.backlog),
                total_processed=server.total_processed,
            )
            for server in self.servers
        ]

    def pending_tasks(self) -> list[Task]:
        """Copies of the pending tasks in admission order."""
        return [self.tasks[uid].model_copy() for uid in self.pending]

    def completed_tasks(self) -> list[Task]:
        """Copies of the completed tasks in completion order."""
        return [self.tasks[uid].model_copy() for uid in self.completed]

    @property
    def queued_count(self) -> int:
        return sum(len(server.backlog) for server in self.servers)

    @property
    def running_count(self) -> int:
        return sum(1 for server in self.servers if server.running_task is not None)

    @property
    def is_drained(self) -> bool:
        """True when no task is pending, queued or running."""
        return not self.pending and all(server.is_idle for server in self.servers)

    def get_state_summary(self) -> dict[str, int | float]:
        """
        Get a summary of current state counts.

        Returns:
            Dictionary with counts of tasks in each collection
        """
        return {
            "time": self.current_time,
            "servers": len(self.servers),
            "pending": len(self.pending),
            "queued": self.queued_count,
            "running": self.running_count,
            "completed": len(self.completed),
            "total_tasks": len(self.tasks),
        }
