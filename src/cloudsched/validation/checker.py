"""Invariant checker for scheduler state."""

from typing import TYPE_CHECKING

from cloudsched.data_models.violation import Violation

if TYPE_CHECKING:
    from cloudsched.environment.scheduler import Scheduler

_STATUS_RANK = {"pending": 0, "queued": 1, "running": 2, "completed": 3}


class ConstraintChecker:
    """
    Checks invariants that must hold for any scheduler state.

    Invariants:
    1. Partition - every task is in exactly one of pending queue, a running
       slot, a backlog, or the completed history
    2. Duplicate running - no task occupies two running slots
    3. Running in backlog - a backlog never contains its server's running task
    4. Status mismatch - a task's status matches the collection holding it
    5. Status regression - status never moves backwards between checks

    The checker remembers the last status it saw for every task, so use one
    instance per scheduler.
    """

    def __init__(self) -> None:
        self._last_status: dict[int, str] = {}

    def check(self, scheduler: "Scheduler") -> list[Violation]:
        """
        Check all invariants against the scheduler's current state.

        Args:
            scheduler: Scheduler to inspect

        Returns:
            List of violations (empty if all invariants hold)
        """
        violations = []
        now = scheduler.current_time

        locations: dict[int, list[str]] = {}
        for uid in scheduler.pending:
            locations.setdefault(uid, []).append("pending")
        for uid in scheduler.completed:
            locations.setdefault(uid, []).append("completed")
        for server in scheduler.servers:
            if server.running_task is not None:
                locations.setdefault(server.running_task, []).append(f"running@{server.id}")
            for uid in server.backlog:
                locations.setdefault(uid, []).append(f"backlog@{server.id}")

        violations.extend(self._check_partition(scheduler, locations, now))
        violations.extend(self._check_servers(scheduler, now))
        violations.extend(self._check_statuses(scheduler, locations, now))
        violations.extend(self._check_regressions(scheduler, now))

        return violations

    def _check_partition(
        self,
        scheduler: "Scheduler",
        locations: dict[int, list[str]],
        now: float
    ) -> list[Violation]:
        """Every arena task must appear exactly once, and nothing else may appear."""
        violations = []

        for uid in scheduler.tasks:
            places = locations.get(uid, [])
            if len(places) != 1:
                violations.append(Violation(
                    time=now,
                    type="partition",
                    details={"task_id": uid, "locations": places}
                ))

        for uid, places in locations.items():
            if uid not in scheduler.tasks:
                violations.append(Violation(
                    time=now,
                    type="partition",
                    details={"task_id": uid, "locations": places, "reason": "unknown_task"}
                ))

        return violations

    def _check_servers(self, scheduler: "Scheduler", now: float) -> list[Violation]:
        violations = []
        seen_running: dict[int, int] = {}

        for server in scheduler.servers:
            uid = server.running_task
            if uid is None:
                continue

            if uid in seen_running:
                violations.append(Violation(
                    time=now,
                    type="duplicate_running",
                    details={"task_id": uid, "servers": [seen_running[uid], server.id]}
                ))
            seen_running[uid] = server.id

            if uid in server.backlog:
                violations.append(Violation(
                    time=now,
                    type="running_in_backlog",
                    details={"task_id": uid, "server_id": server.id}
                ))

        return violations

    def _check_statuses(
        self,
        scheduler: "Scheduler",
        locations: dict[int, list[str]],
        now: float
    ) -> list[Violation]:
        violations = []

        for uid, places in locations.items():
            task = scheduler.tasks.get(uid)
            if task is None or len(places) != 1:
                continue

            expected = places[0].split("@")[0]
            if expected == "backlog":
                expected = "queued"
            if task.status != expected:
                violations.append(Violation(
                    time=now,
                    type="status_mismatch",
                    details={"task_id": uid, "status": task.status, "expected": expected}
                ))

        return violations

    def _check_regressions(self, scheduler: "Scheduler", now: float) -> list[Violation]:
        violations = []

        for uid, task in scheduler.tasks.items():
            previous = self._last_status.get(uid)
            if previous is not None and _STATUS_RANK[task.status] < _STATUS_RANK[previous]:
                violations.append(Violation(
                    time=now,
                    type="status_regression",
                    details={"task_id": uid, "from": previous, "to": task.status}
                ))
            self._last_status[uid] = task.status

        return violations
