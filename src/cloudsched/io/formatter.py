"""Report formatter for converting simulation state to readable text."""

import json

from cloudsched.data_models.result import Metrics, SimulationResult
from cloudsched.data_models.server import ServerSnapshot
from cloudsched.data_models.task import Task


class ReportFormatter:
    """
    Converts metrics, server snapshots and results to human-readable text.

    Format includes:
    - Clock and placement policy
    - Aggregate metrics (two-decimal averages)
    - One line per server with status and usage
    - Optional completed-task timeline
    """

    def format(
        self,
        metrics: Metrics,
        servers: list[ServerSnapshot],
        policy: str | None = None,
        completed: list[Task] | None = None,
    ) -> str:
        """
        Convert a scheduler snapshot to formatted text.

        Args:
            metrics: Metrics snapshot
            servers: Per-server snapshots
            policy: Active placement policy, if known
            completed: Completed tasks to list as a timeline

        Returns:
            Human-readable string representation
        """
        lines = []
        shown = metrics.display()

        # Header
        lines.append("=" * 70)
        header = f"CLUSTER STATUS - t={metrics.current_time:g}"
        if policy:
            header += f" (policy: {policy})"
        lines.append(header)
        lines.append("=" * 70)
        lines.append("")

        # Metrics
        lines.append("METRICS:")
        lines.append(f"  Submitted:      {shown['total_submitted']}")
        lines.append(f"  Completed:      {shown['total_completed']}")
        lines.append(f"  Pending:        {shown['pending_count']}")
        lines.append(f"  Avg wait:       {shown['avg_wait_time']}")
        lines.append(f"  Avg turnaround: {shown['avg_turnaround_time']}")
        lines.append(f"  Throughput:     {shown['throughput']} tasks/unit")
        lines.append("")

        # Servers
        if servers:
            lines.append(f"SERVERS ({len(servers)}):")
            for server in servers:
                running = "-" if server.running_task is None else f"#{server.running_task}"
                lines.append(
                    f"  {server.name:<10} [{server.status.upper():<7}] "
                    f"load {server.load:.2f}  cpu {server.cpu_usage:5.1f}%  "
                    f"ram {server.ram_usage:5.1f}%  running {running:<5} "
                    f"backlog {server.backlog_size}  done {server.total_processed}"
                )
        else:
            lines.append("SERVERS: none")
        lines.append("")

        # Timeline
        if completed:
            lines.append(f"COMPLETED TASKS ({len(completed)}):")
            for task in completed:
                lines.append(
                    f"  #{task.id} {task.name} [P{task.priority} {task.category}] "
                    f"arrived {task.arrival_time:g}, started {task.start_time:g}, "
                    f"finished {task.end_time:g}"
                )
            lines.append("")

        lines.append("=" * 70)

        return "\n".join(lines)

    def format_result(self, result: SimulationResult) -> str:
        """Summarize a finished simulation run."""
        lines = [str(result), str(result.summary)]
        for violation in result.violations:
            lines.append(f"  ! {violation}")
        return "\n".join(lines)

    def format_compact(self, metrics: Metrics, servers: list[ServerSnapshot]) -> str:
        """
        Format a snapshot as JSON.

        Args:
            metrics: Metrics snapshot
            servers: Per-server snapshots

        Returns:
            JSON string representation
        """
        return json.dumps({
            "metrics": metrics.display(),
            "time": metrics.current_time,
            "servers": [
                {
                    "id": s.id,
                    "name": s.name,
                    "status": s.status,
                    "load": round(s.load, 2),
                    "cpu": round(s.cpu_usage, 2),
                    "ram": round(s.ram_usage, 2),
                    "running": s.running_task,
                    "backlog": s.backlog_size,
                    "processed": s.total_processed,
                } for s in servers
            ]
        }, indent=2)
