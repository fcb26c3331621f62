"""Server data models for cloudsched."""

from typing import Literal

from pydantic import BaseModel, Field

ServerStatus = Literal["normal", "warning", "danger"]


class Server(BaseModel):
    """
    Execution unit in the cluster.

    Holds at most one running task and a FIFO backlog of admitted tasks.
    Both refer to tasks by id; the Scheduler's task arena owns the Task records.
    """

    id: int = Field(ge=0, description="Position of the server in the pool")
    name: str = Field(description="Display name")
    running_task: int | None = Field(default=None, description="ID of the running task")
    backlog: list[int] = Field(default_factory=list, description="IDs of waiting tasks (FIFO)")
    cpu_usage: float = Field(default=0.0, ge=0, le=100, description="CPU usage percent")
    ram_usage: float = Field(default=0.0, ge=0, le=100, description="Memory usage percent")
    total_processed: int = Field(default=0, ge=0, description="Tasks completed on this server")

    @classmethod
    def create(cls, server_id: int) -> "Server":
        return cls(id=server_id, name=f"Server {server_id}")

    @property
    def is_idle(self) -> bool:
        """True when nothing is running and nothing is waiting."""
        return self.running_task is None and not self.backlog

    def reset(self) -> None:
        """Clear runtime state but keep identity."""
        self.running_task = None
        self.backlog.clear()
        self.cpu_usage = 0.0
        self.ram_usage = 0.0
        self.total_processed = 0

    def __str__(self) -> str:
        """Human-readable string representation."""
        running = "idle" if self.running_task is None else f"task {self.running_task}"
        return f"{self.name}({running}, backlog={len(self.backlog)})"


class ServerSnapshot(BaseModel):
    """Read-only per-server status used for reporting."""

    id: int = Field(ge=0, description="Server identifier")
    name: str = Field(description="Display name")
    status: ServerStatus = Field(description="Load category")
    load: float = Field(ge=0, le=1, description="Mean of CPU and memory usage fractions")
    cpu_usage: float = Field(ge=0, le=100, description="CPU usage percent")
    ram_usage: float = Field(ge=0, le=100, description="Memory usage percent")
    running_task: int | None = Field(default=None, description="ID of the running task")
    backlog_size: int = Field(ge=0, description="Number of tasks waiting on this server")
    total_processed: int = Field(ge=0, description="Tasks completed on this server")

    def __str__(self) -> str:
        """Human-readable string representation."""
        return (
            f"{self.name} [{self.status.upper()}] load={self.load:.2f} "
            f"cpu={self.cpu_usage:.0f}% ram={self.ram_usage:.0f}% "
            f"backlog={self.backlog_size} done={self.total_processed}"
        )
