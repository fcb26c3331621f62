"""Placement policies and server load functions.

Policies are plain functions over the server pool. Each returns the server
that should receive the next admitted task, or None when the pool is empty.
"""

from typing import Callable, Literal, Sequence

from cloudsched.config import DANGER_LOAD_THRESHOLD, WARNING_LOAD_THRESHOLD
from cloudsched.data_models.server import Server, ServerStatus

PolicyName = Literal["round-robin", "least-loaded"]
PolicyFn = Callable[[Sequence[Server]], Server | None]


def server_load(server: Server) -> float:
    """Mean of the CPU and memory usage fractions, in [0, 1]."""
    return (server.cpu_usage / 100 + server.ram_usage / 100) / 2


def server_status(server: Server) -> ServerStatus:
    load = server_load(server)
    if load > DANGER_LOAD_THRESHOLD:
        return "danger"
    if load > WARNING_LOAD_THRESHOLD:
        return "warning"
    return "normal"


def select_round_robin(servers: Sequence[Server]) -> Server | None:
    """
    Round-robin placement.

    Prefer the first fully idle server (empty slot and empty backlog).
    Otherwise pick the server with the shortest backlog; ties go to the
    earliest server in pool order.
    """
    if not servers:
        return None
    for server in servers:
        if server.is_idle:
            return server
    # min() keeps the first of equal keys
    return min(servers, key=lambda s: len(s.backlog))


def select_least_loaded(servers: Sequence[Server]) -> Server | None:
    """Pick the server with the lowest load; ties go to pool order."""
    if not servers:
        return None
    return min(servers, key=server_load)


POLICIES: dict[str, PolicyFn] = {
    "round-robin": select_round_robin,
    "least-loaded": select_least_loaded,
}


def list_policies() -> list[str]:
    """Return names of all available placement policies."""
    return list(POLICIES)


def get_policy(name: str) -> PolicyFn:
    """
    Look up a placement policy by name.

    Raises:
        ValueError: If the policy is unknown
    """
    try:
        return POLICIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown placement policy: '{name}'. "
            f"Available policies: {', '.join(POLICIES)}"
        ) from None
