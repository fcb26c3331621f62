"""Tests for server load functions and placement policies."""

import pytest

from cloudsched.data_models.server import Server
from cloudsched.environment.policies import (
    get_policy,
    list_policies,
    select_least_loaded,
    select_round_robin,
    server_load,
    server_status,
)


@pytest.fixture
def pool():
    """Three idle servers."""
    return [Server.create(i) for i in range(3)]


def test_server_create():
    """Test server identity and idle defaults."""
    server = Server.create(2)
    assert server.id == 2
    assert server.name == "Server 2"
    assert server.running_task is None
    assert server.backlog == []
    assert server.is_idle


def test_server_reset_keeps_identity():
    """Test reset clears runtime state but keeps id and name."""
    server = Server.create(1)
    server.running_task = 4
    server.backlog.extend([5, 6])
    server.cpu_usage = 70
    server.ram_usage = 20
    server.total_processed = 3

    server.reset()

    assert server.id == 1
    assert server.name == "Server 1"
    assert server.is_idle
    assert server.cpu_usage == 0
    assert server.ram_usage == 0
    assert server.total_processed == 0


@pytest.mark.parametrize(
    "cpu, ram, load, status",
    [
        (0, 0, 0.0, "normal"),
        (50, 50, 0.5, "normal"),
        (60, 50, 0.55, "warning"),
        (80, 80, 0.8, "warning"),
        (90, 90, 0.9, "danger"),
        (100, 100, 1.0, "danger"),
    ],
)
def test_server_load_and_status(cpu, ram, load, status):
    """Test load is the mean usage fraction and status thresholds are strict."""
    server = Server.create(0)
    server.cpu_usage = cpu
    server.ram_usage = ram
    assert server_load(server) == pytest.approx(load)
    assert server_status(server) == status


def test_round_robin_prefers_first_idle(pool):
    """Test round-robin picks the first fully idle server."""
    pool[0].running_task = 1
    assert select_round_robin(pool) is pool[1]


def test_round_robin_ignores_server_with_backlog(pool):
    """Test a server with an empty slot but a backlog is not idle."""
    pool[0].running_task = 1
    pool[1].backlog.append(2)
    assert select_round_robin(pool) is pool[2]


def test_round_robin_falls_back_to_shortest_backlog(pool):
    """Test fallback to shortest backlog when no server is idle."""
    for i, server in enumerate(pool):
        server.running_task = i
    pool[0].backlog.extend([10, 11])
    pool[1].backlog.append(12)
    pool[2].backlog.append(13)
    assert select_round_robin(pool) is pool[1]


def test_round_robin_tie_breaks_by_pool_order(pool):
    """Test equal backlogs resolve to the first server."""
    for i, server in enumerate(pool):
        server.running_task = i
    assert select_round_robin(pool) is pool[0]


def test_least_loaded_picks_minimum(pool):
    """Test least-loaded picks the server with the lowest load."""
    pool[0].cpu_usage, pool[0].ram_usage = 90, 90
    pool[1].cpu_usage, pool[1].ram_usage = 10, 10
    pool[2].cpu_usage, pool[2].ram_usage = 40, 40
    assert select_least_loaded(pool) is pool[1]


def test_least_loaded_tie_breaks_by_pool_order(pool):
    """Test equal loads resolve to the first server."""
    pool[0].cpu_usage = 30
    pool[1].ram_usage = 10
    pool[2].ram_usage = 10
    assert select_least_loaded(pool) is pool[1]


def test_policies_return_none_for_empty_pool():
    """Test that no server is selected from an empty pool."""
    assert select_round_robin([]) is None
    assert select_least_loaded([]) is None


def test_get_policy():
    """Test policy lookup by name."""
    assert get_policy("round-robin") is select_round_robin
    assert get_policy("least-loaded") is select_least_loaded
    assert list_policies() == ["round-robin", "least-loaded"]


def test_get_policy_unknown():
    """Test that an unknown policy name raises."""
    with pytest.raises(ValueError, match="Unknown placement policy"):
        get_policy("random")
