"""Tests for report formatting."""

import json

import pytest

from cloudsched.environment.scheduler import Scheduler
from cloudsched.io.formatter import ReportFormatter
from cloudsched.runner import SimulationRunner


@pytest.fixture
def formatter():
    """Create formatter instance."""
    return ReportFormatter()


@pytest.fixture
def finished():
    """Scheduler after a complete two-server run."""
    scheduler = Scheduler(server_count=2)
    for i in range(3):
        scheduler.submit({"name": f"job{i}", "priority": 2, "category": "network"})
    for _ in range(10):
        scheduler.step(1.0)
    return scheduler


def test_format_basic(formatter, finished):
    """Test text report sections."""
    text = formatter.format(finished.metrics(), finished.server_snapshots(), policy="round-robin")

    assert "CLUSTER STATUS - t=10 (policy: round-robin)" in text
    assert "METRICS:" in text
    assert "Avg wait:       2.33" in text
    assert "Throughput:     0.30 tasks/unit" in text
    assert "SERVERS (2):" in text
    assert "Server 0" in text
    assert "[NORMAL ]" in text
    assert "COMPLETED TASKS" not in text


def test_format_timeline(formatter, finished):
    """Test completed tasks are listed in completion order."""
    text = formatter.format(
        finished.metrics(), finished.server_snapshots(), completed=finished.completed_tasks()
    )
    assert "COMPLETED TASKS (3):" in text
    assert "#2 job2 [P2 network] arrived 0, started 5, finished 10" in text


def test_format_no_servers(formatter):
    """Test an empty pool is reported."""
    scheduler = Scheduler(server_count=0)
    text = formatter.format(scheduler.metrics(), scheduler.server_snapshots())
    assert "SERVERS: none" in text
    assert "Avg wait:       0.00" in text


def test_format_compact(formatter, finished):
    """Test JSON snapshot format."""
    data = json.loads(formatter.format_compact(finished.metrics(), finished.server_snapshots()))

    assert data["time"] == 10.0
    assert data["metrics"]["throughput"] == "0.30"
    assert len(data["servers"]) == 2
    assert data["servers"][0]["processed"] == 2
    assert data["servers"][1]["running"] is None


def test_format_result(formatter):
    """Test run summary lines."""
    scheduler = Scheduler(server_count=1)
    scheduler.submit({"name": "a"})
    result = SimulationRunner(scheduler).run()

    text = formatter.format_result(result)
    assert text.startswith("DRAINED after 5 steps")
    assert "SimulationSummary(steps=5" in text
