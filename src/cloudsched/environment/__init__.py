"""cloudsched scheduling environment.

The core cluster scheduler, its placement policies, and workload loading utilities.
"""

from cloudsched.environment.scheduler import Scheduler
from cloudsched.environment.policies import (
    POLICIES,
    get_policy,
    list_policies,
    select_least_loaded,
    select_round_robin,
    server_load,
    server_status,
)
from cloudsched.environment.loader import WorkloadConfig, WorkloadLoader

__all__ = [
    "Scheduler",
    "POLICIES",
    "get_policy",
    "list_policies",
    "select_least_loaded",
    "select_round_robin",
    "server_load",
    "server_status",
    "WorkloadConfig",
    "WorkloadLoader",
]
