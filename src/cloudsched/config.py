"""cloudsched configuration constants.

This module contains all configuration defaults and constants used throughout cloudsched.
Users can override the pool size, policy and quantum by passing parameters to the
Scheduler or the API functions.
"""

# Simulation core
BASE_EXECUTION_QUANTUM = 5.0
"""Simulated time a task occupies a server's running slot once started."""

SERVER_MEMORY_CAPACITY_MB = 4096
"""Fixed memory capacity of every server, used to derive memory usage."""

DEFAULT_SERVER_COUNT = 4
"""Number of servers created when no pool size is given."""

DEFAULT_POLICY = "round-robin"
"""Placement policy active on a freshly constructed scheduler."""

# Server status thresholds
DANGER_LOAD_THRESHOLD = 0.8
"""Load above which a server is reported as 'danger'."""

WARNING_LOAD_THRESHOLD = 0.5
"""Load above which a server is reported as 'warning'."""

# Task descriptor defaults (used when a numeric field is missing or unparseable)
DEFAULT_PRIORITY = 1
DEFAULT_CPU = 50
DEFAULT_RAM = 512
DEFAULT_ARRIVAL_TIME = 0.0
DEFAULT_DEADLINE = 10.0
DEFAULT_CATEGORY = "compute"

# Validation limits for task descriptors
MIN_PRIORITY = 1
MAX_PRIORITY = 4
MIN_CPU = 1
MAX_CPU = 100
MIN_RAM = 100
MAX_RAM = SERVER_MEMORY_CAPACITY_MB

# Runner settings
DEFAULT_TIME_STEP = 1.0
"""Default simulated time advanced per step by the runner and CLI."""

DEFAULT_MAX_STEPS = 1000
"""Upper bound on steps a runner will take before giving up on draining."""

DEFAULT_WORKLOADS_DIR = "workloads"
"""Default directory containing workload JSON files."""
