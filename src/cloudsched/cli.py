"""Command-line interface for cloudsched."""

import argparse
import logging
import sys
from typing import Optional, Sequence

from cloudsched.config import DEFAULT_MAX_STEPS, DEFAULT_WORKLOADS_DIR

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger("cloudsched.cli")


def cmd_run(args):
    """Simulate a workload file and print the report."""
    from cloudsched.api import run_workload
    from cloudsched.io.formatter import ReportFormatter

    if args.verbose:
        logging.getLogger("cloudsched").setLevel(logging.DEBUG)
    elif args.quiet:
        logging.getLogger("cloudsched").setLevel(logging.WARNING)

    result = run_workload(
        args.workload,
        workloads_dir=args.workloads_dir,
        policy=args.policy,
        servers=args.servers,
        max_steps=args.max_steps,
        verbose=args.verbose,
        output_path=args.output,
    )

    formatter = ReportFormatter()
    if args.json:
        print(formatter.format_compact(result.metrics, result.servers))
    else:
        print(formatter.format(
            result.metrics,
            result.servers,
            policy=result.policy,
            completed=result.completed if args.timeline else None,
        ))
        print(formatter.format_result(result))

    if result.violations:
        sys.exit(2)


def cmd_validate(args):
    """Validate a workload file without simulating it."""
    from cloudsched.environment.loader import WorkloadLoader

    loader = WorkloadLoader.for_path(args.workload, args.workloads_dir)
    config = loader.load(args.workload)
    print(
        f"OK: {len(config.tasks)} tasks, {config.servers} servers, "
        f"policy={config.policy}, quantum={config.base_quantum:g}"
    )


def cmd_list_policies(args):
    """List all available placement policies."""
    from cloudsched.environment.policies import list_policies

    policies = list_policies()
    print(f"\nAvailable placement policies ({len(policies)} total):\n")
    for i, name in enumerate(policies, 1):
        print(f"  {i:2d}. {name}")
    print()


def main(argv: Optional[Sequence[str]] = None):
    """Main CLI entry point."""
    from cloudsched.environment.policies import list_policies

    parser = argparse.ArgumentParser(
        description="cloudsched - Cluster Task Scheduling Simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Simulate a workload with its own settings
  cloudsched run demo_cluster.json

  # Override the placement policy and pool size
  cloudsched run demo_cluster.json --policy least-loaded --servers 2

  # Check a workload file for invalid tasks
  cloudsched validate demo_cluster.json

  # List placement policies
  cloudsched policies
"""
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # ========== run command ==========
    run_parser = subparsers.add_parser(
        "run",
        help="Simulate a workload file",
        description="Load a workload JSON file, run it to completion and print metrics"
    )
    run_parser.add_argument(
        "workload",
        help="Workload JSON file (absolute, or relative to --workloads-dir)"
    )
    run_parser.add_argument(
        "--workloads-dir",
        default=DEFAULT_WORKLOADS_DIR,
        metavar="DIR",
        help=f"Directory containing workload files (default: {DEFAULT_WORKLOADS_DIR})"
    )
    run_parser.add_argument(
        "--policy",
        choices=list_policies(),
        help="Override the workload's placement policy"
    )
    run_parser.add_argument(
        "--servers",
        type=int,
        metavar="N",
        help="Override the workload's server count"
    )
    run_parser.add_argument(
        "--max-steps",
        type=int,
        default=DEFAULT_MAX_STEPS,
        metavar="N",
        help=f"Maximum steps before giving up (default: {DEFAULT_MAX_STEPS})"
    )
    run_parser.add_argument(
        "--output",
        type=str,
        metavar="FILE",
        help="Save the full result (including time series) to JSON"
    )
    run_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the final snapshot as JSON"
    )
    run_parser.add_argument(
        "--timeline",
        action="store_true",
        help="List completed tasks in completion order"
    )
    run_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show detailed step-by-step logs"
    )
    run_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print the final report"
    )
    run_parser.set_defaults(func=cmd_run)

    # ========== validate command ==========
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate a workload file"
    )
    validate_parser.add_argument("workload", help="Workload JSON file")
    validate_parser.add_argument(
        "--workloads-dir",
        default=DEFAULT_WORKLOADS_DIR,
        metavar="DIR",
        help=f"Directory containing workload files (default: {DEFAULT_WORKLOADS_DIR})"
    )
    validate_parser.set_defaults(func=cmd_validate)

    # ========== policies command ==========
    list_parser = subparsers.add_parser(
        "policies",
        help="List all placement policies"
    )
    list_parser.set_defaults(func=cmd_list_policies)

    # Parse and execute
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
