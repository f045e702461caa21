"""
Metrics Refresh Script.

============================================================
REFRESH PROJECT METRICS
============================================================

This script:
1. Connects to the database from the environment (.env)
2. Optionally creates missing tables, then checks they all exist
3. Recalculates metrics for one contract, one chain or
   every tracked contract
4. Prints a summary

USAGE:
    python -m scripts.refresh_metrics
    python -m scripts.refresh_metrics --chain 1
    python -m scripts.refresh_metrics --chain starknet --contract 0xabc...

EXIT CODES:
- 0: Refresh completed
- 1: Database connection failed or required tables missing
- 2: One or more contracts failed to refresh

============================================================
"""

import argparse
import logging
import sys
from typing import List, Optional

from database import (
    DatabaseConfig,
    DatabasePersistenceError,
    create_all_tables,
    create_database_engine,
    create_session_factory,
    verify_database_connection,
    verify_required_tables,
)
from project_metrics import (
    MetricsError,
    MetricsPipeline,
    ProjectNotFoundError,
    format_metrics_summary,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("refresh_metrics")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Recalculate project metrics")
    parser.add_argument("--chain", help="Only refresh contracts on this chain id")
    parser.add_argument("--contract", help="Refresh a single contract (requires --chain)")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before refreshing",
    )
    args = parser.parse_args(argv)
    if args.contract and not args.chain:
        parser.error("--contract requires --chain")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    print("\n" + "=" * 70)
    print("PROJECT METRICS REFRESH")
    print("=" * 70)

    # Step 1: Connect
    print("\n[1/2] Connecting to database...")
    try:
        engine = create_database_engine(DatabaseConfig.from_env())
        verify_database_connection(engine)
        if args.create_tables:
            create_all_tables(engine)
        verify_required_tables(engine)
        print("  ✓ Database ready")
    except DatabasePersistenceError as e:
        print(f"  ✗ Database connection failed: {e}")
        return 1

    pipeline = MetricsPipeline(create_session_factory(engine))

    # Step 2: Refresh
    if args.contract:
        print(f"\n[2/2] Refreshing {args.contract} on chain {args.chain}...")
        try:
            scored = pipeline.refresh_project(args.contract, args.chain)
        except ProjectNotFoundError as e:
            print(f"  ○ Skipped: {e}")
            return 0
        except (MetricsError, DatabasePersistenceError) as e:
            print(f"  ✗ Refresh failed: {e}")
            return 2
        print(format_metrics_summary(scored))
        return 0

    scope = f"chain {args.chain}" if args.chain else "all chains"
    print(f"\n[2/2] Refreshing contracts on {scope}...")
    summary = pipeline.refresh_all(chain_id=args.chain)

    print("\n" + "-" * 70)
    print("SUMMARY")
    print("-" * 70)
    print(f"  Processed: {summary.processed}")
    print(f"  Skipped:   {summary.skipped}")
    print(f"  Failed:    {len(summary.failures)}")
    print(f"  Duration:  {summary.duration_seconds:.2f}s")

    for address, chain_id, error in summary.failures:
        print(f"  ✗ {address} (chain {chain_id}): {error}")

    return 2 if summary.failures else 0


if __name__ == "__main__":
    sys.exit(main())
