#!/usr/bin/env python3
"""CLI entry point for the Infrastructure Cost Allocator."""

import argparse
import subprocess
import sys
from pathlib import Path

from cost_allocator.clients.exchange_rate_client import ExchangeRateClient
from cost_allocator.cost.allocation import AllocationResult
from cost_allocator.cost.ledger import CostLedger
from cost_allocator.cost.models import AllocationMode, ByUserCount
from cost_allocator.input.cost_parser import parse_cost_file
from cost_allocator.output.excel_generator import ExcelGenerator
from cost_allocator.output.report_data import ReportDataBuilder
from cost_allocator.session import CostSession
from cost_allocator.utils.helpers import format_currency, format_percentage, load_config, setup_logging


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Infrastructure Cost Allocator - Aggregate recurring costs and derive a per-user cost"
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        help="Path to CSV/Excel file with the cost list (default: costs from config)"
    )

    parser.add_argument(
        "--rate", "-r",
        type=float,
        help="USD/BRL exchange rate (BRL per USD)"
    )

    parser.add_argument(
        "--fetch-rate",
        action="store_true",
        help="Fetch the current USD/BRL quote before calculating"
    )

    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in AllocationMode],
        help="Allocation mode: divide by user count or charge a percentage"
    )

    parser.add_argument(
        "--users",
        type=int,
        help="Target number of users"
    )

    parser.add_argument(
        "--percentage",
        type=float,
        help="Percentage of the total charged per user"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        help="Write the Excel report to this path"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config file"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    parser.add_argument(
        "--dashboard",
        action="store_true",
        help="Launch the Streamlit dashboard instead of printing a report"
    )

    return parser.parse_args(argv)


def build_session(args, config) -> CostSession:
    """Create a session from config, then apply file input and CLI overrides.

    Args:
        args: Command line arguments
        config: Application configuration

    Returns:
        Configured CostSession
    """
    session = CostSession.from_config(config)

    if args.input:
        session.ledger = CostLedger(parse_cost_file(args.input))

    # A manual rate always wins over a fetched one
    if args.rate is not None:
        session.set_exchange_rate(args.rate)
    elif args.fetch_rate:
        rate_config = config.get("exchange_rate", {})
        client = ExchangeRateClient(
            base_url=rate_config.get("api_url", ExchangeRateClient.DEFAULT_URL),
            pair=rate_config.get("pair", ExchangeRateClient.DEFAULT_PAIR),
            timeout=rate_config.get("timeout", 10),
            max_retries=rate_config.get("max_retries", 3),
        )
        session.refresh_rate(client)

    if args.mode:
        session.set_mode(args.mode)
    if args.users is not None:
        session.set_target_users(args.users)
    if args.percentage is not None:
        session.set_target_percentage(args.percentage)

    return session


def print_report(result: AllocationResult) -> None:
    """Print a text breakdown of an allocation result."""
    print("\n" + "=" * 60)
    print("INFRASTRUCTURE COST REPORT")
    print("=" * 60)
    print(f"USD/BRL Rate:     {format_currency(result.exchange_rate)}")
    print("-" * 60)

    for item in result.breakdown:
        entry = item.entry
        print(f"  {entry.name[:28]:<28} {format_currency(entry.amount, entry.currency.value):>14}")
        print(f"    -> {format_currency(item.converted_amount)} ({format_percentage(item.share)} of total)")

    if not result.breakdown:
        print("  No costs entered.")

    print("-" * 60)
    print(f"Monthly Total:    {format_currency(result.total)}")

    if isinstance(result.config, ByUserCount):
        print(f"Allocation:       {result.config.target_users} users")
    else:
        print(f"Allocation:       {result.config.target_percentage:g}% of total")

    print(f"Cost per User:    {format_currency(result.per_user_cost)}")
    print("=" * 60)


def launch_dashboard() -> int:
    """Launch the Streamlit dashboard."""
    app_path = Path(__file__).parent / "dashboard" / "app.py"
    return subprocess.call([sys.executable, "-m", "streamlit", "run", str(app_path)])


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    if args.dashboard:
        sys.exit(launch_dashboard())

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        setup_logging("INFO").error(str(e))
        sys.exit(1)

    log_config = config.get("logging", {})
    logger = setup_logging(
        "DEBUG" if args.verbose else log_config.get("level", "INFO"),
        log_file=log_config.get("file"),
    )

    try:
        session = build_session(args, config)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        sys.exit(1)

    result = session.calculate()
    print_report(result)

    if args.output:
        report = ReportDataBuilder().build(result)
        path = ExcelGenerator(args.output).generate(report)
        print(f"\nReport saved to: {path}")

    return 0


if __name__ == "__main__":
    main()
