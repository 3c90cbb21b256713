#!/usr/bin/env python3

import sys
import calendar
from cli.transactions import parse_month
from logger import get_logger
from tools.transactions import get_dashboard

logger = get_logger()

_INSIGHT_MARKERS = {
    "warning": "⚠️",
    "tip": "💡",
    "success": "✅",
    "info": "ℹ️",
}


def _load_dashboard(args, services):
    try:
        year, month = parse_month(args.month)
    except ValueError as e:
        logger.error(f"Invalid month: {e}")
        logger.error("Use YYYY/MM format for --month")
        sys.exit(1)
    return year, month, get_dashboard(services, services.config.user_id, year, month)


def cmd_summary(args, services):
    """Show realized totals, the selected month and its category breakdown."""
    year, month, dashboard = _load_dashboard(args, services)
    totals = dashboard["totals"]
    month_totals = dashboard["month_totals"]

    logger.info("\nBalance (paid transactions):")
    logger.info("=" * 60)
    logger.info(f"Income:   {totals.total_income:>12}")
    logger.info(f"Expenses: {totals.total_expense:>12}")
    logger.info(f"Balance:  {totals.balance:>12}")

    logger.info(f"\n{calendar.month_name[month]} {year} (including planned):")
    logger.info("=" * 60)
    logger.info(f"Income:   {month_totals.month_income:>12}")
    logger.info(f"Expenses: {month_totals.month_expense:>12}")
    logger.info(f"Net:      {month_totals.month_balance:>12}")

    if not dashboard["chart"]:
        logger.info("\nNo expenses this month.")
        return

    logger.info("\nExpenses by category:")
    logger.info("-" * 60)
    for entry in dashboard["chart"]:
        logger.info(
            f"{entry.icon} {entry.name:<14} {entry.amount:>12}  {entry.percentage:>5}%"
        )


def cmd_banks(args, services):
    """Show realized balances per bank."""
    _year, _month, dashboard = _load_dashboard(args, services)
    balances = dashboard["bank_balances"]

    if balances.is_empty:
        logger.info("No bank activity recorded.")
        logger.info("Add transactions linked to a bank to see a summary here.")
        return

    logger.info("\nBank balances:")
    logger.info("=" * 60)
    for bank, stats in balances.banks.items():
        logger.info(
            f"{bank:<16} balance {stats.balance:>12}   "
            f"in +{stats.income}   out -{stats.expense}"
        )
    logger.info("-" * 60)
    logger.info(f"{'Total':<16} balance {balances.total:>12}")


def cmd_insights(args, services):
    """Show insights for the selected month."""
    _year, _month, dashboard = _load_dashboard(args, services)

    for insight in dashboard["insights"]:
        marker = _INSIGHT_MARKERS.get(insight.kind, "")
        logger.info(f"\n{marker} {insight.title}")
        logger.info(f"   {insight.description}")


def cmd_year(args, services):
    """Show income and expenses per month for the selected year."""
    year, _month, dashboard = _load_dashboard(args, services)

    logger.info(f"\n{year}:")
    logger.info("=" * 60)
    for point in dashboard["yearly_series"]:
        logger.info(
            f"{calendar.month_abbr[point.month]}  income {point.income:>12}  "
            f"expenses {point.expense:>12}"
        )


def setup_parser(subparsers):
    """Setup report subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "report",
        help="Summaries, bank balances and insights",
        description="Aggregated views over your transactions",
    )

    report_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available report commands",
        dest="subcommand",
        required=True,
    )

    for name, func, help_text in (
        ("summary", cmd_summary, "Totals and category breakdown for a month"),
        ("banks", cmd_banks, "Balance per bank"),
        ("insights", cmd_insights, "Financial insights and tips"),
        ("year", cmd_year, "Income and expenses per month of the year"),
    ):
        sub = report_subparsers.add_parser(name, help=help_text)
        sub.add_argument("--month", help="Month in YYYY/MM format (default: current)")
        sub.set_defaults(func=func)
