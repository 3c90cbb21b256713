#!/usr/bin/env python3

import sys
from errors import StoreError, ValidationError
from logger import get_logger

logger = get_logger()


def cmd_show(args, services):
    """Show the savings goal and progress."""
    goal = services.savings.get(services.config.user_id)

    logger.info("\nSavings goal:")
    logger.info("=" * 60)
    logger.info(f"Saved:     {goal.current_amount:>12}")
    logger.info(f"Target:    {goal.target_amount:>12}")
    logger.info(f"Remaining: {goal.remaining:>12}")
    logger.info(f"Progress:  {goal.progress:>11}%")


def cmd_set(args, services):
    """Update the savings goal."""
    user_id = services.config.user_id
    current = services.savings.get(user_id)

    try:
        goal = services.savings.upsert(
            user_id,
            args.current if args.current is not None else current.current_amount,
            args.target if args.target is not None else current.target_amount,
        )
    except ValidationError as e:
        logger.error(f"Invalid savings goal: {e}")
        sys.exit(1)
    except StoreError as e:
        logger.error(f"Could not save savings goal: {e}")
        sys.exit(1)

    logger.info("✓ Savings goal updated")
    logger.info(f"  Saved: {goal.current_amount}  Target: {goal.target_amount}")


def setup_parser(subparsers):
    """Setup savings subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "savings",
        help="Savings goal",
        description="Show or update your savings goal",
    )

    savings_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available savings commands",
        dest="subcommand",
        required=True,
    )

    show_parser = savings_subparsers.add_parser("show", help="Show the savings goal")
    show_parser.set_defaults(func=cmd_show)

    set_parser = savings_subparsers.add_parser("set", help="Update the savings goal")
    set_parser.add_argument("--current", help="Amount saved so far")
    set_parser.add_argument("--target", help="Amount to reach")
    set_parser.set_defaults(func=cmd_set)
