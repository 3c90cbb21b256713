#!/usr/bin/env python3

import sys
from errors import NotFoundError, StoreError, ValidationError
from logger import get_logger
from models.wishlist import PRIORITY_RANK

logger = get_logger()


def cmd_list(args, services):
    """List wishlist items."""
    items = services.wishlist.find_all(services.config.user_id)

    if not items:
        logger.info("Your wishlist is empty.")
        return

    logger.info("\nWishlist:")
    logger.info("=" * 60)
    for item in items:
        logger.info(f"[{item.id}] {item.description:<30} {item.price:>12}  {item.priority}")


def cmd_add(args, services):
    """Add a wishlist item."""
    try:
        item = services.wishlist.create(
            services.config.user_id, args.description, args.price, args.priority
        )
    except ValidationError as e:
        logger.error(f"Invalid wishlist item: {e}")
        sys.exit(1)
    except StoreError as e:
        logger.error(f"Could not save wishlist item: {e}")
        sys.exit(1)

    logger.info(f"✓ Added '{item.description}' to your wishlist (ID: {item.id})")


def cmd_update(args, services):
    """Edit a wishlist item."""
    try:
        item = services.wishlist.update(
            services.config.user_id,
            args.item_id,
            description=args.description,
            price=args.price,
            priority=args.priority,
        )
    except NotFoundError:
        logger.error(f"Wishlist item {args.item_id} not found. It may have been removed.")
        sys.exit(1)
    except ValidationError as e:
        logger.error(f"Invalid wishlist item: {e}")
        sys.exit(1)
    except StoreError as e:
        logger.error(f"Could not update wishlist item, try again: {e}")
        sys.exit(1)

    logger.info(f"✓ Updated '{item.description}' ({item.price}, {item.priority})")


def cmd_delete(args, services):
    """Remove a wishlist item."""
    try:
        services.wishlist.delete(services.config.user_id, args.item_id)
    except NotFoundError:
        logger.error(f"Wishlist item {args.item_id} was already removed.")
        sys.exit(1)
    except StoreError as e:
        logger.error(f"Could not remove wishlist item, try again: {e}")
        sys.exit(1)

    logger.info("✓ Wishlist item removed")


def setup_parser(subparsers):
    """Setup wishlist subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "wishlist",
        help="Planned purchases",
        description="Manage the things you want to buy",
    )

    wishlist_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available wishlist commands",
        dest="subcommand",
        required=True,
    )

    list_parser = wishlist_subparsers.add_parser("list", help="List wishlist items")
    list_parser.set_defaults(func=cmd_list)

    add_parser = wishlist_subparsers.add_parser("add", help="Add a wishlist item")
    add_parser.add_argument("--description", required=True)
    add_parser.add_argument("--price", required=True)
    add_parser.add_argument("--priority", choices=list(PRIORITY_RANK), default="Medium")
    add_parser.set_defaults(func=cmd_add)

    update_parser = wishlist_subparsers.add_parser("update", help="Edit a wishlist item")
    update_parser.add_argument("item_id", type=int)
    update_parser.add_argument("--description")
    update_parser.add_argument("--price")
    update_parser.add_argument("--priority", choices=list(PRIORITY_RANK))
    update_parser.set_defaults(func=cmd_update)

    delete_parser = wishlist_subparsers.add_parser("delete", help="Remove a wishlist item")
    delete_parser.add_argument("item_id", type=int)
    delete_parser.set_defaults(func=cmd_delete)
