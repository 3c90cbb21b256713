"""Category and bank catalogs for transaction classification."""

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class CategoryInfo:
    """Display metadata for a transaction category.

    Attributes:
        key: Stable identifier stored on transactions (e.g., "food").
        name: Human readable name.
        icon: Emoji used by front ends.
        color: HSL color string used by chart front ends.
    """

    key: str
    name: str
    icon: str
    color: str


# Catalog order is the enumeration order used to break ties in chart series.
CATEGORIES: Dict[str, CategoryInfo] = {
    info.key: info
    for info in [
        CategoryInfo("food", "Food", "🍔", "hsl(24, 95%, 53%)"),
        CategoryInfo("transport", "Transport", "🚗", "hsl(221, 83%, 53%)"),
        CategoryInfo("housing", "Housing", "🏠", "hsl(262, 83%, 58%)"),
        CategoryInfo("leisure", "Leisure", "🎮", "hsl(339, 90%, 51%)"),
        CategoryInfo("health", "Health", "💊", "hsl(142, 76%, 36%)"),
        CategoryInfo("education", "Education", "📚", "hsl(199, 89%, 48%)"),
        CategoryInfo("shopping", "Shopping", "🛒", "hsl(280, 87%, 65%)"),
        CategoryInfo("services", "Services", "⚡", "hsl(38, 92%, 50%)"),
        CategoryInfo("salary", "Salary", "💰", "hsl(158, 64%, 40%)"),
        CategoryInfo("investments", "Investments", "📈", "hsl(173, 80%, 40%)"),
        CategoryInfo("piggy_bank", "Piggy Bank", "🐷", "hsl(326, 100%, 74%)"),
        CategoryInfo("other", "Other", "📦", "hsl(215, 14%, 45%)"),
    ]
}

CATEGORY_ORDER: Dict[str, int] = {key: index for index, key in enumerate(CATEGORIES)}

EXPENSE_CATEGORIES: List[str] = [
    "food",
    "transport",
    "housing",
    "leisure",
    "health",
    "education",
    "shopping",
    "services",
    "piggy_bank",
    "other",
]

INCOME_CATEGORIES: List[str] = [
    "salary",
    "investments",
    "other",
]

BANKS: List[str] = [
    "Nubank",
    "Inter",
    "Itaú",
    "Bradesco",
    "Santander",
    "Caixa",
    "Banco do Brasil",
    "Mercado Pago",
    "PicPay",
    "C6 Bank",
    "XP",
    "BTG",
    "Cash",
    "Other",
]

TRANSACTION_TYPES = ("income", "expense")


def categories_for_type(transaction_type: str) -> List[str]:
    """Get the categories allowed for a transaction type.

    Args:
        transaction_type: "income" or "expense".

    Returns:
        List of category keys in catalog order.

    Raises:
        ValueError: If the transaction type is unknown.
    """
    if transaction_type == "expense":
        return EXPENSE_CATEGORIES
    if transaction_type == "income":
        return INCOME_CATEGORIES
    raise ValueError(f"Unknown transaction type: {transaction_type}")


def is_valid_category(transaction_type: str, category: str) -> bool:
    """Check whether a category belongs to the set for a transaction type."""
    try:
        return category in categories_for_type(transaction_type)
    except ValueError:
        return False
