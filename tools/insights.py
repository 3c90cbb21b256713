"""Rule-based financial insights.

Insights are produced by a fixed, ordered table of rules evaluated against
an immutable snapshot of aggregates (InsightFacts). Each rule sees the
insights emitted so far and may add at most one. The order of the table is
the display order.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_CEILING, ROUND_HALF_UP
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from dateutil.relativedelta import relativedelta

from models.category import CATEGORIES, CATEGORY_ORDER
from models.insight import Insight
from models.savings import SavingsGoal
from models.transaction import Transaction
from models.wishlist import WishlistItem
from tools.aggregation import (
    expenses_by_category,
    monthly_slice,
    monthly_totals,
    totals_by_paid_status,
)

ZERO = Decimal("0")

# Thresholds, as fractions of income or of total expenses
GOOD_TIME_TO_BUY = Decimal("0.30")
DELAY_PURCHASES = Decimal("0.10")
CREDIT_USAGE_LIMIT = Decimal("0.80")
LOW_SAVINGS_RATE = Decimal("0.10")
HIGH_SAVINGS_RATE = Decimal("0.20")
DOMINANT_CATEGORY_SHARE = Decimal("0.40")
FOOD_SHARE_OF_INCOME = Decimal("0.15")
LEISURE_SHARE_OF_INCOME = Decimal("0.10")


@dataclass(frozen=True)
class InsightFacts:
    """Everything the rules may look at.

    Attributes:
        transaction_count: Number of transactions considered.
        total_income: Lifetime income over effective-paid transactions.
        total_expense: Lifetime expenses over effective-paid transactions.
        balance: total_income - total_expense.
        month_income: Income in the selected month, paid or not.
        month_expense: Expenses in the selected month, paid or not.
        expenses_by_category: Monthly expenses per category.
        wishlist: Wishlist items, in any order.
        savings_goal: The user's savings goal, if known. No rule reads it;
            it rides along so callers rendering insights have the goal at hand.
        as_of: Reference date used for projections.
    """

    transaction_count: int
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    month_income: Decimal
    month_expense: Decimal
    expenses_by_category: Dict[str, Decimal] = field(default_factory=dict)
    wishlist: Tuple[WishlistItem, ...] = ()
    savings_goal: Optional[SavingsGoal] = None
    as_of: date = field(default_factory=date.today)

    @property
    def monthly_savings(self) -> Decimal:
        return self.month_income - self.month_expense


def build_facts(
    transactions: Iterable[Transaction],
    year: int,
    month: int,
    as_of: date,
    wishlist: Iterable[WishlistItem] = (),
    savings_goal: Optional[SavingsGoal] = None,
) -> InsightFacts:
    """Aggregate raw collections into an InsightFacts snapshot.

    Args:
        transactions: All of the user's transactions.
        year: Selected year.
        month: Selected month (1-12).
        as_of: Reference date for paid status and projections.
        wishlist: The user's wishlist items.
        savings_goal: The user's savings goal.
    """
    transactions = list(transactions)
    totals = totals_by_paid_status(transactions, as_of)
    month_transactions = monthly_slice(transactions, year, month)
    month_totals = monthly_totals(month_transactions)

    return InsightFacts(
        transaction_count=len(transactions),
        total_income=totals.total_income,
        total_expense=totals.total_expense,
        balance=totals.balance,
        month_income=month_totals.month_income,
        month_expense=month_totals.month_expense,
        expenses_by_category=expenses_by_category(month_transactions),
        wishlist=tuple(wishlist),
        savings_goal=savings_goal,
        as_of=as_of,
    )


def _money(value: Decimal) -> str:
    return f"{value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):,.2f}"


def _percent(value: Decimal) -> str:
    return f"{value.quantize(Decimal('1'), rounding=ROUND_HALF_UP):.0f}%"


Rule = Callable[[InsightFacts, List[Insight]], Optional[Insight]]

_RULES: List[Tuple[str, Rule]] = []


def _rule(name: str):
    """Register a rule. Registration order is evaluation and display order."""

    def register(func: Rule) -> Rule:
        _RULES.append((name, func))
        return func

    return register


def select_wishlist_target(items: Iterable[WishlistItem]) -> Optional[WishlistItem]:
    """Pick the wishlist item to plan for.

    Highest priority wins; among equal priorities the cheapest wins.
    """
    ranked = sorted(items, key=lambda item: (-item.rank, item.price))
    return ranked[0] if ranked else None


@_rule("wishlist")
def _wishlist(facts: InsightFacts, emitted: List[Insight]) -> Optional[Insight]:
    target = select_wishlist_target(facts.wishlist)
    if target is None:
        return None

    if facts.balance >= target.price:
        return Insight(
            kind="success",
            title=f"You can buy {target.description}",
            description=(
                f"Your balance of {_money(facts.balance)} covers "
                f"{target.description} ({_money(target.price)})."
            ),
            rule="wishlist",
            details={"item_id": target.id, "price": target.price, "balance": facts.balance},
        )

    remaining = target.price - facts.balance
    savings = facts.monthly_savings

    if savings > 0:
        months = int((remaining / savings).to_integral_value(rounding=ROUND_CEILING))
        target_date = facts.as_of + relativedelta(months=months)
        return Insight(
            kind="tip",
            title=f"Plan for {target.description}",
            description=(
                f"You need {_money(remaining)} more. Saving {_money(savings)} a month, "
                f"you can buy it in {target_date.strftime('%B %Y')}."
            ),
            rule="wishlist",
            details={
                "item_id": target.id,
                "remaining": remaining,
                "monthly_savings": savings,
                "months_to_wait": months,
                "target_month": f"{target_date.year:04d}-{target_date.month:02d}",
            },
        )

    return Insight(
        kind="warning",
        title=f"{target.description} is out of reach",
        description=(
            f"You need {_money(remaining)} more, but you are not saving anything "
            "this month. Cut expenses to make room for this goal."
        ),
        rule="wishlist",
        details={"item_id": target.id, "remaining": remaining, "monthly_savings": savings},
    )


@_rule("overspend")
def _overspend(facts: InsightFacts, emitted: List[Insight]) -> Optional[Insight]:
    if facts.total_expense <= facts.total_income:
        return None
    return Insight(
        kind="warning",
        title="Spending more than you earn",
        description=(
            f"Expenses of {_money(facts.total_expense)} exceed income of "
            f"{_money(facts.total_income)}. You are eating into your reserves."
        ),
        rule="overspend",
        details={"deficit": facts.total_expense - facts.total_income},
    )


@_rule("purchase_timing")
def _purchase_timing(facts: InsightFacts, emitted: List[Insight]) -> Optional[Insight]:
    if emitted:
        return None

    savings = facts.monthly_savings
    if savings > facts.month_income * GOOD_TIME_TO_BUY:
        return Insight(
            kind="success",
            title="Good time to buy",
            description=(
                f"You are keeping {_money(savings)} this month, more than 30% of "
                "your income. Planned purchases fit comfortably."
            ),
            rule="purchase_timing",
            details={"monthly_savings": savings},
        )
    if facts.month_income > 0 and savings < facts.month_income * DELAY_PURCHASES:
        return Insight(
            kind="warning",
            title="Hold off on purchases",
            description=(
                "You are keeping less than 10% of this month's income. "
                "Delay non-essential purchases."
            ),
            rule="purchase_timing",
            details={"monthly_savings": savings},
        )
    return None


@_rule("credit_usage")
def _credit_usage(facts: InsightFacts, emitted: List[Insight]) -> Optional[Insight]:
    if facts.total_expense <= facts.total_income * CREDIT_USAGE_LIMIT:
        return None
    return Insight(
        kind="warning",
        title="Close to your income limit",
        description=(
            f"Expenses have reached {_money(facts.total_expense)}, over 80% of your "
            f"income of {_money(facts.total_income)}."
        ),
        rule="credit_usage",
        details={"total_expense": facts.total_expense, "total_income": facts.total_income},
    )


@_rule("savings_rate")
def _savings_rate(facts: InsightFacts, emitted: List[Insight]) -> Optional[Insight]:
    if facts.total_income > 0:
        rate = (facts.total_income - facts.total_expense) / facts.total_income
    else:
        rate = ZERO

    if rate < 0:
        return None
    if rate < LOW_SAVINGS_RATE and facts.total_income > 0:
        return Insight(
            kind="tip",
            title="Room to save more",
            description=(
                "Try to save at least 20% of your income. Small cuts add up."
            ),
            rule="savings_rate",
            details={"rate": rate},
        )
    if rate >= HIGH_SAVINGS_RATE:
        return Insight(
            kind="success",
            title="Great job",
            description=f"You are saving {_percent(rate * 100)} of your income. Keep it up!",
            rule="savings_rate",
            details={"rate": rate},
        )
    return None


@_rule("dominant_category")
def _dominant_category(facts: InsightFacts, emitted: List[Insight]) -> Optional[Insight]:
    if not facts.expenses_by_category:
        return None

    total = sum(facts.expenses_by_category.values(), ZERO)
    if total <= 0:
        return None

    # Equal amounts resolve in catalog order
    category, amount = min(
        facts.expenses_by_category.items(),
        key=lambda item: (-item[1], CATEGORY_ORDER.get(item[0], len(CATEGORY_ORDER))),
    )
    share = amount / total
    if share <= DOMINANT_CATEGORY_SHARE:
        return None

    info = CATEGORIES.get(category)
    name = info.name if info else category
    icon = f"{info.icon} " if info else ""
    return Insight(
        kind="warning",
        title=f"{icon}High spending on {name}",
        description=(
            f"{_percent(share * 100)} of your expenses go to {name.lower()}. "
            "Set a monthly limit for it."
        ),
        rule="dominant_category",
        details={"category": category, "amount": amount, "share": share},
    )


@_rule("missing_income")
def _missing_income(facts: InsightFacts, emitted: List[Insight]) -> Optional[Insight]:
    if facts.total_income != 0:
        return None
    return Insight(
        kind="tip",
        title="Record your income",
        description="Add your income to get a complete picture of your finances.",
        rule="missing_income",
    )


@_rule("food_spending")
def _food_spending(facts: InsightFacts, emitted: List[Insight]) -> Optional[Insight]:
    food = facts.expenses_by_category.get("food", ZERO)
    if not food or food <= facts.month_income * FOOD_SHARE_OF_INCOME:
        return None
    return Insight(
        kind="tip",
        title="🍔 Savings tip",
        description="Cooking at home can cut your food spending by up to half.",
        rule="food_spending",
        details={"amount": food},
    )


@_rule("leisure_spending")
def _leisure_spending(facts: InsightFacts, emitted: List[Insight]) -> Optional[Insight]:
    leisure = facts.expenses_by_category.get("leisure", ZERO)
    if not leisure or leisure <= facts.month_income * LEISURE_SHARE_OF_INCOME:
        return None
    return Insight(
        kind="tip",
        title="🎮 Budget your leisure",
        description="Look for free alternatives and set a fixed budget for fun.",
        rule="leisure_spending",
        details={"amount": leisure},
    )


def get_started_insight() -> Insight:
    return Insight(
        kind="info",
        title="Get started",
        description="Add your transactions to receive personalized insights and tips.",
        rule="get_started",
    )


def healthy_insight() -> Insight:
    return Insight(
        kind="info",
        title="Healthy finances",
        description="Your spending is balanced. Keep tracking to stay in control.",
        rule="healthy",
    )


def generate_insights(facts: InsightFacts) -> List[Insight]:
    """Run the rule table against a facts snapshot.

    With no transactions, only the onboarding insight is returned. When no
    rule fires, a single "healthy finances" insight is returned.

    Returns:
        Insights in display order.
    """
    if facts.transaction_count == 0:
        return [get_started_insight()]

    insights: List[Insight] = []
    for _name, rule in _RULES:
        insight = rule(facts, insights)
        if insight is not None:
            insights.append(insight)

    if not insights:
        insights.append(healthy_insight())

    return insights


def rule_names() -> List[str]:
    """Get the registered rule names in evaluation order."""
    return [name for name, _rule_func in _RULES]
