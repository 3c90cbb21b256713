"""Aggregation of transaction collections into totals and chart series.

Every function here is pure: it reads the transactions it is given and
never mutates them.

Two views exist side by side:

- Lifetime (realized) totals only count transactions whose effective paid
  state is true, regardless of month.
- Monthly slices include everything dated in the month, paid or not, so
  they show planned activity as well as realized activity.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_DOWN
from typing import Dict, Iterable, List

from models.category import CATEGORIES, CATEGORY_ORDER
from models.transaction import Transaction

ZERO = Decimal("0")
TENTH = Decimal("0.1")


@dataclass(frozen=True)
class Totals:
    """Lifetime totals over effective-paid transactions."""

    total_income: Decimal
    total_expense: Decimal
    balance: Decimal


@dataclass(frozen=True)
class MonthlyTotals:
    """Totals over a monthly slice, paid or not."""

    month_income: Decimal
    month_expense: Decimal
    month_balance: Decimal


@dataclass(frozen=True)
class ChartEntry:
    """One slice of the expenses-by-category chart."""

    category: str
    amount: Decimal
    name: str
    icon: str
    color: str
    percentage: Decimal  # share of the chart total, one decimal place


@dataclass(frozen=True)
class BankBalance:
    income: Decimal
    expense: Decimal
    balance: Decimal


@dataclass(frozen=True)
class BankBalances:
    """Per-bank balances ordered by balance (highest first).

    An empty result is the "no bank activity" state; callers check
    is_empty to render it.
    """

    banks: Dict[str, BankBalance]

    @property
    def is_empty(self) -> bool:
        return not self.banks

    @property
    def total(self) -> Decimal:
        """Sum of all listed bank balances."""
        return sum((b.balance for b in self.banks.values()), ZERO)


@dataclass(frozen=True)
class MonthPoint:
    month: int
    income: Decimal
    expense: Decimal


def effective_paid(transaction: Transaction, as_of: date) -> bool:
    """Whether a transaction counts as realized on a reference date.

    The explicit paid flag wins when set; otherwise anything dated on or
    before the reference date counts as paid.
    """
    if transaction.paid is not None:
        return transaction.paid
    return transaction.date <= as_of


def _sum_by_type(transactions: Iterable[Transaction]):
    income = ZERO
    expense = ZERO
    for t in transactions:
        if t.type == "income":
            income += t.amount
        elif t.type == "expense":
            expense += t.amount
    return income, expense


def totals_by_paid_status(transactions: Iterable[Transaction], as_of: date) -> Totals:
    """Sum income and expenses over effective-paid transactions.

    Args:
        transactions: Any collection of transactions.
        as_of: Reference date for transactions without an explicit paid flag.

    Returns:
        Totals where balance == total_income - total_expense exactly.
    """
    income, expense = _sum_by_type(t for t in transactions if effective_paid(t, as_of))
    return Totals(total_income=income, total_expense=expense, balance=income - expense)


def monthly_slice(
    transactions: Iterable[Transaction], year: int, month: int
) -> List[Transaction]:
    """Get the transactions dated within a calendar month, keeping their order."""
    return [t for t in transactions if t.date.year == year and t.date.month == month]


def monthly_totals(transactions: Iterable[Transaction]) -> MonthlyTotals:
    """Sum income and expenses over a monthly slice without paid filtering."""
    income, expense = _sum_by_type(transactions)
    return MonthlyTotals(
        month_income=income, month_expense=expense, month_balance=income - expense
    )


def expenses_by_category(transactions: Iterable[Transaction]) -> Dict[str, Decimal]:
    """Sum expense amounts per category.

    Categories without expenses are omitted rather than zero-filled. Keys
    are returned in catalog order.

    Returns:
        Dictionary mapping category key to summed amount.
    """
    sums: Dict[str, Decimal] = {}
    for t in transactions:
        if t.type != "expense":
            continue
        sums[t.category] = sums.get(t.category, ZERO) + t.amount

    return {
        category: sums[category]
        for category in sorted(sums, key=lambda c: CATEGORY_ORDER.get(c, len(CATEGORY_ORDER)))
    }


def _share_percentages(amounts: List[Decimal], total: Decimal) -> List[Decimal]:
    """Split 100% across amounts in tenths of a percent.

    Each share is rounded down, then the leftover tenths go to the shares
    with the largest remainders (earlier entries win ties). The result sums
    to exactly 100.0 when total is positive.
    """
    if not total:
        return [ZERO for _amount in amounts]

    # Work in integer tenths of a percent
    exact = [amount * 1000 / total for amount in amounts]
    tenths = [int(value.to_integral_value(rounding=ROUND_DOWN)) for value in exact]

    leftover = 1000 - sum(tenths)
    by_remainder = sorted(
        range(len(amounts)), key=lambda i: (-(exact[i] - tenths[i]), i)
    )
    for i in by_remainder[:leftover]:
        tenths[i] += 1

    return [(Decimal(t) / 10).quantize(TENTH) for t in tenths]


def chart_series(category_map: Dict[str, Decimal]) -> List[ChartEntry]:
    """Build chart entries from a category map.

    Entries are sorted by amount (largest first); equal amounts keep
    catalog order. Each entry carries its share of the map total; the shares
    add up to exactly 100.0.
    """
    total = sum(category_map.values(), ZERO)

    ordered = sorted(
        category_map.items(),
        key=lambda item: (-item[1], CATEGORY_ORDER.get(item[0], len(CATEGORY_ORDER))),
    )

    percentages = _share_percentages([amount for _category, amount in ordered], total)

    series = []
    for (category, amount), percentage in zip(ordered, percentages):
        info = CATEGORIES.get(category)
        series.append(
            ChartEntry(
                category=category,
                amount=amount,
                name=info.name if info else category,
                icon=info.icon if info else "",
                color=info.color if info else "",
                percentage=percentage,
            )
        )
    return series


def bank_balances(transactions: Iterable[Transaction], as_of: date) -> BankBalances:
    """Compute income, expense and balance per bank over effective-paid transactions.

    Transactions without a bank are ignored. Banks with no income, no
    expense and a zero balance are left out.

    Returns:
        BankBalances ordered by balance descending, ties by bank name.
    """
    income: Dict[str, Decimal] = {}
    expense: Dict[str, Decimal] = {}

    for t in transactions:
        if not t.bank or not effective_paid(t, as_of):
            continue
        if t.type == "income":
            income[t.bank] = income.get(t.bank, ZERO) + t.amount
        elif t.type == "expense":
            expense[t.bank] = expense.get(t.bank, ZERO) + t.amount

    stats = {}
    for bank in set(income) | set(expense):
        bank_income = income.get(bank, ZERO)
        bank_expense = expense.get(bank, ZERO)
        balance = bank_income - bank_expense
        if bank_income > 0 or bank_expense > 0 or balance != 0:
            stats[bank] = BankBalance(
                income=bank_income, expense=bank_expense, balance=balance
            )

    ordered = sorted(stats.items(), key=lambda item: (-item[1].balance, item[0]))
    return BankBalances(banks=dict(ordered))


def yearly_series(transactions: Iterable[Transaction], year: int) -> List[MonthPoint]:
    """Get income and expense per month for a whole year (12 points, Jan first).

    Like monthly slices, this ignores paid status.
    """
    transactions = list(transactions)
    points = []
    for month in range(1, 13):
        income, expense = _sum_by_type(monthly_slice(transactions, year, month))
        points.append(MonthPoint(month=month, income=income, expense=expense))
    return points
