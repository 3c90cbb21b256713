"""Transaction analysis tools.

These tie the stores to the aggregation and insight engines: one call per
render cycle reads the store, aggregates, and produces insights.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Union

from logger import get_logger
from models.transaction import Transaction
from tools.aggregation import (
    bank_balances,
    chart_series,
    expenses_by_category,
    monthly_slice,
    monthly_totals,
    totals_by_paid_status,
    yearly_series,
)
from tools.insights import build_facts, generate_insights
from tools.recurrence import TransactionIntent, expand, parse_intent

logger = get_logger()


def record_transaction(
    services, user_id: str, intent: Union[TransactionIntent, dict]
) -> List[Transaction]:
    """Expand a transaction intent and store the resulting records.

    Validation happens before anything reaches the store, so an invalid
    intent creates no records.

    Args:
        services: Services container with transaction service.
        user_id: Owner of the new transactions.
        intent: A TransactionIntent or a raw field mapping.

    Returns:
        The stored transactions, with IDs, earliest first.

    Raises:
        ValidationError: If the intent is invalid.
        StoreError: If the insert fails. Nothing is stored in that case.
    """
    if not isinstance(intent, TransactionIntent):
        intent = parse_intent(intent)

    records = expand(intent)
    stored = services.transactions.bulk_create(user_id, records)
    logger.debug(f"Stored {len(stored)} transaction(s) for user {user_id}")
    return stored


def get_dashboard(
    services,
    user_id: str,
    year: int,
    month: int,
    as_of: Optional[date] = None,
) -> Dict:
    """Build everything a dashboard shows for one selected month.

    Args:
        services: Services container with transactions, savings and wishlist services.
        user_id: User whose data to read.
        year: Selected year.
        month: Selected month (1-12).
        as_of: Reference date for paid status. Defaults to today.

    Returns:
        Dictionary with:
        - "totals": lifetime realized Totals
        - "month_totals": MonthlyTotals for the selected month
        - "transactions": the monthly slice, newest first
        - "expenses_by_category": monthly expenses per category
        - "chart": chart entries for the monthly expenses
        - "bank_balances": BankBalances over all transactions
        - "yearly_series": 12 MonthPoints for the selected year
        - "savings_goal": the user's SavingsGoal
        - "insights": list of Insights in display order
    """
    as_of = as_of or date.today()

    transactions = services.transactions.find_all(user_id)
    savings_goal = services.savings.get(user_id)
    wishlist = services.wishlist.find_all(user_id)

    month_transactions = monthly_slice(transactions, year, month)
    category_map = expenses_by_category(month_transactions)

    facts = build_facts(
        transactions,
        year,
        month,
        as_of,
        wishlist=wishlist,
        savings_goal=savings_goal,
    )

    logger.debug(
        f"Built dashboard for user {user_id} {year:04d}/{month:02d}: "
        f"{len(transactions)} transaction(s), {len(month_transactions)} in month"
    )

    return {
        "totals": totals_by_paid_status(transactions, as_of),
        "month_totals": monthly_totals(month_transactions),
        "transactions": month_transactions,
        "expenses_by_category": category_map,
        "chart": chart_series(category_map),
        "bank_balances": bank_balances(transactions, as_of),
        "yearly_series": yearly_series(transactions, year),
        "savings_goal": savings_goal,
        "insights": generate_insights(facts),
    }


def get_period_summary(
    services,
    user_id: str,
    start_month: date,
    end_month: date,
) -> Dict[str, Dict]:
    """Get summarized transaction data for a period, by month.

    Args:
        services: Services container with transaction service.
        user_id: User whose data to read.
        start_month: Start of period (date object, day component ignored).
        end_month: End of period (date object, day component ignored).

    Returns:
        Dictionary keyed by month (format: "YYYY/MM") with:
        - "income_total": Total income for the month (Decimal)
        - "expense_total": Total expenses for the month (Decimal)
        - "net": Net amount (income - expenses) (Decimal)
        - "expenses_by_category": Dict mapping category to expense amount (Decimal)

    Example:
        {
            "2024/01": {
                "income_total": Decimal("1000.00"),
                "expense_total": Decimal("500.00"),
                "net": Decimal("500.00"),
                "expenses_by_category": {
                    "food": Decimal("200.00"),
                    "transport": Decimal("300.00"),
                },
            },
            "2024/02": {...},
        }
    """
    result = {}

    current_year = start_month.year
    current_month = start_month.month
    end_year = end_month.year
    end_month_num = end_month.month

    # Iterate through each month in the range (inclusive)
    while (current_year, current_month) <= (end_year, end_month_num):
        month_key = f"{current_year:04d}/{current_month:02d}"

        transactions = services.transactions.find_by_month(
            user_id, current_year, current_month
        )
        totals = monthly_totals(transactions)

        result[month_key] = {
            "income_total": totals.month_income,
            "expense_total": totals.month_expense,
            "net": totals.month_balance,
            "expenses_by_category": expenses_by_category(transactions),
        }

        current_month += 1
        if current_month > 12:
            current_month = 1
            current_year += 1

    return result


def summarize_amounts(transactions: List[Transaction]) -> Decimal:
    """Sum the amounts of a list of transactions regardless of type."""
    return sum((t.amount for t in transactions), Decimal("0"))
