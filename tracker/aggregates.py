"""Derived views over a snapshot of transactions.

Every function here is pure: it reads the transactions it is given plus an
explicit reference date and returns a new value. Nothing is cached, views
are recomputed on each call.
"""

from datetime import date
from decimal import Decimal
from functools import reduce
from typing import Iterable, Mapping, Optional, Tuple, TypeVar

from tracker.domain import BudgetLevel, BudgetStatus, Kind, MonthlyPoint, Transaction
from tracker.filters import by_kind, by_month

K = TypeVar("K")

WARNING_PERCENT = Decimal(80)
OVER_PERCENT = Decimal(100)


def sum_by_kind(trans: Iterable[Transaction], kind: Kind) -> Decimal:
    return reduce(
        lambda acc, t: acc + t.amount if t.kind == kind else acc, trans, Decimal(0)
    )


def monthly_total(trans: Iterable[Transaction], kind: Kind, month: int, year: int) -> Decimal:
    in_month = by_month(month, year)
    return sum_by_kind(filter(in_month, trans), kind)


def monthly_expense_total(trans: Iterable[Transaction], month: int, year: int) -> Decimal:
    return monthly_total(trans, Kind.EXPENSE, month, year)


def months_ago(today: date, back: int) -> Tuple[int, int]:
    """(month, year) of the calendar month ``back`` months before ``today``."""
    index = today.year * 12 + (today.month - 1) - back
    return index % 12 + 1, index // 12


def monthly_series(
    trans: Iterable[Transaction], months_back: int = 6, today: Optional[date] = None
) -> Tuple[MonthlyPoint, ...]:
    """Income and expense totals per month, oldest first, ending at today's month."""
    if months_back < 0:
        raise ValueError(f"months_back must not be negative, got {months_back}")
    today = today or date.today()
    snapshot = tuple(trans)

    points = []
    for back in range(months_back - 1, -1, -1):
        month, year = months_ago(today, back)
        points.append(
            MonthlyPoint(
                label=date(year, month, 1).strftime("%b %Y"),
                income=monthly_total(snapshot, Kind.INCOME, month, year),
                expense=monthly_total(snapshot, Kind.EXPENSE, month, year),
            )
        )
    return tuple(points)


def _breakdown(trans: Iterable[Transaction], kind: Kind, month: int, year: int) -> dict[str, Decimal]:
    totals: dict[str, Decimal] = {}
    in_month = by_month(month, year)
    for t in filter(by_kind(kind), trans):
        if in_month(t):
            totals[t.category] = totals.get(t.category, Decimal(0)) + t.amount
    return totals


def category_breakdown(trans: Iterable[Transaction], month: int, year: int) -> dict[str, Decimal]:
    return _breakdown(trans, Kind.EXPENSE, month, year)


def income_breakdown(trans: Iterable[Transaction], month: int, year: int) -> dict[str, Decimal]:
    return _breakdown(trans, Kind.INCOME, month, year)


def top_entry(mapping: Mapping[K, Decimal]) -> Optional[Tuple[K, Decimal]]:
    best: Optional[Tuple[K, Decimal]] = None
    for key, value in mapping.items():
        # strict comparison keeps the first of equal maxima
        if best is None or value > best[1]:
            best = (key, value)
    return best


def budget_status(total_expense: Decimal, budget: Decimal) -> BudgetStatus:
    remaining = max(budget - total_expense, Decimal(0))
    percent_used = total_expense / budget * 100 if budget > 0 else Decimal(0)

    if percent_used >= OVER_PERCENT:
        level = BudgetLevel.OVER
    elif percent_used >= WARNING_PERCENT:
        level = BudgetLevel.WARNING
    else:
        level = BudgetLevel.OK
    return BudgetStatus(remaining=remaining, percent_used=percent_used, level=level)


def format_category(name: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in name.split("_"))


def insights(trans: Iterable[Transaction], today: date) -> dict:
    """Top income source and top expense category for today's month."""
    snapshot = tuple(trans)
    return {
        "top_income": top_entry(income_breakdown(snapshot, today.month, today.year)),
        "top_expense": top_entry(category_breakdown(snapshot, today.month, today.year)),
    }
