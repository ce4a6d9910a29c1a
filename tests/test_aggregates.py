from datetime import date, datetime
from decimal import Decimal

import pytest

from tracker.aggregates import (
    budget_status,
    category_breakdown,
    format_category,
    income_breakdown,
    insights,
    monthly_expense_total,
    monthly_series,
    months_ago,
    sum_by_kind,
    top_entry,
)
from tracker.domain import BudgetLevel, Kind, Transaction


def make_tx(id, kind, amount, category, d, description=""):
    return Transaction(
        id=id,
        kind=Kind(kind),
        amount=Decimal(str(amount)),
        category=category,
        description=description,
        date=date.fromisoformat(d),
        created_at=datetime(2024, 5, 1, 9, 0),
    )


def make_sample():
    return (
        make_tx(1, "income", "3000", "salary", "2024-05-01", "Salary"),
        make_tx(2, "expense", "50", "food", "2024-05-02", "Lunch"),
        make_tx(3, "expense", "60", "rent", "2024-05-03", "Rent share"),
        make_tx(4, "expense", "30", "food", "2024-05-04", "Dinner"),
        make_tx(5, "income", "200.10", "freelance", "2024-04-20", "Gig"),
        make_tx(6, "expense", "0.10", "food", "2024-04-21", "Gum"),
        make_tx(7, "expense", "0.20", "shopping", "2023-05-15", "Old"),
    )


def test_sum_by_kind():
    trans = make_sample()
    assert sum_by_kind(trans, Kind.INCOME) == Decimal("3200.10")
    assert sum_by_kind(trans, Kind.EXPENSE) == Decimal("140.30")


def test_sum_by_kind_empty():
    assert sum_by_kind((), Kind.EXPENSE) == 0


def test_sum_by_kind_partitions_total():
    trans = make_sample()
    total = sum(t.amount for t in trans)
    assert sum_by_kind(trans, Kind.INCOME) + sum_by_kind(trans, Kind.EXPENSE) == total
    reversed_trans = tuple(reversed(trans))
    assert sum_by_kind(reversed_trans, Kind.INCOME) + sum_by_kind(reversed_trans, Kind.EXPENSE) == total


def test_sum_by_kind_does_not_mutate_input():
    trans = list(make_sample())
    copy = list(trans)
    sum_by_kind(trans, Kind.EXPENSE)
    assert trans == copy


def test_monthly_expense_total():
    trans = make_sample()
    assert monthly_expense_total(trans, 5, 2024) == Decimal("140")
    assert monthly_expense_total(trans, 4, 2024) == Decimal("0.10")
    assert monthly_expense_total(trans, 5, 2023) == Decimal("0.20")
    assert monthly_expense_total(trans, 6, 2024) == 0


def test_months_ago_wraps_years():
    assert months_ago(date(2024, 2, 29), 0) == (2, 2024)
    assert months_ago(date(2024, 2, 29), 2) == (12, 2023)
    assert months_ago(date(2024, 1, 31), 13) == (12, 2022)


def test_monthly_series_shape_and_order():
    series = monthly_series(make_sample(), 6, today=date(2024, 5, 31))
    assert len(series) == 6
    assert [p.label for p in series] == [
        "Dec 2023", "Jan 2024", "Feb 2024", "Mar 2024", "Apr 2024", "May 2024",
    ]
    assert series[-1].income == Decimal("3000")
    assert series[-1].expense == Decimal("140")
    assert series[-2].income == Decimal("200.10")
    assert series[-2].expense == Decimal("0.10")
    assert all(p.income == 0 and p.expense == 0 for p in series[:4])


@pytest.mark.parametrize("months_back", [0, 1, 3, 12, 25])
def test_monthly_series_length(months_back):
    assert len(monthly_series(make_sample(), months_back, today=date(2024, 5, 1))) == months_back


def test_monthly_series_negative_raises():
    with pytest.raises(ValueError):
        monthly_series((), -1, today=date(2024, 5, 1))


def test_category_breakdown_expense_only_and_ordered():
    breakdown = category_breakdown(make_sample(), 5, 2024)
    assert breakdown == {"food": Decimal("80"), "rent": Decimal("60")}
    assert list(breakdown) == ["food", "rent"]


def test_breakdown_then_top_entry_sums_repeated_category():
    breakdown = category_breakdown(make_sample(), 5, 2024)
    assert top_entry(breakdown) == ("food", Decimal("80"))


def test_income_breakdown():
    assert income_breakdown(make_sample(), 4, 2024) == {"freelance": Decimal("200.10")}


def test_top_entry_empty():
    assert top_entry({}) is None


def test_top_entry_tie_keeps_first():
    assert top_entry({"rent": Decimal(10), "food": Decimal(10)}) == ("rent", Decimal(10))
    assert top_entry({"food": Decimal(10), "rent": Decimal(10)}) == ("food", Decimal(10))


def test_budget_status_ok():
    status = budget_status(Decimal("40"), Decimal("100"))
    assert status.remaining == Decimal("60")
    assert status.percent_used == Decimal("40")
    assert status.level == BudgetLevel.OK


def test_budget_status_warning_at_eighty():
    assert budget_status(Decimal("80"), Decimal("100")).level == BudgetLevel.WARNING


def test_budget_status_over_is_uncapped():
    status = budget_status(Decimal("150"), Decimal("100"))
    assert status.remaining == 0
    assert status.percent_used == Decimal("150")
    assert status.display_percent == Decimal("100")
    assert status.level == BudgetLevel.OVER


def test_budget_status_zero_budget():
    status = budget_status(Decimal("999"), Decimal("0"))
    assert status.percent_used == 0
    assert status.level == BudgetLevel.OK
    assert status.remaining == 0


def test_format_category():
    assert format_category("side_hustle") == "Side Hustle"
    assert format_category("food") == "Food"


def test_insights_current_month():
    result = insights(make_sample(), date(2024, 5, 20))
    assert result["top_income"] == ("salary", Decimal("3000"))
    assert result["top_expense"] == ("food", Decimal("80"))


def test_insights_empty_month():
    result = insights(make_sample(), date(2024, 7, 1))
    assert result == {"top_income": None, "top_expense": None}
