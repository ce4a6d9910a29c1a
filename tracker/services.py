from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, Optional, Sequence

from tracker.aggregates import (
    budget_status,
    category_breakdown,
    insights,
    monthly_expense_total,
    monthly_series,
    sum_by_kind,
)
from tracker.domain import Kind, Transaction
from tracker.filters import filter_by_category, sort_for_display

Calculator = Callable[[Dict[str, Any], Dict[str, Any]], Dict[str, Any]]


def calc_summary(ctx: Dict[str, Any], acc: Dict[str, Any]) -> Dict[str, Any]:
    visible = filter_by_category(ctx["transactions"], ctx["category"])
    return {
        "rows": sort_for_display(visible),
        "total_income": sum_by_kind(visible, Kind.INCOME),
        "total_expense": sum_by_kind(visible, Kind.EXPENSE),
    }


def calc_budget(ctx: Dict[str, Any], acc: Dict[str, Any]) -> Dict[str, Any]:
    today = ctx["today"]
    spent = monthly_expense_total(ctx["transactions"], today.month, today.year)
    return {
        "budget": ctx["budget"],
        "month_spent": spent,
        "budget_status": budget_status(spent, ctx["budget"]),
    }


def calc_series(ctx: Dict[str, Any], acc: Dict[str, Any]) -> Dict[str, Any]:
    return {"series": monthly_series(ctx["transactions"], ctx["months_back"], ctx["today"])}


def calc_breakdown(ctx: Dict[str, Any], acc: Dict[str, Any]) -> Dict[str, Any]:
    today = ctx["today"]
    return {"breakdown": category_breakdown(ctx["transactions"], today.month, today.year)}


def calc_insights(ctx: Dict[str, Any], acc: Dict[str, Any]) -> Dict[str, Any]:
    return insights(ctx["transactions"], ctx["today"])


DEFAULT_CALCULATORS: Sequence[Calculator] = (
    calc_summary,
    calc_budget,
    calc_series,
    calc_breakdown,
    calc_insights,
)


class DashboardService:
    """Facade that builds every dashboard view from one transaction snapshot.

    calculators: sequence of functions taking (context, acc) -> dict (partial results).
    ``context`` holds transactions, budget, today, category and months_back;
    ``acc`` holds the merged output of the calculators that already ran.
    """

    def __init__(self, calculators: Sequence[Calculator] = DEFAULT_CALCULATORS, months_back: int = 6):
        self.calculators = calculators
        self.months_back = months_back

    def snapshot(
        self,
        transactions: Iterable[Transaction],
        budget: Decimal,
        today: Optional[date] = None,
        category: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Run calculators in order and return the aggregated report with intermediate steps."""
        ctx = {
            "transactions": tuple(transactions),
            "budget": budget,
            "today": today or date.today(),
            "category": category,
            "months_back": self.months_back,
        }
        report: Dict[str, Any] = {"today": ctx["today"], "category": category, "steps": [], "result": {}}

        acc: Dict[str, Any] = {}
        for calc in self.calculators:
            out = calc(ctx, acc)
            report["steps"].append({"calculator": getattr(calc, "__name__", str(calc)), "output": out})
            acc.update(out)

        report["result"] = acc
        return report
