from typing import Iterable, Optional

from tracker.domain import Kind, Transaction


def by_category(category: str):
    def _filter(t: Transaction) -> bool:
        return t.category == category

    return _filter


def by_kind(kind: Kind):
    def _filter(t: Transaction) -> bool:
        return t.kind == kind

    return _filter


def by_month(month: int, year: int):
    def _filter(t: Transaction) -> bool:
        return t.date.month == month and t.date.year == year

    return _filter


def filter_by_category(
    trans: Iterable[Transaction], category: Optional[str]
) -> tuple[Transaction, ...]:
    if not category:
        return tuple(trans)
    return tuple(filter(by_category(category), trans))


def sort_for_display(trans: Iterable[Transaction]) -> tuple[Transaction, ...]:
    # newest first; same-day records keep insertion order
    return tuple(sorted(trans, key=lambda t: t.date, reverse=True))
