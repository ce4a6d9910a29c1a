from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Final


class Kind(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class BudgetLevel(str, Enum):
    OK = "ok"
    WARNING = "warning"
    OVER = "over"


EXPENSE_CATEGORIES: Final[tuple[str, ...]] = (
    "food",
    "groceries",
    "rent",
    "utilities",
    "transportation",
    "entertainment",
    "shopping",
    "healthcare",
    "education",
    "other_expense",
)

INCOME_CATEGORIES: Final[tuple[str, ...]] = (
    "salary",
    "freelance",
    "side_hustle",
    "investments",
    "gifts",
    "other_income",
)

CATEGORIES_BY_KIND: Final[dict[Kind, tuple[str, ...]]] = {
    Kind.EXPENSE: EXPENSE_CATEGORIES,
    Kind.INCOME: INCOME_CATEGORIES,
}


# Validated mutable fields of a transaction, before an id is assigned
@dataclass(frozen=True)
class TransactionDraft:
    kind: Kind
    amount: Decimal
    category: str
    description: str
    date: date


@dataclass(frozen=True)
class Transaction:
    id: int
    kind: Kind
    amount: Decimal      # always > 0, sign comes from kind
    category: str
    description: str
    date: date           # user-supplied calendar date
    created_at: datetime # set on create, refreshed on update

    @classmethod
    def from_draft(cls, tx_id: int, draft: TransactionDraft, created_at: datetime) -> "Transaction":
        return cls(
            id=tx_id,
            kind=draft.kind,
            amount=draft.amount,
            category=draft.category,
            description=draft.description,
            date=draft.date,
            created_at=created_at,
        )


@dataclass(frozen=True)
class MonthlyPoint:
    label: str  # e.g. "May 2024"
    income: Decimal
    expense: Decimal


@dataclass(frozen=True)
class BudgetStatus:
    remaining: Decimal
    percent_used: Decimal  # uncapped
    level: BudgetLevel

    @property
    def display_percent(self) -> Decimal:
        return min(self.percent_used, Decimal(100))
