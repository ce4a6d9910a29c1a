from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar

from tracker.domain import CATEGORIES_BY_KIND, Kind, Transaction, TransactionDraft

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')

REQUIRED_FIELDS = ("kind", "amount", "category", "description", "date")


class Maybe(Generic[T], ABC):

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_some(self) -> bool:
        pass

    def is_none(self) -> bool:
        return not self.is_some()


@dataclass(frozen=True)
class Some(Maybe[T]):
    value: T

    def get_or_else(self, default: T) -> T:
        return self.value

    def is_some(self) -> bool:
        return True


@dataclass(frozen=True)
class Nothing(Maybe[T]):

    def get_or_else(self, default: T) -> T:
        return default

    def is_some(self) -> bool:
        return False


class Either(Generic[E, T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    def is_left(self) -> bool:
        return not self.is_right()

    @abstractmethod
    def get_error(self) -> E:
        pass


@dataclass(frozen=True)
class Right(Either[E, T]):
    value: T

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Right(f(self.value))

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self.value)

    def get_or_else(self, default: T) -> T:
        return self.value

    def is_right(self) -> bool:
        return True

    def get_error(self) -> E:
        raise ValueError("Cannot get error from Right")


@dataclass(frozen=True)
class Left(Either[E, T]):
    error: E

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return self

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return self

    def get_or_else(self, default: T) -> T:
        return default

    def is_right(self) -> bool:
        return False

    def get_error(self) -> E:
        return self.error


def find_transaction(trans: tuple[Transaction, ...], tx_id: int) -> Maybe[Transaction]:
    for t in trans:
        if t.id == tx_id:
            return Some(t)
    return Nothing()


def to_decimal(value: Any) -> Optional[Decimal]:
    """Parse a finite decimal from user input, or None if it is not one."""
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return parsed if parsed.is_finite() else None


def _invalid(error: str, message: str, field: str) -> Left:
    return Left({"error": error, "message": message, "field": field})


def _require_fields(fields: Mapping[str, Any]) -> Either[dict, dict]:
    for name in REQUIRED_FIELDS:
        value = fields.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            return _invalid("missing_field", f"Field '{name}' is required", name)
    return Right({name: fields[name] for name in REQUIRED_FIELDS})


def _parse_kind(parsed: dict) -> Either[dict, dict]:
    try:
        kind = Kind(parsed["kind"])
    except ValueError:
        return _invalid("invalid_kind", f"Unknown transaction type {parsed['kind']!r}", "kind")
    return Right({**parsed, "kind": kind})


def _parse_amount(parsed: dict) -> Either[dict, dict]:
    amount = to_decimal(parsed["amount"])
    if amount is None:
        return _invalid("invalid_amount", f"Amount {parsed['amount']!r} is not a number", "amount")
    if amount <= 0:
        return _invalid("invalid_amount", "Amount must be greater than 0", "amount")
    return Right({**parsed, "amount": amount})


def _check_category(parsed: dict) -> Either[dict, dict]:
    kind = parsed["kind"]
    if parsed["category"] not in CATEGORIES_BY_KIND[kind]:
        return _invalid(
            "category_type_mismatch",
            f"Category {parsed['category']!r} is not a valid {kind.value} category",
            "category",
        )
    return Right(parsed)


def _parse_date(parsed: dict) -> Either[dict, dict]:
    value = parsed["date"]
    if isinstance(value, datetime):
        return Right({**parsed, "date": value.date()})
    if isinstance(value, date):
        return Right(parsed)
    try:
        return Right({**parsed, "date": date.fromisoformat(str(value).strip())})
    except ValueError:
        return _invalid("invalid_date", f"Date {value!r} is not a YYYY-MM-DD date", "date")


def validate_transaction(fields: Mapping[str, Any]) -> Either[dict, TransactionDraft]:
    return (
        _require_fields(fields)
        .bind(_parse_kind)
        .bind(_parse_amount)
        .bind(_check_category)
        .bind(_parse_date)
        .map(lambda parsed: TransactionDraft(
            kind=parsed["kind"],
            amount=parsed["amount"],
            category=parsed["category"],
            description=str(parsed["description"]),
            date=parsed["date"],
        ))
    )


def validate_budget(value: Any) -> Either[dict, Decimal]:
    amount = to_decimal(value)
    if amount is None:
        return _invalid("invalid_budget", f"Budget {value!r} is not a number", "budget")
    if amount < 0:
        return _invalid("invalid_budget", "Budget cannot be negative", "budget")
    return Right(amount)
