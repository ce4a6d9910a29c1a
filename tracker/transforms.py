import json
from datetime import date, datetime
from decimal import Decimal
from typing import Tuple

import pandas as pd

from tracker.domain import CATEGORIES_BY_KIND, Kind, Transaction

FRAME_COLUMNS = ["id", "date", "type", "category", "description", "amount"]


def add_transaction(
    trans: Tuple[Transaction, ...], t: Transaction
) -> Tuple[Transaction, ...]:
    return trans + (t,)


def replace_transaction(
    trans: Tuple[Transaction, ...], t: Transaction
) -> Tuple[Transaction, ...]:
    return tuple(t if old.id == t.id else old for old in trans)


def remove_transaction(
    trans: Tuple[Transaction, ...], tx_id: int
) -> Tuple[Transaction, ...]:
    return tuple(filter(lambda t: t.id != tx_id, trans))


def next_id(trans: Tuple[Transaction, ...], now: datetime) -> int:
    """Millisecond timestamp id, bumped past the largest existing id on collision."""
    candidate = int(now.timestamp() * 1000)
    highest = max((t.id for t in trans), default=0)
    return candidate if candidate > highest else highest + 1


def to_record(t: Transaction) -> dict:
    return {
        "id": t.id,
        "type": t.kind.value,
        "amount": str(t.amount),
        "category": t.category,
        "description": t.description,
        "date": t.date.isoformat(),
        "timestamp": t.created_at.isoformat(),
    }


def from_record(record: dict) -> Transaction:
    """Rebuild a transaction from its stored form.

    Raises KeyError, TypeError, ValueError or decimal.InvalidOperation
    when the record is malformed.
    """
    tx_id = record["id"]
    if isinstance(tx_id, bool) or not isinstance(tx_id, int):
        raise TypeError(f"transaction id must be an integer, got {tx_id!r}")
    amount = Decimal(str(record["amount"]))
    if not amount.is_finite() or amount <= 0:
        raise ValueError(f"transaction amount must be positive, got {amount}")
    kind = Kind(record["type"])
    category = record["category"]
    if category not in CATEGORIES_BY_KIND[kind]:
        raise ValueError(f"category {category!r} is not a valid {kind.value} category")
    description = record["description"]
    if not isinstance(description, str) or not description.strip():
        raise ValueError("transaction description must be a non-empty string")
    return Transaction(
        id=tx_id,
        kind=kind,
        amount=amount,
        category=category,
        description=description,
        date=date.fromisoformat(record["date"]),
        created_at=datetime.fromisoformat(record["timestamp"]),
    )


def dump_transactions(trans: Tuple[Transaction, ...]) -> str:
    return json.dumps([to_record(t) for t in trans])


def load_transactions(raw: str) -> Tuple[Transaction, ...]:
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError("stored transactions must be a list")
    trans = tuple(from_record(r) for r in data)
    if len({t.id for t in trans}) != len(trans):
        raise ValueError("stored transactions contain duplicate ids")
    return trans


def to_frame(trans: Tuple[Transaction, ...]) -> pd.DataFrame:
    """Tabular view of transactions for display, one row per record."""
    rows = [
        {
            "id": t.id,
            "date": t.date,
            "type": t.kind.value,
            "category": t.category,
            "description": t.description,
            "amount": float(t.amount),
        }
        for t in trans
    ]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)
