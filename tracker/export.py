from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

import pandas as pd

from tracker.domain import Transaction

CENTS = Decimal("0.01")
CSV_HEADER = ["Date", "Type", "Category", "Description", "Amount"]


def quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def export_csv(trans: Iterable[Transaction]) -> str:
    """Comma-separated export, oldest date first, header row included."""
    df = pd.DataFrame(
        [
            {
                "Date": t.date.isoformat(),
                "Type": t.kind.value,
                "Category": t.category,
                "Description": quote(t.description),
                "Amount": str(t.amount.quantize(CENTS, rounding=ROUND_HALF_UP)),
            }
            for t in trans
        ],
        columns=CSV_HEADER,
    )
    # ISO dates sort chronologically as strings
    df = df.sort_values("Date", kind="stable")

    lines = [",".join(CSV_HEADER)]
    lines.extend(",".join(row) for row in df.itertuples(index=False, name=None))
    return "\n".join(lines)


def export_filename(today: date) -> str:
    return f"money_tracker_export_{today.isoformat()}.csv"
