from datetime import datetime
from typing import Any, Callable, Dict, List, NamedTuple

__all__ = [
    'TRANSACTION_ADDED', 'TRANSACTION_UPDATED', 'TRANSACTION_REMOVED', 'BUDGET_SET',
    'Event', 'EventBus', 'describe',
]

TRANSACTION_ADDED = "TRANSACTION_ADDED"
TRANSACTION_UPDATED = "TRANSACTION_UPDATED"
TRANSACTION_REMOVED = "TRANSACTION_REMOVED"
BUDGET_SET = "BUDGET_SET"


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event], Any]


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def subscribe_all(self, handler: Handler) -> None:
        for name in (TRANSACTION_ADDED, TRANSACTION_UPDATED, TRANSACTION_REMOVED, BUDGET_SET):
            self.subscribe(name, handler)

    def unsubscribe(self, name: str, handler: Handler) -> None:
        handlers = self._subscribers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, name: str, payload: dict) -> List[Any]:
        handlers = self._subscribers.get(name)
        if not handlers:
            return []

        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        return [handler(event) for handler in list(handlers)]


def describe(event: Event) -> str:
    """Short user-facing notice for a change event."""
    if event.name == BUDGET_SET:
        return f"Monthly budget set to ${event.payload['budget']:,.2f}"
    if event.name == TRANSACTION_REMOVED:
        return "Transaction deleted"
    tx = event.payload["transaction"]
    verb = "added" if event.name == TRANSACTION_ADDED else "updated"
    return f"{tx.kind.value.title()} of ${tx.amount:,.2f} {verb}"
