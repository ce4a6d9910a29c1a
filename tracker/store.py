"""
Transaction store: the live collection of transactions plus the budget.

The Store owns an ordered tuple of Transaction records (insertion order)
and a single budget value. Every mutation builds the new state, writes the
whole of it to the durable slot and only then swaps it in, so a failed
write leaves the Store exactly as it was. Successful mutations are
announced on the Store's EventBus so views can recompute.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Mapping, Optional, Tuple

from tracker.domain import Transaction
from tracker.errors import NotFoundError, ValidationError
from tracker.events import (
    BUDGET_SET,
    TRANSACTION_ADDED,
    TRANSACTION_REMOVED,
    TRANSACTION_UPDATED,
    EventBus,
)
from tracker.functional import find_transaction, to_decimal, validate_budget, validate_transaction
from tracker.storage import Slot
from tracker.transforms import (
    add_transaction,
    dump_transactions,
    load_transactions,
    next_id,
    remove_transaction,
    replace_transaction,
)

logger = logging.getLogger(__name__)

TRANSACTIONS_KEY = "transactions"
BUDGET_KEY = "monthlyBudget"


class Store:
    """
    In-memory transaction collection mirrored to a durable slot.

    Parameters
    ----------
    slot : Slot
        Key-value storage the state is loaded from and written to.
    bus : EventBus, optional
        Bus that change events are published on. A private one is created
        when omitted.
    clock : callable, optional
        Returns the current datetime; used for ids and ``created_at``.
    """

    def __init__(
        self,
        slot: Slot,
        bus: Optional[EventBus] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._slot = slot
        self.bus = bus if bus is not None else EventBus()
        self._clock = clock or datetime.now
        self._transactions: Tuple[Transaction, ...] = ()
        self._budget = Decimal(0)
        self.load()

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        return self._transactions

    @property
    def budget(self) -> Decimal:
        return self._budget

    def load(self) -> Tuple[Tuple[Transaction, ...], Decimal]:
        """
        Reload state from the slot.

        Absent or malformed values fall back to an empty collection and a
        zero budget; this never raises.
        """
        self._transactions = self._read_transactions()
        self._budget = self._read_budget()
        logger.info(
            "Loaded %d transactions, budget %s", len(self._transactions), self._budget
        )
        return self._transactions, self._budget

    def _read_transactions(self) -> Tuple[Transaction, ...]:
        try:
            raw = self._slot.get(TRANSACTIONS_KEY)
            if raw is None:
                return ()
            return load_transactions(raw)
        except (OSError, KeyError, TypeError, ValueError, ArithmeticError, RecursionError) as e:
            logger.warning("Discarding malformed stored transactions: %s", e)
            return ()

    def _read_budget(self) -> Decimal:
        try:
            raw = self._slot.get(BUDGET_KEY)
        except OSError as e:
            logger.warning("Could not read stored budget: %s", e)
            return Decimal(0)
        if raw is None:
            return Decimal(0)
        budget = to_decimal(raw)
        if budget is None or budget < 0:
            logger.warning("Discarding malformed stored budget %r", raw)
            return Decimal(0)
        return budget

    def _commit(self, trans: Tuple[Transaction, ...]) -> None:
        self._slot.set(TRANSACTIONS_KEY, dump_transactions(trans))
        self._transactions = trans

    def get(self, tx_id: int) -> Transaction:
        found = find_transaction(self._transactions, tx_id)
        if found.is_none():
            raise NotFoundError(tx_id)
        return found.get_or_else(None)

    def add(self, fields: Mapping[str, Any]) -> Transaction:
        result = validate_transaction(fields)
        if result.is_left():
            raise ValidationError.from_details(result.get_error())

        now = self._clock()
        tx = Transaction.from_draft(next_id(self._transactions, now), result.get_or_else(None), now)
        self._commit(add_transaction(self._transactions, tx))

        logger.info("Added %s %s (%s) id=%s", tx.kind.value, tx.amount, tx.category, tx.id)
        self.bus.publish(TRANSACTION_ADDED, {"transaction": tx})
        return tx

    def update(self, tx_id: int, fields: Mapping[str, Any]) -> Transaction:
        """Replace every mutable field of an existing transaction."""
        self.get(tx_id)

        result = validate_transaction(fields)
        if result.is_left():
            raise ValidationError.from_details(result.get_error())

        tx = Transaction.from_draft(tx_id, result.get_or_else(None), self._clock())
        self._commit(replace_transaction(self._transactions, tx))

        logger.info("Updated transaction id=%s", tx_id)
        self.bus.publish(TRANSACTION_UPDATED, {"transaction": tx})
        return tx

    def remove(self, tx_id: int) -> None:
        if find_transaction(self._transactions, tx_id).is_none():
            logger.debug("Remove of unknown transaction id=%s ignored", tx_id)
            return

        self._commit(remove_transaction(self._transactions, tx_id))

        logger.info("Removed transaction id=%s", tx_id)
        self.bus.publish(TRANSACTION_REMOVED, {"id": tx_id})

    def set_budget(self, amount: Any) -> None:
        result = validate_budget(amount)
        if result.is_left():
            raise ValidationError.from_details(result.get_error())

        budget = result.get_or_else(None)
        self._slot.set(BUDGET_KEY, str(budget))
        self._budget = budget

        logger.info("Monthly budget set to %s", budget)
        self.bus.publish(BUDGET_SET, {"budget": budget})
