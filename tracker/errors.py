from typing import Optional


class TrackerError(Exception):
    """Base class for errors surfaced by the tracker."""


class ValidationError(TrackerError):
    """Rejected input: bad amount, missing field, bad budget value."""

    def __init__(self, code: str, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.field = field

    @classmethod
    def from_details(cls, details: dict) -> "ValidationError":
        return cls(details["error"], details["message"], details.get("field"))


class NotFoundError(TrackerError):
    def __init__(self, transaction_id: int):
        super().__init__(f"Transaction with ID {transaction_id} does not exist")
        self.transaction_id = transaction_id
