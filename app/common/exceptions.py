"""
Domain exceptions for ledger and master-data operations.

Exception Hierarchy:
    LedgerError (base)
    ├── PartyNotFound - party lookup failures
    ├── InvalidDateRange - statement range with start after end
    └── PartyInUse - delete blocked by linked transactions

Each exception carries an HTTP status code and an error code so the
handlers in ``app.common.error_handlers`` can render a consistent body.
"""

from typing import Any, Optional


class LedgerError(Exception):
    """Base exception for ledger operations."""

    status_code: int = 400
    default_error_code: str = "LEDGER_ERROR"
    default_message: str = "Ledger operation failed"

    def __init__(self, message: Optional[str] = None, details: Optional[dict] = None):
        self.message = message or self.default_message
        self.error_code = self.default_error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": False,
            "message": self.message,
            "error": self.error_code,
            "status_code": self.status_code,
            "details": self.details,
        }


class PartyNotFound(LedgerError):
    """
    Raised when a balance or statement is requested for a party that does
    not exist, or that exists under a different party type.
    """

    status_code = 404
    default_error_code = "PARTY_NOT_FOUND"
    default_message = "Party not found"

    def __init__(self, party_id: int, party_type: Optional[str] = None):
        self.party_id = party_id
        self.party_type = party_type
        details = {"party_id": party_id}
        if party_type:
            details["party_type"] = party_type
        super().__init__(details=details)


class InvalidDateRange(LedgerError):
    """Raised when a statement range starts after it ends."""

    status_code = 400
    default_error_code = "INVALID_DATE_RANGE"
    default_message = "invalid date range"

    def __init__(self, start, end):
        self.start = start
        self.end = end
        super().__init__(details={"start_date": str(start), "end_date": str(end)})


class PartyInUse(LedgerError):
    """Raised when deleting a party that still has linked transactions."""

    status_code = 409
    default_error_code = "PARTY_IN_USE"

    def __init__(self, party_id: int, linked: dict[str, int]):
        self.party_id = party_id
        self.linked = linked
        summary = ", ".join(f"{count} {name}" for name, count in linked.items() if count)
        super().__init__(
            message=f"Cannot delete party with linked transactions ({summary})",
            details={"party_id": party_id, "linked": linked},
        )
