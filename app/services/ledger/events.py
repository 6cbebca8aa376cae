"""
Ledger event types.

Every source row that touches a party's balance (sale, purchase, payment,
return, opening balance) is read into a ``RawEvent`` tagged with its
``LedgerKind``. The normalizer turns raw events into signed ``LedgerEntry``
values and the accumulator folds those into balances and statements.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Iterator, List, Optional, Tuple

from app.common.exceptions import InvalidDateRange
from app.utilities.money import ZERO, quantize_kwd


class LedgerKind(str, Enum):
    SALE = "sale"
    PURCHASE = "purchase"
    PAYMENT_IN = "payment_in"
    PAYMENT_OUT = "payment_out"
    SALE_RETURN = "sale_return"
    PURCHASE_RETURN = "purchase_return"
    OPENING_BALANCE = "opening_balance"
    BROUGHT_FORWARD = "brought_forward"


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar range; a missing bound is open-ended."""
    start: Optional[date] = None
    end: Optional[date] = None

    def __post_init__(self):
        if self.start and self.end and self.start > self.end:
            raise InvalidDateRange(self.start, self.end)

    def contains(self, day: date) -> bool:
        if self.start and day < self.start:
            return False
        if self.end and day > self.end:
            return False
        return True


@dataclass(frozen=True)
class RawEvent:
    kind: LedgerKind
    date: date
    amount: Any  # as read from storage, parsed by the normalizer
    reference_id: Optional[int]
    sequence: int
    branch_id: Optional[int] = None
    description: str = ""


@dataclass
class EventBundle:
    """Unordered events for one party, grouped by source."""
    sales: List[RawEvent] = field(default_factory=list)
    purchases: List[RawEvent] = field(default_factory=list)
    payments_in: List[RawEvent] = field(default_factory=list)
    payments_out: List[RawEvent] = field(default_factory=list)
    returns: List[RawEvent] = field(default_factory=list)
    # one row per branch; with a branch filter at most one
    opening_balances: List[RawEvent] = field(default_factory=list)

    def events(self) -> Iterator[RawEvent]:
        yield from self.opening_balances
        yield from self.sales
        yield from self.purchases
        yield from self.payments_in
        yield from self.payments_out
        yield from self.returns

    def is_empty(self) -> bool:
        return not any(
            (self.opening_balances, self.sales, self.purchases,
             self.payments_in, self.payments_out, self.returns)
        )


@dataclass(frozen=True)
class LedgerEntry:
    date: date
    kind: LedgerKind
    signed_amount: Decimal
    reference_id: Optional[int]
    description: str
    sequence: int

    @property
    def debit(self) -> Decimal:
        return self.signed_amount if self.signed_amount > 0 else quantize_kwd(ZERO)

    @property
    def credit(self) -> Decimal:
        return -self.signed_amount if self.signed_amount < 0 else quantize_kwd(ZERO)

    def sort_key(self) -> Tuple[date, int]:
        return (self.date, self.sequence)


@dataclass(frozen=True)
class StatementLine:
    entry: LedgerEntry
    running_balance: Decimal


@dataclass(frozen=True)
class Statement:
    party_id: int
    party_type: str
    date_range: DateRange
    opening_balance: Decimal
    closing_balance: Decimal
    lines: Tuple[StatementLine, ...] = ()
