"""Running balance accumulator over ordered ledger entries."""

from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from app.services.ledger.events import DateRange, LedgerEntry, LedgerKind, StatementLine
from app.utilities.money import ZERO, add_kwd, quantize_kwd


def sum_entries(entries: Iterable[LedgerEntry], as_of: Optional[date] = None) -> Decimal:
    """Sum signed amounts dated on or before ``as_of`` (no bound if None)."""
    bounds = DateRange(end=as_of)
    total = quantize_kwd(ZERO)
    for entry in entries:
        if not bounds.contains(entry.date):
            continue
        total = add_kwd(total, entry.signed_amount)
    return total


def running_balances(entries: List[LedgerEntry]) -> Tuple[Decimal, List[StatementLine], Decimal]:
    """
    Walk ordered entries and attach the balance after each one.

    Returns ``(seed, lines, closing)`` where ``seed`` is the brought forward
    amount when the first entry is the synthetic brought-forward row, and
    zero otherwise.
    """
    seed = quantize_kwd(ZERO)
    if entries and entries[0].kind == LedgerKind.BROUGHT_FORWARD:
        seed = entries[0].signed_amount

    balance = quantize_kwd(ZERO)
    lines = []
    for entry in entries:
        balance = add_kwd(balance, entry.signed_amount)
        lines.append(StatementLine(entry=entry, running_balance=balance))

    return seed, lines, balance
