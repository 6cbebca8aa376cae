"""
Chronological normalizer: raw events in, signed ordered entries out.

Sign convention (positive means the party's balance grows, i.e. the
customer owes us more or we owe the supplier more):

    sale, purchase                      +
    payment in, payment out             -
    sale return, purchase return        -
    opening balance                     as stored
"""

from datetime import date
from typing import Iterable, List, Optional

from app.logger_config import logger
from app.services.ledger.events import EventBundle, LedgerEntry, LedgerKind, RawEvent
from app.utilities.money import ZERO, add_kwd, parse_amount, quantize_kwd

SIGNS = {
    LedgerKind.SALE: 1,
    LedgerKind.PURCHASE: 1,
    LedgerKind.PAYMENT_IN: -1,
    LedgerKind.PAYMENT_OUT: -1,
    LedgerKind.SALE_RETURN: -1,
    LedgerKind.PURCHASE_RETURN: -1,
    LedgerKind.OPENING_BALANCE: 1,
    LedgerKind.BROUGHT_FORWARD: 1,
}

BROUGHT_FORWARD_DESCRIPTION = "Balance Brought Forward"


def normalize_event(event: RawEvent) -> LedgerEntry:
    """Parse the stored amount and apply the sign of the event's kind."""
    amount = parse_amount(
        event.amount, context=f"{event.kind.value} #{event.reference_id}"
    )
    return LedgerEntry(
        date=event.date,
        kind=event.kind,
        signed_amount=quantize_kwd(amount * SIGNS[event.kind]),
        reference_id=event.reference_id,
        description=event.description,
        sequence=event.sequence,
    )


def order_entries(entries: Iterable[LedgerEntry]) -> List[LedgerEntry]:
    """Date ascending, then creation sequence ascending."""
    return sorted(entries, key=LedgerEntry.sort_key)


def normalize(bundle: EventBundle) -> List[LedgerEntry]:
    entries = order_entries(normalize_event(event) for event in bundle.events())
    logger.debug(f"Normalized {len(entries)} ledger entries")
    return entries


def fold_brought_forward(entries: List[LedgerEntry], start: Optional[date]) -> List[LedgerEntry]:
    """
    Collapse every entry dated before ``start`` into one synthetic
    "Balance Brought Forward" entry dated ``start``.

    ``entries`` must already be ordered. With no start, or nothing before
    it, the entries come back unchanged.
    """
    if start is None:
        return list(entries)

    before = [e for e in entries if e.date < start]
    within = [e for e in entries if e.date >= start]
    if not before:
        return within

    carried = ZERO
    for entry in before:
        carried = add_kwd(carried, entry.signed_amount)

    brought_forward = LedgerEntry(
        date=start,
        kind=LedgerKind.BROUGHT_FORWARD,
        signed_amount=quantize_kwd(carried),
        reference_id=None,
        description=BROUGHT_FORWARD_DESCRIPTION,
        # sorts ahead of every real row on the start date
        sequence=0,
    )
    logger.debug(
        f"Folded {len(before)} entries before {start} into brought forward {carried}"
    )
    return [brought_forward] + within
