"""
Party balance and statement service.

The ledger is never stored: every call re-reads the source rows, so
deleting a sale or payment is reflected on the next computation.

Example (supplier with an opening balance):
- 2023-12-31: Opening balance 500.000
- 2024-02-01: Purchase 200.000
- 2024-02-15: Payment out 300.000
Statement for 2024-01-01..2024-02-28:
  Balance Brought Forward  500.000  -> 500.000
  Purchase                +200.000  -> 700.000
  Payment made            -300.000  -> 400.000
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from app.common.exceptions import PartyNotFound
from app.logger_config import logger
from app.models.party import Party, PartyType
from app.services.ledger.accumulator import running_balances, sum_entries
from app.services.ledger.events import DateRange, Statement
from app.services.ledger.extractor import LedgerEventExtractor
from app.services.ledger.normalizer import fold_brought_forward, normalize
from app.services.party_service import get_party_by_id

LEDGER_PARTY_TYPES = (PartyType.customer, PartyType.supplier)


class LedgerService:
    """Current balance and statement for customers and suppliers."""

    def __init__(self, db: Session):
        self.db = db
        self.extractor = LedgerEventExtractor(db)

    def get_ledger_party(self, party_id: int, party_type: Optional[PartyType] = None) -> Party:
        """
        Resolve a party that carries a ledger.

        Raises PartyNotFound when the id is unknown, when the party is a
        salesman, or when ``party_type`` is given and does not match.
        """
        party = get_party_by_id(self.db, party_id)
        if not party or party.party_type not in LEDGER_PARTY_TYPES:
            logger.warning(f"Ledger requested for unknown party {party_id}")
            raise PartyNotFound(party_id, party_type.value if party_type else None)
        if party_type is not None and party.party_type != party_type:
            logger.warning(
                f"Ledger requested for party {party_id} as {party_type.value}, "
                f"but it is a {party.party_type.value}"
            )
            raise PartyNotFound(party_id, party_type.value)
        return party
    def current_balance(
        self,
        party_id: int,
        party_type: Optional[PartyType] = None,
        as_of: Optional[date] = None,
        branch_id: Optional[int] = None,
    ) -> Decimal:
        party = self.get_ledger_party(party_id, party_type)
        return self.balance_of(party, as_of=as_of, branch_id=branch_id)

    def balance_of(
        self,
        party: Party,
        as_of: Optional[date] = None,
        branch_id: Optional[int] = None,
    ) -> Decimal:
        """Balance of an already resolved ledger party."""
        bundle = self.extractor.extract(
            party.id, party.party_type, DateRange(end=as_of), branch_id=branch_id
        )
        balance = sum_entries(normalize(bundle), as_of=as_of)

        logger.info(
            f"Balance for {party.party_type.value} {party.id}"
            f"{f' as of {as_of}' if as_of else ''}: {balance}"
        )
        return balance

    def statement(
        self,
        party_id: int,
        party_type: Optional[PartyType] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        branch_id: Optional[int] = None,
    ) -> Statement:
        # Validates start <= end before touching the database
        date_range = DateRange(start=start, end=end)
        party = self.get_ledger_party(party_id, party_type)
        return self.statement_of(party, date_range, branch_id=branch_id)

    def statement_of(
        self,
        party: Party,
        date_range: DateRange,
        branch_id: Optional[int] = None,
    ) -> Statement:
        """Statement of an already resolved ledger party."""
        start, end = date_range.start, date_range.end

        # Everything up to the end date; earlier rows fold into brought forward
        upto = DateRange(end=end)
        bundle = self.extractor.extract(party.id, party.party_type, upto, branch_id=branch_id)
        entries = [e for e in normalize(bundle) if upto.contains(e.date)]
        entries = fold_brought_forward(entries, start)

        seed, lines, closing = running_balances(entries)

        logger.info(
            f"Statement for {party.party_type.value} {party.id} "
            f"[{start or 'inception'} .. {end or 'latest'}]: "
            f"{len(lines)} lines, opening {seed}, closing {closing}"
        )
        return Statement(
            party_id=party.id,
            party_type=party.party_type.value,
            date_range=date_range,
            opening_balance=seed,
            closing_balance=closing,
            lines=tuple(lines),
        )
