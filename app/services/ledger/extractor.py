"""
Ledger event extractor.

Reads every source row that affects one party's balance. Customers read
sales, payments IN and sale returns; suppliers read purchases, payments OUT
and purchase returns. Nothing here validates the party: an id with no rows
of the requested kind simply yields an empty bundle.
"""

from typing import List, Optional

from sqlalchemy.orm import Query, Session

from app.logger_config import logger
from app.models.opening_balance import OpeningBalance
from app.models.party import PartyType
from app.models.payment import Payment, PaymentDirection
from app.models.purchase import PurchaseOrder
from app.models.returns import ReturnOrder, ReturnType
from app.models.sale import SalesOrder
from app.services.ledger.events import DateRange, EventBundle, LedgerKind, RawEvent


class LedgerEventExtractor:

    def __init__(self, db: Session):
        self.db = db

    def extract(
        self,
        party_id: int,
        party_type: PartyType,
        date_range: Optional[DateRange] = None,
        branch_id: Optional[int] = None,
    ) -> EventBundle:
        date_range = date_range or DateRange()
        bundle = EventBundle()

        if party_type == PartyType.customer:
            bundle.sales = self._sales(party_id, date_range, branch_id)
            bundle.payments_in = self._payments(party_id, PaymentDirection.IN, date_range, branch_id)
            bundle.returns = self._returns(party_id, ReturnType.sale_return, date_range, branch_id)
        elif party_type == PartyType.supplier:
            bundle.purchases = self._purchases(party_id, date_range, branch_id)
            bundle.payments_out = self._payments(party_id, PaymentDirection.OUT, date_range, branch_id)
            bundle.returns = self._returns(party_id, ReturnType.purchase_return, date_range, branch_id)
        else:
            logger.debug(f"Party type {party_type} has no ledger; returning empty bundle")
            return bundle

        # Opening balance is returned regardless of the range
        bundle.opening_balances = self._opening_balances(party_id, branch_id)

        logger.debug(
            f"Extracted ledger events for {party_type.value} {party_id}: "
            f"sales={len(bundle.sales)}, purchases={len(bundle.purchases)}, "
            f"payments_in={len(bundle.payments_in)}, payments_out={len(bundle.payments_out)}, "
            f"returns={len(bundle.returns)}, opening={len(bundle.opening_balances)}"
        )
        return bundle

    # ==================== HELPERS ====================

    @staticmethod
    def _scope(query: Query, date_column, branch_column, date_range: DateRange, branch_id: Optional[int]) -> Query:
        if date_range.start:
            query = query.filter(date_column >= date_range.start)
        if date_range.end:
            query = query.filter(date_column <= date_range.end)
        if branch_id is not None:
            query = query.filter(branch_column == branch_id)
        return query

    def _sales(self, customer_id: int, date_range: DateRange, branch_id: Optional[int]) -> List[RawEvent]:
        query = self.db.query(SalesOrder).filter(SalesOrder.customer_id == customer_id)
        query = self._scope(query, SalesOrder.sale_date, SalesOrder.branch_id, date_range, branch_id)
        return [
            RawEvent(
                kind=LedgerKind.SALE,
                date=row.sale_date,
                amount=row.total_kwd,
                reference_id=row.id,
                sequence=row.sequence,
                branch_id=row.branch_id,
                description=f"Sales invoice {row.invoice_number or f'#{row.id}'}",
            )
            for row in query.all()
        ]

    def _purchases(self, supplier_id: int, date_range: DateRange, branch_id: Optional[int]) -> List[RawEvent]:
        query = self.db.query(PurchaseOrder).filter(PurchaseOrder.supplier_id == supplier_id)
        query = self._scope(query, PurchaseOrder.purchase_date, PurchaseOrder.branch_id, date_range, branch_id)
        return [
            RawEvent(
                kind=LedgerKind.PURCHASE,
                date=row.purchase_date,
                amount=row.total_kwd,
                reference_id=row.id,
                sequence=row.sequence,
                branch_id=row.branch_id,
                description=f"Purchase invoice {row.invoice_number or f'#{row.id}'}",
            )
            for row in query.all()
        ]

    def _payments(
        self,
        party_id: int,
        direction: PaymentDirection,
        date_range: DateRange,
        branch_id: Optional[int],
    ) -> List[RawEvent]:
        query = self.db.query(Payment).filter(
            Payment.party_id == party_id,
            Payment.direction == direction,
        )
        query = self._scope(query, Payment.payment_date, Payment.branch_id, date_range, branch_id)

        kind = LedgerKind.PAYMENT_IN if direction == PaymentDirection.IN else LedgerKind.PAYMENT_OUT
        label = "Payment received" if direction == PaymentDirection.IN else "Payment made"
        return [
            RawEvent(
                kind=kind,
                date=row.payment_date,
                amount=row.amount,
                reference_id=row.id,
                sequence=row.sequence,
                branch_id=row.branch_id,
                description=f"{label} ({row.payment_type.value})"
                + (f" ref {row.reference}" if row.reference else ""),
            )
            for row in query.all()
        ]

    def _returns(
        self,
        party_id: int,
        return_type: ReturnType,
        date_range: DateRange,
        branch_id: Optional[int],
    ) -> List[RawEvent]:
        query = self.db.query(ReturnOrder).filter(
            ReturnOrder.party_id == party_id,
            ReturnOrder.return_type == return_type,
        )
        query = self._scope(query, ReturnOrder.return_date, ReturnOrder.branch_id, date_range, branch_id)

        kind = LedgerKind.SALE_RETURN if return_type == ReturnType.sale_return else LedgerKind.PURCHASE_RETURN
        label = "Sale return" if return_type == ReturnType.sale_return else "Purchase return"
        return [
            RawEvent(
                kind=kind,
                date=row.return_date,
                amount=row.total_kwd,
                reference_id=row.id,
                sequence=row.sequence,
                branch_id=row.branch_id,
                description=f"{label} {row.return_number or f'#{row.id}'}",
            )
            for row in query.all()
        ]

    def _opening_balances(self, party_id: int, branch_id: Optional[int]) -> List[RawEvent]:
        """
        The party's opening balance rows, each dated at its own effective
        date. With a branch, only that branch's row.
        """
        query = self.db.query(OpeningBalance).filter(OpeningBalance.party_id == party_id)
        if branch_id is not None:
            query = query.filter(OpeningBalance.branch_id == branch_id)
        return [
            RawEvent(
                kind=LedgerKind.OPENING_BALANCE,
                date=row.effective_date,
                amount=row.amount,
                reference_id=row.id,
                sequence=row.sequence,
                branch_id=row.branch_id,
                description="Opening balance"
                + (f" ({row.branch.name})" if row.branch is not None else ""),
            )
            for row in query.all()
        ]
