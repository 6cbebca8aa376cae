"""
Payment Service
Handles money received from customers (IN) and paid to suppliers (OUT).

A payment may be settled through several payment types at once (for example
part cash, part Knet). Such a payment is stored with type "Split" and one
split row per leg; its amount is the sum of the legs.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.logger_config import logger
from app.models.party import PartyType
from app.models.payment import Payment, PaymentDirection, PaymentSplit, PaymentType
from app.models.sequence import next_ledger_sequence
from app.utilities.money import ZERO, add_kwd, quantize_kwd
from app.utils.filteration import apply_filters
from app.utils.line_items import validate_branch, validate_party

DIRECTION_PARTY_TYPES = {
    PaymentDirection.IN: PartyType.customer,
    PaymentDirection.OUT: PartyType.supplier,
}


def get_payment_by_id(db: Session, payment_id: int) -> Optional[Payment]:
    return (db.query(Payment)
            .options(joinedload(Payment.party), joinedload(Payment.splits))
            .filter(Payment.id == payment_id)
            .first())


def get_all_payments(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    direction: Optional[PaymentDirection] = None,
    party_id: Optional[int] = None,
    branch_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> tuple[List[Payment], int]:
    query = db.query(Payment).options(joinedload(Payment.party))
    if direction:
        query = query.filter(Payment.direction == direction)
    query = apply_filters(
        query, Payment, "payment_date",
        party_field="party_id", party_id=party_id,
        branch_id=branch_id, start_date=start_date, end_date=end_date
    )

    total = query.count()
    payments = (query
                .order_by(Payment.payment_date.desc(), Payment.sequence.desc())
                .offset(skip)
                .limit(limit)
                .all())

    logger.info(f"Retrieved {len(payments)} payments out of {total} total")
    return payments, total


def create_payment(
    db: Session,
    direction: PaymentDirection,
    party_id: int,
    payment_date: date,
    payment_type: PaymentType,
    amount: Optional[Decimal] = None,
    splits: Optional[List[dict]] = None,
    reference: Optional[str] = None,
    notes: Optional[str] = None,
    branch_id: Optional[int] = None
) -> Payment:
    """Create a payment IN (customer) or OUT (supplier)."""
    logger.info(f"Payment {direction.value} - Party: {party_id}, Type: {payment_type.value}, Amount: {amount}")

    try:
        validate_party(db, party_id, DIRECTION_PARTY_TYPES[direction])
        validate_branch(db, branch_id)

        split_rows = []
        if splits:
            total = ZERO
            for idx, split in enumerate(splits):
                split_amount = quantize_kwd(Decimal(str(split["amount"])))
                if split_amount <= 0:
                    raise ValueError(f"Split amount must be positive (split {idx + 1})")
                split_type = PaymentType(split["payment_type"])
                if split_type == PaymentType.SPLIT:
                    raise ValueError("A split leg cannot itself be a split payment")
                split_rows.append(PaymentSplit(payment_type=split_type, amount=split_amount))
                total = add_kwd(total, split_amount)

            if amount is not None and quantize_kwd(Decimal(str(amount))) != total:
                raise ValueError(f"Payment amount {amount} does not match split total {total}")
            amount = total
            payment_type = PaymentType.SPLIT
        elif payment_type == PaymentType.SPLIT:
            raise ValueError("Split payments require at least one split")

        if amount is None or amount <= 0:
            logger.error(f"Invalid payment amount: {amount}")
            raise ValueError("Amount must be positive")

        payment = Payment(
            direction=direction,
            party_id=party_id,
            payment_date=payment_date,
            payment_type=payment_type,
            amount=quantize_kwd(Decimal(str(amount))),
            reference=reference,
            notes=notes,
            branch_id=branch_id,
            sequence=next_ledger_sequence(db),
            splits=split_rows
        )
        db.add(payment)
        db.commit()
        db.refresh(payment)

        logger.info(f"✅ Payment {payment.id} recorded - {direction.value} {payment.amount}")
        return payment

    except ValueError as ve:
        db.rollback()
        logger.error(f"Validation error in payment creation: {str(ve)}")
        raise
    except IntegrityError as ie:
        db.rollback()
        logger.error(f"Database integrity error in payment creation: {str(ie)}")
        raise ValueError("Failed to create payment due to a database constraint")


def delete_payment(db: Session, payment_id: int) -> bool:
    payment = db.query(Payment).filter(Payment.id == payment_id).first()
    if not payment:
        return False

    db.delete(payment)
    try:
        db.commit()
        logger.info(f"Payment deleted: {payment_id}")
        return True
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Error deleting payment: {str(e)}")
        raise ValueError("Failed to delete payment.")
