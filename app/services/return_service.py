from datetime import date
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.logger_config import logger
from app.models.party import PartyType
from app.models.returns import ReturnLineItem, ReturnOrder, ReturnType
from app.models.sequence import next_ledger_sequence
from app.utils.filteration import apply_filters
from app.utils.line_items import build_line_items, validate_branch, validate_party

# Sale returns come back from customers, purchase returns go to suppliers
RETURN_PARTY_TYPES = {
    ReturnType.sale_return: PartyType.customer,
    ReturnType.purchase_return: PartyType.supplier,
}


def get_return_by_id(db: Session, return_id: int) -> Optional[ReturnOrder]:
    return (db.query(ReturnOrder)
            .options(
                joinedload(ReturnOrder.party),
                joinedload(ReturnOrder.line_items)
            )
            .filter(ReturnOrder.id == return_id)
            .first())


def get_all_returns(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    return_type: Optional[ReturnType] = None,
    party_id: Optional[int] = None,
    branch_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> tuple[List[ReturnOrder], int]:
    query = db.query(ReturnOrder).options(joinedload(ReturnOrder.party))
    if return_type:
        query = query.filter(ReturnOrder.return_type == return_type)
    query = apply_filters(
        query, ReturnOrder, "return_date",
        party_field="party_id", party_id=party_id,
        branch_id=branch_id, start_date=start_date, end_date=end_date
    )

    total = query.count()
    returns = (query
               .order_by(ReturnOrder.return_date.desc(), ReturnOrder.sequence.desc())
               .offset(skip)
               .limit(limit)
               .all())
    return returns, total


def create_return(
    db: Session,
    return_type: ReturnType,
    party_id: int,
    return_date: date,
    items: List[dict],
    return_number: Optional[str] = None,
    branch_id: Optional[int] = None,
    notes: Optional[str] = None
) -> ReturnOrder:
    """
    Record goods returned by a customer or to a supplier.

    A return is an independent ledger event: it lowers the party's balance
    by its total and is not matched against a specific invoice.
    """
    logger.info(f"Starting {return_type.value} creation - Party: {party_id}, Items: {len(items)}")

    try:
        validate_party(db, party_id, RETURN_PARTY_TYPES[return_type])
        validate_branch(db, branch_id)
        lines, total = build_line_items(ReturnLineItem, items)

        return_order = ReturnOrder(
            return_type=return_type,
            party_id=party_id,
            return_date=return_date,
            return_number=return_number,
            branch_id=branch_id,
            notes=notes,
            total_kwd=total,
            sequence=next_ledger_sequence(db),
            line_items=lines
        )
        db.add(return_order)
        db.commit()
        db.refresh(return_order)

        logger.info(f"Return created: {return_order.id} ({return_type.value}) - Total: {return_order.total_kwd}")
        return return_order

    except ValueError as ve:
        db.rollback()
        logger.error(f"Validation error in return creation: {str(ve)}")
        raise
    except IntegrityError as ie:
        db.rollback()
        logger.error(f"Database integrity error in return creation: {str(ie)}")
        raise ValueError("Failed to create return due to a database constraint")


def delete_return(db: Session, return_id: int) -> bool:
    return_order = db.query(ReturnOrder).filter(ReturnOrder.id == return_id).first()
    if not return_order:
        return False

    db.delete(return_order)
    try:
        db.commit()
        logger.info(f"Return deleted: {return_id}")
        return True
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Error deleting return: {str(e)}")
        raise ValueError("Failed to delete return.")
