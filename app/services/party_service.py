from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import func, or_
from typing import Optional, List
from decimal import Decimal

from app.common.exceptions import PartyInUse
from app.models.opening_balance import OpeningBalance
from app.models.party import Party, PartyType
from app.models.payment import Payment
from app.models.purchase import PurchaseOrder
from app.models.returns import ReturnOrder
from app.models.sale import SalesOrder
from app.logger_config import logger


def get_party_by_id(db: Session, party_id: int) -> Optional[Party]:
    """Get party by database ID."""
    return db.query(Party).filter(Party.id == party_id).first()


def get_all_parties(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    party_type: Optional[PartyType] = None,
    search: Optional[str] = None
) -> tuple[List[Party], int]:
    """Get all parties with optional type and search filtering."""
    query = db.query(Party)

    if party_type:
        query = query.filter(Party.party_type == party_type)

    if search:
        search_term = f"%{search}%"
        query = query.filter(
            or_(
                Party.name.ilike(search_term),
                Party.phone.ilike(search_term),
                Party.address.ilike(search_term)
            )
        )

    total = query.count()
    parties = query.order_by(Party.name.asc()).offset(skip).limit(limit).all()

    return parties, total


def _clean_type_fields(
    party_type: PartyType,
    credit_limit: Optional[Decimal],
    commission_rate: Optional[Decimal]
) -> tuple[Optional[Decimal], Optional[Decimal]]:
    # Credit limit only applies to customers, commission only to salesmen
    if party_type != PartyType.customer:
        credit_limit = None
    if party_type != PartyType.salesman:
        commission_rate = None
    return credit_limit, commission_rate


def create_party(
    db: Session,
    name: str,
    party_type: PartyType,
    phone: Optional[str] = None,
    address: Optional[str] = None,
    credit_limit: Optional[Decimal] = None,
    commission_rate: Optional[Decimal] = None
) -> Party:
    """Create a new customer, supplier or salesman."""
    credit_limit, commission_rate = _clean_type_fields(party_type, credit_limit, commission_rate)

    party = Party(
        name=name,
        party_type=party_type,
        phone=phone,
        address=address,
        credit_limit=credit_limit,
        commission_rate=commission_rate
    )
    db.add(party)

    try:
        db.commit()
        db.refresh(party)
        logger.info(f"Party created: {party.id} ({party.party_type.value}) {party.name}")
        return party
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Error creating party: {str(e)}")
        raise ValueError("Failed to create party.")


def update_party(
    db: Session,
    party_id: int,
    name: Optional[str] = None,
    party_type: Optional[PartyType] = None,
    phone: Optional[str] = None,
    address: Optional[str] = None,
    credit_limit: Optional[Decimal] = None,
    commission_rate: Optional[Decimal] = None
) -> Optional[Party]:
    """Update party information."""
    party = get_party_by_id(db, party_id)
    if not party:
        return None

    if party_type is not None and party_type != party.party_type:
        linked = count_linked_transactions(db, party_id)
        if any(linked.values()):
            raise ValueError("Cannot change the type of a party with linked transactions")
        party.party_type = party_type

    if name is not None:
        party.name = name
    if phone is not None:
        party.phone = phone
    if address is not None:
        party.address = address
    if credit_limit is not None:
        party.credit_limit = credit_limit
    if commission_rate is not None:
        party.commission_rate = commission_rate

    party.credit_limit, party.commission_rate = _clean_type_fields(
        party.party_type, party.credit_limit, party.commission_rate
    )

    try:
        db.commit()
        db.refresh(party)
        return party
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Error updating party: {str(e)}")
        raise ValueError("Failed to update party.")


def count_linked_transactions(db: Session, party_id: int) -> dict[str, int]:
    """Count source rows that reference a party."""
    def count(model, column) -> int:
        return db.query(func.count(model.id)).filter(column == party_id).scalar() or 0

    return {
        "sales": count(SalesOrder, SalesOrder.customer_id),
        "purchases": count(PurchaseOrder, PurchaseOrder.supplier_id),
        "payments": count(Payment, Payment.party_id),
        "returns": count(ReturnOrder, ReturnOrder.party_id),
        "opening_balances": count(OpeningBalance, OpeningBalance.party_id),
    }


def delete_party(db: Session, party_id: int) -> bool:
    """
    Delete a party.
    Blocked with PartyInUse while any ledger row still references it.
    """
    party = get_party_by_id(db, party_id)
    if not party:
        return False

    linked = count_linked_transactions(db, party_id)
    if any(linked.values()):
        logger.warning(f"Refusing to delete party {party_id}: linked {linked}")
        raise PartyInUse(party_id, linked)

    db.delete(party)
    try:
        db.commit()
        return True
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Error deleting party: {str(e)}")
        raise ValueError("Failed to delete party.")
