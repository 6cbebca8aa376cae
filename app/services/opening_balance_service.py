from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.logger_config import logger
from app.models.opening_balance import OpeningBalance
from app.models.party import Party, PartyType
from app.models.sequence import next_ledger_sequence
from app.utilities.money import quantize_kwd
from app.utils.line_items import validate_branch


def get_opening_balance_by_id(db: Session, balance_id: int) -> Optional[OpeningBalance]:
    return db.query(OpeningBalance).filter(OpeningBalance.id == balance_id).first()


def get_all_opening_balances(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    party_type: Optional[PartyType] = None,
    party_id: Optional[int] = None
) -> tuple[List[OpeningBalance], int]:
    query = db.query(OpeningBalance).options(
        joinedload(OpeningBalance.party),
        joinedload(OpeningBalance.branch)
    )
    if party_type:
        query = query.join(Party, OpeningBalance.party_id == Party.id).filter(Party.party_type == party_type)
    if party_id:
        query = query.filter(OpeningBalance.party_id == party_id)

    total = query.count()
    balances = query.order_by(OpeningBalance.effective_date.asc(), OpeningBalance.id.asc()).offset(skip).limit(limit).all()
    return balances, total


def create_opening_balance(
    db: Session,
    party_id: int,
    amount: Decimal,
    effective_date: date,
    branch_id: Optional[int] = None,
    notes: Optional[str] = None
) -> OpeningBalance:
    """
    Record a party's opening balance.

    The amount is signed: positive means the customer owes us, or we owe the
    supplier. Only one opening balance may exist per party and branch.
    """
    party = db.query(Party).filter(Party.id == party_id).first()
    if not party or party.party_type not in (PartyType.customer, PartyType.supplier):
        raise ValueError(f"Customer or supplier {party_id} not found")
    validate_branch(db, branch_id)

    existing = db.query(OpeningBalance).filter(
        OpeningBalance.party_id == party_id,
        OpeningBalance.branch_id.is_(None) if branch_id is None else OpeningBalance.branch_id == branch_id
    ).first()
    if existing:
        raise ValueError("An opening balance already exists for this party and branch")

    balance = OpeningBalance(
        party_id=party_id,
        branch_id=branch_id,
        amount=quantize_kwd(Decimal(str(amount))),
        effective_date=effective_date,
        notes=notes,
        sequence=next_ledger_sequence(db)
    )
    db.add(balance)

    try:
        db.commit()
        db.refresh(balance)
        logger.info(f"Opening balance {balance.id} for party {party_id}: {balance.amount} at {effective_date}")
        return balance
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Error creating opening balance: {str(e)}")
        raise ValueError("Failed to create opening balance.")


def delete_opening_balance(db: Session, balance_id: int) -> bool:
    balance = get_opening_balance_by_id(db, balance_id)
    if not balance:
        return False

    db.delete(balance)
    try:
        db.commit()
        return True
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Error deleting opening balance: {str(e)}")
        raise ValueError("Failed to delete opening balance.")
