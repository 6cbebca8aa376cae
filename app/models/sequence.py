from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.orm import Session
from sqlalchemy.sql import func
from app.core.database import Base


class LedgerSequence(Base):
    """
    Shared creation counter for every row that feeds the party ledger.

    Sales, purchases, payments, returns and opening balances each take a
    number from here when they are created, so same-day events sort in
    creation order across tables.
    """
    __tablename__ = "ledger_sequence"

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


def next_ledger_sequence(db: Session) -> int:
    """Reserve the next sequence number inside the caller's transaction."""
    seq = LedgerSequence()
    db.add(seq)
    db.flush()  # Flush to get seq.id
    return seq.id
