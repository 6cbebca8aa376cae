from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class OpeningBalance(Base):
    """
    Pre-system history of a party collapsed into one signed amount.

    Positive means the customer owes the company, or the company owes the
    supplier. At most one row per (party, branch); branch_id NULL is the
    company-wide row.
    """
    __tablename__ = "opening_balances"

    id = Column(Integer, primary_key=True, autoincrement=True)
    party_id = Column(Integer, ForeignKey("parties.id"), nullable=False, index=True)
    branch_id = Column(Integer, ForeignKey("branches.id"), nullable=True)

    amount = Column(Numeric(12, 3), nullable=False)
    effective_date = Column(Date, nullable=False)
    notes = Column(String(500), nullable=True)
    sequence = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    party = relationship("Party")
    branch = relationship("Branch")
