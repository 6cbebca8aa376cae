import enum
from sqlalchemy import Column, DateTime, Enum, Integer, Numeric, String
from sqlalchemy.sql import func
from app.core.database import Base


class PartyType(str, enum.Enum):
    customer = "customer"
    supplier = "supplier"
    salesman = "salesman"


class Party(Base):
    __tablename__ = "parties"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    phone = Column(String(30), nullable=True)
    address = Column(String(500), nullable=True)
    party_type = Column(Enum(PartyType), nullable=False, default=PartyType.supplier)

    # customers only
    credit_limit = Column(Numeric(12, 3), nullable=True)
    # salesmen only (percent)
    commission_rate = Column(Numeric(5, 2), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Party(id={self.id}, name='{self.name}', type='{self.party_type}')>"
