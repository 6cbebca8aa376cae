import enum
from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class ReturnType(str, enum.Enum):
    sale_return = "sale_return"          # goods back from a customer
    purchase_return = "purchase_return"  # goods back to a supplier


class ReturnOrder(Base):
    __tablename__ = "returns"

    id = Column(Integer, primary_key=True, autoincrement=True)
    return_date = Column(Date, nullable=False, index=True)
    return_number = Column(String(50), nullable=True)
    return_type = Column(Enum(ReturnType), nullable=False)

    party_id = Column(Integer, ForeignKey("parties.id"), nullable=False, index=True)
    branch_id = Column(Integer, ForeignKey("branches.id"), nullable=True)

    total_kwd = Column(Numeric(12, 3), nullable=False, default=0)
    notes = Column(String(500), nullable=True)
    sequence = Column(Integer, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    party = relationship("Party")
    branch = relationship("Branch")
    line_items = relationship(
        "ReturnLineItem",
        back_populates="return_order",
        cascade="all, delete-orphan",
        order_by="ReturnLineItem.id",
    )


class ReturnLineItem(Base):
    __tablename__ = "return_line_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    return_id = Column(Integer, ForeignKey("returns.id", ondelete="CASCADE"), nullable=False)
    item_name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    price_kwd = Column(Numeric(12, 3), nullable=False)
    total_kwd = Column(Numeric(12, 3), nullable=False)

    return_order = relationship("ReturnOrder", back_populates="line_items")
