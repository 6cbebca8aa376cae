from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class PurchaseOrder(Base):
    __tablename__ = "purchase_orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    purchase_date = Column(Date, nullable=False, index=True)
    invoice_number = Column(String(50), nullable=True)

    supplier_id = Column(Integer, ForeignKey("parties.id"), nullable=False, index=True)
    branch_id = Column(Integer, ForeignKey("branches.id"), nullable=True)

    total_kwd = Column(Numeric(12, 3), nullable=False, default=0)
    # Supplier invoice currency, informational only; the ledger uses total_kwd
    fx_currency = Column(String(3), nullable=True, default="AED")
    fx_rate = Column(Numeric(10, 4), nullable=True)
    total_fx = Column(Numeric(12, 2), nullable=True)
    sequence = Column(Integer, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    supplier = relationship("Party")
    branch = relationship("Branch")
    line_items = relationship(
        "PurchaseOrderLineItem",
        back_populates="purchase_order",
        cascade="all, delete-orphan",
        order_by="PurchaseOrderLineItem.id",
    )


class PurchaseOrderLineItem(Base):
    __tablename__ = "purchase_order_line_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    purchase_order_id = Column(Integer, ForeignKey("purchase_orders.id", ondelete="CASCADE"), nullable=False)
    item_name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    price_kwd = Column(Numeric(12, 3), nullable=False)
    total_kwd = Column(Numeric(12, 3), nullable=False)

    purchase_order = relationship("PurchaseOrder", back_populates="line_items")
