from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class SalesOrder(Base):
    __tablename__ = "sales_orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sale_date = Column(Date, nullable=False, index=True)
    invoice_number = Column(String(50), nullable=True)

    customer_id = Column(Integer, ForeignKey("parties.id"), nullable=False, index=True)
    branch_id = Column(Integer, ForeignKey("branches.id"), nullable=True)

    total_kwd = Column(Numeric(12, 3), nullable=False, default=0)
    sequence = Column(Integer, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    customer = relationship("Party")
    branch = relationship("Branch")
    line_items = relationship(
        "SalesOrderLineItem",
        back_populates="sales_order",
        cascade="all, delete-orphan",
        order_by="SalesOrderLineItem.id",
    )


class SalesOrderLineItem(Base):
    __tablename__ = "sales_order_line_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sales_order_id = Column(Integer, ForeignKey("sales_orders.id", ondelete="CASCADE"), nullable=False)
    item_name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    price_kwd = Column(Numeric(12, 3), nullable=False)
    total_kwd = Column(Numeric(12, 3), nullable=False)

    sales_order = relationship("SalesOrder", back_populates="line_items")
