import enum
from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class PaymentDirection(str, enum.Enum):
    IN = "IN"    # received from a customer
    OUT = "OUT"  # paid to a supplier


class PaymentType(str, enum.Enum):
    CASH = "Cash"
    NBK_BANK = "NBK Bank"
    CBK_BANK = "CBK Bank"
    KNET = "Knet"
    WAMD = "Wamd"
    SPLIT = "Split"


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    payment_date = Column(Date, nullable=False, index=True)
    direction = Column(Enum(PaymentDirection), nullable=False)

    party_id = Column(Integer, ForeignKey("parties.id"), nullable=False, index=True)
    branch_id = Column(Integer, ForeignKey("branches.id"), nullable=True)

    payment_type = Column(Enum(PaymentType, values_callable=lambda e: [m.value for m in e]), nullable=False)
    amount = Column(Numeric(12, 3), nullable=False)
    reference = Column(String(100), nullable=True)
    notes = Column(String(500), nullable=True)
    sequence = Column(Integer, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    party = relationship("Party")
    branch = relationship("Branch")
    splits = relationship(
        "PaymentSplit",
        back_populates="payment",
        cascade="all, delete-orphan",
        order_by="PaymentSplit.id",
    )


class PaymentSplit(Base):
    """One leg of a payment settled through several payment types."""
    __tablename__ = "payment_splits"

    id = Column(Integer, primary_key=True, autoincrement=True)
    payment_id = Column(Integer, ForeignKey("payments.id", ondelete="CASCADE"), nullable=False)
    payment_type = Column(Enum(PaymentType, values_callable=lambda e: [m.value for m in e]), nullable=False)
    amount = Column(Numeric(12, 3), nullable=False)

    payment = relationship("Payment", back_populates="splits")
