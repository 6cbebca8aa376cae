"""
Pytest fixtures for the party ledger.

Sections:
    - Database Fixtures: in-memory SQLite session and API client
    - Party Fixtures: customers, suppliers, salesmen and branches
    - Transaction Helpers: one-line builders for ledger source rows
"""

import os

# Must be set before app.core.config is imported
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core.database import Base
from app.core.dependencies import get_db
from app.main import app as fastapi_app
from app.models.party import PartyType
from app.models.payment import PaymentDirection, PaymentType
from app.models.returns import ReturnType
from app.services.branch_service import create_branch
from app.services.opening_balance_service import create_opening_balance
from app.services.party_service import create_party
from app.services.payment_service import create_payment
from app.services.purchase_service import create_purchase_order
from app.services.return_service import create_return
from app.services.sale_service import create_sales_order


# ==========================================================================
# Database Fixtures
# ==========================================================================


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    """Session bound to a fresh in-memory database."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    """API client whose requests share the test session."""
    def override_get_db():
        yield db

    fastapi_app.dependency_overrides[get_db] = override_get_db
    # raise_server_exceptions=False so the 500 handler renders like production
    yield TestClient(fastapi_app, raise_server_exceptions=False)
    fastapi_app.dependency_overrides.clear()


# ==========================================================================
# Party Fixtures
# ==========================================================================


@pytest.fixture
def customer(db):
    return create_party(db, name="Al Mansour Trading", party_type=PartyType.customer, phone="96550001111")


@pytest.fixture
def supplier(db):
    return create_party(db, name="Gulf Textiles LLC", party_type=PartyType.supplier)


@pytest.fixture
def salesman(db):
    return create_party(db, name="Yousef", party_type=PartyType.salesman, commission_rate=Decimal("2.50"))


@pytest.fixture
def branch(db):
    return create_branch(db, name="Salmiya")


@pytest.fixture
def other_branch(db):
    return create_branch(db, name="Hawalli")


# ==========================================================================
# Transaction Helpers
# ==========================================================================


def items_for(amount) -> list[dict]:
    """One line item whose total is exactly ``amount``."""
    return [{"item_name": "Fabric roll", "quantity": 1, "price_kwd": Decimal(str(amount))}]


def add_sale(db, customer, day: date, amount, branch=None):
    return create_sales_order(
        db, customer_id=customer.id, sale_date=day, items=items_for(amount),
        branch_id=branch.id if branch else None
    )


def add_purchase(db, supplier, day: date, amount, branch=None):
    return create_purchase_order(
        db, supplier_id=supplier.id, purchase_date=day, items=items_for(amount),
        branch_id=branch.id if branch else None
    )


def add_payment_in(db, customer, day: date, amount, branch=None, payment_type=PaymentType.CASH):
    return create_payment(
        db, direction=PaymentDirection.IN, party_id=customer.id, payment_date=day,
        payment_type=payment_type, amount=Decimal(str(amount)),
        branch_id=branch.id if branch else None
    )


def add_payment_out(db, supplier, day: date, amount, branch=None, payment_type=PaymentType.CASH):
    return create_payment(
        db, direction=PaymentDirection.OUT, party_id=supplier.id, payment_date=day,
        payment_type=payment_type, amount=Decimal(str(amount)),
        branch_id=branch.id if branch else None
    )


def add_sale_return(db, customer, day: date, amount, branch=None):
    return create_return(
        db, return_type=ReturnType.sale_return, party_id=customer.id, return_date=day,
        items=items_for(amount), branch_id=branch.id if branch else None
    )


def add_purchase_return(db, supplier, day: date, amount, branch=None):
    return create_return(
        db, return_type=ReturnType.purchase_return, party_id=supplier.id, return_date=day,
        items=items_for(amount), branch_id=branch.id if branch else None
    )


def add_opening_balance(db, party, day: date, amount, branch=None):
    return create_opening_balance(
        db, party_id=party.id, amount=Decimal(str(amount)), effective_date=day,
        branch_id=branch.id if branch else None
    )
