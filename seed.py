from app.core.database import SessionLocal, init_db
from app.models.branch import Branch
from app.models.opening_balance import OpeningBalance
from app.models.party import Party, PartyType
from app.models.payment import Payment, PaymentDirection, PaymentSplit, PaymentType
from app.models.purchase import PurchaseOrder, PurchaseOrderLineItem
from app.models.returns import ReturnLineItem, ReturnOrder, ReturnType
from app.models.sale import SalesOrder, SalesOrderLineItem
from app.models.sequence import LedgerSequence
from app.services.branch_service import create_branch
from app.services.ledger import LedgerService
from app.services.opening_balance_service import create_opening_balance
from app.services.party_service import create_party
from app.services.payment_service import create_payment
from app.services.purchase_service import create_purchase_order
from app.services.return_service import create_return
from app.services.sale_service import create_sales_order

from faker import Faker
from decimal import Decimal
from datetime import date, timedelta
import random

fake = Faker()
init_db()
db = SessionLocal()

START = date.today() - timedelta(days=120)


def random_day() -> date:
    return START + timedelta(days=random.randint(1, 119))


def random_items() -> list[dict]:
    return [
        {
            "item_name": fake.word().title(),
            "quantity": random.randint(1, 10),
            "price_kwd": Decimal(random.randint(500, 25000)) / 1000,
        }
        for _ in range(random.randint(1, 4))
    ]


try:
    print("🔄 Clearing existing data...")
    for model in (PaymentSplit, Payment, ReturnLineItem, ReturnOrder, SalesOrderLineItem, SalesOrder,
                  PurchaseOrderLineItem, PurchaseOrder, OpeningBalance, LedgerSequence, Party, Branch):
        db.query(model).delete()
    db.commit()
    print("✅ Data cleared.")

    print("🔄 Creating branches and parties...")
    branches = [create_branch(db, name=f"{fake.city()} Branch {i + 1}") for i in range(2)]

    customers = [
        create_party(
            db,
            name=fake.name(),
            party_type=PartyType.customer,
            phone=''.join(filter(str.isdigit, fake.phone_number()))[:20],
            address=fake.address().replace('\n', ', '),
            credit_limit=Decimal(random.choice([500, 1000, 2500]))
        )
        for _ in range(random.randint(8, 12))
    ]
    suppliers = [
        create_party(
            db,
            name=fake.company(),
            party_type=PartyType.supplier,
            phone=''.join(filter(str.isdigit, fake.phone_number()))[:20],
            address=fake.address().replace('\n', ', ')
        )
        for _ in range(random.randint(4, 6))
    ]
    create_party(db, name=fake.name(), party_type=PartyType.salesman, commission_rate=Decimal("2.50"))
    print(f"✅ Seeded {len(customers)} customers and {len(suppliers)} suppliers")

    print("🔄 Creating opening balances...")
    for party in random.sample(customers + suppliers, k=4):
        create_opening_balance(
            db,
            party_id=party.id,
            amount=Decimal(random.randint(-50000, 200000)) / 1000,
            effective_date=START,
            notes="Carried over from previous system"
        )

    print("🔄 Creating sales, purchases, payments and returns...")
    for customer in customers:
        for _ in range(random.randint(2, 6)):
            create_sales_order(
                db,
                customer_id=customer.id,
                sale_date=random_day(),
                items=random_items(),
                invoice_number=f"INV-{fake.unique.random_number(digits=6)}",
                branch_id=random.choice(branches).id
            )
        create_payment(
            db,
            direction=PaymentDirection.IN,
            party_id=customer.id,
            payment_date=random_day(),
            payment_type=random.choice([PaymentType.CASH, PaymentType.KNET, PaymentType.WAMD]),
            amount=Decimal(random.randint(1000, 30000)) / 1000,
            branch_id=random.choice(branches).id
        )
        if random.random() < 0.3:
            create_return(
                db,
                return_type=ReturnType.sale_return,
                party_id=customer.id,
                return_date=random_day(),
                items=random_items()[:1],
                branch_id=random.choice(branches).id
            )

    for supplier in suppliers:
        for _ in range(random.randint(2, 5)):
            create_purchase_order(
                db,
                supplier_id=supplier.id,
                purchase_date=random_day(),
                items=random_items(),
                invoice_number=f"PO-{fake.unique.random_number(digits=6)}",
                branch_id=random.choice(branches).id
            )
        create_payment(
            db,
            direction=PaymentDirection.OUT,
            party_id=supplier.id,
            payment_date=random_day(),
            payment_type=PaymentType.SPLIT,
            splits=[
                {"payment_type": PaymentType.CASH, "amount": Decimal("10.000")},
                {"payment_type": PaymentType.NBK_BANK, "amount": Decimal(random.randint(1000, 20000)) / 1000},
            ]
        )

    ledger = LedgerService(db)
    for party in customers + suppliers:
        print(f"   {party.party_type.value:<8} {party.name:<30} {ledger.current_balance(party.id)}")

    print("🎉 Seed complete.")

except Exception as e:
    db.rollback()
    print(f"❌ Error during seeding: {e}")
    raise
finally:
    db.close()
