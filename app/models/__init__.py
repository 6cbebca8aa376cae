# app/models/__init__.py
from .sequence import LedgerSequence, next_ledger_sequence
from .party import Party, PartyType
from .branch import Branch
from .sale import SalesOrder, SalesOrderLineItem
from .purchase import PurchaseOrder, PurchaseOrderLineItem
from .payment import Payment, PaymentDirection, PaymentSplit, PaymentType
from .returns import ReturnLineItem, ReturnOrder, ReturnType
from .opening_balance import OpeningBalance
