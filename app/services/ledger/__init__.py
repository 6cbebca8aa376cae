from app.services.ledger.events import (
    DateRange,
    EventBundle,
    LedgerEntry,
    LedgerKind,
    RawEvent,
    Statement,
    StatementLine,
)
from app.services.ledger.extractor import LedgerEventExtractor
from app.services.ledger.service import LedgerService
