# app/services/purchase_service.py

from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.logger_config import logger
from app.models.party import PartyType
from app.models.purchase import PurchaseOrder, PurchaseOrderLineItem
from app.models.sequence import next_ledger_sequence
from app.utils.filteration import apply_filters
from app.utils.line_items import build_line_items, validate_branch, validate_party


# ==================== PURCHASE ORDER QUERIES ====================

def get_purchase_order_by_id(db: Session, order_id: int) -> Optional[PurchaseOrder]:
    """Get purchase order by ID with supplier and line items."""
    order = (db.query(PurchaseOrder)
             .options(
                 joinedload(PurchaseOrder.supplier),
                 joinedload(PurchaseOrder.line_items)
             )
             .filter(PurchaseOrder.id == order_id)
             .first())

    if order:
        logger.debug(f"Purchase order found: {order_id}")
    else:
        logger.warning(f"Purchase order not found: {order_id}")
    return order


def get_all_purchase_orders(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    supplier_id: Optional[int] = None,
    branch_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> tuple[List[PurchaseOrder], int]:
    """Get all purchase orders with optional filtering."""
    query = db.query(PurchaseOrder).options(joinedload(PurchaseOrder.supplier))
    query = apply_filters(
        query, PurchaseOrder, "purchase_date",
        party_field="supplier_id", party_id=supplier_id,
        branch_id=branch_id, start_date=start_date, end_date=end_date
    )

    total = query.count()
    orders = (query
              .order_by(PurchaseOrder.purchase_date.desc(), PurchaseOrder.sequence.desc())
              .offset(skip)
              .limit(limit)
              .all())

    logger.info(f"Retrieved {len(orders)} purchase orders out of {total} total")
    return orders, total


# ==================== PURCHASE ORDER CREATION ====================

def create_purchase_order(
    db: Session,
    supplier_id: int,
    purchase_date: date,
    items: List[dict],
    invoice_number: Optional[str] = None,
    branch_id: Optional[int] = None,
    fx_currency: Optional[str] = None,
    fx_rate: Optional[Decimal] = None,
    total_fx: Optional[Decimal] = None
) -> PurchaseOrder:
    """
    Create a purchase order with line items.

    Process:
    1. Validate supplier and branch
    2. Build line items and total (KWD)
    3. Take the next ledger sequence number
    4. Commit header and lines together
    """
    logger.info(f"Starting purchase order creation - Supplier: {supplier_id}, Items: {len(items)}")

    try:
        supplier = validate_party(db, supplier_id, PartyType.supplier)
        logger.info(f"Supplier validated: {supplier.name} ({supplier.id})")
        validate_branch(db, branch_id)

        lines, total = build_line_items(PurchaseOrderLineItem, items)
        logger.info(f"All items validated. Total items: {len(lines)}, Total amount: {total}")

        order = PurchaseOrder(
            supplier_id=supplier_id,
            purchase_date=purchase_date,
            invoice_number=invoice_number,
            branch_id=branch_id,
            total_kwd=total,
            fx_currency=fx_currency,
            fx_rate=fx_rate,
            total_fx=total_fx,
            sequence=next_ledger_sequence(db),
            line_items=lines
        )
        db.add(order)
        db.commit()
        db.refresh(order)

        logger.info(f"Purchase order created: {order.id} - Total: {order.total_kwd}")
        return order

    except ValueError as ve:
        db.rollback()
        logger.error(f"Validation error in purchase order creation: {str(ve)}")
        raise
    except IntegrityError as ie:
        db.rollback()
        logger.error(f"Database integrity error in purchase order creation: {str(ie)}")
        raise ValueError("Failed to create purchase order due to a database constraint")


def delete_purchase_order(db: Session, order_id: int) -> bool:
    """Delete a purchase order."""
    order = db.query(PurchaseOrder).filter(PurchaseOrder.id == order_id).first()
    if not order:
        return False

    db.delete(order)
    try:
        db.commit()
        logger.info(f"Purchase order deleted: {order_id}")
        return True
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Error deleting purchase order: {str(e)}")
        raise ValueError("Failed to delete purchase order.")
