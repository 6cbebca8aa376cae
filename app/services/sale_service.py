# app/services/sale_service.py

from datetime import date
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.logger_config import logger
from app.models.party import PartyType
from app.models.sale import SalesOrder, SalesOrderLineItem
from app.models.sequence import next_ledger_sequence
from app.utils.filteration import apply_filters
from app.utils.line_items import build_line_items, validate_branch, validate_party


def get_sales_order_by_id(db: Session, order_id: int) -> Optional[SalesOrder]:
    """Get sales order by ID with customer and line items."""
    order = (db.query(SalesOrder)
             .options(
                 joinedload(SalesOrder.customer),
                 joinedload(SalesOrder.line_items)
             )
             .filter(SalesOrder.id == order_id)
             .first())

    if not order:
        logger.warning(f"Sales order not found: {order_id}")
    return order


def get_all_sales_orders(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    customer_id: Optional[int] = None,
    branch_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> tuple[List[SalesOrder], int]:
    """Get sales orders, newest first, with optional filtering."""
    query = db.query(SalesOrder).options(joinedload(SalesOrder.customer))
    query = apply_filters(
        query, SalesOrder, "sale_date",
        party_field="customer_id", party_id=customer_id,
        branch_id=branch_id, start_date=start_date, end_date=end_date
    )

    total = query.count()
    orders = (query
              .order_by(SalesOrder.sale_date.desc(), SalesOrder.sequence.desc())
              .offset(skip)
              .limit(limit)
              .all())

    logger.info(f"Retrieved {len(orders)} sales orders out of {total} total")
    return orders, total


def create_sales_order(
    db: Session,
    customer_id: int,
    sale_date: date,
    items: List[dict],
    invoice_number: Optional[str] = None,
    branch_id: Optional[int] = None
) -> SalesOrder:
    """
    Create a sales order with its line items in one transaction.

    The order total is the sum of the line totals. The order takes the next
    ledger sequence number so same-day rows keep their creation order.
    """
    logger.info(f"Starting sales order creation - Customer: {customer_id}, Items: {len(items)}")

    try:
        validate_party(db, customer_id, PartyType.customer)
        validate_branch(db, branch_id)
        lines, total = build_line_items(SalesOrderLineItem, items)

        order = SalesOrder(
            customer_id=customer_id,
            sale_date=sale_date,
            invoice_number=invoice_number,
            branch_id=branch_id,
            total_kwd=total,
            sequence=next_ledger_sequence(db),
            line_items=lines
        )
        db.add(order)
        db.commit()
        db.refresh(order)

        logger.info(f"Sales order created: {order.id} - Total: {order.total_kwd}")
        return order

    except ValueError as ve:
        db.rollback()
        logger.error(f"Validation error in sales order creation: {str(ve)}")
        raise
    except IntegrityError as ie:
        db.rollback()
        logger.error(f"Database integrity error in sales order creation: {str(ie)}")
        raise ValueError("Failed to create sales order due to a database constraint")


def delete_sales_order(db: Session, order_id: int) -> bool:
    """Delete a sales order; its ledger entry disappears with it."""
    order = db.query(SalesOrder).filter(SalesOrder.id == order_id).first()
    if not order:
        return False

    db.delete(order)
    try:
        db.commit()
        logger.info(f"Sales order deleted: {order_id}")
        return True
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Error deleting sales order: {str(e)}")
        raise ValueError("Failed to delete sales order.")
