"""
Sales Routes
Sales orders (customer invoices) with line items. Each order raises the
customer's balance by its total.
"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Path
from sqlalchemy.orm import Session

from app.core.dependencies import get_db
from app.schemas.common import line_items_as_dicts
from app.schemas.sale import SalesOrderCreate, SalesOrderListResponse, SalesOrderResponse
from app.services.sale_service import (
    create_sales_order,
    delete_sales_order,
    get_all_sales_orders,
    get_sales_order_by_id
)
from app.logger_config import logger

router = APIRouter()


@router.post(
    "",
    response_model=SalesOrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new sales order"
)
def create_sales_order_route(
    order_data: SalesOrderCreate,
    db: Session = Depends(get_db)
):
    try:
        order = create_sales_order(
            db=db,
            customer_id=order_data.customer_id,
            sale_date=order_data.sale_date,
            items=line_items_as_dicts(order_data.line_items),
            invoice_number=order_data.invoice_number,
            branch_id=order_data.branch_id
        )
        return SalesOrderResponse.model_validate(order)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Error creating sales order: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create sales order"
        )


@router.get("", response_model=SalesOrderListResponse)
def list_sales_orders(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    customer_id: Optional[int] = Query(None, gt=0),
    branch_id: Optional[int] = Query(None, gt=0),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db)
):
    orders, total = get_all_sales_orders(
        db, skip=skip, limit=limit, customer_id=customer_id,
        branch_id=branch_id, start_date=start_date, end_date=end_date
    )
    return SalesOrderListResponse(
        total=total,
        skip=skip,
        limit=limit,
        sales_orders=[SalesOrderResponse.model_validate(order) for order in orders]
    )


@router.get("/{order_id}", response_model=SalesOrderResponse)
def get_sales_order(
    order_id: int = Path(..., gt=0),
    db: Session = Depends(get_db)
):
    order = get_sales_order_by_id(db, order_id)
    if not order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Sales order {order_id} not found"
        )
    return SalesOrderResponse.model_validate(order)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_sales_order_route(
    order_id: int = Path(..., gt=0),
    db: Session = Depends(get_db)
):
    try:
        if not delete_sales_order(db, order_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Sales order {order_id} not found"
            )
        return None
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
