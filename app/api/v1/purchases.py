"""
Purchase Routes
Purchase orders (supplier bills) with line items. Each order raises the
amount owed to the supplier by its KWD total.
"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Path
from sqlalchemy.orm import Session

from app.core.dependencies import get_db
from app.schemas.common import line_items_as_dicts
from app.schemas.purchase import PurchaseOrderCreate, PurchaseOrderListResponse, PurchaseOrderResponse
from app.services.purchase_service import (
    create_purchase_order,
    delete_purchase_order,
    get_all_purchase_orders,
    get_purchase_order_by_id
)
from app.logger_config import logger

router = APIRouter()


@router.post(
    "",
    response_model=PurchaseOrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new purchase order",
    description="""
    Create a purchase order with its line items in a single transaction.
    The KWD total is the sum of the line totals; FX fields are informational.
    """
)
def create_purchase_order_route(
    order_data: PurchaseOrderCreate,
    db: Session = Depends(get_db)
):
    try:
        order = create_purchase_order(
            db=db,
            supplier_id=order_data.supplier_id,
            purchase_date=order_data.purchase_date,
            items=line_items_as_dicts(order_data.line_items),
            invoice_number=order_data.invoice_number,
            branch_id=order_data.branch_id,
            fx_currency=order_data.fx_currency,
            fx_rate=order_data.fx_rate,
            total_fx=order_data.total_fx
        )
        return PurchaseOrderResponse.model_validate(order)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Error creating purchase order: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create purchase order"
        )


@router.get("", response_model=PurchaseOrderListResponse)
def list_purchase_orders(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    supplier_id: Optional[int] = Query(None, gt=0),
    branch_id: Optional[int] = Query(None, gt=0),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db)
):
    orders, total = get_all_purchase_orders(
        db, skip=skip, limit=limit, supplier_id=supplier_id,
        branch_id=branch_id, start_date=start_date, end_date=end_date
    )
    return PurchaseOrderListResponse(
        total=total,
        skip=skip,
        limit=limit,
        purchase_orders=[PurchaseOrderResponse.model_validate(order) for order in orders]
    )


@router.get("/{order_id}", response_model=PurchaseOrderResponse)
def get_purchase_order(
    order_id: int = Path(..., gt=0),
    db: Session = Depends(get_db)
):
    order = get_purchase_order_by_id(db, order_id)
    if not order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Purchase order {order_id} not found"
        )
    return PurchaseOrderResponse.model_validate(order)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_purchase_order_route(
    order_id: int = Path(..., gt=0),
    db: Session = Depends(get_db)
):
    try:
        if not delete_purchase_order(db, order_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Purchase order {order_id} not found"
            )
        return None
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
