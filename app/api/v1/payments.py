"""
Payment Routes
Payments IN from customers and OUT to suppliers, optionally split across
several payment types.
"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Path
from sqlalchemy.orm import Session

from app.core.dependencies import get_db
from app.models.payment import PaymentDirection
from app.schemas.payment import PaymentCreate, PaymentListResponse, PaymentResponse
from app.services.payment_service import create_payment, delete_payment, get_all_payments, get_payment_by_id
from app.logger_config import logger

router = APIRouter()


@router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
def create_payment_route(
    payment_data: PaymentCreate,
    db: Session = Depends(get_db)
):
    try:
        payment = create_payment(
            db=db,
            direction=payment_data.direction,
            party_id=payment_data.party_id,
            payment_date=payment_data.payment_date,
            payment_type=payment_data.payment_type,
            amount=payment_data.amount,
            splits=[s.model_dump() for s in payment_data.splits] if payment_data.splits else None,
            reference=payment_data.reference,
            notes=payment_data.notes,
            branch_id=payment_data.branch_id
        )
        return PaymentResponse.model_validate(payment)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Error creating payment: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create payment"
        )


@router.get("", response_model=PaymentListResponse)
def list_payments(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    direction: Optional[PaymentDirection] = Query(None),
    party_id: Optional[int] = Query(None, gt=0),
    branch_id: Optional[int] = Query(None, gt=0),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db)
):
    payments, total = get_all_payments(
        db, skip=skip, limit=limit, direction=direction, party_id=party_id,
        branch_id=branch_id, start_date=start_date, end_date=end_date
    )
    return PaymentListResponse(
        total=total,
        skip=skip,
        limit=limit,
        payments=[PaymentResponse.model_validate(p) for p in payments]
    )


@router.get("/{payment_id}", response_model=PaymentResponse)
def get_payment(
    payment_id: int = Path(..., gt=0),
    db: Session = Depends(get_db)
):
    payment = get_payment_by_id(db, payment_id)
    if not payment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Payment {payment_id} not found"
        )
    return PaymentResponse.model_validate(payment)


@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_payment_route(
    payment_id: int = Path(..., gt=0),
    db: Session = Depends(get_db)
):
    try:
        if not delete_payment(db, payment_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Payment {payment_id} not found"
            )
        return None
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
