from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Path
from sqlalchemy.orm import Session

from app.core.dependencies import get_db
from app.models.returns import ReturnType
from app.schemas.common import line_items_as_dicts
from app.schemas.returns import ReturnCreate, ReturnListResponse, ReturnResponse
from app.services.return_service import create_return, delete_return, get_all_returns, get_return_by_id
from app.logger_config import logger

router = APIRouter()


@router.post("", response_model=ReturnResponse, status_code=status.HTTP_201_CREATED)
def create_return_route(
    return_data: ReturnCreate,
    db: Session = Depends(get_db)
):
    """
    Record a sale return (customer) or purchase return (supplier).
    """
    try:
        return_order = create_return(
            db=db,
            return_type=return_data.return_type,
            party_id=return_data.party_id,
            return_date=return_data.return_date,
            items=line_items_as_dicts(return_data.line_items),
            return_number=return_data.return_number,
            branch_id=return_data.branch_id,
            notes=return_data.notes
        )
        return ReturnResponse.model_validate(return_order)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Error creating return: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create return"
        )


@router.get("", response_model=ReturnListResponse)
def list_returns(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    return_type: Optional[ReturnType] = Query(None),
    party_id: Optional[int] = Query(None, gt=0),
    branch_id: Optional[int] = Query(None, gt=0),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db)
):
    returns, total = get_all_returns(
        db, skip=skip, limit=limit, return_type=return_type, party_id=party_id,
        branch_id=branch_id, start_date=start_date, end_date=end_date
    )
    return ReturnListResponse(
        total=total,
        skip=skip,
        limit=limit,
        returns=[ReturnResponse.model_validate(r) for r in returns]
    )


@router.get("/{return_id}", response_model=ReturnResponse)
def get_return(
    return_id: int = Path(..., gt=0),
    db: Session = Depends(get_db)
):
    return_order = get_return_by_id(db, return_id)
    if not return_order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Return {return_id} not found"
        )
    return ReturnResponse.model_validate(return_order)


@router.delete("/{return_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_return_route(
    return_id: int = Path(..., gt=0),
    db: Session = Depends(get_db)
):
    try:
        if not delete_return(db, return_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Return {return_id} not found"
            )
        return None
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
