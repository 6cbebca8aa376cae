from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from app.core.dependencies import get_db
from app.services.branch_service import get_all_branches, create_branch
from app.schemas.branch import BranchCreate, BranchResponse
from app.logger_config import logger

router = APIRouter()


@router.get("", response_model=List[BranchResponse])
def get_branches(db: Session = Depends(get_db)):
    return [BranchResponse.model_validate(branch) for branch in get_all_branches(db)]


@router.post("", response_model=BranchResponse, status_code=status.HTTP_201_CREATED)
def create_branch_route(
    branch_data: BranchCreate,
    db: Session = Depends(get_db)
):
    try:
        branch = create_branch(db, name=branch_data.name, address=branch_data.address, phone=branch_data.phone)
        return BranchResponse.model_validate(branch)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Error creating branch: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create branch"
        )
