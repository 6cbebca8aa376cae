from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.common.exceptions import LedgerError
from app.core.dependencies import get_db
from app.models.party import PartyType
from app.services.party_service import (
    get_party_by_id,
    get_all_parties,
    create_party,
    update_party,
    delete_party
)
from app.schemas.party import (
    PartyCreate,
    PartyUpdate,
    PartyResponse,
    PartyListResponse
)
from app.logger_config import logger

router = APIRouter()


@router.get("", response_model=PartyListResponse)
def get_parties(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=100),
    party_type: Optional[PartyType] = Query(None),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """
    Get all parties with optional type and search filtering.
    """
    try:
        parties, total = get_all_parties(db, skip=skip, limit=limit, party_type=party_type, search=search)
        return PartyListResponse(
            total=total,
            parties=[PartyResponse.model_validate(party) for party in parties]
        )
    except Exception as e:
        logger.error(f"Error fetching parties: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch parties"
        )


@router.get("/{party_id}", response_model=PartyResponse)
def get_party(
    party_id: int,
    db: Session = Depends(get_db)
):
    """
    Get party by ID.
    """
    party = get_party_by_id(db, party_id)
    if not party:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Party not found"
        )
    return PartyResponse.model_validate(party)


@router.post("", response_model=PartyResponse, status_code=status.HTTP_201_CREATED)
def create_party_route(
    party_data: PartyCreate,
    db: Session = Depends(get_db)
):
    """
    Create a new customer, supplier or salesman.
    Credit limit is kept for customers only, commission for salesmen only.
    """
    try:
        party = create_party(
            db=db,
            name=party_data.name,
            party_type=party_data.party_type,
            phone=party_data.phone,
            address=party_data.address,
            credit_limit=party_data.credit_limit,
            commission_rate=party_data.commission_rate
        )
        return PartyResponse.model_validate(party)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Error creating party: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create party"
        )


@router.put("/{party_id}", response_model=PartyResponse)
def update_party_route(
    party_id: int,
    party_data: PartyUpdate,
    db: Session = Depends(get_db)
):
    """
    Update party information.
    The party type cannot change once transactions reference the party.
    """
    try:
        party = update_party(
            db=db,
            party_id=party_id,
            name=party_data.name,
            party_type=party_data.party_type,
            phone=party_data.phone,
            address=party_data.address,
            credit_limit=party_data.credit_limit,
            commission_rate=party_data.commission_rate
        )

        if not party:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Party not found"
            )

        logger.info(f"Party {party_id} updated")
        return PartyResponse.model_validate(party)
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Error updating party: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update party"
        )


@router.delete("/{party_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_party_route(
    party_id: int,
    db: Session = Depends(get_db)
):
    """
    Delete a party.
    Refused with 409 while any sale, purchase, payment, return or opening
    balance references it.
    """
    try:
        success = delete_party(db, party_id)
        if not success:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Party not found"
            )

        logger.info(f"Party {party_id} deleted")
        return None
    except (HTTPException, LedgerError):
        raise
    except Exception as e:
        logger.error(f"Error deleting party: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete party"
        )
