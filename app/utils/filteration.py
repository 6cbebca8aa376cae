from datetime import date
from typing import Optional

from sqlalchemy.orm import Query

from app.logger_config import logger


def apply_filters(
    query: Query,
    model,
    date_field: str,
    party_field: Optional[str] = None,
    party_id: Optional[int] = None,
    branch_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> Query:
    """Filter a transaction list by party, branch and inclusive date range."""
    if party_field and party_id:
        query = query.filter(getattr(model, party_field) == party_id)
        logger.debug(f"Filtering by {party_field}: {party_id}")

    if branch_id:
        query = query.filter(model.branch_id == branch_id)
        logger.debug(f"Filtering by branch_id: {branch_id}")

    date_column = getattr(model, date_field)
    if start_date:
        query = query.filter(date_column >= start_date)
        logger.debug(f"Filtering by start_date: {start_date}")

    if end_date:
        query = query.filter(date_column <= end_date)
        logger.debug(f"Filtering by end_date: {end_date}")

    return query
