from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.logger_config import logger
from app.models.branch import Branch
from app.models.party import Party, PartyType
from app.utilities.money import ZERO, add_kwd, quantize_kwd


def validate_party(db: Session, party_id: int, party_type: PartyType) -> Party:
    """Load a party and make sure it has the expected type."""
    party = db.query(Party).filter(
        Party.id == party_id,
        Party.party_type == party_type
    ).first()
    if not party:
        logger.error(f"Party validation failed: ID {party_id} not found or not a {party_type.value}")
        raise ValueError(f"{party_type.value.capitalize()} {party_id} not found")
    return party


def validate_branch(db: Session, branch_id: Optional[int]) -> None:
    if branch_id is None:
        return
    if not db.query(Branch).filter(Branch.id == branch_id).first():
        logger.error(f"Branch not found: {branch_id}")
        raise ValueError(f"Branch {branch_id} not found")


def build_line_items(line_model, items: Iterable[dict]) -> Tuple[List, Decimal]:
    """
    Build line item rows and the header total.
    Line total = quantity x price, rounded to fils; header total is the
    sum of line totals.
    """
    lines = []
    total = ZERO

    for idx, item in enumerate(items):
        quantity = item["quantity"]
        price = Decimal(str(item["price_kwd"]))

        if quantity <= 0:
            logger.error(f"Invalid quantity on line {idx + 1}: {quantity}")
            raise ValueError(f"Quantity must be positive (line {idx + 1})")
        if price < 0:
            logger.error(f"Invalid price on line {idx + 1}: {price}")
            raise ValueError(f"Price cannot be negative (line {idx + 1})")

        line_total = quantize_kwd(Decimal(quantity) * price)
        lines.append(line_model(
            item_name=item["item_name"],
            quantity=quantity,
            price_kwd=quantize_kwd(price),
            total_kwd=line_total
        ))
        total = add_kwd(total, line_total)
        logger.debug(f"Line {idx + 1}: {item['item_name']} {quantity} x {price} = {line_total}")

    if not lines:
        logger.error("No line items provided")
        raise ValueError("At least one line item is required")

    return lines, total
