from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Optional, List

from app.models.branch import Branch
from app.logger_config import logger


def get_branch_by_id(db: Session, branch_id: int) -> Optional[Branch]:
    return db.query(Branch).filter(Branch.id == branch_id).first()


def get_all_branches(db: Session) -> List[Branch]:
    return db.query(Branch).order_by(Branch.name.asc()).all()


def create_branch(
    db: Session,
    name: str,
    address: Optional[str] = None,
    phone: Optional[str] = None
) -> Branch:
    """Create a new branch."""
    if db.query(Branch).filter(Branch.name == name).first():
        raise ValueError(f"Branch '{name}' already exists")

    branch = Branch(name=name, address=address, phone=phone)
    db.add(branch)
    try:
        db.commit()
        db.refresh(branch)
        logger.info(f"Branch created: {branch.id} {branch.name}")
        return branch
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Error creating branch: {str(e)}")
        raise ValueError("Failed to create branch.")
