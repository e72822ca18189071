"""
budget_service.py — Budgets
CRUD for budgets owned by a single user.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.budget import Budget

logger = logging.getLogger(__name__)


class BudgetService:
    @staticmethod
    def get(db: Session, budget_id: int) -> Budget | None:
        return db.get(Budget, budget_id)

    @staticmethod
    def get_all(db: Session, user_id: int) -> list[Budget]:
        """Budgets owned by *user_id*, newest first."""
        return (
            db.query(Budget)
            .filter(Budget.user_id == user_id)
            .order_by(Budget.created_at.desc(), Budget.id.desc())
            .all()
        )

    @staticmethod
    def create(db: Session, user_id: int, data: dict) -> Budget | None:
        try:
            b = Budget(
                user_id=user_id,
                name=data.get("name"),
                amount=data.get("amount"),
            )
            db.add(b)
            db.commit()
            db.refresh(b)
            return b
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Could not create budget for user {user_id}")
            return None

    @staticmethod
    def update(db: Session, budget: Budget, data: dict) -> bool:
        try:
            budget.name = data.get("name", budget.name)
            budget.amount = data.get("amount", budget.amount)
            db.commit()
            return True
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Could not update budget {budget.id}")
            return False

    @staticmethod
    def delete(db: Session, budget: Budget) -> bool:
        """Remove the budget; its expenses go with it."""
        try:
            db.delete(budget)
            db.commit()
            return True
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Could not delete budget {budget.id}")
            return False
