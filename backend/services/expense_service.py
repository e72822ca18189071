"""
expense_service.py — Expenses
CRUD for expenses inside a budget.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.expense import Expense

logger = logging.getLogger(__name__)


class ExpenseService:
    @staticmethod
    def get(db: Session, expense_id: int) -> Expense | None:
        return db.get(Expense, expense_id)

    @staticmethod
    def create(db: Session, budget_id: int, data: dict) -> Expense | None:
        try:
            e = Expense(
                budget_id=budget_id,
                name=data.get("name"),
                amount=data.get("amount"),
            )
            db.add(e)
            db.commit()
            db.refresh(e)
            return e
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Could not create expense in budget {budget_id}")
            return None

    @staticmethod
    def update(db: Session, expense: Expense, data: dict) -> bool:
        try:
            expense.name = data.get("name", expense.name)
            expense.amount = data.get("amount", expense.amount)
            db.commit()
            return True
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Could not update expense {expense.id}")
            return False

    @staticmethod
    def delete(db: Session, expense: Expense) -> bool:
        try:
            db.delete(expense)
            db.commit()
            return True
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Could not delete expense {expense.id}")
            return False
