"""
guards.py — Resource ownership chain
Each guarded route resolves its path ids through three steps: the id must be
a positive integer, the row must exist, and it must belong to the caller
(budgets) or to the enclosing budget (expenses). The resolved rows are handed
to the handler in a typed context so it never queries them again.
"""

import re
from dataclasses import dataclass

from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from auth import get_current_user
from database import get_db
from models.budget import Budget
from models.expense import Expense
from models.user import User
from services.budget_service import BudgetService
from services.expense_service import ExpenseService
from validation import invalid_param

MAX_ID = 2_147_483_647

NOT_FOUND = {
    "budget": "Presupuesto no encontrado",
    "expense": "Gasto no encontrado",
}

# A budget owned by someone else is reported as 401, an expense reached
# through the wrong budget as 403.
ACCESS_DENIED_STATUS = {
    "budget": 401,
    "expense": 403,
}


@dataclass
class BudgetContext:
    user: User
    budget: Budget


@dataclass
class ExpenseContext:
    user: User
    budget: Budget
    expense: Expense


def parse_id(value: str, param: str) -> int:
    """Positive integer or a 400 "ID no válido"."""
    if re.fullmatch(r"[0-9]+", value or ""):
        parsed = int(value)
        if 0 < parsed <= MAX_ID:
            return parsed
    raise invalid_param(param, value, "ID no válido")


def ensure_exists(resource: str, row):
    if row is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND[resource])
    return row


def ensure_access(resource: str, owner_id: int, expected_id: int):
    """Single ownership policy for every guarded resource."""
    if owner_id != expected_id:
        raise HTTPException(status_code=ACCESS_DENIED_STATUS[resource], detail="Acción no válida")


# ── Dependencies ──────────────────────────────────────────────────
def validate_budget_id(budget_id: str) -> int:
    return parse_id(budget_id, "budget_id")


def validate_expense_id(expense_id: str) -> int:
    return parse_id(expense_id, "expense_id")


def get_budget_context(
    budget_id: int = Depends(validate_budget_id),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> BudgetContext:
    budget = ensure_exists("budget", BudgetService.get(db, budget_id))
    ensure_access("budget", budget.user_id, user.id)
    return BudgetContext(user=user, budget=budget)


def get_expense_context(
    ctx: BudgetContext = Depends(get_budget_context),
    expense_id: int = Depends(validate_expense_id),
    db: Session = Depends(get_db),
) -> ExpenseContext:
    expense = ensure_exists("expense", ExpenseService.get(db, expense_id))
    ensure_access("expense", expense.budget_id, ctx.budget.id)
    return ExpenseContext(user=ctx.user, budget=ctx.budget, expense=expense)
