from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from auth import get_current_user
from database import get_db
from guards import BudgetContext, ExpenseContext, get_budget_context, get_expense_context
from schemas import ExpenseRequest, ExpenseOut
from services.expense_service import ExpenseService
from validation import SERVER_ERROR, parse_body

router = APIRouter(
    prefix="/api/budgets/{budget_id}/expenses",
    tags=["Expenses"],
    dependencies=[Depends(get_current_user)],
)


@router.post("", status_code=201)
@router.post("/", status_code=201, include_in_schema=False)
def create_expense(
    ctx: BudgetContext = Depends(get_budget_context),
    db: Session = Depends(get_db),
    body: ExpenseRequest = Depends(parse_body(ExpenseRequest)),
):
    expense = ExpenseService.create(db, ctx.budget.id, body.model_dump())
    if expense is None:
        raise HTTPException(status_code=500, detail=SERVER_ERROR)
    return "Gasto creado"


@router.get("/{expense_id}", response_model=ExpenseOut)
def get_expense(ctx: ExpenseContext = Depends(get_expense_context)):
    return ctx.expense


@router.put("/{expense_id}")
def update_expense(
    ctx: ExpenseContext = Depends(get_expense_context),
    db: Session = Depends(get_db),
    body: ExpenseRequest = Depends(parse_body(ExpenseRequest)),
):
    if not ExpenseService.update(db, ctx.expense, body.model_dump()):
        raise HTTPException(status_code=500, detail=SERVER_ERROR)
    return "Gasto actualizado"


@router.delete("/{expense_id}")
def delete_expense(ctx: ExpenseContext = Depends(get_expense_context), db: Session = Depends(get_db)):
    if not ExpenseService.delete(db, ctx.expense):
        raise HTTPException(status_code=500, detail=SERVER_ERROR)
    return "Gasto eliminado"
