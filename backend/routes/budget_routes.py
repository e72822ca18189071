from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from auth import get_current_user
from database import get_db
from guards import BudgetContext, get_budget_context
from models.user import User
from schemas import BudgetRequest, BudgetOut, BudgetDetailOut
from services.budget_service import BudgetService
from validation import SERVER_ERROR, parse_body

router = APIRouter(prefix="/api/budgets", tags=["Budgets"], dependencies=[Depends(get_current_user)])


@router.post("", status_code=201)
@router.post("/", status_code=201, include_in_schema=False)
def create_budget(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    body: BudgetRequest = Depends(parse_body(BudgetRequest)),
):
    budget = BudgetService.create(db, user.id, body.model_dump())
    if budget is None:
        raise HTTPException(status_code=500, detail=SERVER_ERROR)
    return "Presupuesto creado"


@router.get("", response_model=List[BudgetOut])
@router.get("/", response_model=List[BudgetOut], include_in_schema=False)
def list_budgets(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return BudgetService.get_all(db, user.id)


@router.get("/{budget_id}", response_model=BudgetDetailOut)
def get_budget(ctx: BudgetContext = Depends(get_budget_context)):
    return ctx.budget


@router.put("/{budget_id}")
def update_budget(
    ctx: BudgetContext = Depends(get_budget_context),
    db: Session = Depends(get_db),
    body: BudgetRequest = Depends(parse_body(BudgetRequest)),
):
    if not BudgetService.update(db, ctx.budget, body.model_dump()):
        raise HTTPException(status_code=500, detail=SERVER_ERROR)
    return "Presupuesto actualizado"


@router.delete("/{budget_id}")
def delete_budget(ctx: BudgetContext = Depends(get_budget_context), db: Session = Depends(get_db)):
    if not BudgetService.delete(db, ctx.budget):
        raise HTTPException(status_code=500, detail=SERVER_ERROR)
    return "Presupuesto eliminado"
