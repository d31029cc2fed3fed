"""CRUD for /v1/budgets"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from finpulse.api.v1.schemas import BudgetTargetCreate, BudgetTargetResponse, BudgetTargetUpdate
from finpulse.domain.exceptions import RecordNotFoundError
from finpulse.infrastructure.database.repositories import BudgetTargetRepository
from finpulse.infrastructure.database.session import get_db
from finpulse.infrastructure.observability.metrics import record_write

router = APIRouter()


@router.get("/budgets", response_model=List[BudgetTargetResponse])
def list_budgets(db: Session = Depends(get_db)):
    """All budget targets, most recently created first"""
    return BudgetTargetRepository(db).list_all()


@router.post("/budgets", response_model=BudgetTargetResponse, status_code=201)
def create_budget(body: BudgetTargetCreate, db: Session = Depends(get_db)):
    record = BudgetTargetRepository(db).create(**body.model_dump())
    db.commit()
    record_write("budget_target", "create")
    return record


@router.patch("/budgets/{budget_id}", response_model=BudgetTargetResponse)
def update_budget(
    budget_id: uuid.UUID,
    body: BudgetTargetUpdate,
    db: Session = Depends(get_db),
):
    try:
        record = BudgetTargetRepository(db).update(
            budget_id, body.model_dump(exclude_unset=True, exclude_none=True)
        )
    except RecordNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Budget target not found")
    db.commit()
    record_write("budget_target", "update")
    return record


@router.delete("/budgets/{budget_id}", status_code=204)
def delete_budget(budget_id: uuid.UUID, db: Session = Depends(get_db)):
    try:
        BudgetTargetRepository(db).delete(budget_id)
    except RecordNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Budget target not found")
    db.commit()
    record_write("budget_target", "delete")
    return Response(status_code=204)
