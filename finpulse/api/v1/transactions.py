"""CRUD for /v1/transactions"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from finpulse.api.v1.schemas import (
    CategoryOptions,
    TransactionCreate,
    TransactionResponse,
    TransactionUpdate,
)
from finpulse.domain.categories import (
    EXPENSE_CATEGORIES,
    INFLOW_SOURCES,
    OUTFLOW_SOURCES,
    REVENUE_CATEGORIES,
)
from finpulse.domain.exceptions import RecordNotFoundError
from finpulse.infrastructure.database.repositories import TransactionRepository
from finpulse.infrastructure.database.session import get_db
from finpulse.infrastructure.observability.metrics import record_write

router = APIRouter()


@router.get("/categories", response_model=CategoryOptions)
def get_category_options():
    """Recommended category and source labels for entry forms"""
    return CategoryOptions(
        revenue=REVENUE_CATEGORIES,
        expenditure=EXPENSE_CATEGORIES,
        inflow=INFLOW_SOURCES,
        outflow=OUTFLOW_SOURCES,
    )


@router.get("/transactions", response_model=List[TransactionResponse])
def list_transactions(db: Session = Depends(get_db)):
    """All transactions, newest date first"""
    return TransactionRepository(db).list_all()


@router.post("/transactions", response_model=TransactionResponse, status_code=201)
def create_transaction(body: TransactionCreate, db: Session = Depends(get_db)):
    """Record a revenue or expenditure transaction"""
    record = TransactionRepository(db).create(
        type=body.type.value,
        category=body.category,
        description=body.description,
        amount=body.amount,
        date=body.date,
    )
    db.commit()
    record_write("transaction", "create")
    return record


@router.get("/transactions/{transaction_id}", response_model=TransactionResponse)
def get_transaction(transaction_id: uuid.UUID, db: Session = Depends(get_db)):
    try:
        return TransactionRepository(db).get(transaction_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Transaction not found")


@router.patch("/transactions/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: uuid.UUID,
    body: TransactionUpdate,
    db: Session = Depends(get_db),
):
    """Partially update a transaction"""
    updates = body.model_dump(exclude_unset=True, exclude_none=True)
    if "type" in updates:
        updates["type"] = updates["type"].value
    try:
        record = TransactionRepository(db).update(transaction_id, updates)
    except RecordNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Transaction not found")
    db.commit()
    record_write("transaction", "update")
    return record


@router.delete("/transactions/{transaction_id}", status_code=204)
def delete_transaction(transaction_id: uuid.UUID, db: Session = Depends(get_db)):
    try:
        TransactionRepository(db).delete(transaction_id)
    except RecordNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Transaction not found")
    db.commit()
    record_write("transaction", "delete")
    return Response(status_code=204)
