"""CRUD and net summary for /v1/cash-flows"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from finpulse.api.v1.schemas import (
    CashFlowCreate,
    CashFlowResponse,
    CashFlowSummaryResponse,
    CashFlowUpdate,
)
from finpulse.domain.exceptions import RecordNotFoundError
from finpulse.domain.summary import summarize_cash_flow
from finpulse.infrastructure.database.repositories import CashFlowRepository, to_cash_flow_entry
from finpulse.infrastructure.database.session import get_db
from finpulse.infrastructure.observability.metrics import record_write

router = APIRouter()


@router.get("/cash-flows", response_model=List[CashFlowResponse])
def list_cash_flows(db: Session = Depends(get_db)):
    """All cash-flow entries, newest date first"""
    return CashFlowRepository(db).list_all()


# Declared before /cash-flows/{entry_id} so "summary" is not parsed as an id
@router.get("/cash-flows/summary", response_model=CashFlowSummaryResponse)
def get_cash_flow_summary(db: Session = Depends(get_db)):
    """Total inflow, total outflow and net cash flow"""
    entries = [to_cash_flow_entry(row) for row in CashFlowRepository(db).list_all()]
    summary = summarize_cash_flow(entries)
    return CashFlowSummaryResponse(
        total_inflow=float(summary.total_inflow),
        total_outflow=float(summary.total_outflow),
        net_cash_flow=float(summary.net_cash_flow),
    )


@router.post("/cash-flows", response_model=CashFlowResponse, status_code=201)
def create_cash_flow(body: CashFlowCreate, db: Session = Depends(get_db)):
    """Record a cash inflow or outflow"""
    record = CashFlowRepository(db).create(
        flow_type=body.flow_type.value,
        source=body.source,
        description=body.description,
        amount=body.amount,
        date=body.date,
    )
    db.commit()
    record_write("cash_flow", "create")
    return record


@router.get("/cash-flows/{entry_id}", response_model=CashFlowResponse)
def get_cash_flow(entry_id: uuid.UUID, db: Session = Depends(get_db)):
    try:
        return CashFlowRepository(db).get(entry_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Cash flow entry not found")


@router.patch("/cash-flows/{entry_id}", response_model=CashFlowResponse)
def update_cash_flow(
    entry_id: uuid.UUID,
    body: CashFlowUpdate,
    db: Session = Depends(get_db),
):
    """Partially update a cash-flow entry"""
    updates = body.model_dump(exclude_unset=True, exclude_none=True)
    if "flow_type" in updates:
        updates["flow_type"] = updates["flow_type"].value
    try:
        record = CashFlowRepository(db).update(entry_id, updates)
    except RecordNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Cash flow entry not found")
    db.commit()
    record_write("cash_flow", "update")
    return record


@router.delete("/cash-flows/{entry_id}", status_code=204)
def delete_cash_flow(entry_id: uuid.UUID, db: Session = Depends(get_db)):
    try:
        CashFlowRepository(db).delete(entry_id)
    except RecordNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Cash flow entry not found")
    db.commit()
    record_write("cash_flow", "delete")
    return Response(status_code=204)
