"""POST /v1/analyze - quick analysis of uploaded tables"""

import logging
import time
from typing import Any, List, Mapping, Optional

from fastapi import APIRouter, File, Form, HTTPException, Query, Request, UploadFile

from finpulse.api.dependencies import get_request_id
from finpulse.api.v1.schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    CategoryTotalSchema,
    QuickAnalysisSchema,
    RemoteStatusResponse,
)
from finpulse.domain.exceptions import CsvIngestionError, RemoteAnalysisError
from finpulse.infrastructure.clients.analysis import AnalysisClient
from finpulse.infrastructure.ingestion.csv_reader import read_csv_rows
from finpulse.infrastructure.observability.logging import log_analysis
from finpulse.services.analysis import LOCAL, AnalysisOutcome, analyze_rows

router = APIRouter()


def _outcome_payload(outcome: AnalysisOutcome) -> dict:
    if outcome.mode != LOCAL:
        return outcome.data
    result = outcome.data
    return QuickAnalysisSchema(
        inflow=float(result.inflow),
        outflow=float(result.outflow),
        net=float(result.net),
        top_categories=[
            CategoryTotalSchema(name=c.name, total=float(c.total)) for c in result.top_categories
        ],
    ).model_dump()


async def _run_analysis(
    request_id: str,
    rows: List[Mapping[str, Any]],
    api_url: Optional[str],
    source_file: Optional[str] = None,
) -> AnalyzeResponse:
    start_time = time.time()
    try:
        outcome = await analyze_rows(rows, api_url=api_url)
    except RemoteAnalysisError as e:
        logging.warning(f"Remote analysis failed: {e}", extra={"request_id": request_id})
        raise HTTPException(
            status_code=502,
            detail=f"{e}. Retry, or omit api_url to run the local quick analysis.",
        )

    duration_ms = (time.time() - start_time) * 1000
    log_analysis(request_id, outcome.mode, len(rows), duration_ms, source_file=source_file)

    return AnalyzeResponse(
        mode=outcome.mode,
        row_count=len(rows),
        data=_outcome_payload(outcome),
        source_file=source_file,
    )


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(body: AnalyzeRequest, request: Request):
    """
    Analyze rows already parsed by the client.

    Without api_url (and no configured endpoint) the local quick analysis runs;
    with one the rows are forwarded and the remote JSON is returned verbatim.
    """
    if not body.rows:
        raise HTTPException(status_code=422, detail="No rows to analyze")
    return await _run_analysis(get_request_id(request), body.rows, body.api_url)


@router.post("/analyze/upload", response_model=AnalyzeResponse)
async def analyze_upload(
    request: Request,
    file: UploadFile = File(..., description="CSV with a header row"),
    api_url: Optional[str] = Form(None),
):
    """Parse an uploaded CSV and analyze its rows"""
    request_id = get_request_id(request)
    try:
        rows = read_csv_rows(await file.read())
    except CsvIngestionError as e:
        logging.warning(f"CSV parse error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    if not rows:
        raise HTTPException(status_code=422, detail="No data rows in uploaded file")

    return await _run_analysis(request_id, rows, api_url, source_file=file.filename)


@router.get("/analyze/remote-status", response_model=RemoteStatusResponse)
async def remote_status(api_url: str = Query(..., description="Remote analysis endpoint to probe")):
    """Probe a remote analysis endpoint (idempotent GET, one bounded retry)"""
    reachable = await AnalysisClient(api_url).ping()
    return RemoteStatusResponse(api_url=api_url, reachable=reachable)
