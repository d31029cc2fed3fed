"""Stand-in remote analysis endpoint for local development"""

from typing import Any, Dict, List

from fastapi import FastAPI
from pydantic import BaseModel

app = FastAPI(title="Mock Analysis Server", version="1.0.0")


class AnalyzePayload(BaseModel):
    rows: List[Dict[str, Any]] = []


@app.get("/health")
def health(): return {"status": "ok"}

@app.get("/analyze")
def probe(): return {"status": "ready"}

@app.post("/analyze")
def analyze(payload: AnalyzePayload):
    columns = sorted({key for row in payload.rows for key in row})
    return {"row_count": len(payload.rows), "columns": columns, "engine": "mock"}
