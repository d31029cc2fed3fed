"""Uploaded-table analysis: local quick analysis or remote pass-through"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union

from finpulse.config import settings
from finpulse.domain.models import QuickAnalysis
from finpulse.domain.quick_analysis import quick_analysis
from finpulse.infrastructure.clients.analysis import AnalysisClient
from finpulse.infrastructure.observability.metrics import record_analysis

LOCAL = "local"
API = "api"


@dataclass
class AnalysisOutcome:
    """Tagged analysis result: mode is "local" (QuickAnalysis) or "api" (verbatim JSON)"""

    mode: str
    data: Union[QuickAnalysis, Dict[str, Any]]


async def analyze_rows(
    rows: List[Mapping[str, Any]],
    api_url: Optional[str] = None,
    client: Optional[AnalysisClient] = None,
) -> AnalysisOutcome:
    """
    Analyze uploaded rows.

    With an endpoint URL (argument, else settings.analysis_api_url) the rows are
    forwarded opaquely; otherwise the local quick analysis runs. A remote failure
    raises RemoteAnalysisError and leaves nothing half-computed, so the caller
    can retry or fall back to local analysis.
    """
    url = api_url or settings.analysis_api_url
    if client is None and url:
        client = AnalysisClient(url)

    if client is not None:
        data = await client.analyze(rows)
        record_analysis(API)
        return AnalysisOutcome(mode=API, data=data)

    result = quick_analysis(rows, top_n=settings.quick_analysis_top_n)
    record_analysis(LOCAL)
    return AnalysisOutcome(mode=LOCAL, data=result)
