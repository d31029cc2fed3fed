"""Remote analysis endpoint HTTP client"""

import asyncio
import math
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

import httpx

from finpulse.config import settings
from finpulse.domain.exceptions import RemoteAnalysisError
from finpulse.infrastructure.observability.metrics import (
    remote_analysis_failure_counter,
    remote_analysis_latency_histogram,
)


def _json_safe(value: Any) -> Any:
    """Make a cell JSON-encodable; NaN/inf become null"""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, Decimal):
        return float(value) if value.is_finite() else None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def serialize_rows(rows: List[Any]) -> List[Any]:
    """Every row forwarded in order; only cell values are made JSON-safe"""
    return [
        {str(key): _json_safe(value) for key, value in row.items()}
        if isinstance(row, Mapping)
        else _json_safe(row)
        for row in rows
    ]


class AnalysisClient:
    """Client for a user-supplied remote analysis endpoint"""

    def __init__(
        self,
        url: str,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        backoff_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout or settings.analysis_timeout_seconds
        self.max_retries = settings.analysis_max_retries if max_retries is None else max_retries
        self.backoff_seconds = settings.analysis_backoff_seconds if backoff_seconds is None else backoff_seconds
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def analyze(self, rows: List[Any]) -> Dict[str, Any]:
        """
        POST the raw rows as {"rows": [...]} and return the JSON object verbatim.

        POST is not idempotent, so there is exactly one attempt.

        Raises:
            RemoteAnalysisError: On timeout, transport/HTTP errors, or a non-object body
        """
        async with self._client() as client:
            try:
                with remote_analysis_latency_histogram.time():
                    response = await client.post(
                        self.url,
                        json={"rows": serialize_rows(rows)},
                        headers={"Content-Type": "application/json"},
                    )
                    response.raise_for_status()
                data = response.json()
            except httpx.TimeoutException as e:
                remote_analysis_failure_counter.inc()
                raise RemoteAnalysisError(f"Analysis API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                remote_analysis_failure_counter.inc()
                raise RemoteAnalysisError(f"Analysis API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                remote_analysis_failure_counter.inc()
                raise RemoteAnalysisError(f"Analysis API unreachable: {e}") from e
            except ValueError as e:
                remote_analysis_failure_counter.inc()
                raise RemoteAnalysisError("Analysis API returned invalid JSON") from e

        if not isinstance(data, dict):
            remote_analysis_failure_counter.inc()
            raise RemoteAnalysisError("Analysis API returned a non-object JSON body")
        return data

    async def ping(self) -> bool:
        """
        Check the endpoint answers a GET.

        Retry strategy: one bounded retry after `backoff_seconds` on 5xx or
        network failures. Returns False instead of raising.
        """
        attempt = 0
        async with self._client() as client:
            while True:
                try:
                    response = await client.get(self.url)
                    if response.status_code >= 500:
                        response.raise_for_status()
                    return True
                except (httpx.HTTPStatusError, httpx.RequestError):
                    attempt += 1
                    if attempt > self.max_retries:
                        return False
                    await asyncio.sleep(self.backoff_seconds)
