"""CSV ingestion: header-keyed rows with best-effort type inference"""

import io
from typing import Any, Dict, List

import pandas as pd

from finpulse.domain.exceptions import CsvIngestionError


def read_csv_rows(content: bytes) -> List[Dict[str, Any]]:
    """
    Parse an uploaded CSV into one dict per row, keyed by header.

    Numeric-looking columns are inferred as numbers; blank lines are skipped
    and blank cells come back as None. Nothing here is trusted downstream:
    aggregation re-coerces every value.

    Raises:
        CsvIngestionError: When the bytes cannot be parsed as CSV
    """
    if not content.strip():
        return []

    try:
        # index_col=False keeps fields mapped by header position on ragged rows
        df = pd.read_csv(io.BytesIO(content), skip_blank_lines=True, index_col=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise CsvIngestionError(f"Could not parse CSV: {e}") from e

    # object dtype so None survives instead of being turned back into NaN
    df = df.astype(object).where(pd.notna(df), None)
    return df.to_dict(orient="records")
