from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Union

import pandas as pd

from .errors import DataError
from .models import OrderRecord

logger = logging.getLogger(__name__)

# Column names accepted for the preparation time, in order of preference
FULFIL_COLUMNS = ("fulfilTime", "fulfil_time", "prepTime")


def records_from_dataframe(df: pd.DataFrame) -> List[OrderRecord]:
    if df.empty and len(df.columns) == 0:
        return []
    fulfil_col = next((c for c in FULFIL_COLUMNS if c in df.columns), None)
    missing = [c for c in ("id", "name") if c not in df.columns]
    if fulfil_col is None:
        missing.append("fulfilTime")
    if missing:
        raise DataError(f"order data is missing columns: {', '.join(missing)}")

    fulfil = pd.to_numeric(df[fulfil_col], errors="coerce")
    if fulfil.isna().any():
        raise DataError("order data has non-numeric fulfil times")
    if (fulfil < 0).any():
        raise DataError("order data has negative fulfil times")

    ids = df["id"].astype(str)
    dupes = ids[ids.duplicated()].unique().tolist()
    if dupes:
        raise DataError(f"order data has duplicate ids: {', '.join(dupes)}")

    return [
        OrderRecord(id=str(i), name=str(n), fulfil_time=float(f))
        for i, n, f in zip(df["id"], df["name"], fulfil)
    ]


def load_orders(path: Union[str, Path]) -> List[OrderRecord]:
    path = Path(path)
    if not path.exists():
        raise DataError(f"order data file not found: {path}")
    try:
        df = pd.read_json(path, orient="records", dtype={"id": str, "name": str})
    except ValueError as e:
        raise DataError(f"malformed order data {path}: {e}") from e
    records = records_from_dataframe(df)
    logger.info("-->dataRead. Number of orders = %d", len(records))
    return records
