# src/staffing_adherence/data/connection.py
from __future__ import annotations

from contextlib import contextmanager
from typing import Dict, List

import pandas as pd

from staffing_adherence.utils.config import config


@contextmanager
def get_connection():
    """One pyodbc connection per call; connections are never shared across threads."""
    # Imported here so the domain and tests load without an ODBC driver manager
    import pyodbc

    conn = pyodbc.connect(config.ODBC_CONNECTION_STRING, autocommit=True)
    try:
        yield conn
    finally:
        conn.close()


def read_records(sql: str, params: list | None = None) -> List[Dict]:
    """Run a query and return plain dict rows, NULL/NaN as None."""
    with get_connection() as conn:
        df = pd.read_sql(sql, conn, params=params or [])
    return frame_to_records(df)


def frame_to_records(df: pd.DataFrame) -> List[Dict]:
    if df is None or df.empty:
        return []
    return df.astype(object).where(pd.notna(df), None).to_dict("records")
