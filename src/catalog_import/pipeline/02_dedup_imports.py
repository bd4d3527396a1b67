#!/usr/bin/env python3
"""
02_dedup_imports.py - Resolve repeated dates in the import statistics log.

A night can be logged more than once when an import job is rerun. For each
date only the row with the largest total is kept; exact ties keep the row
that appears first in the file.
"""

import sys
from pathlib import Path

import numpy as np
import pandas as pd

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from src.common.constants import get_logger
from src.catalog_import.common.constants import DATE_KEY

logger = get_logger(__name__)


def deduplicate_by_max(
    df: pd.DataFrame,
    key: str = DATE_KEY,
    value_col: str = "total",
) -> pd.DataFrame:
    """
    Keep one row per key: the one with the maximum ``value_col``.

    Args:
        df: Input DataFrame, keys may repeat
        key: Column to deduplicate on
        value_col: Column whose maximum selects the surviving row

    Returns:
        DataFrame with unique keys. Surviving rows keep their original
        relative order and index. Absent values lose to any present value;
        exact ties keep the first row in input order.
    """
    for c in (key, value_col):
        if c not in df.columns:
            raise ValueError(f"Missing column '{c}'. Available: {df.columns.tolist()}")

    # Stable sort so ties keep input order, then first row per key wins
    ranked = df.assign(_pos=np.arange(len(df))).sort_values(
        value_col, ascending=False, kind="mergesort", na_position="last"
    )
    keep = np.sort(ranked.drop_duplicates(subset=key, keep="first")["_pos"].to_numpy())

    out = df.iloc[keep].copy()

    dropped = len(df) - len(out)
    if dropped:
        logger.info(f"Dropped {dropped} duplicate row(s) on '{key}' (kept max '{value_col}')")

    return out
