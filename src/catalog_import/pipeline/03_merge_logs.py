#!/usr/bin/env python3
"""
03_merge_logs.py - Full outer join of the import statistics and the time log.

Every date that appears in either log yields exactly one merged row. Fields
from the log that has no entry for a date stay absent.
"""

import sys
from pathlib import Path

import pandas as pd
from pandas.errors import MergeError

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from src.common.constants import get_logger
from src.catalog_import.common.constants import DATE_KEY
from src.catalog_import.common.errors import DuplicateKeyError

logger = get_logger(__name__)


def check_unique(df: pd.DataFrame, key: str, name: str) -> None:
    """
    Raise if ``key`` repeats in ``df``.

    Raises:
        DuplicateKeyError: Listing up to five repeated key values
    """
    dupes = df.loc[df[key].duplicated(keep=False), key]
    if len(dupes):
        sample = sorted(set(dupes.astype(str)))[:5]
        raise DuplicateKeyError(
            f"{name} has {dupes.nunique()} repeated '{key}' value(s), e.g. {sample}"
        )


def merge_logs(
    imports: pd.DataFrame,
    times: pd.DataFrame,
    key: str = DATE_KEY,
) -> pd.DataFrame:
    """
    Full outer join on exact key equality, sorted by key.

    Args:
        imports: Deduplicated import statistics (unique key)
        times: Process time log (unique key)
        key: Join column

    Returns:
        DataFrame with the key, the import columns and the time columns,
        one row per distinct key across both inputs

    Raises:
        DuplicateKeyError: If either input repeats a key
    """
    for name, df in (("import log", imports), ("time log", times)):
        if key not in df.columns:
            raise ValueError(f"Missing key column '{key}' in {name}. Available: {df.columns.tolist()}")
        check_unique(df, key, name)

    try:
        merged = pd.merge(
            imports,
            times,
            on=key,
            how="outer",
            sort=True,
            validate="one_to_one",
        )
    except MergeError as e:
        raise DuplicateKeyError(str(e)) from e

    merged = merged.reset_index(drop=True)

    only_imports = int((~imports[key].isin(times[key])).sum())
    only_times = int((~times[key].isin(imports[key])).sum())
    logger.info(
        f"Merged {len(imports)} import rows and {len(times)} time rows -> {len(merged)} "
        f"({only_imports} import-only, {only_times} time-only)"
    )

    return merged
