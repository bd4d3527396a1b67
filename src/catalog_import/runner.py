"""
In-process entry point for the catalog import pipeline.

Chains the numbered stages in order: load both logs, deduplicate the import
statistics, merge, add calendar features and export. The stage modules are
loaded with importlib because their file names start with the step number.
"""

import importlib
from types import ModuleType
from typing import Dict

import pandas as pd

from src.common.constants import get_logger
from src.catalog_import.common.config import PipelineConfig

logger = get_logger(__name__)

STAGES: Dict[str, str] = {
    "load": "src.catalog_import.pipeline.01_load_logs",
    "dedup": "src.catalog_import.pipeline.02_dedup_imports",
    "merge": "src.catalog_import.pipeline.03_merge_logs",
    "calendar": "src.catalog_import.pipeline.04_add_calendar",
    "export": "src.catalog_import.pipeline.05_export_table",
    "rank": "src.catalog_import.pipeline.06_rank_features",
}


def load_stage(name: str) -> ModuleType:
    """
    Import a pipeline stage module by its short name.

    Args:
        name: One of the STAGES keys

    Returns:
        The stage module
    """
    if name not in STAGES:
        raise KeyError(f"Unknown stage '{name}'. Expected one of {list(STAGES)}")
    return importlib.import_module(STAGES[name])


def build_merged_table(config: PipelineConfig) -> pd.DataFrame:
    """
    Run load, dedup, merge and calendar stages without writing anything.

    Args:
        config: Run configuration

    Returns:
        Merged table with calendar features, one row per date
    """
    load = load_stage("load")
    dedup = load_stage("dedup")
    merge = load_stage("merge")
    calendar = load_stage("calendar")

    key = config.date_key

    logger.info(f"Reading time log: {config.time_log}")
    times = load.load_time_log(config.time_log, config)
    logger.info(f"Reading import log: {config.import_log}")
    imports = load.load_import_log(config.import_log, config)

    imports = dedup.deduplicate_by_max(imports, key=key, value_col="total")
    merged = merge.merge_logs(imports, times, key=key)
    return calendar.add_calendar_features(merged, key=key)


def run_pipeline(config: PipelineConfig) -> pd.DataFrame:
    """
    Run the full pipeline and write the merged table to ``config.output``.

    Args:
        config: Run configuration

    Returns:
        The exported table (typed, before serialization)

    Raises:
        LoadError: On a missing or malformed input log
        DuplicateKeyError: If a repeated date reaches the merge
        ExportError: If the output cannot be written
    """
    export = load_stage("export")

    merged = build_merged_table(config)
    export.export_table(merged, config.output, key=config.date_key)
    logger.info(f"Merged table preview:\n{export.preview(merged)}")

    return merged[export.output_columns(config.date_key)]
