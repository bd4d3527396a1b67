#!/usr/bin/env python3
"""
00_run_pipeline.py - Merge the nightly import logs into one table.

Loads the time log and the import statistics log, resolves repeated dates,
joins them on the date, adds calendar columns and writes a tab-separated
table. With --rank, also ranks the variables that explain each process
duration.

Usage:
    python scripts/00_run_pipeline.py \\
        --time-log raw_logs/time.log \\
        --import-log raw_logs/import_stats.log \\
        --output data/merged_import_log.tsv

    python scripts/00_run_pipeline.py --rank --model-dir models/duration_rf
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.common.constants import setup_logging, get_logger
from src.catalog_import.common.config import PipelineConfig, add_config_arguments
from src.catalog_import.common.constants import (
    DEFAULT_CV_REPEATS,
    DEFAULT_CV_SPLITS,
    DEFAULT_MODEL_DIR,
    DEFAULT_N_ESTIMATORS,
    DURATION_COLUMNS,
)
from src.catalog_import.common.errors import PipelineError
from src.catalog_import.runner import load_stage, run_pipeline

logger = get_logger("run_pipeline")


def main() -> None:
    ap = argparse.ArgumentParser(
        description="Merge the catalog import time log and import statistics log."
    )
    add_config_arguments(ap)

    # Optional variable importance step
    ap.add_argument("--rank", action="store_true",
                    help="Also rank the variables explaining each process duration")
    ap.add_argument("--model-dir", default=DEFAULT_MODEL_DIR,
                    help="Where to store ranking models and importance tables")
    ap.add_argument("--n-splits", type=int, default=DEFAULT_CV_SPLITS)
    ap.add_argument("--n-repeats", type=int, default=DEFAULT_CV_REPEATS)
    ap.add_argument("--n-estimators", type=int, default=DEFAULT_N_ESTIMATORS)
    ap.add_argument("--n-jobs", type=int, default=-1)
    ap.add_argument("--log-level", default="INFO",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = ap.parse_args()

    setup_logging(getattr(logging, args.log_level))
    config = PipelineConfig.from_args(args)

    try:
        merged = run_pipeline(config)
    except PipelineError as e:
        logger.error(f"❌ Pipeline failed: {e}")
        raise SystemExit(1) from e

    if args.rank:
        rank = load_stage("rank")
        for target in DURATION_COLUMNS:
            try:
                result = rank.rank_features(
                    merged,
                    target,
                    n_splits=args.n_splits,
                    n_repeats=args.n_repeats,
                    n_estimators=args.n_estimators,
                    n_jobs=args.n_jobs,
                )
            except ValueError as e:
                logger.warning(f"Skipping ranking for {target}: {e}")
                continue
            rank.log_ranking(result)
            rank.save_ranking(result, Path(args.model_dir))

    logger.info("✅ ALL DONE")
    logger.info(f"📌 Merged table: {config.output}")
    if args.rank:
        logger.info(f"📌 Rankings:     {args.model_dir}")


if __name__ == "__main__":
    main()
