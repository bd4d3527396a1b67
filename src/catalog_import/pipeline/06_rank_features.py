#!/usr/bin/env python3
"""
06_rank_features.py - Rank the variables that explain import process duration.

Fits a random-forest regression per process duration on the merged table,
scores it with repeated 10-fold cross-validation and ranks the input
variables by permutation importance (mean increase in MSE when a variable is
shuffled). Folds and trees are spread over all cores by joblib.

Usage:
    python src/catalog_import/pipeline/06_rank_features.py \\
        --input data/merged_import_log.tsv \\
        --model-dir models/duration_rf \\
        --n-splits 10 \\
        --n-repeats 3
"""

import argparse
import importlib
import json
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import joblib
import numpy as np
import pandas as pd

from sklearn.compose import ColumnTransformer
from sklearn.ensemble import RandomForestRegressor
from sklearn.impute import SimpleImputer
from sklearn.inspection import permutation_importance
from sklearn.model_selection import RepeatedKFold, cross_validate
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import OneHotEncoder

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from src.common.constants import DEFAULT_RANDOM_STATE, setup_logging, get_logger
from src.catalog_import.common.constants import (
    COUNT_COLUMNS,
    DATE_KEY,
    DEFAULT_CV_REPEATS,
    DEFAULT_CV_SPLITS,
    DEFAULT_MODEL_DIR,
    DEFAULT_N_ESTIMATORS,
    DEFAULT_OUTPUT,
    DURATION_COLUMNS,
)
from src.catalog_import.common.durations import to_seconds

logger = get_logger(__name__)

# Stage module names start with a digit
calendar = importlib.import_module("src.catalog_import.pipeline.04_add_calendar")

NUMERIC_FEATURES: List[str] = [*COUNT_COLUMNS, "weekday", "month"]
CATEGORICAL_FEATURES: List[str] = ["year"]
FEATURE_COLUMNS: List[str] = NUMERIC_FEATURES + CATEGORICAL_FEATURES


@dataclass
class RankingResult:
    """Outcome of rank_features for one target."""

    target: str
    model: Pipeline
    importance: pd.DataFrame
    cv_metrics: Dict[str, float]
    n_rows: int


def build_feature_frame(df: pd.DataFrame, target: str) -> Tuple[pd.DataFrame, pd.Series]:
    """
    Numeric projection of the merged table for one duration target.

    Counts become floats, weekday and month become their 1-based ordinals,
    year becomes a string label and the target becomes seconds. Rows
    without a target duration are dropped.

    Args:
        df: Merged table with calendar features
        target: One of the duration columns

    Returns:
        (X, y) with X columns in FEATURE_COLUMNS order
    """
    if target not in DURATION_COLUMNS:
        raise ValueError(f"Unknown target '{target}'. Expected one of {DURATION_COLUMNS}")
    missing = [c for c in FEATURE_COLUMNS + [target] if c not in df.columns]
    if missing:
        raise ValueError(f"Missing columns: {missing}. Run the merge pipeline first.")

    X = pd.DataFrame(index=df.index)
    for c in COUNT_COLUMNS:
        X[c] = pd.to_numeric(df[c]).astype(float)
    X["weekday"] = calendar.weekday_ordinal(df["weekday"]).astype(float)
    X["month"] = calendar.month_ordinal(df["month"]).astype(float)
    X["year"] = df["year"].astype("Int64").astype(str).replace("<NA>", np.nan)

    y = to_seconds(df[target])

    keep = y.notna()
    dropped = int((~keep).sum())
    if dropped:
        logger.info(f"{target}: dropped {dropped} row(s) without a duration")

    return X.loc[keep].reset_index(drop=True), y.loc[keep].reset_index(drop=True)


def build_model(
    n_estimators: int = DEFAULT_N_ESTIMATORS,
    random_state: int = DEFAULT_RANDOM_STATE,
    n_jobs: Optional[int] = -1,
) -> Pipeline:
    """
    Imputation + one-hot encoding + random forest regression pipeline.

    Args:
        n_estimators: Trees in the forest
        random_state: Seed for the forest
        n_jobs: Cores used to grow trees (-1: all)

    Returns:
        Unfitted sklearn Pipeline
    """
    num_pipe = Pipeline([
        ("imputer", SimpleImputer(strategy="median")),
    ])
    cat_pipe = Pipeline([
        ("imputer", SimpleImputer(strategy="most_frequent")),
        ("onehot", OneHotEncoder(handle_unknown="ignore")),
    ])
    pre = ColumnTransformer(
        transformers=[
            ("num", num_pipe, NUMERIC_FEATURES),
            ("cat", cat_pipe, CATEGORICAL_FEATURES),
        ],
        remainder="drop",
    )
    rf = RandomForestRegressor(
        n_estimators=n_estimators,
        random_state=random_state,
        n_jobs=n_jobs,
    )
    return Pipeline([("features", pre), ("rf", rf)])


def rank_features(
    df: pd.DataFrame,
    target: str,
    n_splits: int = DEFAULT_CV_SPLITS,
    n_repeats: int = DEFAULT_CV_REPEATS,
    n_estimators: int = DEFAULT_N_ESTIMATORS,
    random_state: int = DEFAULT_RANDOM_STATE,
    n_jobs: Optional[int] = -1,
    importance_repeats: int = 10,
) -> RankingResult:
    """
    Cross-validate a random forest for ``target`` and rank its inputs.

    Args:
        df: Merged table with calendar features
        target: Duration column to explain
        n_splits: Folds per cross-validation repeat
        n_repeats: Cross-validation repeats
        n_estimators: Trees in the forest
        random_state: Seed for folds, forest and permutations
        n_jobs: Cores for folds and permutations (-1: all)
        importance_repeats: Shuffles per variable for permutation importance

    Returns:
        RankingResult with the model refit on all rows, the importance table
        (sorted, most important first) and mean/std CV scores

    Raises:
        ValueError: If there are fewer rows with a target than folds
    """
    X, y = build_feature_frame(df, target)
    if len(X) < n_splits:
        raise ValueError(
            f"Not enough rows for {target}: {len(X)} with a duration, need at least {n_splits}."
        )

    logger.info(
        f"{target}: {n_splits}-fold CV x {n_repeats} on {len(X)} rows "
        f"({n_estimators} trees, n_jobs={n_jobs})"
    )
    cv = RepeatedKFold(n_splits=n_splits, n_repeats=n_repeats, random_state=random_state)
    scores = cross_validate(
        build_model(n_estimators, random_state, n_jobs=1),
        X,
        y,
        cv=cv,
        scoring=("r2", "neg_root_mean_squared_error"),
        n_jobs=n_jobs,
    )
    rmse = -scores["test_neg_root_mean_squared_error"]
    cv_metrics = {
        "r2_mean": float(np.mean(scores["test_r2"])),
        "r2_std": float(np.std(scores["test_r2"])),
        "rmse_mean_seconds": float(np.mean(rmse)),
        "rmse_std_seconds": float(np.std(rmse)),
        "folds": int(len(rmse)),
    }

    model = build_model(n_estimators, random_state, n_jobs=n_jobs)
    model.fit(X, y)

    logger.info(f"{target}: computing permutation importance...")
    perm = permutation_importance(
        model,
        X,
        y,
        scoring="neg_mean_squared_error",
        n_repeats=importance_repeats,
        random_state=random_state,
        n_jobs=n_jobs,
    )
    importance = pd.DataFrame({
        "feature": X.columns.tolist(),
        "inc_mse": perm.importances_mean,
        "inc_mse_std": perm.importances_std,
    })
    total = importance["inc_mse"].clip(lower=0).sum()
    importance["inc_mse_pct"] = (
        importance["inc_mse"].clip(lower=0) / total * 100.0 if total > 0 else 0.0
    )
    importance = importance.sort_values("inc_mse", ascending=False).reset_index(drop=True)

    return RankingResult(
        target=target,
        model=model,
        importance=importance,
        cv_metrics=cv_metrics,
        n_rows=int(len(X)),
    )


def save_ranking(result: RankingResult, model_dir: Path) -> Path:
    """
    Save model, importance table and metrics for one target.

    Args:
        result: Output of rank_features
        model_dir: Base directory; artifacts go to ``model_dir/<target>``

    Returns:
        Directory the artifacts were written to
    """
    out_dir = Path(model_dir) / result.target
    out_dir.mkdir(parents=True, exist_ok=True)

    joblib.dump(result.model, out_dir / "model.joblib")
    result.importance.to_csv(out_dir / "importance.csv", index=False)

    meta = {
        "task": "duration_feature_ranking",
        "target": result.target,
        "features": FEATURE_COLUMNS,
        "rows": result.n_rows,
        "cv": result.cv_metrics,
        "created_at": datetime.now().isoformat(),
    }
    (out_dir / "metrics.json").write_text(json.dumps(meta, indent=2))

    logger.info(f"💾 Saved ranking for {result.target} to: {out_dir}")
    return out_dir


def log_ranking(result: RankingResult, top_k: int = 10) -> None:
    """Log CV scores and the top-k variables of one ranking."""
    m = result.cv_metrics
    logger.info(
        f"✅ {result.target}: R² {m['r2_mean']:.3f} ± {m['r2_std']:.3f}, "
        f"RMSE {m['rmse_mean_seconds']:.0f}s ± {m['rmse_std_seconds']:.0f}s over {m['folds']} folds"
    )
    for _, row in result.importance.head(top_k).iterrows():
        logger.info(f"  {row['feature']:20s} {row['inc_mse_pct']:6.2f}%  (ΔMSE {row['inc_mse']:.1f})")


def main() -> None:
    """Main entry point for the feature ranking script."""
    setup_logging()

    export = importlib.import_module("src.catalog_import.pipeline.05_export_table")

    ap = argparse.ArgumentParser(
        description="Rank the variables that explain import process duration."
    )
    ap.add_argument("--input", default=DEFAULT_OUTPUT, help="Merged table from the pipeline")
    ap.add_argument("--model-dir", default=DEFAULT_MODEL_DIR, help="Directory for model artifacts")
    ap.add_argument("--date-key", default=DATE_KEY)
    ap.add_argument(
        "--target",
        action="append",
        choices=DURATION_COLUMNS,
        help="Duration to explain (repeatable, default: both)"
    )
    ap.add_argument("--n-splits", type=int, default=DEFAULT_CV_SPLITS)
    ap.add_argument("--n-repeats", type=int, default=DEFAULT_CV_REPEATS)
    ap.add_argument("--n-estimators", type=int, default=DEFAULT_N_ESTIMATORS)
    ap.add_argument("--n-jobs", type=int, default=-1)
    ap.add_argument("--random-state", type=int, default=DEFAULT_RANDOM_STATE)
    args = ap.parse_args()

    in_path = Path(args.input)
    if not in_path.exists():
        logger.error(f"Input file not found: {in_path}")
        raise FileNotFoundError(f"Input file not found: {in_path}")

    logger.info(f"Reading input: {in_path}")
    df = export.read_exported_table(in_path, key=args.date_key)

    for target in args.target or DURATION_COLUMNS:
        result = rank_features(
            df,
            target,
            n_splits=args.n_splits,
            n_repeats=args.n_repeats,
            n_estimators=args.n_estimators,
            random_state=args.random_state,
            n_jobs=args.n_jobs,
        )
        log_ranking(result)
        save_ranking(result, Path(args.model_dir))


if __name__ == "__main__":
    main()
