"""
Fit the workflow across bootstrap resamples and collect out-of-bag results.

For every resample the workflow is cloned, fitted on the in-bag rows and used
to predict the out-of-bag rows. Each resample contributes:

  - one prediction row per out-of-bag volcano (.row, id, truth, .pred_class, correct)
  - one accuracy and one macro-precision estimate

Usage:

    from volcano_types.modeling.workflow import collect_metrics, fit_resamples

    results = fit_resamples(workflow, volcano_df, resamples)
    summary = collect_metrics(results)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd
from imblearn.pipeline import Pipeline as ImbPipeline
from sklearn.base import clone
from sklearn.metrics import accuracy_score, precision_score

from volcano_types.modeling.resampling import Bootstrap

logger = logging.getLogger(__name__)

METRICS = ("accuracy", "precision")


@dataclass
class ResampleResults:
    predictions: pd.DataFrame
    metrics: pd.DataFrame


def fit_resamples(
    workflow: ImbPipeline,
    df: pd.DataFrame,
    resamples: list[Bootstrap],
    outcome: str = "volcano_type",
) -> ResampleResults:
    """
    Fit `workflow` once per resample and score it on the out-of-bag rows.

    Args:
        workflow: Unfitted recipe + model pipeline (see build_workflow).
        df: The labeled dataset the resamples index into.
        resamples: Bootstrap splits from bootstraps().
        outcome: Name of the label column.

    Returns:
        ResampleResults with
            predictions: .row, id, <outcome>, .pred_class, correct
            metrics:     id, .metric, .estimate

    Raises:
        KeyError: If `outcome` is not a column of df.
        ValueError: If `resamples` is empty.
    """
    if outcome not in df.columns:
        raise KeyError(f"Outcome column {outcome!r} not in DataFrame")
    if not resamples:
        raise ValueError("No resamples to fit")

    X = df.drop(columns=[outcome])
    y = df[outcome].astype(str)

    pred_frames: list[pd.DataFrame] = []
    metric_rows: list[dict] = []

    for i, split in enumerate(resamples, start=1):
        fitted = clone(workflow).fit(X.iloc[split.train_idx], y.iloc[split.train_idx])

        y_true = y.iloc[split.holdout_idx].to_numpy()
        y_pred = fitted.predict(X.iloc[split.holdout_idx])

        acc = accuracy_score(y_true, y_pred)
        prec = precision_score(y_true, y_pred, average="macro", zero_division=0)
        metric_rows.append({"id": split.id, ".metric": "accuracy", ".estimate": acc})
        metric_rows.append({"id": split.id, ".metric": "precision", ".estimate": prec})

        pred_frames.append(
            pd.DataFrame(
                {
                    ".row": split.holdout_idx,
                    "id": split.id,
                    outcome: y_true,
                    ".pred_class": y_pred,
                    "correct": y_true == y_pred,
                }
            )
        )
        logger.info(
            "  [%s] %d/%d → accuracy=%.4f  precision=%.4f  (n_oob=%d)",
            split.id, i, len(resamples), acc, prec, split.holdout_idx.size,
        )

    predictions = pd.concat(pred_frames, ignore_index=True)
    categories = getattr(df[outcome].dtype, "categories", None)
    if categories is not None:
        for col in (outcome, ".pred_class"):
            predictions[col] = pd.Categorical(predictions[col], categories=list(categories))

    return ResampleResults(predictions=predictions, metrics=pd.DataFrame(metric_rows))


def collect_metrics(results: ResampleResults) -> pd.DataFrame:
    """Mean, count and standard error of each metric across resamples."""
    grouped = results.metrics.groupby(".metric", sort=False)[".estimate"]
    summary = grouped.agg(mean="mean", n="count", std="std").reset_index()
    summary["std_err"] = summary["std"].fillna(0.0) / np.sqrt(summary["n"])
    return summary[[".metric", "mean", "n", "std_err"]]
