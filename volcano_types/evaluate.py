"""
Evaluation of resampled predictions.

All functions here are pure: they take the DataFrames produced by
fit_resamples() (or the labeled dataset) and return new DataFrames / Series,
leaving plotting to volcano_types.plots.

  confusion_matrix       : predicted × truth counts pooled over all resamples
  precision_by_resample  : macro precision for each resample id
  variable_importance    : permutation importance on the juiced training data
  attach_coordinates     : join predictions back to latitude / longitude
  bin_accuracy           : mean correctness per lon/lat grid cell
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd
from imblearn.pipeline import Pipeline as ImbPipeline
from sklearn.base import clone
from sklearn.ensemble import RandomForestClassifier
from sklearn.inspection import permutation_importance
from sklearn.metrics import precision_score

from volcano_types.features.labels import VOLCANO_TYPES
from volcano_types.modeling.recipe import juice

logger = logging.getLogger(__name__)


def confusion_matrix(
    predictions: pd.DataFrame,
    truth: str = "volcano_type",
    estimate: str = ".pred_class",
    labels: list[str] | None = None,
) -> pd.DataFrame:
    """
    Count table of predicted (rows) against true (columns) classes.

    Rows and columns always carry every label, zeros included, so the table
    is square even when a class was never predicted.
    """
    labels = list(labels or VOLCANO_TYPES)
    table = pd.crosstab(
        pd.Categorical(predictions[estimate].astype(str), categories=labels),
        pd.Categorical(predictions[truth].astype(str), categories=labels),
        rownames=["Prediction"],
        colnames=["Truth"],
        dropna=False,
    )
    return table.reindex(index=labels, columns=labels, fill_value=0)


def precision_by_resample(
    predictions: pd.DataFrame,
    truth: str = "volcano_type",
    estimate: str = ".pred_class",
) -> pd.DataFrame:
    """Macro-averaged precision of the out-of-bag predictions for each resample."""
    rows = []
    for resample_id, group in predictions.groupby("id", sort=True):
        rows.append({
            "id": resample_id,
            ".metric": "precision",
            ".estimate": precision_score(
                group[truth].astype(str),
                group[estimate].astype(str),
                average="macro",
                zero_division=0,
            ),
        })
    return pd.DataFrame(rows, columns=["id", ".metric", ".estimate"])


def variable_importance(
    recipe: ImbPipeline,
    model: RandomForestClassifier,
    X: pd.DataFrame,
    y: pd.Series,
    n_repeats: int = 10,
    random_state: int | None = None,
) -> pd.Series:
    """
    Permutation importance of each processed predictor.

    The recipe is prepped on the full dataset and the forest is fitted on the
    juiced (encoded, scaled, oversampled) output. Importance is the mean drop
    in accuracy when a column is shuffled, measured on that same juiced data.

    Returns:
        Series indexed by processed column name, sorted descending.
    """
    X_res, y_res = juice(recipe, X, y.astype(str))
    fitted = clone(model).fit(X_res, y_res)
    result = permutation_importance(
        fitted, X_res, y_res, n_repeats=n_repeats, random_state=random_state
    )
    importance = pd.Series(result.importances_mean, index=X_res.columns, name="importance")
    importance = importance.sort_values(ascending=False)
    logger.info(
        "Top predictors: %s",
        ", ".join(f"{name}={value:.3f}" for name, value in importance.head(5).items()),
    )
    return importance


def attach_coordinates(predictions: pd.DataFrame, labeled: pd.DataFrame) -> pd.DataFrame:
    """Add latitude and longitude to each prediction via its .row position."""
    coords = labeled[["latitude", "longitude"]].reset_index(drop=True)
    return predictions.merge(coords, left_on=".row", right_index=True, how="left")


def bin_accuracy(located: pd.DataFrame, bins: int = 50) -> pd.DataFrame:
    """
    Mean prediction correctness on a regular lon/lat grid.

    The world is split into `bins` × `bins` equal cells (longitude -180..180,
    latitude -90..90). Only cells containing at least one prediction appear
    in the output.

    Returns:
        DataFrame with lon_bin and lat_bin (cell centres in degrees),
        accuracy (share of correct predictions) and n (prediction count).
    """
    if bins < 1:
        raise ValueError(f"bins must be at least 1, got {bins}")

    lon_edges = np.linspace(-180.0, 180.0, bins + 1)
    lat_edges = np.linspace(-90.0, 90.0, bins + 1)
    lon_centres = (lon_edges[:-1] + lon_edges[1:]) / 2
    lat_centres = (lat_edges[:-1] + lat_edges[1:]) / 2

    lon_idx = np.clip(np.digitize(located["longitude"], lon_edges) - 1, 0, bins - 1)
    lat_idx = np.clip(np.digitize(located["latitude"], lat_edges) - 1, 0, bins - 1)

    grid = pd.DataFrame({
        "lon_bin": lon_centres[lon_idx],
        "lat_bin": lat_centres[lat_idx],
        "correct": located["correct"].astype(float).to_numpy(),
    })
    out = (
        grid.groupby(["lon_bin", "lat_bin"])["correct"]
        .agg(accuracy="mean", n="count")
        .reset_index()
    )
    return out
