"""
Preprocessing recipe for the volcano type classifier.

The recipe is an ordered chain of scikit-learn / imbalanced-learn steps. It is
always refitted from scratch on the in-bag rows of each bootstrap resample, so
pooling thresholds, dummy levels, variances and scaling statistics never see
the out-of-bag rows.

  1. collapse  : pool rare tectonic_settings / major_rock_1 levels into "other"
  2. dummy     : one-hot encode those two columns (first level dropped)
  3. zv        : drop zero-variance predictors
  4. normalize : center and scale every predictor
  5. smote     : oversample minority volcano types up to the majority count

build_preprocessor() returns steps 1-4 as a scikit-learn Pipeline with pandas
output, so processed column names survive for variable importance.
build_recipe() lays the same steps out flat in an imbalanced-learn Pipeline
followed by SMOTE (imblearn refuses a nested Pipeline as an intermediate
step). SMOTE only runs at fit time: imblearn skips samplers when predicting.

Usage:

    from volcano_types.modeling.recipe import build_recipe, juice

    recipe = build_recipe(cfg)
    X_res, y_res = juice(recipe, X, y)
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
import pandas as pd
from imblearn.over_sampling import SMOTE
from imblearn.pipeline import Pipeline as ImbPipeline
from sklearn.base import BaseEstimator, OneToOneFeatureMixin, TransformerMixin, clone
from sklearn.compose import ColumnTransformer
from sklearn.feature_selection import VarianceThreshold
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import OneHotEncoder, StandardScaler
from sklearn.utils.validation import check_is_fitted

logger = logging.getLogger(__name__)


class CollapseRareLevels(OneToOneFeatureMixin, TransformerMixin, BaseEstimator):
    """
    Pool infrequent categorical levels into a single catch-all level.

    A level is kept when its share of the training rows is at least
    `threshold`. Everything else, including levels that first appear at
    transform time, becomes `other_label`. Output columns are plain object
    dtype so the pooled label can sit next to the original levels.
    """

    def __init__(self, threshold: float = 0.05, other_label: str = "other"):
        self.threshold = threshold
        self.other_label = other_label

    def fit(self, X: pd.DataFrame, y=None):
        X = pd.DataFrame(X)
        self.feature_names_in_ = np.asarray(X.columns, dtype=object)
        self.n_features_in_ = X.shape[1]
        self.levels_: dict[Any, set] = {}
        for col in X.columns:
            shares = X[col].astype(object).value_counts(normalize=True)
            self.levels_[col] = set(shares.index[shares >= self.threshold])
            n_pooled = len(shares) - len(self.levels_[col])
            if n_pooled:
                logger.debug("%s: pooling %d rare level(s) into %r", col, n_pooled, self.other_label)
        return self

    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        check_is_fitted(self, "levels_")
        X = pd.DataFrame(X).copy()
        for col in X.columns:
            values = X[col].astype(object)
            X[col] = values.where(values.isin(self.levels_[col]), self.other_label)
        return X


def predictor_columns(cfg: dict[str, Any]) -> list[str]:
    """Predictor column names from the config (outcome and id are excluded)."""
    features = cfg["features"]
    return list(features["categorical"]) + list(features["numeric"])


def build_preprocessor(
    categorical: list[str],
    numeric: list[str],
    other_threshold: float = 0.05,
    other_label: str = "other",
) -> Pipeline:
    """
    Steps 1-4 of the recipe as a scikit-learn Pipeline returning DataFrames.

    Columns not named in `categorical` or `numeric` (the id, the outcome)
    are dropped, which keeps the id out of the predictors.
    """
    categorical_pipe = Pipeline(
        steps=[
            ("collapse", CollapseRareLevels(threshold=other_threshold, other_label=other_label)),
            ("dummy", OneHotEncoder(drop="first", handle_unknown="ignore", sparse_output=False)),
        ]
    )
    encoder = ColumnTransformer(
        transformers=[
            ("cat", categorical_pipe, list(categorical)),
            ("num", "passthrough", list(numeric)),
        ],
        remainder="drop",
        verbose_feature_names_out=False,
    )
    preprocessor = Pipeline(
        steps=[
            ("encode", encoder),
            ("zv", VarianceThreshold(threshold=0.0)),
            ("normalize", StandardScaler()),
        ]
    )
    return preprocessor.set_output(transform="pandas")


def build_recipe(cfg: dict[str, Any]) -> ImbPipeline:
    """Full five-step recipe (preprocessing + SMOTE) built from the analysis config."""
    recipe_cfg = cfg["recipe"]
    smote_cfg = recipe_cfg["smote"]
    preprocessor = build_preprocessor(
        categorical=cfg["features"]["categorical"],
        numeric=cfg["features"]["numeric"],
        other_threshold=recipe_cfg["other_threshold"],
        other_label=recipe_cfg.get("other_label", "other"),
    )
    smote = SMOTE(
        k_neighbors=smote_cfg["k_neighbors"],
        random_state=smote_cfg.get("random_state"),
    )
    return ImbPipeline(steps=list(preprocessor.steps) + [("smote", smote)])


def juice(recipe: ImbPipeline, X: pd.DataFrame, y: pd.Series) -> tuple[pd.DataFrame, pd.Series]:
    """
    Fit a copy of the recipe on (X, y) and return the processed training data.

    This is what the model actually sees at fit time: encoded, filtered and
    scaled predictors with SMOTE rows appended, so class counts are balanced.
    The recipe passed in is left unfitted.
    """
    fitted = clone(recipe)
    Xt, yt = X, y
    for name, step in fitted.steps:
        if hasattr(step, "fit_resample"):
            Xt, yt = step.fit_resample(Xt, yt)
        else:
            Xt = step.fit_transform(Xt, yt)
        logger.debug("juice: after %s -> %d rows x %d columns", name, Xt.shape[0], Xt.shape[1])
    return Xt, pd.Series(np.asarray(yt), name=getattr(y, "name", None))
