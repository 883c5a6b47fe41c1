"""
Random forest classifier and the recipe + model workflow.

Usage:

    from volcano_types.modeling.model import build_model, build_workflow

    workflow = build_workflow(build_recipe(cfg), build_model(cfg))
"""

from __future__ import annotations

from typing import Any

from imblearn.pipeline import Pipeline as ImbPipeline
from sklearn.base import clone
from sklearn.ensemble import RandomForestClassifier


def build_model(cfg: dict[str, Any]) -> RandomForestClassifier:
    """
    Random forest classifier with the configured tree count.

    Split and node parameters stay at scikit-learn's defaults
    (max_features="sqrt", min_samples_leaf=1, fully grown trees).
    """
    rf_cfg = cfg["random_forest"]
    return RandomForestClassifier(
        n_estimators=rf_cfg["n_estimators"],
        random_state=rf_cfg.get("random_state"),
        n_jobs=rf_cfg.get("n_jobs"),
    )


def build_workflow(recipe: ImbPipeline, model: RandomForestClassifier) -> ImbPipeline:
    """
    Bind the recipe steps and the model into one estimator.

    Fitting the workflow preps the recipe and trains the forest on the
    oversampled output; predicting runs the fitted preprocessing only (no SMOTE)
    before the forest. The inputs are cloned, never mutated.
    """
    steps = [(name, clone(step)) for name, step in recipe.steps]
    return ImbPipeline(steps=steps + [("model", clone(model))])
