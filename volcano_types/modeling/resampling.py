"""
Bootstrap resampling for model validation.

The labeled dataset has fewer than a thousand rows, and the Shield class is
small, so there is no fixed train/test split. Each model is instead fitted on
a bootstrap sample (n rows drawn with replacement) and scored on the rows that
sample never drew (the out-of-bag rows, roughly a third of the data).

Usage:

    from volcano_types.modeling.resampling import bootstraps

    resamples = bootstraps(volcano_df, times=25, random_state=123)
    for split in resamples:
        train = split.analysis(volcano_df)
        holdout = split.assessment(volcano_df)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

# Guard against an endless loop when every draw covers the whole dataset
# (a one-row frame can never produce an out-of-bag row).
_MAX_DRAWS_PER_RESAMPLE = 100


@dataclass(frozen=True)
class Bootstrap:
    """One bootstrap split, expressed as positional row indices."""

    id: str
    train_idx: np.ndarray
    holdout_idx: np.ndarray

    def analysis(self, df: pd.DataFrame) -> pd.DataFrame:
        """In-bag rows (with duplicates), used for fitting."""
        return df.iloc[self.train_idx]

    def assessment(self, df: pd.DataFrame) -> pd.DataFrame:
        """Out-of-bag rows, used for scoring."""
        return df.iloc[self.holdout_idx]


def bootstraps(
    df: pd.DataFrame,
    times: int = 25,
    random_state: int | None = None,
) -> list[Bootstrap]:
    """
    Draw `times` bootstrap splits of `df`.

    Args:
        df: The full labeled dataset.
        times: Number of resamples.
        random_state: Seed for reproducible draws.

    Returns:
        A list of Bootstrap splits with ids Bootstrap01, Bootstrap02, ...
        Every train_idx has len(df) entries; every holdout_idx is non-empty,
        sorted and disjoint from train_idx.

    Raises:
        ValueError: If df is empty, times < 1, or no draw leaves an
            out-of-bag row (df has a single row).
    """
    n = len(df)
    if n == 0:
        raise ValueError("Cannot bootstrap an empty DataFrame")
    if times < 1:
        raise ValueError(f"times must be at least 1, got {times}")

    rng = np.random.default_rng(random_state)
    width = max(2, len(str(times)))
    all_rows = np.arange(n)
    resamples: list[Bootstrap] = []

    for i in range(1, times + 1):
        for _ in range(_MAX_DRAWS_PER_RESAMPLE):
            train_idx = rng.integers(0, n, size=n)
            holdout_idx = np.setdiff1d(all_rows, train_idx)
            if holdout_idx.size:
                break
        else:
            raise ValueError(
                f"Could not draw a bootstrap with out-of-bag rows from {n} row(s)"
            )
        resamples.append(Bootstrap(f"Bootstrap{i:0{width}d}", train_idx, holdout_idx))

    logger.info(
        "Drew %d bootstrap resamples of %d rows (mean out-of-bag size %.1f)",
        times,
        n,
        np.mean([r.holdout_idx.size for r in resamples]),
    )
    return resamples
