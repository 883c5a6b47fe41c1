"""
Loader for the TidyTuesday volcano catalogue (2020-05-12 release).

The dataset is a single CSV with one row per Holocene volcano from the
Smithsonian Global Volcanism Program. Only a handful of its columns feed the
classifier; the rest (population counts, minor rocks, eruption history) are
left in the returned frame and dropped later by the labeler.

Usage:

    from volcano_types.data.loader import load_volcano_csv

    raw_df = load_volcano_csv(cfg["data"]["url"])
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)

# Columns the rest of the pipeline reads from the raw file
RAW_COLUMNS = [
    "volcano_number",
    "primary_volcano_type",
    "latitude",
    "longitude",
    "elevation",
    "tectonic_settings",
    "major_rock_1",
]


def load_volcano_csv(source: Path | str) -> pd.DataFrame:
    """
    Read the volcano CSV from a URL or a local path.

    pandas handles the HTTP GET for URLs. There is no retry: a network or
    parse failure propagates straight to the caller.

    Args:
        source: http(s) URL or filesystem path of volcano.csv.

    Returns:
        The raw DataFrame, one row per volcano.

    Raises:
        FileNotFoundError: If a local path does not exist.
        KeyError: If any column in RAW_COLUMNS is missing from the file.
    """
    source_str = str(source)
    if not source_str.startswith(("http://", "https://")):
        path = Path(source_str)
        if not path.exists():
            raise FileNotFoundError(f"Volcano CSV not found: {path}")

    df = pd.read_csv(source_str)

    missing = [c for c in RAW_COLUMNS if c not in df.columns]
    if missing:
        raise KeyError(f"Volcano CSV is missing required columns: {missing}")

    logger.info("Loaded %d volcanoes (%d columns) from %s", len(df), df.shape[1], source_str)
    return df
