"""
Outcome label creation for the volcano type classifier.

The raw `primary_volcano_type` field is free text with dozens of spellings
("Stratovolcano(es)", "Shield(s)", "Pyroclastic shield", "Caldera", ...).
The classifier only distinguishes three buckets:

  Stratovolcano : any type mentioning a stratovolcano
  Shield        : any type mentioning a shield, unless it is also a stratovolcano
  Others        : everything else

Rules are checked in that order and the first match wins, so a string such as
"Stratovolcano, Shield" is a Stratovolcano.

Usage:

    from volcano_types.features.labels import label_volcanoes

    volcano_df = label_volcanoes(raw_df)
    # Columns: volcano_type, volcano_number, latitude, longitude,
    #          elevation, tectonic_settings, major_rock_1
"""

from __future__ import annotations

import logging
import re

import pandas as pd

logger = logging.getLogger(__name__)

VOLCANO_TYPES = ["Stratovolcano", "Shield", "Others"]

# Only the leading letter is case-insensitive: "Complex stratovolcano" and
# "Pyroclastic shield" both match, "SHIELD" does not.
_TYPE_RULES: list[tuple[re.Pattern, str]] = [
    (re.compile(r"[Ss]tratovolcano"), "Stratovolcano"),
    (re.compile(r"[Ss]hield"), "Shield"),
]
_DEFAULT_TYPE = "Others"

_CATEGORICAL_COLS = ["tectonic_settings", "major_rock_1"]
_LABELED_COLS = [
    "volcano_type",
    "volcano_number",
    "latitude",
    "longitude",
    "elevation",
    "tectonic_settings",
    "major_rock_1",
]


def classify_volcano_type(text) -> str:
    """Map one `primary_volcano_type` string to its three-way bucket."""
    if not isinstance(text, str):
        return _DEFAULT_TYPE
    for pattern, label in _TYPE_RULES:
        if pattern.search(text):
            return label
    return _DEFAULT_TYPE


def label_volcanoes(df: pd.DataFrame) -> pd.DataFrame:
    """
    Reduce the raw catalogue to the labeled modelling frame.

    Args:
        df: Raw volcano DataFrame from the loader.

    Returns:
        A new DataFrame with the columns listed in the module docstring.
        volcano_type, tectonic_settings and major_rock_1 are pandas
        categoricals; volcano_type always carries all three VOLCANO_TYPES
        levels in a fixed order. Rows with a missing value in any kept
        column are dropped and the index is reset to 0..n-1, so the
        positional index doubles as the row id used by resampling.

    Raises:
        KeyError: If a required raw column is missing.
    """
    required = ["primary_volcano_type"] + _LABELED_COLS[1:]
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise KeyError(f"Cannot label volcanoes, missing columns: {missing}")

    out = df[required].copy()
    out.insert(0, "volcano_type", out.pop("primary_volcano_type").map(classify_volcano_type))
    out = out[_LABELED_COLS]

    n_before = len(out)
    out = out.dropna().reset_index(drop=True)
    if len(out) < n_before:
        logger.warning("Dropped %d of %d volcanoes with missing values", n_before - len(out), n_before)

    out["volcano_type"] = pd.Categorical(out["volcano_type"], categories=VOLCANO_TYPES)
    for col in _CATEGORICAL_COLS:
        out[col] = out[col].astype("category")

    counts = out["volcano_type"].value_counts()
    logger.info(
        "Labeled %d volcanoes: %s",
        len(out),
        ", ".join(f"{t}={int(counts[t])}" for t in VOLCANO_TYPES),
    )
    return out
