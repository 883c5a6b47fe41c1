"""
Shared pytest fixtures for the volcano types test suite.

All fixtures are synthetic. No network access or real dataset files are
required. Class sizes are large enough that SMOTE's five nearest neighbours
exist inside every bootstrap sample.
"""

from __future__ import annotations

from pathlib import Path

import matplotlib
import numpy as np
import pandas as pd
import pytest

matplotlib.use("Agg")

# ---------------------------------------------------------------------------
# Raw catalogue rows (loader output shape)
# ---------------------------------------------------------------------------

@pytest.fixture()
def raw_volcano_df() -> pd.DataFrame:
    """
    Six raw volcanoes covering each labelling rule, plus one row with a
    missing elevation and an unused extra column the labeler should drop.
    """
    return pd.DataFrame({
        "volcano_number": [1, 2, 3, 4, 5, 6],
        "volcano_name": ["A", "B", "C", "D", "E", "F"],
        "primary_volcano_type": [
            "Stratovolcano",
            "Shield",
            "Caldera",
            "Complex stratovolcano",
            "Pyroclastic shield",
            "Stratovolcano",
        ],
        "latitude": [10.0, 20.0, -5.0, 35.5, 0.0, 1.0],
        "longitude": [100.0, -150.0, 30.0, 139.0, -80.0, 2.0],
        "elevation": [2000.0, 1200.0, 800.0, 3776.0, 500.0, np.nan],
        "tectonic_settings": [
            "Subduction zone / Continental crust (>25 km)",
            "Intraplate / Oceanic crust (< 15 km)",
            "Rift zone / Continental crust (>25 km)",
            "Subduction zone / Continental crust (>25 km)",
            "Intraplate / Oceanic crust (< 15 km)",
            "Rift zone / Continental crust (>25 km)",
        ],
        "major_rock_1": [
            "Andesite / Basaltic Andesite",
            "Basalt / Picro-Basalt",
            "Rhyolite",
            "Andesite / Basaltic Andesite",
            "Basalt / Picro-Basalt",
            "Dacite",
        ],
    })


@pytest.fixture()
def raw_csv_file(tmp_path: Path, raw_volcano_df: pd.DataFrame) -> Path:
    """Write raw_volcano_df to a temp CSV and return the Path."""
    p = tmp_path / "volcano.csv"
    raw_volcano_df.to_csv(p, index=False)
    return p


# ---------------------------------------------------------------------------
# Labeled modelling frame (labeler output shape)
# ---------------------------------------------------------------------------

_SETTINGS = {
    "Stratovolcano": "Subduction zone / Continental crust (>25 km)",
    "Shield": "Intraplate / Oceanic crust (< 15 km)",
    "Others": "Rift zone / Continental crust (>25 km)",
}
_ROCKS = {
    "Stratovolcano": "Andesite / Basaltic Andesite",
    "Shield": "Basalt / Picro-Basalt",
    "Others": "Trachyte / Trachydacite",
}


@pytest.fixture()
def labeled_df() -> pd.DataFrame:
    """
    110 volcanoes, imbalanced 60 / 20 / 30 across Stratovolcano / Shield / Others.

    Each class leans towards its own tectonic setting, rock type, latitude
    band and elevation so a forest can learn something. Two rows carry rare
    levels ("Unknown" setting, "Foidite" rock) at under 5% frequency, which
    the recipe must pool into "other".
    """
    rng = np.random.default_rng(7)
    sizes = {"Stratovolcano": 60, "Shield": 20, "Others": 30}
    centres = {"Stratovolcano": (35.0, 140.0, 2500.0), "Shield": (20.0, -155.0, 1000.0),
               "Others": (-10.0, 30.0, 1500.0)}

    records = []
    for volcano_type, n in sizes.items():
        lat, lon, elev = centres[volcano_type]
        for _ in range(n):
            records.append({
                "volcano_type": volcano_type,
                "latitude": float(np.clip(lat + rng.normal(0, 8), -89, 89)),
                "longitude": float(np.clip(lon + rng.normal(0, 15), -179, 179)),
                "elevation": float(elev + rng.normal(0, 400)),
                "tectonic_settings": _SETTINGS[volcano_type],
                "major_rock_1": _ROCKS[volcano_type],
            })
    df = pd.DataFrame(records)
    df.loc[5, "tectonic_settings"] = "Unknown"
    df.loc[70, "major_rock_1"] = "Foidite"
    df.insert(1, "volcano_number", np.arange(100000, 100000 + len(df)))

    df["volcano_type"] = pd.Categorical(
        df["volcano_type"], categories=["Stratovolcano", "Shield", "Others"]
    )
    for col in ("tectonic_settings", "major_rock_1"):
        df[col] = df[col].astype("category")
    return df


@pytest.fixture()
def analysis_cfg() -> dict:
    """Small-scale copy of configs/analysis.yaml so model tests stay fast."""
    return {
        "labels": {"outcome": "volcano_type", "id": "volcano_number"},
        "features": {
            "categorical": ["tectonic_settings", "major_rock_1"],
            "numeric": ["latitude", "longitude", "elevation"],
        },
        "recipe": {
            "other_threshold": 0.05,
            "other_label": "other",
            "smote": {"k_neighbors": 5, "random_state": 0},
        },
        "resampling": {"times": 3, "random_state": 0},
        "random_forest": {"n_estimators": 25, "random_state": 0, "n_jobs": 1},
        "importance": {"n_repeats": 2, "random_state": 0},
        "plots": {"accuracy_gridsize": 10},
    }


# ---------------------------------------------------------------------------
# Out-of-bag predictions (fit_resamples output shape)
# ---------------------------------------------------------------------------

@pytest.fixture()
def tiny_predictions() -> pd.DataFrame:
    """
    Two resamples, four predictions each, with hand-checkable scores.

    Bootstrap1: all four correct.
    Bootstrap2: two correct; one Shield predicted as Stratovolcano and one
    Others predicted as Shield.
    """
    return pd.DataFrame({
        ".row": [0, 1, 2, 3, 0, 1, 2, 3],
        "id": ["Bootstrap1"] * 4 + ["Bootstrap2"] * 4,
        "volcano_type": ["Stratovolcano", "Shield", "Others", "Stratovolcano",
                         "Stratovolcano", "Shield", "Others", "Stratovolcano"],
        ".pred_class": ["Stratovolcano", "Shield", "Others", "Stratovolcano",
                        "Stratovolcano", "Stratovolcano", "Shield", "Stratovolcano"],
        "correct": [True, True, True, True, True, False, False, True],
    })
