"""
01_explore_volcanoes.py — Load the volcano catalogue, label types, map them.

Downloads volcano.csv, buckets primary_volcano_type into Stratovolcano /
Shield / Others and shows where each type sits on a world map. Run this first
to eyeball the class balance before fitting anything.

Usage:
    python -m pipeline.01_explore_volcanoes
"""

from __future__ import annotations

import sys
from pathlib import Path

import matplotlib.pyplot as plt

# Make the project root importable so volcano_types.* works from any directory.
_PROJECT_ROOT = Path(__file__).parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from volcano_types.config import load_config  # noqa: E402
from volcano_types.data.loader import load_volcano_csv  # noqa: E402
from volcano_types.features.labels import label_volcanoes  # noqa: E402
from volcano_types.logging_utils import get_logger  # noqa: E402
from volcano_types.plots import plot_volcano_map  # noqa: E402

logger = get_logger(__name__)

_cfg = load_config("analysis")

DATA_URL: str = _cfg["data"]["url"]
CATEGORICAL: list[str] = _cfg["features"]["categorical"]


def main() -> None:
    logger.info("Volcano type exploration")

    raw_df = load_volcano_csv(DATA_URL)
    logger.info(
        "%d distinct primary_volcano_type values in the raw data",
        raw_df["primary_volcano_type"].nunique(),
    )

    volcano_df = label_volcanoes(raw_df)
    for col in CATEGORICAL:
        top = volcano_df[col].value_counts().head(5)
        logger.info(
            "%s: %d levels, most common: %s",
            col,
            volcano_df[col].nunique(),
            ", ".join(f"{level} ({n})" for level, n in top.items()),
        )

    plot_volcano_map(volcano_df)
    plt.show()


if __name__ == "__main__":
    main()
