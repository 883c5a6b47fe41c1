"""
YAML settings for the volcano types analysis.

Everything tunable (dataset URL, which columns are predictors, the pooling
threshold, SMOTE neighbours, resample count, tree count, plot grid) lives in
configs/analysis.yaml. Pipeline scripts read it once at import time.

Usage:

    from volcano_types.config import load_config

    cfg = load_config("analysis")
    url = cfg["data"]["url"]
    trees = cfg["random_forest"]["n_estimators"]

Tests point configs_dir at a tmp_path to load a hand-written file instead.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

# configs/ sits next to the package, not in the caller's working directory.
_CONFIGS_DIR = Path(__file__).parent.parent / "configs"


def load_config(name: str = "analysis", configs_dir: Path | str | None = None) -> dict[str, Any]:
    """
    Read configs/<name>.yaml into a nested dictionary.

    Args:
        name: Config file name without the .yaml extension.
        configs_dir: Directory to read from. Defaults to the project's configs/.

    Returns:
        The parsed YAML mapping.

    Raises:
        FileNotFoundError: If <name>.yaml does not exist; the message lists
            the configs that do.
        ValueError: If the file parses to something other than a mapping
            (for example an empty file).
        yaml.YAMLError: If the file contains invalid YAML.
    """
    configs_dir = Path(configs_dir) if configs_dir is not None else _CONFIGS_DIR
    path = configs_dir / f"{name}.yaml"
    if not path.exists():
        available = sorted(p.stem for p in configs_dir.glob("*.yaml"))
        raise FileNotFoundError(
            f"No volcano analysis config named {name!r} at {path}. "
            f"Available configs: {available}"
        )
    with path.open(encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    if not isinstance(cfg, dict):
        raise ValueError(f"{path} must contain a YAML mapping, got {type(cfg).__name__}")
    return cfg
