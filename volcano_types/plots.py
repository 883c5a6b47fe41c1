"""
Figures for the volcano type analysis.

Every function builds and returns a matplotlib Figure without showing or
saving it; the pipeline scripts call plt.show(). World maps use cartopy's
PlateCarree projection with Natural Earth land and coastlines (fetched and
cached by cartopy the first time a map is drawn).
"""

from __future__ import annotations

import cartopy.crs as ccrs
import cartopy.feature as cfeature
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.figure import Figure
from matplotlib.ticker import PercentFormatter
from sklearn.metrics import ConfusionMatrixDisplay

from volcano_types.features.labels import VOLCANO_TYPES

_TYPE_COLOURS = {
    "Stratovolcano": "#E4572E",
    "Shield": "#17BEBB",
    "Others": "#FFC914",
}


def _world_axes(figsize: tuple[float, float] = (12, 6)):
    fig = plt.figure(figsize=figsize)
    ax = fig.add_subplot(1, 1, 1, projection=ccrs.PlateCarree())
    ax.set_global()
    ax.add_feature(cfeature.LAND, facecolor="#E0E0E0", edgecolor="none", zorder=0)
    ax.coastlines(linewidth=0.3, color="#FFFFFF")
    return fig, ax


def plot_volcano_map(df: pd.DataFrame, label_col: str = "volcano_type") -> Figure:
    """Volcano locations on a world map, coloured by volcano type."""
    fig, ax = _world_axes()
    for volcano_type in VOLCANO_TYPES:
        subset = df[df[label_col].astype(str) == volcano_type]
        ax.scatter(
            subset["longitude"],
            subset["latitude"],
            s=6,
            alpha=0.8,
            color=_TYPE_COLOURS[volcano_type],
            label=f"{volcano_type} ({len(subset)})",
            transform=ccrs.PlateCarree(),
            zorder=2,
        )
    ax.legend(loc="lower left", markerscale=3, frameon=False)
    ax.set_title("Volcanoes by type")
    return fig


def plot_confusion_matrix(table: pd.DataFrame) -> Figure:
    """Heatmap of a Prediction × Truth table from evaluate.confusion_matrix."""
    fig, ax = plt.subplots(figsize=(6, 5))
    # ConfusionMatrixDisplay expects rows = truth, columns = prediction
    display = ConfusionMatrixDisplay(
        confusion_matrix=table.to_numpy().T,
        display_labels=list(table.index),
    )
    display.plot(ax=ax, cmap="Blues", colorbar=False, values_format="d")
    ax.set_title("Out-of-bag predictions, all resamples")
    fig.tight_layout()
    return fig


def plot_variable_importance(importance: pd.Series, top_n: int = 10) -> Figure:
    """Dot plot of the top_n permutation importances, largest at the top."""
    top = importance.head(top_n)[::-1]
    fig, ax = plt.subplots(figsize=(7, 0.4 * len(top) + 1.5))
    ax.scatter(top.to_numpy(), np.arange(len(top)), color="#333333")
    ax.set_yticks(np.arange(len(top)))
    ax.set_yticklabels(top.index)
    ax.set_xlabel("Permutation importance (mean accuracy drop)")
    ax.grid(axis="x", alpha=0.3)
    fig.tight_layout()
    return fig


def plot_accuracy_map(located: pd.DataFrame, gridsize: int = 50) -> Figure:
    """
    Hexbin map of the share of correct out-of-bag predictions.

    `located` is the output of evaluate.attach_coordinates. Each hexagon is
    coloured by the mean of `correct` over all predictions that fall in it,
    pooled across resamples.
    """
    fig, ax = _world_axes()
    hb = ax.hexbin(
        located["longitude"],
        located["latitude"],
        C=located["correct"].astype(float),
        reduce_C_function=np.mean,
        gridsize=gridsize,
        extent=(-180, 180, -90, 90),
        cmap="viridis",
        alpha=0.7,
        transform=ccrs.PlateCarree(),
        zorder=2,
    )
    cbar = fig.colorbar(hb, ax=ax, shrink=0.6, format=PercentFormatter(xmax=1.0))
    cbar.set_label("Percent classified correctly")
    ax.set_title("Where the random forest gets volcano types right")
    return fig
