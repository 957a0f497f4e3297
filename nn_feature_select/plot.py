"""
nn_feature_select.plot
======================
Visualization helpers for the greedy 1-NN feature search.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.patches as mpatches

from .metric import check_instances, nearest_neighbors
from .search import TraceEvent


__all__ = ["plot_search_trace", "plot_feature_space_2d"]

_PHASE_COLORS = {
    "forward":   "#4C72B0",
    "backward":  "#55A868",
    "class-1":   "#8172B2",
    "class-2":   "#CCB974",
    "any-class": "#64B5CD",
}


def plot_search_trace(
    trace: Sequence[TraceEvent],
    *,
    highlight: frozenset | None = None,
    title: str = "LOOCV accuracy of evaluated feature subsets",
    ax: Optional[plt.Axes] = None,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Accuracy of every evaluation, in the order the search made them.

    Parameters
    ----------
    trace : sequence of TraceEvent
        ``SearchResult.trace`` or ``NearestNeighborFeatureSelector.trace_``.
    highlight : frozenset of int, optional
        Mark evaluations of this subset in red (typically the result).
    title : str
        Plot title.
    ax : matplotlib Axes, optional
    save_path : str, optional

    Returns
    -------
    matplotlib.figure.Figure
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(max(8, len(trace) * 0.08), 4))
    else:
        fig = ax.get_figure()

    order = np.arange(len(trace))
    scores = np.array([event.accuracy for event in trace], dtype=float)
    phases = [event.phase for event in trace]

    legend_handles = []
    for phase in dict.fromkeys(phases):
        mask = np.array([p == phase for p in phases])
        color = _PHASE_COLORS.get(phase, "#4C72B0")
        ax.plot(order[mask], scores[mask], marker="o", markersize=3,
                linewidth=0.8, color=color)
        legend_handles.append(mpatches.Patch(color=color, label=phase))

    if highlight is not None:
        hits = [k for k, event in enumerate(trace) if event.subset == highlight]
        if hits:
            ax.scatter(order[hits], scores[hits], c="#C44E52", s=60, zorder=4)
            legend_handles.append(
                mpatches.Patch(color="#C44E52",
                               label=f"Selected: {sorted(highlight)}")
            )

    ax.set_xlabel("Evaluation", fontsize=12)
    ax.set_ylabel("LOOCV accuracy", fontsize=12)
    ax.set_title(title, fontsize=13)
    ax.set_ylim(0, 1.05)
    if legend_handles:
        ax.legend(handles=legend_handles, fontsize=9, loc="lower right")

    fig.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")
    return fig


def plot_feature_space_2d(
    instances,
    feature_indices: tuple[int, int],
    *,
    feature_names: Sequence[str] | None = None,
    title: str = "Feature space",
    ax: Optional[plt.Axes] = None,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Scatter plot of two feature columns, one colour per class.

    Points misclassified by leave-one-out 1-NN on this pair of features are
    drawn as black crosses.

    Parameters
    ----------
    instances : array-like, shape (n_instances, n_columns)
        Label in column 0.
    feature_indices : (int, int)
        Pair of feature columns (1-based, as in the search) to plot.
    feature_names : sequence of str, optional
        Names indexed by feature column.
    title : str
    ax : matplotlib Axes, optional
    save_path : str, optional

    Returns
    -------
    matplotlib.figure.Figure
    """
    data  = check_instances(instances, min_instances=2)
    i, j  = feature_indices
    y_arr = data[:, 0]
    missed = y_arr[nearest_neighbors((i, j), data)] != y_arr
    X_sub = data[:, [i, j]]

    classes   = np.unique(y_arr)
    cmap      = plt.cm.tab10(np.linspace(0, 0.85, len(classes)))
    class_col = {cls: cmap[k] for k, cls in enumerate(classes)}

    if ax is None:
        fig, ax = plt.subplots(figsize=(7, 6))
    else:
        fig = ax.get_figure()

    legend_handles = []
    for cls in classes:
        mask = (y_arr == cls) & ~missed
        ax.scatter(
            X_sub[mask, 0], X_sub[mask, 1],
            c=[class_col[cls]], s=30, edgecolors="white",
            linewidths=0.4, zorder=3,
        )
        legend_handles.append(
            mpatches.Patch(color=class_col[cls], label=f"Class {cls:g}")
        )

    if missed.any():
        ax.scatter(
            X_sub[missed, 0], X_sub[missed, 1],
            c="black", s=35, marker="x", linewidths=1.2, zorder=4,
        )
        legend_handles.append(
            mpatches.Patch(color="black", label="Misclassified (LOOCV)")
        )

    if feature_names is not None:
        ax.set_xlabel(feature_names[i], fontsize=12)
        ax.set_ylabel(feature_names[j], fontsize=12)
    else:
        ax.set_xlabel(f"Feature {i}", fontsize=12)
        ax.set_ylabel(f"Feature {j}", fontsize=12)

    ax.set_title(f"{title}\nLOOCV accuracy = {1.0 - missed.mean():.3f}",
                 fontsize=13)
    ax.legend(handles=legend_handles, fontsize=9, loc="best")
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")
    return fig
