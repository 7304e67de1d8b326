"""Diagnostic plots."""

import matplotlib.pyplot as plt
from typing import Optional, Sequence


def plot_history(values: Sequence[float], ax: Optional[plt.Axes] = None,
                 xlabel: str = 'iteration number', ylabel: str = 'loss',
                 title: Optional[str] = None) -> plt.Axes:
    """
    Plot a sequence of scalars, e.g. the per-epoch loss of a trained model.

    Args:
        values: Values in chronological order
        ax: Axes to draw on. A new figure is created when None
        xlabel: Label for the x axis
        ylabel: Label for the y axis
        title: Optional title

    Returns:
        The axes that were drawn on
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 5))

    ax.plot(range(1, len(values) + 1), list(values), marker='o', markersize=3)
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    if title:
        ax.set_title(title)
    ax.grid(True, alpha=0.3)

    return ax
