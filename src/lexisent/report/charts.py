"""Matplotlib charts for sentiment word counts and polarity."""

from __future__ import annotations

import base64
import io
import math
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

SENTIMENT_COLORS = {
    "positive": "#2E86AB",
    "negative": "#C0392B",
    "joy": "#F1C40F",
    "trust": "#27AE60",
    "fear": "#6C3483",
    "anger": "#E74C3C",
    "sadness": "#5D6D7E",
    "anticipation": "#E67E22",
    "surprise": "#16A085",
    "disgust": "#7D6608",
}
DEFAULT_COLOR = "#7B1E2B"


def _color(sentiment: str) -> str:
    return SENTIMENT_COLORS.get(str(sentiment).lower(), DEFAULT_COLOR)


def plot_top_words(ranked: pd.DataFrame, title: str, max_cols: int = 2) -> Figure:
    """Faceted horizontal bar chart: one panel per sentiment, largest count on top."""
    sentiments = list(dict.fromkeys(ranked["sentiment"]))
    if not sentiments:
        raise ValueError("no rows to plot")

    ncols = min(max_cols, len(sentiments))
    nrows = math.ceil(len(sentiments) / ncols)
    tallest = int(ranked.groupby("sentiment").size().max())
    fig, axes = plt.subplots(
        nrows, ncols, figsize=(5 * ncols, max(2.5, 0.3 * tallest + 1.2) * nrows), squeeze=False
    )

    for ax, sentiment in zip(axes.flat, sentiments):
        group = ranked[ranked["sentiment"] == sentiment]
        # barh draws bottom-up; reverse so the most frequent word sits at the top.
        group = group.iloc[::-1]
        ax.barh(group["word"], group["n"], color=_color(sentiment))
        ax.set_title(str(sentiment))
        ax.set_xlabel("Contribution to sentiment")
    for ax in list(axes.flat)[len(sentiments) :]:
        ax.set_visible(False)

    fig.suptitle(title)
    fig.tight_layout()
    return fig


def plot_polarity(summary: pd.DataFrame, title: str) -> Figure:
    """Single bar chart of total counts per sentiment."""
    if summary.empty:
        raise ValueError("no rows to plot")

    fig, ax = plt.subplots(figsize=(6, 4))
    ax.bar(summary["sentiment"], summary["n"], color=[_color(s) for s in summary["sentiment"]])
    ax.set_ylabel("Word count")
    ax.set_title(title)
    fig.tight_layout()
    return fig


def plot_trajectory(trajectory: pd.DataFrame, title: str) -> Figure:
    """Net sentiment per section, one panel per source."""
    sources = list(dict.fromkeys(trajectory["source"]))
    if not sources:
        raise ValueError("no rows to plot")

    fig, axes = plt.subplots(len(sources), 1, figsize=(10, 2.8 * len(sources)), squeeze=False)
    for ax, source in zip(axes[:, 0], sources):
        group = trajectory[trajectory["source"] == source]
        colors = [_color("positive") if v >= 0 else _color("negative") for v in group["net"]]
        ax.bar(group["section"], group["net"], color=colors)
        ax.axhline(0.0, color="#888", linestyle="--", linewidth=1)
        ax.set_title(str(source))
        ax.set_ylabel("Positive - negative")
    axes[-1, 0].set_xlabel("Section")
    fig.suptitle(title)
    fig.tight_layout()
    return fig


def save_figure(fig: Figure, path: Path | str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=150, bbox_inches="tight")
    return path


def figure_to_base64(fig: Figure) -> str:
    """Encode a figure as base64 PNG for inline embedding."""
    buffer = io.BytesIO()
    fig.savefig(buffer, format="png", dpi=110, bbox_inches="tight")
    return base64.b64encode(buffer.getvalue()).decode("ascii")


def close_figure(fig: Figure) -> None:
    plt.close(fig)
