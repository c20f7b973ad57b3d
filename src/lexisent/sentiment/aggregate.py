"""Lexicon join and sentiment aggregation utilities."""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from lexisent.sentiment.lexicon import Lexicon

COUNT_COLUMNS = ["word", "sentiment", "n"]
SUMMARY_COLUMNS = ["sentiment", "n"]
TRAJECTORY_COLUMNS = ["source", "section", "negative", "positive", "net"]


def join_lexicon(tokens: pd.DataFrame, lexicon: Lexicon) -> pd.DataFrame:
    """Keep tokens whose word is a lexicon key and attach its sentiment label."""
    if "word" not in tokens.columns:
        raise ValueError("tokens must have a 'word' column")

    labels = tokens["word"].map(dict(lexicon.entries))
    joined = tokens[labels.notna()].copy()
    joined["sentiment"] = labels[labels.notna()].astype(str)
    return joined.reset_index(drop=True)


def count_sentiment_words(joined: pd.DataFrame) -> pd.DataFrame:
    """Count (word, sentiment) occurrences, most frequent first.

    Ties keep the order in which words first appear in the token stream.
    """
    if joined.empty:
        return pd.DataFrame(columns=COUNT_COLUMNS)

    counts = joined.groupby(["word", "sentiment"], sort=False).size().reset_index(name="n")
    counts = counts.sort_values("n", ascending=False, kind="stable")
    return counts[COUNT_COLUMNS].reset_index(drop=True)


def top_n_per_sentiment(counts: pd.DataFrame, n: int = 20) -> pd.DataFrame:
    """Return at most n rows per sentiment, counts non-increasing within each group."""
    if n < 1:
        raise ValueError(f"n must be a positive integer, got {n}")
    if counts.empty:
        return pd.DataFrame(columns=COUNT_COLUMNS)

    ordered = counts.sort_values("n", ascending=False, kind="stable")
    top = ordered.groupby("sentiment", sort=False).head(n)
    # Group rows together, groups in first-seen order, ranking preserved inside each group.
    group_order = {label: idx for idx, label in enumerate(dict.fromkeys(top["sentiment"]))}
    top = top.assign(_group=top["sentiment"].map(group_order)).sort_values("_group", kind="stable")
    return top[COUNT_COLUMNS].reset_index(drop=True)


def polarity_summary(counts: pd.DataFrame) -> pd.DataFrame:
    """Total count per sentiment category, largest first."""
    if counts.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    summary = counts.groupby("sentiment", sort=False)["n"].sum().reset_index()
    summary = summary.sort_values("n", ascending=False, kind="stable")
    return summary[SUMMARY_COLUMNS].reset_index(drop=True)


def polarity_balance(summary: pd.DataFrame) -> int:
    """Net positive minus negative tally (0 when either side is absent)."""
    totals = dict(zip(summary["sentiment"], summary["n"]))
    return int(totals.get("positive", 0)) - int(totals.get("negative", 0))


def word_frequencies(tokens: pd.DataFrame, stop_words: Iterable[str] = (), n: int = 10) -> pd.DataFrame:
    """Most common words after removing stop words."""
    if n < 1:
        raise ValueError(f"n must be a positive integer, got {n}")
    stop = set(stop_words)
    words = tokens.loc[~tokens["word"].isin(stop), "word"]
    if words.empty:
        return pd.DataFrame(columns=["word", "n"])

    freq = words.groupby(words, sort=False).size().reset_index(name="n")
    freq.columns = ["word", "n"]
    freq = freq.sort_values("n", ascending=False, kind="stable").head(n)
    return freq.reset_index(drop=True)


def sentiment_trajectory(
    joined: pd.DataFrame, lines_per_section: int = 80, group_col: str = "source"
) -> pd.DataFrame:
    """Positive/negative counts per section of consecutive lines, per source.

    Expects a two-label (positive/negative) lexicon join; other labels are ignored.
    """
    if lines_per_section < 1:
        raise ValueError(f"lines_per_section must be positive, got {lines_per_section}")
    polar = joined[joined["sentiment"].isin(["positive", "negative"])] if not joined.empty else joined
    if polar.empty:
        return pd.DataFrame(columns=TRAJECTORY_COLUMNS)

    if "line" not in polar.columns or polar["line"].isna().any():
        raise ValueError("sentiment_trajectory needs a line number on every token to assign sections")

    polar = polar.copy()
    polar["section"] = (polar["line"].astype(int) - 1) // lines_per_section
    table = (
        polar.groupby([group_col, "section", "sentiment"], sort=False)
        .size()
        .unstack("sentiment", fill_value=0)
        .reindex(columns=["negative", "positive"], fill_value=0)
        .reset_index()
    )
    table.columns.name = None
    table = table.rename(columns={group_col: "source"})
    table["net"] = table["positive"] - table["negative"]
    table = table.sort_values(["source", "section"], kind="stable", key=_first_seen_key(polar[group_col]))
    return table[TRAJECTORY_COLUMNS].reset_index(drop=True)


def _first_seen_key(sources: pd.Series):
    """Sort key keeping sources in token-stream order and sections ascending."""
    order = {label: idx for idx, label in enumerate(dict.fromkeys(sources))}

    def key(column: pd.Series) -> pd.Series:
        if column.name == "source":
            return column.map(order)
        return column

    return key
