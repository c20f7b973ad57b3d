"""HTML report assembly for sentiment analyses."""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

import pandas as pd

from lexisent.report import charts
from lexisent.sentiment.aggregate import polarity_balance

LEXICON_CAVEAT = (
    "Lexicon lookup scores each word on its own: negation (\"not happy\"), multi-word idioms "
    "and words with several meanings are not handled, and words missing from the lexicon are dropped."
)
EMPTY_NOTE = "No tokens matched the lexicon, so there is nothing to chart."

REPORT_CSS = """
body { font-family: Georgia, serif; margin: 2rem auto; max-width: 980px; color: #2B0B10; }
h1 { color: #7B1E2B; }
h2 { border-bottom: 1px solid rgba(192, 57, 43, 0.35); padding-bottom: 4px; }
table.dataframe { border-collapse: collapse; margin: 0.5rem 0 1rem 0; }
table.dataframe th, table.dataframe td { border: 1px solid #E6D6D8; padding: 4px 10px; }
.note { color: #5D6D7E; font-style: italic; }
img { max-width: 100%; }
"""


@dataclass
class ReportSection:
    title: str
    paragraphs: List[str] = field(default_factory=list)
    tables: List[Tuple[str, pd.DataFrame]] = field(default_factory=list)
    charts: List[Tuple[str, str]] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)


def describe_polarity(summary: pd.DataFrame) -> str:
    """One-sentence interpretation of a sentiment tally."""
    if summary.empty:
        return "No words from the lexicon were found."

    totals = dict(zip(summary["sentiment"], summary["n"].astype(int)))
    total = sum(totals.values())
    if set(totals) <= {"positive", "negative"}:
        balance = polarity_balance(summary)
        if balance > 0:
            leaning = "leans positive"
        elif balance < 0:
            leaning = "leans negative"
        else:
            leaning = "is evenly balanced"
        return (
            f"Of {total} sentiment-bearing words, {totals.get('positive', 0)} are positive and "
            f"{totals.get('negative', 0)} negative, so the text {leaning} (net {balance:+d})."
        )

    top = summary.iloc[0]
    return f"{total} words matched the lexicon; the most frequent category is '{top['sentiment']}' ({int(top['n'])})."


def _chart(fig, path: Path) -> str:
    try:
        charts.save_figure(fig, path)
        return charts.figure_to_base64(fig)
    finally:
        charts.close_figure(fig)


def build_section(
    title: str,
    ranked: pd.DataFrame,
    summary: pd.DataFrame,
    chart_dir: Path,
    slug: str,
    trajectory: pd.DataFrame | None = None,
    frequencies: pd.DataFrame | None = None,
) -> ReportSection:
    """Render tables and charts for one corpus/lexicon analysis and save PNGs under chart_dir."""
    section = ReportSection(title=title, paragraphs=[describe_polarity(summary)], notes=[LEXICON_CAVEAT])

    if frequencies is not None and not frequencies.empty:
        section.tables.append(("Most common words (stop words removed)", frequencies))
    section.tables.append(("Top words per sentiment", ranked))
    section.tables.append(("Sentiment totals", summary))

    if ranked.empty:
        section.notes.insert(0, EMPTY_NOTE)
        return section

    section.charts.append(
        ("Top words per sentiment", _chart(charts.plot_top_words(ranked, title), chart_dir / f"{slug}_top_words.png"))
    )
    section.charts.append(
        ("Sentiment polarity", _chart(charts.plot_polarity(summary, title), chart_dir / f"{slug}_polarity.png"))
    )
    if trajectory is not None and not trajectory.empty:
        section.charts.append(
            (
                "Sentiment through the text",
                _chart(charts.plot_trajectory(trajectory, title), chart_dir / f"{slug}_trajectory.png"),
            )
        )
    return section


def _render_section(section: ReportSection) -> str:
    parts = [f"<h2>{html.escape(section.title)}</h2>"]
    parts.extend(f"<p>{html.escape(p)}</p>" for p in section.paragraphs)
    for caption, table in section.tables:
        parts.append(f"<h3>{html.escape(caption)}</h3>")
        parts.append(table.to_html(index=False, border=0))
    for caption, encoded in section.charts:
        parts.append(f"<h3>{html.escape(caption)}</h3>")
        parts.append(f'<img alt="{html.escape(caption)}" src="data:image/png;base64,{encoded}"/>')
    parts.extend(f'<p class="note">{html.escape(n)}</p>' for n in section.notes)
    return "\n".join(parts)


def render_report(title: str, sections: List[ReportSection], intro: str = "") -> str:
    body = "\n".join(_render_section(section) for section in sections)
    intro_html = f"<p>{html.escape(intro)}</p>" if intro else ""
    return (
        "<!DOCTYPE html>\n<html>\n<head>\n<meta charset=\"utf-8\"/>\n"
        f"<title>{html.escape(title)}</title>\n<style>{REPORT_CSS}</style>\n</head>\n<body>\n"
        f"<h1>{html.escape(title)}</h1>\n{intro_html}\n{body}\n</body>\n</html>\n"
    )


def write_report(content: str, path: Path | str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
