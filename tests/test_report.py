"""Tests for chart rendering and HTML report assembly."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from lexisent.report import charts
from lexisent.report.render import (
    EMPTY_NOTE,
    LEXICON_CAVEAT,
    build_section,
    describe_polarity,
    render_report,
    write_report,
)


def _ranked() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "word": ["good", "happy", "bad"],
            "sentiment": ["positive", "positive", "negative"],
            "n": [3, 1, 2],
        }
    )


def _summary() -> pd.DataFrame:
    return pd.DataFrame({"sentiment": ["positive", "negative"], "n": [4, 2]})


def test_describe_polarity() -> None:
    assert "leans positive" in describe_polarity(_summary())
    assert "net +2" in describe_polarity(_summary())
    balanced = pd.DataFrame({"sentiment": ["positive", "negative"], "n": [2, 2]})
    assert "evenly balanced" in describe_polarity(balanced)
    joy = pd.DataFrame({"sentiment": ["joy"], "n": [5]})
    assert "'joy'" in describe_polarity(joy)
    assert "No words" in describe_polarity(pd.DataFrame(columns=["sentiment", "n"]))


def test_top_words_chart_has_one_panel_per_sentiment() -> None:
    fig = charts.plot_top_words(_ranked(), "Test")
    try:
        fig.canvas.draw()
        visible = [ax for ax in fig.axes if ax.get_visible()]
        assert [ax.get_title() for ax in visible] == ["positive", "negative"]
        labels = [tick.get_text() for tick in visible[0].get_yticklabels()]
        # most frequent word drawn last (top of the panel)
        assert labels[-1] == "good"
    finally:
        charts.close_figure(fig)


def test_build_section_saves_charts(tmp_path: Path) -> None:
    trajectory = pd.DataFrame(
        {"source": ["Emma", "Emma"], "section": [0, 1], "negative": [1, 3], "positive": [2, 1], "net": [1, -2]}
    )
    section = build_section("Emma: bing", _ranked(), _summary(), tmp_path, "emma_bing", trajectory=trajectory)

    assert [caption for caption, _ in section.charts] == [
        "Top words per sentiment",
        "Sentiment polarity",
        "Sentiment through the text",
    ]
    for name in ("emma_bing_top_words.png", "emma_bing_polarity.png", "emma_bing_trajectory.png"):
        assert (tmp_path / name).exists()
    assert LEXICON_CAVEAT in section.notes


def test_empty_section_has_note_and_no_charts(tmp_path: Path) -> None:
    empty_ranked = pd.DataFrame(columns=["word", "sentiment", "n"])
    empty_summary = pd.DataFrame(columns=["sentiment", "n"])
    section = build_section("Nothing", empty_ranked, empty_summary, tmp_path, "nothing")

    assert section.charts == []
    assert section.notes[0] == EMPTY_NOTE
    assert not list(tmp_path.glob("*.png"))


def test_render_and_write_report(tmp_path: Path) -> None:
    section = build_section("Tweets <bing>", _ranked(), _summary(), tmp_path, "tweets")
    html = render_report("Sentiment & tweets", [section], intro="Intro text")
    path = write_report(html, tmp_path / "out" / "report.html")

    content = path.read_text(encoding="utf-8")
    assert content.startswith("<!DOCTYPE html>")
    assert "Sentiment &amp; tweets" in content
    assert "Tweets &lt;bing&gt;" in content
    assert "data:image/png;base64," in content
    assert "<table" in content
