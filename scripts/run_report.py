"""Run lexicon-based sentiment analysis over the configured corpora and render the report."""

from __future__ import annotations

import argparse
import re
import sys
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd
import yaml

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from lexisent.corpus.loader import (
    DEFAULT_TWEET_TEXT_COLUMN,
    Document,
    load_builtin_corpus,
    load_literary_text,
    load_tweets_csv,
)
from lexisent.corpus.tokenize import clean_tweet, tokenize_documents
from lexisent.report.render import ReportSection, build_section, render_report, write_report
from lexisent.sentiment.aggregate import (
    count_sentiment_words,
    join_lexicon,
    polarity_summary,
    sentiment_trajectory,
    top_n_per_sentiment,
    word_frequencies,
)
from lexisent.sentiment.lexicon import load_lexicon, load_stop_words

DEFAULT_CONFIG_PATH = Path("configs") / "config.yaml"
DEFAULT_TITLE = "Lexicon-based sentiment report"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render the lexicon-based sentiment report.")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to config YAML.")
    parser.add_argument("--demo", action="store_true", help="Generate a tiny demo tweet archive if it is missing.")
    return parser.parse_args()


def load_config(cfg_path: Path) -> Dict[str, Any]:
    with cfg_path.open("r", encoding="utf-8") as handle:
        cfg = yaml.safe_load(handle) or {}
    if not isinstance(cfg, dict):
        raise ValueError("Configuration file must be a mapping.")
    corpora = cfg.get("corpora") or []
    if not isinstance(corpora, list) or not all(isinstance(c, dict) for c in corpora):
        raise ValueError("config['corpora'] must be a list of mappings.")
    return cfg


def resolve_path(path: Path | str) -> Path:
    path = Path(path)
    return path if path.is_absolute() else PROJECT_ROOT / path


def slugify(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "_", str(text).lower()).strip("_") or "corpus"


def word_list(value: Any, field: str) -> List[str]:
    """Config word lists: a YAML list, or a single word given as a plain string."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, (str, int, float)) for v in value):
        raise ValueError(f"config '{field}' must be a word or a list of words, got {value!r}")
    return [str(v) for v in value]


def ensure_demo_data(path: Path, text_col: str = DEFAULT_TWEET_TEXT_COLUMN) -> None:
    """Create a small demo tweet archive."""
    tweets = [
        "Great rally tonight, tremendous crowd. We will win and win big! https://t.co/abc123",
        "The fake news media is failing. Sad!",
        "RT @someone: Thank you for the wonderful welcome &amp; the beautiful weather.",
        "Crooked politicians, terrible deals, total disaster.",
        "Jobs are coming back, the economy is strong and the future is bright.",
        "",
        "Trump Tower tonight, great meeting with wonderful people.",
        "So many lies. A bad week for honest reporting, but we will win.",
    ]
    data = pd.DataFrame({"Tweet Number": range(1, len(tweets) + 1), text_col: tweets})
    path.parent.mkdir(parents=True, exist_ok=True)
    data.to_csv(path, index=False)
    print(f"Demo tweet data written to {path}")


def load_corpus(corpus_cfg: Dict[str, Any], demo: bool = False) -> List[Document]:
    """Load the documents described by one corpus entry of the config."""
    name = corpus_cfg.get("name", "corpus")
    kind = corpus_cfg.get("kind", "tweets")

    if kind == "literary":
        if corpus_cfg.get("path"):
            return load_literary_text(resolve_path(corpus_cfg["path"]), title=corpus_cfg.get("title"))
        return load_builtin_corpus(corpus_cfg.get("builtin", "austen"))

    if kind == "tweets":
        if not corpus_cfg.get("path"):
            raise ValueError(f"corpus '{name}' needs a 'path' to the tweet archive.")
        path = resolve_path(corpus_cfg["path"])
        text_col = corpus_cfg.get("text_column", DEFAULT_TWEET_TEXT_COLUMN)
        if not path.exists() and demo:
            ensure_demo_data(path, text_col)
        return load_tweets_csv(path, text_col=text_col, id_col=corpus_cfg.get("id_column"), source=name)

    raise ValueError(f"corpus '{name}' has unknown kind '{kind}' (expected 'literary' or 'tweets').")


def analyse_corpus(
    corpus_cfg: Dict[str, Any], report_cfg: Dict[str, Any], output_dir: Path, demo: bool = False
) -> List[ReportSection]:
    """Tokenize one corpus and build a report section for each configured lexicon analysis."""
    name = corpus_cfg.get("name", "corpus")
    top_n = int(corpus_cfg.get("top_n", report_cfg.get("top_n", 10)))
    lines_per_section = int(report_cfg.get("lines_per_section", 80))
    exclude = word_list(corpus_cfg.get("exclude"), "exclude")

    documents = load_corpus(corpus_cfg, demo=demo)
    cleaner = clean_tweet if corpus_cfg.get("kind", "tweets") == "tweets" else None
    tokens = tokenize_documents(documents, cleaner=cleaner)
    print(f"[{name}] {len(documents)} documents, {len(tokens)} tokens")

    stop_words = load_stop_words(extra=exclude)
    frequencies = word_frequencies(tokens, stop_words, n=top_n)

    sections: List[ReportSection] = []
    for analysis in corpus_cfg.get("analyses") or [{"lexicon": "bing"}]:
        categories = word_list(analysis.get("categories"), "categories") or None
        lexicon = load_lexicon(
            analysis.get("lexicon", "bing"),
            categories=categories,
            exclude=exclude,
            relabel=analysis.get("relabel"),
        )
        joined = join_lexicon(tokens, lexicon)
        counts = count_sentiment_words(joined)
        ranked = top_n_per_sentiment(counts, n=top_n)
        summary = polarity_summary(counts)

        trajectory = None
        if corpus_cfg.get("kind") == "literary":
            trajectory = sentiment_trajectory(joined, lines_per_section=lines_per_section)

        label = lexicon.name if not categories else f"{lexicon.name} ({', '.join(categories)})"
        slug = slugify(f"{name}_{label}")
        ranked.to_csv(output_dir / f"{slug}_top_words.csv", index=False)
        summary.to_csv(output_dir / f"{slug}_summary.csv", index=False)

        totals = dict(zip(summary["sentiment"], summary["n"].astype(int).tolist()))
        print(f"[{name}] {label}: {len(joined)} matched tokens, totals {totals}")
        sections.append(
            build_section(
                f"{name}: {label}",
                ranked,
                summary,
                output_dir,
                slug,
                trajectory=trajectory,
                frequencies=frequencies if not sections else None,
            )
        )
    return sections


def build_report(cfg: Dict[str, Any], demo: bool = False) -> Path:
    """Run every configured corpus analysis and write the HTML report; returns its path."""
    report_cfg = cfg.get("report") or {}
    output_dir = resolve_path(report_cfg.get("output_dir", Path("reports") / "sentiment"))
    output_dir.mkdir(parents=True, exist_ok=True)

    sections: List[ReportSection] = []
    for corpus_cfg in cfg.get("corpora") or []:
        sections.extend(analyse_corpus(corpus_cfg, report_cfg, output_dir, demo=demo))

    title = report_cfg.get("title", DEFAULT_TITLE)
    html = render_report(title, sections, intro=report_cfg.get("intro", ""))
    return write_report(html, output_dir / "report.html")


def main() -> None:
    args = parse_args()
    cfg_path = resolve_path(args.config)
    if not cfg_path.exists():
        print(f"Config not found: {cfg_path}", file=sys.stderr)
        sys.exit(1)

    try:
        cfg = load_config(cfg_path)
        report_path = build_report(cfg, demo=args.demo)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as exc:
        print(f"Sentiment report failed: {exc}", file=sys.stderr)
        sys.exit(1)

    print("Sentiment report complete.")
    print(f"Report written to {report_path}")


if __name__ == "__main__":
    main()
