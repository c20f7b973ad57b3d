"""Corpus loading for literary texts and tweet archives."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

DATA_DIR = Path(__file__).resolve().parent / "data"
DEFAULT_TWEET_TEXT_COLUMN = "Tweet Text"

# Bundled literary corpus: corpus name -> {book title: resource file}
BUILTIN_CORPORA: Dict[str, Dict[str, str]] = {
    "austen": {
        "Pride & Prejudice": "pride_and_prejudice.txt",
        "Emma": "emma.txt",
    },
}

CHAPTER_RE = re.compile(r"^\s*chapter\s+[\dIVXLC]+\b", re.IGNORECASE)
GUTENBERG_START_RE = re.compile(r"\*\*\*\s*START OF (THE|THIS) PROJECT GUTENBERG EBOOK[^\n]*", re.IGNORECASE)
GUTENBERG_END_RE = re.compile(r"\*\*\*\s*END OF (THE|THIS) PROJECT GUTENBERG EBOOK", re.IGNORECASE)


class CorpusFormatError(ValueError):
    """Raised when a corpus file does not have the expected tabular structure."""


@dataclass(frozen=True)
class Document:
    doc_id: str | int
    text: str
    source: str = ""
    line: Optional[int] = None
    chapter: Optional[int] = None


def strip_gutenberg(text: str) -> str:
    """Drop Project Gutenberg header/footer boilerplate if both markers are present."""
    start = GUTENBERG_START_RE.search(text)
    end = GUTENBERG_END_RE.search(text)
    if start and end and start.end() < end.start():
        return text[start.end() : end.start()].strip("\n")
    return text


def split_book(text: str, title: str) -> List[Document]:
    """Split a book into one Document per line with running chapter numbers."""
    documents: List[Document] = []
    chapter = 0
    for idx, line in enumerate(text.splitlines(), start=1):
        if CHAPTER_RE.match(line):
            chapter += 1
        documents.append(
            Document(doc_id=f"{title}:{idx}", text=line, source=title, line=idx, chapter=chapter)
        )
    return documents


def load_literary_text(path: Path | str, title: str | None = None) -> List[Document]:
    """Load a plain-text book as line-level Documents."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Literary text not found: {path}")
    text = path.read_text(encoding="utf-8", errors="replace")
    return split_book(strip_gutenberg(text), title or path.stem)


def load_builtin_corpus(name: str = "austen") -> List[Document]:
    """Load the bundled literary corpus, books in declaration order."""
    books = BUILTIN_CORPORA.get(name)
    if books is None:
        raise ValueError(f"Unknown built-in corpus '{name}'. Available: {sorted(BUILTIN_CORPORA)}")

    documents: List[Document] = []
    for title, filename in books.items():
        text = (DATA_DIR / filename).read_text(encoding="utf-8")
        documents.extend(split_book(strip_gutenberg(text), title))
    return documents


def load_tweets_csv(
    path: Path | str,
    text_col: str = DEFAULT_TWEET_TEXT_COLUMN,
    id_col: str | None = None,
    source: str = "",
) -> List[Document]:
    """Load a delimited tweet export; row order is the document id unless id_col is given."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Tweet archive not found: {path}")

    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise CorpusFormatError(f"Could not parse {path}: {exc}") from exc
    df.columns = [str(c).strip() for c in df.columns]

    if text_col not in df.columns:
        raise CorpusFormatError(f"text column '{text_col}' not found in {path}")
    if id_col is not None and id_col not in df.columns:
        raise CorpusFormatError(f"id column '{id_col}' not found in {path}")

    label = source or path.stem
    ids = df[id_col].tolist() if id_col else range(1, len(df) + 1)
    return [
        Document(doc_id=doc_id, text=str(text).strip(), source=label, line=row)
        for row, (doc_id, text) in enumerate(zip(ids, df[text_col].tolist()), start=1)
    ]


def documents_frame(documents: List[Document]) -> pd.DataFrame:
    """Return documents as a DataFrame (one row per document)."""
    columns = ["doc_id", "text", "source", "line", "chapter"]
    if not documents:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame([asdict(doc) for doc in documents], columns=columns)
