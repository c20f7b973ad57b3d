"""Word tokenization for corpus documents."""

from __future__ import annotations

import re
from collections import Counter
from typing import Callable, Dict, Iterable, List

import pandas as pd

from lexisent.corpus.loader import Document

TOKEN_COLUMNS = ["doc_id", "source", "line", "chapter", "word"]

# Letters and digits in any script; underscores and other punctuation delimit words.
WORD_RE = re.compile(r"[^\W_]+(?:'[^\W_]+)*")
URL_RE = re.compile(r"https?://\S+|www\.\S+")
ENTITY_RE = re.compile(r"&(?:[a-z]+|#\d+);")
RETWEET_RE = re.compile(r"^rt\s+", re.IGNORECASE)


def normalize_text(text: str) -> str:
    """Lowercase, strip, and collapse whitespace."""
    text = (text or "").lower().strip()
    # Typographic apostrophes would otherwise split contractions.
    text = text.replace("’", "'").replace("‘", "'")
    return re.sub(r"\s+", " ", text)


def clean_tweet(text: str) -> str:
    """Remove links, HTML entities and a leading retweet marker."""
    text = URL_RE.sub(" ", text or "")
    text = ENTITY_RE.sub(" ", text)
    return RETWEET_RE.sub("", text.strip())


def tokenize(text: str) -> List[str]:
    return WORD_RE.findall(normalize_text(text))


def tokenize_documents(
    documents: Iterable[Document], cleaner: Callable[[str], str] | None = None
) -> pd.DataFrame:
    """Return one row per word token, keeping the originating document identifiers."""
    rows = []
    for doc in documents:
        text = cleaner(doc.text) if cleaner else doc.text
        for word in tokenize(text):
            rows.append((doc.doc_id, doc.source, doc.line, doc.chapter, word))
    return pd.DataFrame(rows, columns=TOKEN_COLUMNS)


def rejoin_tokens(tokens: pd.DataFrame) -> Dict[str | int, Counter]:
    """Group tokens back into per-document word bags."""
    bags: Dict[str | int, Counter] = {}
    for doc_id, word in zip(tokens["doc_id"], tokens["word"]):
        bags.setdefault(doc_id, Counter())[word] += 1
    return bags
