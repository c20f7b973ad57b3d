"""Sentiment lexicon loading, filtering, and stop words."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Tuple

import pandas as pd

DATA_DIR = Path(__file__).resolve().parent / "data"

BUILTIN_LEXICONS = {
    "bing": "bing.csv",
    "nrc": "nrc.tsv",
    "afinn": "afinn.tsv",
}

STOP_WORDS_FILE = "stop_words.txt"


class LexiconError(ValueError):
    """Raised for malformed lexicon files or conflicting word labels."""


@dataclass(frozen=True)
class Lexicon:
    """Immutable word -> sentiment mapping."""

    name: str
    entries: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def __contains__(self, word: object) -> bool:
        return word in self.entries

    def __getitem__(self, word: str) -> str:
        return self.entries[word]

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, word: str, default: str | None = None) -> str | None:
        return self.entries.get(word, default)

    def sentiments(self) -> List[str]:
        """Distinct labels in first-seen order."""
        return list(dict.fromkeys(self.entries.values()))

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(list(self.entries.items()), columns=["word", "sentiment"])


def _coerce_label(label: str) -> str | None:
    """Map integer polarity codes to positive/negative; zero scores carry no sentiment."""
    try:
        score = int(label)
    except ValueError:
        return label
    if score > 0:
        return "positive"
    if score < 0:
        return "negative"
    return None


def _data_line_numbers(path: Path) -> List[int]:
    """File line numbers of the non-blank, non-comment lines."""
    with path.open("r", encoding="utf-8") as handle:
        return [n for n, line in enumerate(handle, start=1) if line.strip() and not line.lstrip().startswith("#")]


def _read_rows(path: Path) -> pd.DataFrame:
    """Read a delimited lexicon file; the index holds each row's line number in the file."""
    sep = "\t" if path.suffix in {".tsv", ".txt"} else ","
    try:
        df = pd.read_csv(
            path,
            sep=sep,
            header=None,
            comment="#",
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            encoding="utf-8",
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except (pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise LexiconError(f"Could not parse lexicon {path}: {exc}") from exc

    line_numbers = _data_line_numbers(path)
    df.index = line_numbers if len(line_numbers) == len(df) else range(1, len(df) + 1)
    return df


def _parse_rows(rows: pd.DataFrame, path: Path) -> List[Tuple[str, str]]:
    """Turn raw rows into (word, label) pairs according to the column layout."""
    if rows.empty:
        return []
    if rows.shape[1] not in (2, 3):
        raise LexiconError(f"{path}: found {rows.shape[1]} columns, expected 2 or 3")

    # Optional header row, e.g. "word,sentiment".
    if str(rows.iloc[0, 0]).strip().lower() == "word":
        rows = rows.iloc[1:]

    pairs: List[Tuple[str, str]] = []
    for lineno, row in zip(rows.index, rows.itertuples(index=False, name=None)):
        row = ["" if pd.isna(part) else str(part).strip() for part in row]
        if len(row) == 2:
            word, label = row
        else:
            word, label, flag = row
            if flag not in {"0", "1"}:
                raise LexiconError(f"{path}: line {lineno} has association flag '{flag}', expected 0 or 1")
            if flag == "0":
                continue

        word = word.lower()
        label = label.lower()
        if not word or not label:
            raise LexiconError(f"{path}: line {lineno} has an empty word or label")
        pairs.append((word, label))
    return pairs


def _as_words(values: Iterable[str] | str | None) -> List[str] | None:
    """A single string is one word, not a sequence of characters."""
    if values is None:
        return None
    if isinstance(values, str):
        return [values]
    return list(values)


def resolve_lexicon_path(source: str | Path) -> Tuple[str, Path]:
    """Map a built-in lexicon name or a file path to (name, path)."""
    key = str(source).lower()
    if key in BUILTIN_LEXICONS:
        return key, DATA_DIR / BUILTIN_LEXICONS[key]
    path = Path(source)
    return path.stem, path


def build_lexicon(
    name: str,
    pairs: Iterable[Tuple[str, str]],
    categories: Iterable[str] | str | None = None,
    exclude: Iterable[str] | str | None = None,
    relabel: Mapping[str, str] | None = None,
) -> Lexicon:
    """Apply relabel, category filter and exclusions, then reject conflicting duplicates."""
    categories = _as_words(categories)
    exclude = _as_words(exclude)
    relabel = {str(k).lower(): str(v).lower() for k, v in (relabel or {}).items()}
    wanted = {str(c).lower() for c in categories} if categories is not None else None
    excluded = {str(w).lower().strip() for w in (exclude or [])}

    entries: Dict[str, str] = {}
    conflicts: Dict[str, set] = {}
    for word, label in pairs:
        label = _coerce_label(relabel.get(label, label))
        if label is None:
            continue
        if wanted is not None and label not in wanted:
            continue
        if word in excluded:
            continue
        existing = entries.get(word)
        if existing is None:
            entries[word] = label
        elif existing != label:
            conflicts.setdefault(word, {existing}).add(label)

    if conflicts:
        sample = ", ".join(f"{w} ({'/'.join(sorted(labels))})" for w, labels in sorted(conflicts.items())[:5])
        raise LexiconError(
            f"lexicon '{name}' has {len(conflicts)} words with conflicting labels: {sample}. "
            "Restrict it with a categories filter."
        )
    return Lexicon(name=name, entries=entries)


def load_lexicon(
    source: str | Path,
    categories: Iterable[str] | str | None = None,
    exclude: Iterable[str] | str | None = None,
    relabel: Mapping[str, str] | None = None,
) -> Lexicon:
    """Load a built-in or file-based lexicon and return the filtered mapping."""
    name, path = resolve_lexicon_path(source)
    if not path.exists():
        raise FileNotFoundError(f"Lexicon not found: {path}")
    pairs = _parse_rows(_read_rows(path), path)
    return build_lexicon(name, pairs, categories=categories, exclude=exclude, relabel=relabel)


def load_stop_words(extra: Iterable[str] | str | None = None) -> FrozenSet[str]:
    """Bundled English stop words plus any custom additions."""
    extra = _as_words(extra)
    text = (DATA_DIR / STOP_WORDS_FILE).read_text(encoding="utf-8")
    words = {line.strip().lower() for line in text.splitlines() if line.strip() and not line.startswith("#")}
    words.update(str(w).lower().strip() for w in (extra or []))
    return frozenset(words)
