"""Tests for corpus loading and tokenization."""

from __future__ import annotations

from collections import Counter
from pathlib import Path

import pandas as pd
import pytest

from lexisent.corpus.loader import (
    CorpusFormatError,
    Document,
    documents_frame,
    load_builtin_corpus,
    load_literary_text,
    load_tweets_csv,
    split_book,
)
from lexisent.corpus.tokenize import clean_tweet, rejoin_tokens, tokenize, tokenize_documents


def test_tokenize_lowercases_and_splits_on_punctuation() -> None:
    assert tokenize("Good, GOOD... bad!") == ["good", "good", "bad"]
    assert tokenize("Don't keep coughing so, Kitty") == ["don't", "keep", "coughing", "so", "kitty"]
    assert tokenize("") == []
    assert tokenize("   ... !!! ___") == []


def test_tokenize_keeps_accented_letters_and_digits() -> None:
    assert tokenize("Café naïve, 2nd covid19 in 1813!") == ["café", "naïve", "2nd", "covid19", "in", "1813"]
    assert tokenize("ÉMILE’s déjà-vu") == ["émile's", "déjà", "vu"]


def test_tokenize_documents_keeps_document_ids() -> None:
    docs = [Document(doc_id=1, text="good good bad"), Document(doc_id=2, text="bad bad"), Document(doc_id=3, text="")]
    tokens = tokenize_documents(docs)

    assert list(tokens.columns) == ["doc_id", "source", "line", "chapter", "word"]
    assert tokens["word"].tolist() == ["good", "good", "bad", "bad", "bad"]
    assert tokens["doc_id"].tolist() == [1, 1, 1, 2, 2]
    assert 3 not in set(tokens["doc_id"])


def test_rejoin_recovers_document_words() -> None:
    docs = [
        Document(doc_id="a", text="It is a truth universally acknowledged, a TRUTH."),
        Document(doc_id="b", text="Emma Woodhouse, handsome, clever, and rich"),
        Document(doc_id="c", text="Café naïve, 2nd covid19 in 1813."),
    ]
    bags = rejoin_tokens(tokenize_documents(docs))

    for doc in docs:
        expected = Counter(word.strip(",.").lower() for word in doc.text.split())
        assert bags[doc.doc_id] == expected


def test_empty_documents_produce_empty_token_table() -> None:
    tokens = tokenize_documents([])
    assert tokens.empty
    assert "word" in tokens.columns


def test_clean_tweet_strips_links_entities_and_retweet_marker() -> None:
    cleaned = clean_tweet("RT @news: Tax cuts &amp; jobs https://t.co/xyz")
    assert "https" not in cleaned
    assert "amp" not in tokenize(cleaned)
    assert tokenize(cleaned) == ["news", "tax", "cuts", "jobs"]


def test_split_book_numbers_lines_and_chapters() -> None:
    text = "TITLE\n\nChapter 1\nfirst line\nCHAPTER II\nsecond line"
    docs = split_book(text, "Book")

    assert [d.line for d in docs] == [1, 2, 3, 4, 5, 6]
    assert [d.chapter for d in docs] == [0, 0, 1, 1, 2, 2]
    assert docs[3].doc_id == "Book:4"
    assert all(d.source == "Book" for d in docs)


def test_load_literary_text_strips_gutenberg_boilerplate(tmp_path: Path) -> None:
    path = tmp_path / "book.txt"
    path.write_text(
        "License blurb\n*** START OF THE PROJECT GUTENBERG EBOOK BOOK ***\nChapter 1\nHappy days\n"
        "*** END OF THE PROJECT GUTENBERG EBOOK BOOK ***\nMore license\n",
        encoding="utf-8",
    )
    docs = load_literary_text(path, title="Book")
    text = " ".join(d.text for d in docs)

    assert "License" not in text
    assert "Happy days" in text
    assert docs[0].source == "Book"


def test_load_literary_text_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_literary_text(tmp_path / "missing.txt")


def test_builtin_corpus_has_both_books() -> None:
    docs = load_builtin_corpus("austen")
    sources = list(dict.fromkeys(d.source for d in docs))

    assert sources == ["Pride & Prejudice", "Emma"]
    assert max(d.chapter for d in docs if d.source == "Emma") == 2
    with pytest.raises(ValueError):
        load_builtin_corpus("dickens")


def test_load_tweets_csv_uses_row_order_ids(tmp_path: Path) -> None:
    path = tmp_path / "tweets.csv"
    pd.DataFrame({" Tweet Text ": ["Great day", "", "Sad news"]}).to_csv(path, index=False)

    docs = load_tweets_csv(path)

    assert [d.doc_id for d in docs] == [1, 2, 3]
    assert docs[1].text == ""
    assert docs[0].source == "tweets"


def test_load_tweets_csv_with_id_column(tmp_path: Path) -> None:
    path = tmp_path / "tweets.csv"
    pd.DataFrame({"Tweet Number": ["t1", "t2"], "Tweet Text": ["a", "b"]}).to_csv(path, index=False)

    docs = load_tweets_csv(path, id_col="Tweet Number", source="archive")
    frame = documents_frame(docs)

    assert frame["doc_id"].tolist() == ["t1", "t2"]
    assert set(frame["source"]) == {"archive"}


def test_load_tweets_csv_errors(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_tweets_csv(tmp_path / "nope.csv")

    path = tmp_path / "wrong.csv"
    pd.DataFrame({"text": ["hello"]}).to_csv(path, index=False)
    with pytest.raises(CorpusFormatError):
        load_tweets_csv(path)

    empty = tmp_path / "empty.csv"
    empty.write_text("", encoding="utf-8")
    with pytest.raises(CorpusFormatError):
        load_tweets_csv(empty)
