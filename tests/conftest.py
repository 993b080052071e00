"""Shared test fixtures.

Tests never load a real fastText model or start Ray: a scripted classifier is
registered under the provider name "fake" and corpora are small Parquet files
written to tmp_path.
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pyarrow.parquet as pq
import pytest

from corpus_classifier.pipeline.context import Document
from corpus_classifier.pipeline.worker import WorkerContext
from corpus_classifier.plugins.classifier import TextClassifier
from corpus_classifier.plugins.registry import register_classifier_provider, unregister_classifier_provider
from corpus_classifier.storage.records import records_to_table


class FakeClassifier(TextClassifier):
    """Scores documents from a keyword table; raises on a poison token."""

    def __init__(self, labels: Sequence[str], keywords: Optional[Dict[str, str]] = None,
                 fixed_scores: Optional[Sequence[float]] = None, poison: str = "boom"):
        self.labels = list(labels)
        self.keywords = keywords or {}
        self.fixed_scores = list(fixed_scores) if fixed_scores is not None else None
        self.poison = poison
        self.seen_tokens: List[List[str]] = []

    def create_document(self, tokens):
        self.seen_tokens.append(list(tokens))
        return list(tokens)

    def classify(self, document):
        if self.poison in document:
            raise RuntimeError("scoring failed")
        if self.fixed_scores is not None:
            return list(self.fixed_scores)
        scores = [0.0] * len(self.labels)
        for tok in document:
            label = self.keywords.get(tok)
            if label is not None:
                scores[self.labels.index(label)] += 1.0
        return scores


class FakeObjectStore:
    """Stands in for the Ray object store: put returns a ref, fetch resolves it."""

    def __init__(self):
        self.objects = {}
        self.fetches = 0

    def put(self, data):
        ref = f"ref-{len(self.objects)}"
        self.objects[ref] = data
        return ref

    def fetch(self, ref):
        self.fetches += 1
        return self.objects[ref]


def spam_classifier() -> FakeClassifier:
    return FakeClassifier(
        ["spam", "ham"],
        keywords={"offer": "spam", "buy": "spam", "now": "spam", "meeting": "ham", "lunch": "ham"},
    )


@pytest.fixture
def fake_provider(tmp_path: Path):
    """Register the "fake" provider; records the paths it was asked to load."""
    loaded: List[str] = []

    def provider(path: str) -> TextClassifier:
        if not Path(path).is_file():
            raise FileNotFoundError(path)
        loaded.append(path)
        return spam_classifier()

    register_classifier_provider("fake", provider)
    yield loaded
    unregister_classifier_provider("fake")


@pytest.fixture
def model_file(tmp_path: Path) -> Path:
    p = tmp_path / "models" / "spam.bin"
    p.parent.mkdir(parents=True)
    p.write_bytes(b"not a real model")
    return p


@pytest.fixture
def ctx() -> WorkerContext:
    return WorkerContext(classifier=spam_classifier())


@pytest.fixture
def write_corpus(tmp_path: Path):
    """Write records as a Parquet corpus directory and return its path."""

    def _write(records, name: str = "corpus", shards: int = 1) -> Path:
        out = tmp_path / name
        out.mkdir()
        records = list(records)
        per = max(1, -(-len(records) // shards))
        for i in range(shards):
            chunk = records[i * per:(i + 1) * per]
            pq.write_table(records_to_table(chunk), out / f"part-{i:05d}.parquet")
        return out

    return _write


def doc(key: str, text: Optional[str], metadata: Optional[Dict[str, str]] = None) -> Document:
    return Document(key=key, text=text, metadata=metadata)
