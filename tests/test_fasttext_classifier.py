"""Unit tests for the fastText provider adapter (model object faked)."""

import numpy as np
import pytest

from corpus_classifier.plugins import fasttext_classifier
from corpus_classifier.plugins.fasttext_classifier import FastTextClassifier
from corpus_classifier.plugins.registry import get_classifier_provider, list_classifier_providers


class FakeFastTextModel:
    def __init__(self):
        self.calls = []

    def get_labels(self):
        return ["__label__spam", "__label__ham", "__label__news"]

    def predict(self, text, k=1):
        self.calls.append((text, k))
        return ("__label__ham", "__label__spam", "__label__news"), np.array([0.7, 0.2, 0.1])


class TestFastTextClassifier:
    def test_labels_without_prefix(self):
        assert FastTextClassifier(FakeFastTextModel()).labels == ["spam", "ham", "news"]

    def test_document_is_one_line(self):
        clf = FastTextClassifier(FakeFastTextModel())
        assert clf.create_document(["buy", "now"]) == "buy now"

    def test_scores_follow_label_order(self):
        model = FakeFastTextModel()
        clf = FastTextClassifier(model)
        scores = clf.classify("buy now")
        assert scores == pytest.approx([0.2, 0.7, 0.1])
        assert model.calls == [("buy now", -1)]
        assert clf.best_label(scores) == "ham"

    def test_load_without_fasttext(self, monkeypatch):
        monkeypatch.setattr(fasttext_classifier, "FASTTEXT_AVAILABLE", False)
        with pytest.raises(ImportError):
            FastTextClassifier.load("/models/x.bin")


class TestRegistry:
    def test_fasttext_registered_by_default(self):
        assert "fasttext" in list_classifier_providers()

    def test_unknown_provider(self):
        with pytest.raises(KeyError, match="Available"):
            get_classifier_provider("nope")
