"""fastText classifier provider.

Wraps a supervised fastText model (`.bin` / `.ftz`). Labels are exposed without
the `__label__` prefix and scores are the model probabilities, reordered to
follow `labels`.
"""

from __future__ import annotations
from typing import Any, Dict, List, Sequence
from .classifier import TextClassifier

# Try to import FastText
try:
    import fasttext
    FASTTEXT_AVAILABLE = True
except ImportError:
    FASTTEXT_AVAILABLE = False
    fasttext = None

LABEL_PREFIX = "__label__"

def _strip_prefix(label: str) -> str:
    return label[len(LABEL_PREFIX):] if label.startswith(LABEL_PREFIX) else label

class FastTextClassifier(TextClassifier):
    def __init__(self, model: Any):
        self.model = model
        self.labels: List[str] = [_strip_prefix(l) for l in model.get_labels()]
        self._index: Dict[str, int] = {l: i for i, l in enumerate(self.labels)}

    @classmethod
    def load(cls, path: str) -> "FastTextClassifier":
        if not FASTTEXT_AVAILABLE:
            raise ImportError("fasttext is required for the fasttext classifier provider (pip install 'corpus-classifier[fasttext]')")
        return cls(fasttext.load_model(path))

    def create_document(self, tokens: Sequence[str]) -> str:
        # fastText predicts on a single line of whitespace separated tokens
        return " ".join(tokens)

    def classify(self, document: str) -> List[float]:
        labels, probs = self.model.predict(document, k=-1)
        scores = [0.0] * len(self.labels)
        for label, prob in zip(labels, probs):
            scores[self._index[_strip_prefix(label)]] = float(prob)
        return scores
