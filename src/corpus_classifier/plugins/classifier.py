"""Text classifier adapter plugin.

The classification library is consumed as an opaque capability: a provider
turns a local model file into a TextClassifier, and the stage only relies on
the contract below.

Minimal contract:
- labels: fixed label set, defines the order of the score vector
- create_document(tokens) -> classifier-native representation
- classify(document) -> one score per label
- best_label(scores) -> label with the maximum score

Ties in best_label are resolved by the provider; the default keeps the first
maximum in label order.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Sequence
import numpy as np

class TextClassifier(ABC):
    """Base classifier adapter."""
    labels: List[str]

    @abstractmethod
    def create_document(self, tokens: Sequence[str]) -> Any:
        """Build the representation consumed by classify()."""
        raise NotImplementedError

    @abstractmethod
    def classify(self, document: Any) -> Sequence[float]:
        """Score a document against every label."""
        raise NotImplementedError

    def best_label(self, scores: Sequence[float]) -> str:
        if len(scores) != len(self.labels):
            raise ValueError(f"expected {len(self.labels)} scores, got {len(scores)}")
        return self.labels[int(np.argmax(np.asarray(scores, dtype=np.float64)))]

# provider: local model path -> TextClassifier
ClassifierProvider = Callable[[str], TextClassifier]
