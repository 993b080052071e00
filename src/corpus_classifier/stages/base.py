"""Stage interface.

Stages must:
- accept a (key, Document) record
- return the record to emit (same key) and the MetricEvent it produced
- never raise for per-record conditions; only construction may fail
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Tuple
from ..pipeline.context import Document, MetricEvent

class Stage(ABC):
    name: str = "stage"
    layer: str = "enrichment"

    @abstractmethod
    def apply(self, key: str, doc: Document) -> Tuple[str, Document, MetricEvent]:
        ...
