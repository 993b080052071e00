"""Text classification stage.

Per document:
1. text missing or shorter than 2 chars -> emit unchanged, count MISSING TEXT
2. tokenize (lowercased when classification.tokenize is set)
3. classify -> Labeled(label) or Failed(reason)
   Failed -> emit unchanged, count EXCEPTION, log the error
4. Labeled -> metadata[feature name] = label (overwrite), count the label

The record key and the text body are never modified.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence, Tuple, Union
import logging

from ..pipeline.context import Document, MetricEvent, COUNTER_GROUP, MISSING_TEXT, EXCEPTION
from ..pipeline.counters import Counters
from ..pipeline.worker import WorkerContext
from ..utils.text import tokenize
from .base import Stage

log = logging.getLogger("corpus_classifier.stage")

MIN_TEXT_CHARS = 2

@dataclass(frozen=True)
class Labeled:
    label: str

@dataclass(frozen=True)
class Failed:
    reason: str
    error: Optional[BaseException] = None

ClassifyResult = Union[Labeled, Failed]

def has_text(doc: Document) -> bool:
    return doc.text is not None and len(doc.text) >= MIN_TEXT_CHARS

def classify_tokens(ctx: WorkerContext, tokens: Sequence[str]) -> ClassifyResult:
    classifier = ctx.classifier
    try:
        tcdoc = classifier.create_document(tokens)
        scores = classifier.classify(tcdoc)
        return Labeled(classifier.best_label(scores))
    except Exception as exc:
        return Failed(f"{type(exc).__name__}: {exc}", exc)

class TextClassificationStage(Stage):
    name = "text_classification"
    layer = "enrichment"

    def __init__(self, ctx: WorkerContext):
        self.ctx = ctx

    def apply(self, key: str, doc: Document) -> Tuple[str, Document, MetricEvent]:
        if not has_text(doc):
            return key, doc, MetricEvent(COUNTER_GROUP, MISSING_TEXT)

        tokens = tokenize(doc.text, lowercase=self.ctx.lowercase)
        result = classify_tokens(self.ctx, tokens)

        if isinstance(result, Failed):
            log.warning(f"Classification failed key={key}: {result.reason}", exc_info=result.error)
            return key, doc, MetricEvent(COUNTER_GROUP, EXCEPTION)

        doc.get_metadata(create=True)[self.ctx.feature_name] = result.label
        return key, doc, MetricEvent(COUNTER_GROUP, result.label)

def classify_partition(
    records: Iterable[Tuple[str, Document]],
    ctx: WorkerContext,
    counters: Counters,
) -> Iterator[Tuple[str, Document]]:
    """Run the stage over a partition, one record at a time."""
    stage = TextClassificationStage(ctx)
    for key, doc in records:
        key, doc, event = stage.apply(key, doc)
        counters.apply(event)
        yield key, doc
