"""Core pipeline data model.

Document is the record flowing through the classification stage.
The stage may add or overwrite a single metadata entry; key and text are
left untouched.

MetricEvent is the counter increment produced for each document.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional
import copy

COUNTER_GROUP = "text classification"
MISSING_TEXT = "MISSING TEXT"
EXCEPTION = "EXCEPTION"

@dataclass
class Document:
    # identity (opaque, owned by the caller)
    key: str
    text: Optional[str] = None

    # feature name -> value, created on first write
    metadata: Optional[Dict[str, str]] = field(default=None)

    def get_metadata(self, create: bool = False) -> Optional[Dict[str, str]]:
        if self.metadata is None and create:
            self.metadata = {}
        return self.metadata

    def copy(self) -> "Document":
        return copy.deepcopy(self)

@dataclass(frozen=True)
class MetricEvent:
    group: str
    name: str
    amount: int = 1
