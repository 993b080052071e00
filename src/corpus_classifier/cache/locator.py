"""Model locator.

Picks the one local copy of the model artifact a worker should load.

- No replicas (local mode): the configured path is read directly.
- Replicas: first replica whose path ends with the configured path wins.
- Otherwise the model is reported missing; callers decide what that means.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple
from urllib.parse import urlparse
import logging

log = logging.getLogger("corpus_classifier.cache")

DIRECT = "direct"
REPLICA = "replica"
MISSING = "missing"

def uri_path(uri: str) -> str:
    """Path part of a model location, scheme removed.

    `file:///models/m.bin` -> `/models/m.bin`, `s3://bucket/m.bin` -> `bucket/m.bin`,
    plain paths are returned unchanged.
    """
    parsed = urlparse(uri)
    if not parsed.scheme or len(parsed.scheme) == 1:
        # no scheme, or a Windows drive letter
        return uri
    if parsed.scheme == "file":
        return parsed.path
    return f"{parsed.netloc}{parsed.path}"

@dataclass(frozen=True)
class ModelResolution:
    model_path: str
    local_path: Optional[str]
    mode: str
    candidates: Tuple[str, ...] = ()

    @property
    def found(self) -> bool:
        return self.local_path is not None

def resolve_model(model_path: str, local_replicas: Optional[Sequence[str]]) -> ModelResolution:
    if not local_replicas:
        # local mode? read direct from the path
        return ModelResolution(model_path, uri_path(model_path), DIRECT)

    suffix = uri_path(model_path)
    candidates = tuple(local_replicas)
    for local_path in candidates:
        log.info(f"LocalCache : {local_path}")
        if local_path.endswith(suffix):
            return ModelResolution(model_path, local_path, REPLICA, candidates)
    return ModelResolution(model_path, None, MISSING, candidates)
