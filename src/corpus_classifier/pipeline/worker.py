"""Per-worker context.

Built once when a worker starts, before it handles any record:
1. read the job-level keys (model path, lowercase flag, feature name, provider)
2. resolve the local model replica
3. load the classifier through the configured provider

Any failure here is fatal for the worker and surfaces as WorkerInitError;
per-record failures are handled by the classification stage instead.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence
import logging

from ..cache.locator import resolve_model
from ..config import (
    MODEL_PATH_KEY, TOKENIZE_LOWERCASE_KEY, FEATURE_NAME_KEY, PROVIDER_KEY,
    DEFAULT_FEATURE_NAME, DEFAULT_PROVIDER, get_bool, get_str,
)
from ..plugins.classifier import TextClassifier
from ..plugins.registry import get_classifier_provider

log = logging.getLogger("corpus_classifier.worker")

class WorkerInitError(RuntimeError):
    """Unrecoverable worker startup failure (model missing or unloadable)."""

@dataclass(frozen=True)
class WorkerContext:
    classifier: TextClassifier
    lowercase: bool = False
    feature_name: str = DEFAULT_FEATURE_NAME
    model_path: Optional[str] = None

def build_worker_context(conf: Dict[str, Any], local_replicas: Optional[Sequence[str]] = None) -> WorkerContext:
    try:
        lowercase = get_bool(conf, TOKENIZE_LOWERCASE_KEY, False)
    except ValueError as exc:
        raise WorkerInitError(f"Invalid worker configuration: {exc}") from exc
    feature_name = get_str(conf, FEATURE_NAME_KEY, DEFAULT_FEATURE_NAME)
    provider_name = get_str(conf, PROVIDER_KEY, DEFAULT_PROVIDER)

    model_path = get_str(conf, MODEL_PATH_KEY)
    if not model_path:
        raise WorkerInitError(f"Missing job parameter {MODEL_PATH_KEY}")

    resolution = resolve_model(model_path, local_replicas)
    if not resolution.found:
        raise WorkerInitError(
            "Impossible to retrieve model from distributed cache: "
            f"no replica ends with {model_path} (candidates={list(resolution.candidates)})"
        )

    try:
        provider = get_classifier_provider(provider_name)
        classifier = provider(resolution.local_path)
    except Exception as exc:
        raise WorkerInitError(
            f"Impossible to retrieve model from distributed cache: "
            f"failed to load {resolution.local_path} with provider {provider_name}"
        ) from exc

    log.info(
        f"Worker ready model={resolution.local_path} mode={resolution.mode} "
        f"provider={provider_name} labels={len(classifier.labels)} "
        f"lowercase={lowercase} feature={feature_name}"
    )
    return WorkerContext(
        classifier=classifier,
        lowercase=lowercase,
        feature_name=feature_name,
        model_path=resolution.local_path,
    )
