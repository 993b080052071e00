"""Plugin registry.

Classifier providers are registered by name and selected per job with the
`classification.provider` key. The fastText provider is registered on import.

For now, we keep a simple in-process registry.
"""

from __future__ import annotations
from typing import Dict, List
from .classifier import ClassifierProvider
from .fasttext_classifier import FastTextClassifier

_PROVIDERS: Dict[str, ClassifierProvider] = {
    "fasttext": FastTextClassifier.load,
}

def register_classifier_provider(name: str, provider: ClassifierProvider) -> None:
    _PROVIDERS[name] = provider

def unregister_classifier_provider(name: str) -> None:
    _PROVIDERS.pop(name, None)

def list_classifier_providers() -> List[str]:
    return list(_PROVIDERS.keys())

def get_classifier_provider(name: str) -> ClassifierProvider:
    if name not in _PROVIDERS:
        raise KeyError(
            f"Unknown classifier provider: {name}. "
            f"Available: {list(_PROVIDERS)}. "
            f"Register with register_classifier_provider()"
        )
    return _PROVIDERS[name]
