"""Job configuration.

Configuration is a YAML mapping. Flat dotted keys are job-level parameters
read by the workers; the `run`, `execution` and `storage` sections drive the driver.

Example:

    classification.tokenize: true
    classification.doc.feature.name: category
    classification.provider: fasttext
    run:
      log_dir: logs
      analytics_dir: analytics
    execution:
      mode: ray_data
      concurrency: 8
      batch_size: 512
    storage:
      region: eu-west-1

`-D key=value` options on the command line override file values. Keys starting
with a section name (`run.`, `execution.`, `storage.`) land in that section,
e.g. `-D execution.mode=ray_data`.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, Optional
import copy
import yaml

MODEL_PATH_KEY = "textclassif.model.name"
TOKENIZE_LOWERCASE_KEY = "classification.tokenize"
FEATURE_NAME_KEY = "classification.doc.feature.name"
PROVIDER_KEY = "classification.provider"

DEFAULT_FEATURE_NAME = "label"
DEFAULT_PROVIDER = "fasttext"

SECTIONS = ("run", "execution", "storage")

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}

def load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}

def parse_override(item: str) -> tuple[str, str]:
    """Split a `key=value` override; raises ValueError when malformed."""
    key, sep, value = item.partition("=")
    key = key.strip()
    if not sep or not key:
        raise ValueError(f"Expected key=value, got {item!r}")
    return key, value

def load_job_conf(path: Optional[str] = None, overrides: Iterable[str] = ()) -> Dict[str, Any]:
    conf = copy.deepcopy(load_yaml(path)) if path else {}
    if not isinstance(conf, dict):
        raise ValueError(f"Job configuration must be a mapping: {path}")
    for item in overrides:
        key, value = parse_override(item)
        section, dot, sub = key.partition(".")
        if dot and sub and section in SECTIONS:
            target = conf.get(section)
            if target is None:
                target = conf[section] = {}
            elif not isinstance(target, dict):
                raise ValueError(f"Configuration section '{section}' must be a mapping")
            target[sub] = value
        else:
            conf[key] = value
    return conf

def get_str(conf: Dict[str, Any], key: str, default: Optional[str] = None) -> Optional[str]:
    value = conf.get(key)
    if value is None:
        return default
    return str(value)

def get_bool(conf: Dict[str, Any], key: str, default: bool = False) -> bool:
    value = conf.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"{key} must be a boolean, got {value!r}")

def get_section(conf: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = conf.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Configuration section '{name}' must be a mapping")
    return section
