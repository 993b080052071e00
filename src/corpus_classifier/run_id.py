"""Run ID resolution: explicit or auto-generated from the input location.

Auto-generated ids look like `<input-name>_<yyyy>_<HHMMSS>`, e.g. `news_2024_101530`.
"""

from __future__ import annotations
import os
import re
from datetime import datetime, timezone
from typing import Any, Dict

def _input_name(input_path: str) -> str:
    """Short name for the input: file stem or directory name."""
    raw = input_path.rstrip("/\\")
    name = os.path.basename(raw)
    if os.path.splitext(name)[1]:
        name = os.path.splitext(name)[0]
    # Safe for run_id: alphanumeric and underscore
    name = re.sub(r"[^\w\-]", "_", name)
    return name or "run"

def generate_run_id(input_path: str, now: datetime | None = None) -> str:
    ts = (now or datetime.now(timezone.utc)).strftime("%Y%m%d%H%M%S")
    return "_".join([_input_name(input_path), ts[:4], ts[-6:]])

def resolve_run_id(conf: Dict[str, Any], input_path: str) -> str:
    """Return run_id: explicit run.run_id, or auto-generated from the input path."""
    run = conf.get("run") or {}
    explicit = run.get("run_id")
    if explicit is not None and str(explicit).strip():
        return str(explicit).strip()
    return generate_run_id(input_path)
