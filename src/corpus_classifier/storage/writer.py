"""Job manifest writer.

The manifest sits next to the output shards (`_manifest.json`) and records
what produced them: run id, model, execution mode and final counters.
"""

from __future__ import annotations
from typing import Any, Dict, Optional
import json
from .base import get_storage_backend_for

MANIFEST_NAME = "_manifest.json"

def manifest_path(output_path: str) -> str:
    return output_path.rstrip("/") + "/" + MANIFEST_NAME

def write_manifest(path: str, manifest: Dict[str, Any], storage_options: Optional[Dict[str, Any]] = None) -> None:
    data = json.dumps(manifest, indent=2, ensure_ascii=False).encode("utf-8")
    get_storage_backend_for(path, storage_options).write_file(path, data)
