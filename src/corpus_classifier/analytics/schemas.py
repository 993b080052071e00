"""Analytics event schemas.

One event is emitted per finished job with its final counters.
This module defines the event constructor; it does not validate.
"""

from __future__ import annotations
from typing import Any, Dict
import time

def make_event(
    *,
    run_id: str,
    job_name: str,
    stage: str,
    mode: str,
    counters: Dict[str, Dict[str, int]],
    status: str = "succeeded",
    elapsed_ms: int | None = None,
) -> Dict[str, Any]:
    return {
        "run_id": run_id,
        "job_name": job_name,
        "stage": stage,
        "mode": mode,
        "status": status,
        "timestamp_ms": int(time.time() * 1000),
        "elapsed_ms": elapsed_ms,
        # flattened for Parquet: one entry per (group, name)
        "counters": [
            {"group": group, "name": name, "value": int(value)}
            for group, names in sorted(counters.items())
            for name, value in sorted(names.items())
        ],
    }
