"""Analytics sink.

Job events are appended to Parquet, partitioned by day:
`<analytics_dir>/events/date=YYYY-MM-DD/events.parquet`

Dashboards read these files to follow label distributions across runs.
"""

from __future__ import annotations
from typing import Any, Dict, List
import os
import logging
from datetime import datetime, timezone
import pyarrow as pa
import pyarrow.parquet as pq

log = logging.getLogger("corpus_classifier.analytics")

def event_schema() -> pa.Schema:
    return pa.schema([
        ("run_id", pa.string()),
        ("job_name", pa.string()),
        ("stage", pa.string()),
        ("mode", pa.string()),
        ("status", pa.string()),
        ("timestamp_ms", pa.int64()),
        ("elapsed_ms", pa.int64()),
        ("counters", pa.list_(pa.struct([
            ("group", pa.string()),
            ("name", pa.string()),
            ("value", pa.int64()),
        ]))),
    ])

class AnalyticsSink:
    def __init__(self, out_dir: str):
        self.events_dir = os.path.join(out_dir, "events")
        os.makedirs(self.events_dir, exist_ok=True)

    def emit(self, event: Dict[str, Any]) -> str:
        date = datetime.fromtimestamp(event["timestamp_ms"] / 1000, tz=timezone.utc).date().isoformat()
        p = os.path.join(self.events_dir, f"date={date}", "events.parquet")
        os.makedirs(os.path.dirname(p), exist_ok=True)
        self._append_parquet(p, [event])
        return p

    def _append_parquet(self, path: str, rows: List[Dict[str, Any]]) -> None:
        table = pa.Table.from_pylist(rows, schema=event_schema())
        if os.path.exists(path) and os.path.getsize(path) > 0:
            existing = pq.read_table(path, schema=event_schema())
            table = pa.concat_tables([existing, table])
        pq.write_table(table, path, compression="zstd")
        log.debug(f"Appended {len(rows)} event(s) to {path}")
