"""Corpus record format.

A corpus is a sequence of (key, Document) pairs stored as Parquet shards.

Columns:
- key       string, non-null   opaque record key
- text      string             document body (null when absent)
- metadata  map<string,string> features (null until first write)

Readers accept a single file, a directory (all `*.parquet`, recursive) or a
glob pattern. Writers emit one `part-NNNNN.parquet` per shard.
"""

from __future__ import annotations
from typing import Iterable, Iterator, List, Tuple
import glob
import os
import logging
import pyarrow as pa
import pyarrow.parquet as pq

from ..pipeline.context import Document

log = logging.getLogger("corpus_classifier.storage.records")

Record = Tuple[str, Document]

SCHEMA_VERSION = "doc_v1"

def docs_schema() -> pa.Schema:
    return pa.schema([
        pa.field("key", pa.string(), nullable=False),
        pa.field("text", pa.string()),
        pa.field("metadata", pa.map_(pa.string(), pa.string())),
    ], metadata={"schema_version": SCHEMA_VERSION})

def _metadata_from_arrow(value) -> dict | None:
    if value is None:
        return None
    # map columns come back as a list of (key, value) tuples
    return {str(k): str(v) for k, v in (value.items() if isinstance(value, dict) else value)}

def table_to_records(table: pa.Table) -> List[Record]:
    missing = {"key", "text"} - set(table.column_names)
    if missing:
        raise ValueError(f"Corpus table is missing columns: {sorted(missing)}")
    has_meta = "metadata" in table.column_names
    records: List[Record] = []
    for row in table.to_pylist():
        key = row["key"]
        doc = Document(
            key=key,
            text=row.get("text"),
            metadata=_metadata_from_arrow(row.get("metadata")) if has_meta else None,
        )
        records.append((key, doc))
    return records

def records_to_table(records: Iterable[Record]) -> pa.Table:
    rows = []
    for key, doc in records:
        meta = doc.get_metadata()
        rows.append({
            "key": key,
            "text": doc.text,
            "metadata": list(meta.items()) if meta is not None else None,
        })
    return pa.Table.from_pylist(rows, schema=docs_schema())

def resolve_shards(path: str) -> List[str]:
    """Resolve a file, directory or glob pattern to an ordered list of shards."""
    if any(ch in path for ch in "*?["):
        return sorted(f for f in glob.glob(path, recursive=True) if os.path.isfile(f))
    if os.path.isdir(path):
        return sorted(glob.glob(os.path.join(path, "**", "*.parquet"), recursive=True))
    if os.path.isfile(path):
        return [path]
    raise FileNotFoundError(f"Input corpus not found: {path}")

class ParquetCorpusSource:
    """Streams (key, Document) records shard by shard."""

    def __init__(self, path: str):
        self.path = path
        self.shards = resolve_shards(path)

    def read_shard(self, shard: str) -> List[Record]:
        return table_to_records(pq.read_table(shard))

    def stream(self) -> Iterator[Record]:
        for shard in self.shards:
            yield from self.read_shard(shard)

class ParquetCorpusWriter:
    name = "parquet"

    def write_shard(self, records: Iterable[Record], *, out_dir: str, shard_idx: int) -> str:
        os.makedirs(out_dir, exist_ok=True)
        path = os.path.join(out_dir, f"part-{shard_idx:05d}.parquet")
        table = records_to_table(records)
        pq.write_table(table, path, compression="zstd")
        log.debug(f"Wrote {table.num_rows} records to {path}")
        return path
