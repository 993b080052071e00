"""Local job runner.

Reference implementation of the execution engine:
- simple and deterministic, one worker, records handled sequentially
- no artifact replication: the worker loads the model path directly
- one output shard per input shard

This is what tests and small corpora use; ray_data_build is the distributed runner.
"""

from __future__ import annotations
import logging
from tqdm import tqdm

from ..storage.records import ParquetCorpusSource, ParquetCorpusWriter
from ..stages.text_classification import classify_partition
from .counters import Counters
from .job import ClassifierJob
from .worker import build_worker_context

log = logging.getLogger("corpus_classifier.build")

def build_local(job: ClassifierJob) -> Counters:
    source = ParquetCorpusSource(job.input_path)
    log.info(f"Local run: {len(source.shards)} input shard(s) from {job.input_path}")

    # local mode: nothing was replicated
    ctx = build_worker_context(job.conf, local_replicas=None)

    counters = Counters()
    writer = ParquetCorpusWriter()
    records_in = 0
    for shard_idx, shard in enumerate(tqdm(source.shards, desc="classify", unit="shard")):
        records = source.read_shard(shard)
        records_in += len(records)
        annotated = list(classify_partition(records, ctx, counters))
        path = writer.write_shard(annotated, out_dir=job.output_path, shard_idx=shard_idx)
        log.debug(f"shard={shard} records={len(records)} -> {path}")

    log.info(f"Local run complete: records={records_in} shards={len(source.shards)}")
    return counters
