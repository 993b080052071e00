"""Ray Data job runner.

Pipeline:
ray.data.read_parquet(input) ->
  map_batches(ClassifierMapper)   one mapper instance per worker
-> write_parquet(output)

Worker startup (ClassifierMapper.__init__) localizes the model published by the
driver and builds the WorkerContext; a WorkerInitError there fails the job.
Counter deltas are pushed to a CounterActor after every batch.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional
import logging
import ray
import ray.data
import pyarrow as pa

from ..cache.distributed import CacheFile, DistributedCache
from ..storage.records import records_to_table, table_to_records
from ..stages.text_classification import classify_partition
from .counters import Counters, CounterActor
from .job import ClassifierJob
from .worker import build_worker_context

log = logging.getLogger("corpus_classifier.ray_data")

class ClassifierMapper:
    def __init__(
        self,
        conf: Dict[str, Any],
        cache_files: List[CacheFile],
        cache_dir: Optional[str],
        counter_actor,
        fetch: Optional[Callable[[Any], bytes]] = None,
        wait: Optional[Callable[[Any], Any]] = None,
    ):
        cache = DistributedCache(cache_dir, fetch=fetch)
        cache.localize(cache_files)
        self.ctx = build_worker_context(conf, cache.local_cache_files())
        self.counter_actor = counter_actor
        self._wait = wait or ray.get

    def __call__(self, batch: pa.Table) -> pa.Table:
        counters = Counters()
        annotated = list(classify_partition(table_to_records(batch), self.ctx, counters))
        if counters:
            self._wait(self.counter_actor.add.remote(counters.as_dict()))
        return records_to_table(annotated)

def build_ray_data(job: ClassifierJob, ray_cfg: Dict[str, Any]) -> Counters:
    execution = job.conf.get("execution") or {}
    concurrency = int(execution.get("concurrency", 2))
    batch_size = int(execution.get("batch_size", 512))
    cache_dir = execution.get("cache_dir")

    addr = ray_cfg.get("ray", {}).get("address", "auto")
    ray.init(address=addr, ignore_reinit_error=True)

    # push the model to every worker
    cache = DistributedCache(cache_dir, storage_options=job.storage_options)
    cache_files = [cache.add_cache_file(uri) for uri in job.cache_uris]

    counter_actor = ray.remote(CounterActor).remote()

    log.info(f"[ray.data] job='{job.name}' concurrency={concurrency} batch_size={batch_size}")
    ds = ray.data.read_parquet(job.input_path)
    ds = ds.map_batches(
        ClassifierMapper,
        fn_constructor_kwargs={
            "conf": job.conf,
            "cache_files": cache_files,
            "cache_dir": cache_dir,
            "counter_actor": counter_actor,
        },
        batch_size=batch_size,
        batch_format="pyarrow",
        concurrency=concurrency,
    )
    ds.write_parquet(job.output_path)

    counters = Counters(ray.get(counter_actor.snapshot.remote()))
    log.info(f"[ray.data] job='{job.name}' finished")
    return counters
