"""Job definition and submission.

A ClassifierJob is a map-only pass over a Parquet corpus:
- input and output are (key, Document) Parquet shards
- zero reduce tasks, always
- the model path travels as a job-level parameter
- the model file is requested for replication to every worker

Execution modes (execution.mode):
- local: in-process reference runner; no replication, workers load the model path directly
- ray_data: Ray Data pipeline; the model is published once and localized on each worker
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import copy
import logging

from ..config import MODEL_PATH_KEY, get_section
from ..storage.base import get_storage_backend_for
from .counters import Counters

log = logging.getLogger("corpus_classifier.job")

LOCAL = "local"
RAY_DATA = "ray_data"
MODES = (LOCAL, RAY_DATA)

@dataclass
class ClassifierJob:
    name: str
    input_path: str
    output_path: str
    model_path: str
    conf: Dict[str, Any] = field(default_factory=dict)
    num_reduce_tasks: int = 0
    input_format: str = "parquet"
    output_format: str = "parquet"
    # files every worker needs locally before its first record
    cache_uris: List[str] = field(default_factory=list)

    @property
    def mode(self) -> str:
        return str(get_section(self.conf, "execution").get("mode", LOCAL)).lower()

    @property
    def storage_options(self) -> Dict[str, Any]:
        return get_section(self.conf, "storage")

def configure_job(input_path: str, output_path: str, model_path: str, conf: Optional[Dict[str, Any]] = None) -> ClassifierJob:
    job_conf = copy.deepcopy(conf) if conf else {}
    job_conf[MODEL_PATH_KEY] = model_path
    job = ClassifierJob(
        name=f"ClassifierJob : {input_path}",
        input_path=input_path,
        output_path=output_path,
        model_path=model_path,
        conf=job_conf,
    )
    # map-only annotation pass
    job.num_reduce_tasks = 0
    job.cache_uris.append(model_path)
    if job.mode not in MODES:
        raise ValueError(f"Unknown execution mode: {job.mode}. Available: {list(MODES)}")
    return job

def check_output_spec(job: ClassifierJob) -> None:
    """Refuse to run into an existing output location."""
    if get_storage_backend_for(job.output_path, job.storage_options).exists(job.output_path):
        raise FileExistsError(f"Output directory {job.output_path} already exists")

def submit_job(job: ClassifierJob, ray_cfg: Optional[Dict[str, Any]] = None) -> Counters:
    """Run the job synchronously and return its final counters."""
    log.info(f"Submitting job name='{job.name}' mode={job.mode} output={job.output_path} reducers={job.num_reduce_tasks}")
    if job.mode == RAY_DATA:
        from .ray_data_build import build_ray_data
        return build_ray_data(job, ray_cfg or {})
    from .build import build_local
    return build_local(job)

def cleanup_output(output_path: str, storage_options: Optional[Dict[str, Any]] = None) -> bool:
    """Best-effort recursive delete of a job output; safe to call repeatedly."""
    try:
        deleted = get_storage_backend_for(output_path, storage_options).delete(output_path, recursive=True)
    except Exception:
        log.exception(f"Could not delete output {output_path}")
        return False
    if deleted:
        log.info(f"Deleted partial output {output_path}")
    return deleted
