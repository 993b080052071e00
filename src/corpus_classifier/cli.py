"""Job driver entrypoint.

Usage:
- `corpus-classifier -i <input corpus> -o <output corpus> -m <model> [-c job.yaml] [-D key=value ...]`

Exit status:
- 0: job succeeded, or help was requested
- 1: job failed (partial output is deleted)
- 2: invalid invocation (usage is printed, nothing runs)
"""

from __future__ import annotations
import argparse
import logging
import sys
import time
from typing import List, Optional
import yaml

from .config import load_job_conf, load_yaml, get_section
from .logging_ import setup_logging
from .run_id import resolve_run_id
from .pipeline.counters import Counters
from .pipeline.job import ClassifierJob, configure_job, check_output_spec, submit_job, cleanup_output
from .storage.writer import manifest_path, write_manifest

log = logging.getLogger("corpus_classifier.cli")

PROG = "ClassifierJob"
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

class UsageError(Exception):
    pass

class _Parser(argparse.ArgumentParser):
    def error(self, message: str):
        raise UsageError(message)

def build_parser() -> argparse.ArgumentParser:
    p = _Parser(prog=PROG, add_help=False,
                description="Adds a document feature computed from its text by a text classification model")
    p.add_argument("-h", "--help", action="store_true", help="print this message")
    p.add_argument("-i", "--input", help="input corpus")
    p.add_argument("-o", "--output", help="output corpus")
    p.add_argument("-m", "--model", help="location of the model")
    p.add_argument("-c", "--config", help="job configuration (YAML)")
    p.add_argument("-D", dest="define", action="append", default=[], metavar="KEY=VALUE",
                   help="job parameter override, repeatable")
    p.add_argument("--ray-config", help="Ray configuration (YAML), ray_data mode only")
    return p

def _log_counters(counters: Counters) -> None:
    for group, names in sorted(counters.as_dict().items()):
        log.info(f"Counters group={group}")
        for name, value in sorted(names.items()):
            log.info(f"  {name}={value}")

def _emit_analytics(analytics_dir: Optional[str], job: ClassifierJob, run_id: str,
                    counters: Counters, status: str, elapsed_ms: int) -> None:
    if not analytics_dir:
        return
    try:
        from .analytics.schemas import make_event
        from .analytics.sink import AnalyticsSink
        ev = make_event(run_id=run_id, job_name=job.name, stage="text_classification",
                        mode=job.mode, counters=counters.as_dict(), status=status,
                        elapsed_ms=elapsed_ms)
        path = AnalyticsSink(analytics_dir).emit(ev)
        log.info(f"Analytics event: {path}")
    except Exception as e:
        log.warning(f"Could not emit analytics event: {e}")

def run(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        print(f"{PROG}: {e}", file=sys.stderr)
        parser.print_help(sys.stdout)
        return EXIT_USAGE

    if args.help:
        parser.print_help(sys.stdout)
        return EXIT_OK
    if not args.input or not args.output or not args.model:
        parser.print_help(sys.stdout)
        return EXIT_USAGE

    try:
        conf = load_job_conf(args.config, args.define)
        ray_cfg = load_yaml(args.ray_config) if args.ray_config else {}
        run_cfg = get_section(conf, "run")
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"{PROG}: invalid configuration: {e}", file=sys.stderr)
        return EXIT_USAGE

    run_id = resolve_run_id(conf, args.input)
    log_path = setup_logging(run_cfg.get("log_dir", "logs"), run_id)
    log.info(f"run_id={run_id} log={log_path}")

    try:
        job = configure_job(args.input, args.output, args.model, conf)
        check_output_spec(job)
    except Exception as e:
        # nothing was submitted, so there is no output of ours to clean up
        log.error(f"Cannot configure job: {e}", exc_info=not isinstance(e, (ValueError, FileExistsError)))
        return EXIT_FAILURE

    started = time.time()
    try:
        counters = submit_job(job, ray_cfg)
        elapsed_ms = int((time.time() - started) * 1000)
        write_manifest(manifest_path(job.output_path), {
            "run_id": run_id,
            "job_name": job.name,
            "input": job.input_path,
            "output": job.output_path,
            "model": job.model_path,
            "mode": job.mode,
            "num_reduce_tasks": job.num_reduce_tasks,
            "elapsed_ms": elapsed_ms,
            "counters": counters.as_dict(),
        }, job.storage_options)
    except Exception:
        log.exception(f"Job failed: {job.name}")
        cleanup_output(job.output_path, job.storage_options)
        _emit_analytics(run_cfg.get("analytics_dir"), job, run_id, Counters(), "failed",
                        int((time.time() - started) * 1000))
        return EXIT_FAILURE

    _log_counters(counters)
    _emit_analytics(run_cfg.get("analytics_dir"), job, run_id, counters, "succeeded", elapsed_ms)
    log.info(f"Job complete: {job.name} output={job.output_path}")
    return EXIT_OK

def main() -> None:
    sys.exit(run(sys.argv[1:]))

if __name__ == "__main__":
    main()
