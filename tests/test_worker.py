"""Unit tests for worker context construction."""

import pytest

from corpus_classifier.config import (
    FEATURE_NAME_KEY, MODEL_PATH_KEY, PROVIDER_KEY, TOKENIZE_LOWERCASE_KEY,
)
from corpus_classifier.pipeline.worker import WorkerInitError, build_worker_context


def _conf(model_file, **extra):
    conf = {MODEL_PATH_KEY: str(model_file), PROVIDER_KEY: "fake"}
    conf.update(extra)
    return conf


class TestBuildWorkerContext:
    def test_defaults(self, fake_provider, model_file):
        ctx = build_worker_context(_conf(model_file))
        assert ctx.lowercase is False
        assert ctx.feature_name == "label"
        assert ctx.classifier.labels == ["spam", "ham"]
        assert fake_provider == [str(model_file)]

    def test_reads_flags(self, fake_provider, model_file):
        ctx = build_worker_context(_conf(model_file, **{
            TOKENIZE_LOWERCASE_KEY: "true",
            FEATURE_NAME_KEY: "category",
        }))
        assert ctx.lowercase is True
        assert ctx.feature_name == "category"

    def test_loads_matching_replica(self, fake_provider, model_file, tmp_path):
        replica = tmp_path / "cache" / str(model_file).lstrip("/")
        replica.parent.mkdir(parents=True)
        replica.write_bytes(b"replica")
        ctx = build_worker_context(_conf(model_file), [str(tmp_path / "cache" / "x.bin"), str(replica)])
        assert ctx.model_path == str(replica)
        assert fake_provider == [str(replica)]

    def test_context_is_immutable(self, fake_provider, model_file):
        ctx = build_worker_context(_conf(model_file))
        with pytest.raises(AttributeError):
            ctx.feature_name = "other"

    def test_missing_model_key_is_fatal(self, fake_provider):
        with pytest.raises(WorkerInitError):
            build_worker_context({PROVIDER_KEY: "fake"})

    def test_unmatched_replicas_are_fatal(self, fake_provider, model_file):
        with pytest.raises(WorkerInitError, match="distributed cache"):
            build_worker_context(_conf(model_file), ["/cache/elsewhere.bin"])

    def test_load_failure_is_fatal_and_chained(self, fake_provider, tmp_path):
        with pytest.raises(WorkerInitError) as ei:
            build_worker_context(_conf(tmp_path / "missing.bin"))
        assert isinstance(ei.value.__cause__, FileNotFoundError)

    def test_unknown_provider_is_fatal(self, model_file):
        with pytest.raises(WorkerInitError) as ei:
            build_worker_context({MODEL_PATH_KEY: str(model_file), PROVIDER_KEY: "nope"})
        assert isinstance(ei.value.__cause__, KeyError)

    def test_invalid_boolean_is_fatal(self, fake_provider, model_file):
        with pytest.raises(WorkerInitError):
            build_worker_context(_conf(model_file, **{TOKENIZE_LOWERCASE_KEY: "maybe"}))
