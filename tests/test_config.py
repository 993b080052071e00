"""Unit tests for job configuration helpers."""

import pytest

from corpus_classifier.config import get_bool, get_section, get_str, load_job_conf, parse_override
from corpus_classifier.run_id import generate_run_id, resolve_run_id


class TestGetBool:
    @pytest.mark.parametrize("value", [True, "true", "TRUE", "1", "yes", "on"])
    def test_true_values(self, value):
        assert get_bool({"k": value}, "k") is True

    @pytest.mark.parametrize("value", [False, "false", "0", "no", "Off"])
    def test_false_values(self, value):
        assert get_bool({"k": value}, "k", default=True) is False

    def test_default_when_absent(self):
        assert get_bool({}, "k") is False
        assert get_bool({}, "k", default=True) is True

    def test_rejects_garbage(self):
        with pytest.raises(ValueError):
            get_bool({"k": "maybe"}, "k")


class TestLoadJobConf:
    def test_file_then_overrides(self, tmp_path):
        cfg = tmp_path / "job.yaml"
        cfg.write_text(
            "classification.tokenize: true\n"
            "classification.doc.feature.name: category\n"
            "execution:\n  mode: local\n"
        )
        conf = load_job_conf(str(cfg), ["classification.doc.feature.name=topic", "extra=a=b"])
        assert conf["classification.tokenize"] is True
        assert conf["classification.doc.feature.name"] == "topic"
        assert conf["extra"] == "a=b"
        assert get_section(conf, "execution") == {"mode": "local"}

    def test_no_file(self):
        assert load_job_conf(None, ["a=1"]) == {"a": "1"}

    def test_empty_file(self, tmp_path):
        cfg = tmp_path / "empty.yaml"
        cfg.write_text("")
        assert load_job_conf(str(cfg)) == {}

    def test_malformed_override(self):
        with pytest.raises(ValueError):
            parse_override("novalue")
        with pytest.raises(ValueError):
            parse_override("=value")

    def test_get_str(self):
        assert get_str({"k": 3}, "k") == "3"
        assert get_str({}, "k", "label") == "label"

    def test_section_overrides(self):
        conf = load_job_conf(None, ["execution.mode=ray_data", "run.log_dir=x", "storage.region=eu-west-1"])
        assert conf == {
            "execution": {"mode": "ray_data"},
            "run": {"log_dir": "x"},
            "storage": {"region": "eu-west-1"},
        }

    def test_section_override_merges_into_file(self, tmp_path):
        cfg = tmp_path / "job.yaml"
        cfg.write_text("execution:\n  mode: local\n  concurrency: 4\n")
        conf = load_job_conf(str(cfg), ["execution.mode=ray_data"])
        assert get_section(conf, "execution") == {"mode": "ray_data", "concurrency": 4}

    def test_job_keys_stay_flat(self):
        conf = load_job_conf(None, ["classification.tokenize=true", "execution=x.y"])
        assert conf == {"classification.tokenize": "true", "execution": "x.y"}

    def test_override_into_scalar_section(self, tmp_path):
        cfg = tmp_path / "job.yaml"
        cfg.write_text("run: oops\n")
        with pytest.raises(ValueError):
            load_job_conf(str(cfg), ["run.log_dir=x"])

    def test_section_must_be_mapping(self):
        with pytest.raises(ValueError):
            get_section({"run": "oops"}, "run")
        assert get_section({}, "run") == {}


class TestRunId:
    def test_explicit(self):
        assert resolve_run_id({"run": {"run_id": " nightly "}}, "/data/news") == "nightly"

    def test_generated_from_directory(self):
        from datetime import datetime, timezone
        now = datetime(2024, 5, 6, 10, 15, 30, tzinfo=timezone.utc)
        assert generate_run_id("/data/news/", now) == "news_2024_101530"
        assert generate_run_id("/data/corpus.parquet", now) == "corpus_2024_101530"
