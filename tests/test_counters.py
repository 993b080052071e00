"""Unit tests for job counters."""

import pytest

from corpus_classifier.pipeline.context import MetricEvent
from corpus_classifier.pipeline.counters import CounterActor, Counters


class TestCounters:
    def test_incr_and_get(self):
        c = Counters()
        c.incr("g", "a")
        c.incr("g", "a", 2)
        assert c.get("g", "a") == 3
        assert c.get("g", "missing") == 0
        assert c.get("other", "a") == 0

    def test_apply_event(self):
        c = Counters()
        c.apply(MetricEvent("text classification", "spam"))
        assert c.as_dict() == {"text classification": {"spam": 1}}

    def test_counters_never_decrease(self):
        with pytest.raises(ValueError):
            Counters().incr("g", "a", -1)

    def test_merge(self):
        a = Counters({"g": {"x": 1}})
        b = Counters({"g": {"x": 2, "y": 1}, "h": {"z": 4}})
        a.merge(b)
        assert a.as_dict() == {"g": {"x": 3, "y": 1}, "h": {"z": 4}}

    def test_empty_is_falsy(self):
        assert not Counters()
        assert Counters({"g": {"x": 1}})

    def test_as_dict_is_a_copy(self):
        c = Counters({"g": {"x": 1}})
        c.as_dict()["g"]["x"] = 100
        assert c.get("g", "x") == 1


class TestCounterActor:
    def test_accumulates_worker_deltas(self):
        actor = CounterActor()
        actor.add({"g": {"spam": 2}})
        actor.add({"g": {"spam": 1, "ham": 1}})
        assert actor.snapshot() == {"g": {"spam": 3, "ham": 1}}
