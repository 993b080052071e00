"""Job-level counters.

Counters are grouped, monotonically increasing integers, e.g.
`("text classification", "MISSING TEXT")`.

In local mode the runner owns a single Counters instance. In ray_data mode
each worker keeps its own and pushes deltas to a CounterActor after every batch;
the driver reads the actor snapshot once the job has finished.
"""

from __future__ import annotations
from typing import Dict
from .context import MetricEvent

class Counters:
    def __init__(self, values: Dict[str, Dict[str, int]] | None = None):
        self._values: Dict[str, Dict[str, int]] = {}
        if values:
            for group, names in values.items():
                for name, amount in names.items():
                    self.incr(group, name, amount)

    def incr(self, group: str, name: str, amount: int = 1) -> None:
        if amount < 0:
            raise ValueError(f"counters only increase, got amount={amount}")
        grp = self._values.setdefault(group, {})
        grp[name] = grp.get(name, 0) + int(amount)

    def apply(self, event: MetricEvent) -> None:
        self.incr(event.group, event.name, event.amount)

    def get(self, group: str, name: str) -> int:
        return self._values.get(group, {}).get(name, 0)

    def total(self, group: str) -> int:
        return sum(self._values.get(group, {}).values())

    def merge(self, other: "Counters") -> None:
        for group, names in other.as_dict().items():
            for name, amount in names.items():
                self.incr(group, name, amount)

    def as_dict(self) -> Dict[str, Dict[str, int]]:
        return {g: dict(names) for g, names in self._values.items()}

    def __bool__(self) -> bool:
        return any(self._values.values())

    def __repr__(self) -> str:
        return f"Counters({self.as_dict()!r})"

class CounterActor:
    """Job-level counter sink shared by Ray workers.

    Wrapped with `ray.remote` by the ray_data runner; kept as a plain class so it
    can be exercised without a cluster.
    """

    def __init__(self):
        self._counters = Counters()

    def add(self, values: Dict[str, Dict[str, int]]) -> None:
        self._counters.merge(Counters(values))

    def snapshot(self) -> Dict[str, Dict[str, int]]:
        return self._counters.as_dict()
