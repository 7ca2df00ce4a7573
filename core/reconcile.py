from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from core.series import LabeledSeries


@dataclass(frozen=True)
class NamedSeries:
    name: str
    values: Tuple[Optional[float], ...]


@dataclass(frozen=True)
class ReconciledDataset:
    """Series aligned on a shared, sorted label axis; None marks a missing label."""

    axis: Tuple[str, ...]
    series: Tuple[NamedSeries, ...]

    def get(self, name: str) -> Optional[NamedSeries]:
        for s in self.series:
            if s.name == name:
                return s
        return None


def _align(series: LabeledSeries, axis: Tuple[str, ...]) -> Tuple[Optional[float], ...]:
    lookup = series.lookup()
    return tuple(lookup.get(label) for label in axis)


def reconcile(a: LabeledSeries, name_a: str, b: LabeledSeries, name_b: str) -> ReconciledDataset:
    # Plain string order; for 4-digit years this is chronological.
    axis = tuple(sorted(set(a.labels()) | set(b.labels())))
    return ReconciledDataset(
        axis=axis,
        series=(
            NamedSeries(name=name_a, values=_align(a, axis)),
            NamedSeries(name=name_b, values=_align(b, axis)),
        ),
    )
