from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from core.errors import EmptyIntersection
from core.series import LabeledSeries

SCALE_MAX = 100.0


@dataclass(frozen=True)
class NormalizedComparison:
    axis: Tuple[str, ...]
    norm_a: Tuple[float, ...]
    norm_b: Tuple[float, ...]
    orig_a: Tuple[float, ...]
    orig_b: Tuple[float, ...]


def normalize(values: Sequence[float]) -> Tuple[float, ...]:
    """Min-max scale into [0, 100] using the sequence's own range.

    A constant sequence maps to all zeros rather than dividing by zero.
    """
    arr = np.asarray(list(values), dtype="float64")
    if arr.size == 0:
        return ()
    lo = float(arr.min())
    hi = float(arr.max())
    if hi == lo:
        return tuple(0.0 for _ in range(arr.size))
    span = hi - lo
    if np.isfinite(span):
        scaled = (arr - lo) / span * SCALE_MAX
    else:
        # range overflows float64; halving keeps every difference finite
        scaled = (arr / 2 - lo / 2) / (hi / 2 - lo / 2) * SCALE_MAX
    return tuple(float(v) for v in scaled)


def normalize_comparison(a: LabeledSeries, b: LabeledSeries) -> NormalizedComparison:
    axis = tuple(sorted(set(a.labels()) & set(b.labels())))
    if not axis:
        raise EmptyIntersection(
            f"series share no labels ({len(a)} vs {len(b)} points)",
        )
    lookup_a = a.lookup()
    lookup_b = b.lookup()
    orig_a = tuple(lookup_a[label] for label in axis)
    orig_b = tuple(lookup_b[label] for label in axis)
    return NormalizedComparison(
        axis=axis,
        norm_a=normalize(orig_a),
        norm_b=normalize(orig_b),
        orig_a=orig_a,
        orig_b=orig_b,
    )
