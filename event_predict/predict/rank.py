from __future__ import annotations

from typing import Iterable

from .types import PredictionCandidate


def rank(candidates: Iterable[PredictionCandidate]) -> list[PredictionCandidate]:
    """Lowest total deviation first; ties keep the order they were found in."""
    return sorted(candidates, key=lambda c: c.deviation)


def best(candidates: Iterable[PredictionCandidate]) -> PredictionCandidate | None:
    ranked = rank(candidates)
    return ranked[0] if ranked else None
