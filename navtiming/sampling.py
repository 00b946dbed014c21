"""
Sampling Gate

Admits a page view with probability 1/F. Consulted once per page view,
before any assembly work.
"""

from __future__ import annotations
from typing import Any, Optional
import math
import random

from .contracts.base import is_numeric


def parse_factor(value: Any) -> Optional[float]:
    """
    The sampling factor as a finite number, or None.

    Numeric strings ("1000", " 1e3 ") count as numbers, as the page
    configuration may carry the factor as text. Booleans, NaN and
    infinity do not.
    """
    if is_numeric(value):
        return value
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
        if math.isfinite(parsed):
            return parsed
    return None


class SamplingGate:
    """
    Probabilistic admission check.

    A factor that is not a number, or is below 1, never admits.
    """

    def __init__(self, factor: Any, rng: Optional[random.Random] = None):
        self._factor = factor
        self._parsed = parse_factor(factor)
        self._rng = rng or random.Random()

    @property
    def factor(self) -> Any:
        return self._factor

    @property
    def enabled(self) -> bool:
        return self._parsed is not None and self._parsed >= 1

    @property
    def probability(self) -> float:
        return 1.0 / self._parsed if self.enabled else 0.0

    def admit(self) -> bool:
        if not self.enabled:
            return False
        return math.floor(self._rng.random() * self._parsed) == 0


def in_sample(factor: Any, rng: Optional[random.Random] = None) -> bool:
    """One-shot admission check."""
    return SamplingGate(factor, rng).admit()
