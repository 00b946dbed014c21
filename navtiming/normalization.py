"""
Timing Normalizer
=================

Converts absolute Navigation Timing markers into durations relative to
the navigation origin.

GUARANTEES:
- Relative markers are kept only when numeric and strictly positive;
  a relative 0 means the phase did not apply and is omitted
- dnsLookup and redirecting are plain differences and may be 0
- Invalid values are omitted, never replaced by a placeholder
"""

from __future__ import annotations
from typing import Any, Optional, Tuple

from .contracts.base import RawTiming, is_numeric
from .contracts.events import NormalizedTiming


RELATIVE_MARKERS: Tuple[str, ...] = (
    'connectEnd',
    'connectStart',
    'domComplete',
    'domInteractive',
    'fetchStart',
    'loadEventEnd',
    'loadEventStart',
    'requestStart',
    'responseEnd',
    'responseStart',
)


def _difference(end: Any, start: Any) -> Optional[float]:
    if is_numeric(end) and is_numeric(start):
        return end - start
    return None


def navigation_origin(timing: RawTiming) -> Any:
    """
    The reference timestamp all relative markers are measured from.

    IE 9 reports 0 for navigationStart instead of falling back to
    fetchStart as the standard requires, so a falsy or non-numeric
    navigationStart is replaced by fetchStart.
    """
    if is_numeric(timing.navigation_start) and timing.navigation_start:
        return timing.navigation_start
    return timing.fetch_start


def normalize(timing: RawTiming) -> NormalizedTiming:
    """Derive the relative durations of one snapshot."""
    origin = navigation_origin(timing)
    result: NormalizedTiming = {}

    for marker in RELATIVE_MARKERS:
        measure = _difference(timing.get(marker), origin)
        if measure is not None and measure > 0:
            result[marker] = measure

    if timing.domain_lookup_start:
        dns_lookup = _difference(timing.domain_lookup_end, timing.domain_lookup_start)
        if dns_lookup is not None:
            result['dnsLookup'] = dns_lookup

    if timing.redirect_start:
        result['redirectCount'] = timing.redirect_count
        redirecting = _difference(timing.redirect_end, timing.redirect_start)
        if redirecting is not None:
            result['redirecting'] = redirecting

    return result


def save_duration(timing: Optional[RawTiming]) -> Optional[float]:
    """
    Server time-to-first-byte after an edit: responseStart - navigationStart.

    None unless navigationStart is a positive number.
    """
    if timing is None:
        return None
    start = timing.navigation_start
    if not (is_numeric(start) and start > 0):
        return None
    return _difference(timing.response_start, start)
