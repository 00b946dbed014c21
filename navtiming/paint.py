"""
Paint-Timing Extractor

Two vendor facilities report first paint and never both are merged:

1. LOAD_TIMES: a callable returning seconds-resolution paint times
   (``firstPaintTime``, ``firstPaintAfterLoadTime``). Non-standard and
   impossible to feature-test safely, so calling it may raise.
2. MS_FIRST_PAINT: a single millisecond field on the timing object.

The probe is evaluated once into a PaintProbe and mapped by one function.
"""

from __future__ import annotations
from typing import Any, Mapping, Optional
import math

from .contracts.base import (
    BrowserEnvironment, PaintFacility, PaintProbe, is_numeric
)
from .contracts.events import PaintTiming


def _read(source: Any, name: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def _probe_load_times(env: BrowserEnvironment) -> Optional[PaintProbe]:
    if env.load_times is None:
        return None
    try:
        load_times = env.load_times()
        first_paint = _read(load_times, 'firstPaintTime')
        after_load = _read(load_times, 'firstPaintAfterLoadTime')
    except Exception:
        # Unsupported in this browser; same as not having the facility.
        return None
    if not (is_numeric(first_paint) and is_numeric(after_load)):
        return None
    return PaintProbe(
        facility=PaintFacility.LOAD_TIMES,
        first_paint_time=first_paint,
        first_paint_after_load_time=after_load
    )


def detect_paint_facility(env: BrowserEnvironment) -> PaintProbe:
    """Probe the environment; the vendor callable wins if both exist."""
    probe = _probe_load_times(env)
    if probe is not None:
        return probe

    timing = env.timing
    if timing is not None and is_numeric(timing.ms_first_paint) and timing.ms_first_paint:
        return PaintProbe(
            facility=PaintFacility.MS_FIRST_PAINT,
            first_paint=timing.ms_first_paint
        )

    return PaintProbe.none()


def paint_timing_from_probe(probe: PaintProbe) -> PaintTiming:
    if probe.facility is PaintFacility.LOAD_TIMES:
        # Seconds with microsecond precision; report whole ms like
        # the Navigation Timing markers.
        return {
            'firstPaint': math.floor(probe.first_paint_time * 1000),
            'firstPaintAfterLoad': math.floor(probe.first_paint_after_load_time * 1000),
        }
    if probe.facility is PaintFacility.MS_FIRST_PAINT:
        return {'firstPaint': probe.first_paint}
    return {}


def extract_paint_timing(env: BrowserEnvironment) -> PaintTiming:
    """First-paint fields for the event, or {} if no facility is available."""
    return paint_timing_from_probe(detect_paint_facility(env))
