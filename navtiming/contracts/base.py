"""
Base Contracts and Shared Types

Immutable snapshots of what the host page exposes for one page view.
All types here are pure data: no behavior beyond field access.

BOUNDARY ENFORCEMENT:
=====================
- The host owns every value in RawTiming; nothing here mutates it
- Values are stored exactly as exposed, including malformed ones
- Validation is the job of the compliance and normalization layers
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional
from enum import Enum, IntEnum, auto
import math


def is_numeric(value: Any) -> bool:
    """True for finite ints and floats. Booleans are not numbers here."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    return False


# =============================================================================
# NAVIGATION TYPE (W3C PerformanceNavigation constants)
# =============================================================================

class NavigationType(IntEnum):
    """How the page load was triggered."""
    NAVIGATE = 0        # link click, URL entry, form submission
    RELOAD = 1
    BACK_FORWARD = 2
    RESERVED = 255      # anything else, e.g. prerender

    @classmethod
    def coerce(cls, value: Any) -> NavigationType:
        """Map a host-supplied type code to a member; unknown codes are RESERVED."""
        if isinstance(value, NavigationType):
            return value
        try:
            return cls(value)
        except (TypeError, ValueError):
            return cls.RESERVED


# =============================================================================
# RAW TIMING SNAPSHOT
# =============================================================================

# Python attribute name -> marker name exposed by the browser facility
MARKER_NAMES: Dict[str, str] = {
    'navigation_start': 'navigationStart',
    'fetch_start': 'fetchStart',
    'domain_lookup_start': 'domainLookupStart',
    'domain_lookup_end': 'domainLookupEnd',
    'connect_start': 'connectStart',
    'connect_end': 'connectEnd',
    'secure_connection_start': 'secureConnectionStart',
    'request_start': 'requestStart',
    'response_start': 'responseStart',
    'response_end': 'responseEnd',
    'dom_interactive': 'domInteractive',
    'dom_content_loaded_event_start': 'domContentLoadedEventStart',
    'dom_content_loaded_event_end': 'domContentLoadedEventEnd',
    'dom_complete': 'domComplete',
    'load_event_start': 'loadEventStart',
    'load_event_end': 'loadEventEnd',
    'redirect_start': 'redirectStart',
    'redirect_end': 'redirectEnd',
    'ms_first_paint': 'msFirstPaint',
}

_ATTRIBUTES_BY_MARKER: Dict[str, str] = {v: k for k, v in MARKER_NAMES.items()}


@dataclass(frozen=True)
class RawTiming:
    """
    Absolute timestamps (ms since an epoch chosen by the host).

    Every field is optional and typed loosely on purpose: a broken host
    may expose zero, negative or non-numeric values and the snapshot
    must carry them unchanged so they can be rejected downstream.
    """
    navigation_start: Any = None
    fetch_start: Any = None
    domain_lookup_start: Any = None
    domain_lookup_end: Any = None
    connect_start: Any = None
    connect_end: Any = None
    secure_connection_start: Any = None
    request_start: Any = None
    response_start: Any = None
    response_end: Any = None
    dom_interactive: Any = None
    dom_content_loaded_event_start: Any = None
    dom_content_loaded_event_end: Any = None
    dom_complete: Any = None
    load_event_start: Any = None
    load_event_end: Any = None
    redirect_start: Any = None
    redirect_end: Any = None
    ms_first_paint: Any = None
    redirect_count: Any = 0
    navigation_type: NavigationType = NavigationType.NAVIGATE

    def get(self, marker: str) -> Any:
        """Read a field by its browser marker name, e.g. 'loadEventEnd'."""
        attribute = _ATTRIBUTES_BY_MARKER.get(marker)
        if attribute is None:
            raise KeyError(marker)
        return getattr(self, attribute)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RawTiming:
        """
        Build a snapshot from the camelCase shape the browser exposes.

        Accepts either a flat ``performance.timing``-like mapping or a
        ``performance``-like mapping with nested ``timing`` and
        ``navigation`` entries. Unknown keys are ignored.
        """
        timing = data.get('timing', data)
        navigation = data.get('navigation') or {}

        values: Dict[str, Any] = {}
        for marker, value in timing.items():
            attribute = _ATTRIBUTES_BY_MARKER.get(marker)
            if attribute is not None:
                values[attribute] = value

        if 'redirectCount' in navigation:
            values['redirect_count'] = navigation['redirectCount']
        if 'type' in navigation:
            values['navigation_type'] = NavigationType.coerce(navigation['type'])

        return cls(**values)


# =============================================================================
# HOST ENVIRONMENT (one page view)
# =============================================================================

@dataclass(frozen=True)
class BrowserEnvironment:
    """
    Everything the page exposes besides configuration.

    timing:      None when the browser has no Navigation Timing facility.
    clock:       host high-resolution clock in ms, if the page offers one.
    load_start:  ms marker recorded by the application early in the page.
    geo:         geolocation hint, e.g. {'country': 'NL'}.
    load_times:  vendor paint-timing callable; may raise when unsupported.
    """
    timing: Optional[RawTiming] = None
    user_agent: str = ''
    protocol: str = 'https:'
    clock: Optional[Callable[[], float]] = None
    load_start: Optional[float] = None
    geo: Any = None
    load_times: Optional[Callable[[], Any]] = None


# =============================================================================
# COMPLIANCE VERDICT
# =============================================================================

class NonComplianceReason(Enum):
    """Why timing data was not trusted."""
    FACILITY_ABSENT = auto()
    BROKEN_BROWSER = auto()
    ORDERING_VIOLATION = auto()


@dataclass(frozen=True)
class ComplianceVerdict:
    """Trust signal for one timing snapshot. Truthy iff compliant."""
    compliant: bool
    reason: Optional[NonComplianceReason] = None
    marker: Optional[str] = None  # offending marker for ordering violations

    def __bool__(self) -> bool:
        return self.compliant

    @staticmethod
    def trusted() -> ComplianceVerdict:
        return ComplianceVerdict(compliant=True)

    @staticmethod
    def rejected(
        reason: NonComplianceReason,
        marker: Optional[str] = None
    ) -> ComplianceVerdict:
        return ComplianceVerdict(compliant=False, reason=reason, marker=marker)


# =============================================================================
# PAINT TIMING PROBE (tagged variant)
# =============================================================================

class PaintFacility(Enum):
    """Which first-paint facility the browser offers."""
    NONE = "none"
    LOAD_TIMES = "load_times"          # seconds-resolution pair
    MS_FIRST_PAINT = "ms_first_paint"  # single ms value on the timing object


@dataclass(frozen=True)
class PaintProbe:
    """Result of probing for a paint facility, evaluated once."""
    facility: PaintFacility
    first_paint_time: Optional[float] = None
    first_paint_after_load_time: Optional[float] = None
    first_paint: Optional[float] = None

    @staticmethod
    def none() -> PaintProbe:
        return PaintProbe(facility=PaintFacility.NONE)


# =============================================================================
# TIMESTAMP (UTC, for audit records)
# =============================================================================

@dataclass(frozen=True)
class Timestamp:
    """
    Immutable timestamp with explicit semantics.
    All timestamps are UTC, never local time.
    """
    value: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        if self.value.tzinfo is None:
            object.__setattr__(self, 'value', self.value.replace(tzinfo=timezone.utc))

    @staticmethod
    def now() -> Timestamp:
        return Timestamp(value=datetime.now(timezone.utc))

    def to_iso(self) -> str:
        return self.value.isoformat()
