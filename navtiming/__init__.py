"""
Navigation Timing

Client-side latency measurement: validates a browser timing snapshot,
normalizes it into relative durations and assembles one event per page
view (and per save) for an event-logging transport.

LAYER FLOW:
===========
1. Sampling gate: admit the page view with probability 1/F
2. Compliance: decide whether the timing snapshot is trustworthy
3. Normalization + paint timing + application context
4. Assembly: merge into one flat payload
5. Transport: fire-and-forget hand-off
"""

from .assembler import (
    assemble_navigation_event,
    assemble_save_event,
    is_plain_navigation,
)
from .compliance import check_compliance, is_compliant
from .config import HostConfig
from .context import collect_app_context
from .contracts import (
    BrowserEnvironment,
    ComplianceVerdict,
    LoggedEvent,
    NavigationType,
    NonComplianceReason,
    RawTiming,
    SchemaName,
)
from .normalization import normalize
from .observability import ObservabilityEngine
from .paint import detect_paint_facility, extract_paint_timing
from .reporter import NavigationTimingReporter
from .sampling import SamplingGate, in_sample
from .transport import BeaconTransport, EventTransport, RecordingTransport

__version__ = "1.0.0"

__all__ = [
    'BeaconTransport',
    'BrowserEnvironment',
    'ComplianceVerdict',
    'EventTransport',
    'HostConfig',
    'LoggedEvent',
    'NavigationTimingReporter',
    'NavigationType',
    'NonComplianceReason',
    'ObservabilityEngine',
    'RawTiming',
    'RecordingTransport',
    'SamplingGate',
    'SchemaName',
    'assemble_navigation_event',
    'assemble_save_event',
    'check_compliance',
    'collect_app_context',
    'detect_paint_facility',
    'extract_paint_timing',
    'in_sample',
    'is_compliant',
    'is_plain_navigation',
    'normalize',
]
