"""
Contracts shared by every layer of the timing pipeline.

Layers import types from here and never from each other's internals.
"""

from .base import (
    BrowserEnvironment,
    ComplianceVerdict,
    MARKER_NAMES,
    NavigationType,
    NonComplianceReason,
    PaintFacility,
    PaintProbe,
    RawTiming,
    Timestamp,
    is_numeric,
)
from .events import (
    ApplicationContext,
    AuditEventType,
    AuditLogEntry,
    EventPayload,
    LoggedEvent,
    MetricPoint,
    NormalizedTiming,
    PaintTiming,
    SchemaName,
)

__all__ = [
    'ApplicationContext',
    'AuditEventType',
    'AuditLogEntry',
    'BrowserEnvironment',
    'ComplianceVerdict',
    'EventPayload',
    'LoggedEvent',
    'MARKER_NAMES',
    'MetricPoint',
    'NavigationType',
    'NonComplianceReason',
    'NormalizedTiming',
    'PaintFacility',
    'PaintProbe',
    'PaintTiming',
    'RawTiming',
    'SchemaName',
    'Timestamp',
    'is_numeric',
]
