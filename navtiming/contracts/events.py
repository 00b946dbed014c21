"""
Event Contracts

The flat payloads handed to the event transport, and the records the
observability layer keeps about each hand-off.

All payloads are plain dicts keyed by the historical schema field names
(camelCase) so they can be serialized without translation.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple
from enum import Enum

from .base import Timestamp


# Marker name -> non-negative ms duration relative to the origin marker
NormalizedTiming = Dict[str, Any]

# At most 'firstPaint' and 'firstPaintAfterLoad'
PaintTiming = Dict[str, int]

# Identity/context fields, each independently optional
ApplicationContext = Dict[str, Any]

# ApplicationContext + NormalizedTiming + PaintTiming
EventPayload = Dict[str, Any]


# =============================================================================
# TRANSPORT ENVELOPE
# =============================================================================

class SchemaName(str, Enum):
    """Schemas the transport accepts."""
    NAVIGATION_TIMING = "NavigationTiming"
    SAVE_TIMING = "SaveTiming"


@dataclass(frozen=True)
class LoggedEvent:
    """One payload as handed to the transport."""
    schema: SchemaName
    payload: EventPayload
    logged_at: Timestamp = field(default_factory=Timestamp.now)

    def to_dict(self) -> dict:
        return {
            'schema': self.schema.value,
            'event': dict(self.payload),
            'logged_at': self.logged_at.to_iso(),
        }


# =============================================================================
# OBSERVABILITY CONTRACTS
# =============================================================================

class AuditEventType(Enum):
    """Explicit audit event types."""
    SAMPLING = "sampling"
    COMPLIANCE = "compliance"
    EMISSION = "emission"
    TRANSPORT = "transport"
    SYSTEM = "system"


@dataclass(frozen=True)
class AuditLogEntry:
    """Immutable audit log entry."""
    entry_id: str
    event_type: AuditEventType
    timestamp: Timestamp
    layer: str  # Which layer generated this
    action: str
    entity_id: Optional[str] = None
    metadata: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    def metadata_dict(self) -> Dict[str, str]:
        return dict(self.metadata)


@dataclass(frozen=True)
class MetricPoint:
    """Immutable metric data point."""
    metric_name: str
    value: float
    timestamp: Timestamp
    labels: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)
