"""
Observability & Audit Layer

RESPONSIBILITY: Record what the reporter decided and handed off
ALLOWED INPUTS: Copies of decisions and payload summaries
OUTPUTS: Audit log entries, metric points

WHAT THIS LAYER MUST NOT DO:
============================
- Modify or filter events before they reach the transport
- Influence sampling, compliance or assembly decisions
- Raise into the reporter
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from enum import Enum
import hashlib
import itertools

from .contracts.base import Timestamp
from .contracts.events import AuditEventType, AuditLogEntry, MetricPoint


LAYERS: Tuple[str, ...] = ('sampling', 'compliance', 'emission', 'transport')


# =============================================================================
# LOG COLLECTORS (One per layer)
# =============================================================================

class LogCollector:
    """
    Append-only collector of audit entries for one layer.
    """

    def __init__(self, layer_name: str):
        self._layer_name = layer_name
        self._entries: List[AuditLogEntry] = []

    def collect(self, entry: AuditLogEntry):
        """Collect an audit entry (append-only)."""
        self._entries.append(entry)

    def get_entries(
        self,
        event_type: Optional[AuditEventType] = None,
        action: Optional[str] = None
    ) -> List[AuditLogEntry]:
        """Get entries, optionally filtered."""
        entries = self._entries

        if event_type:
            entries = [e for e in entries if e.event_type == event_type]

        if action:
            entries = [e for e in entries if e.action == action]

        return list(entries)

    @property
    def layer_name(self) -> str:
        return self._layer_name

    @property
    def entry_count(self) -> int:
        return len(self._entries)


# =============================================================================
# METRICS COLLECTOR
# =============================================================================

class MetricType(Enum):
    """Types of metrics collected."""
    COUNTER = "counter"


@dataclass
class MetricDefinition:
    """Definition of a metric to collect."""
    name: str
    metric_type: MetricType
    description: str
    labels: Tuple[str, ...] = field(default_factory=tuple)


class MetricsCollector:
    """
    Append-only time series of metric points.
    """

    def __init__(self):
        self._metrics: Dict[str, List[MetricPoint]] = {}
        self._definitions: Dict[str, MetricDefinition] = {}
        self._register_default_metrics()

    def _register_default_metrics(self):
        defaults = [
            MetricDefinition(
                name="navtiming_sampled_total",
                metric_type=MetricType.COUNTER,
                description="Page views admitted by the sampling gate"
            ),
            MetricDefinition(
                name="navtiming_events_total",
                metric_type=MetricType.COUNTER,
                description="Events handed to the transport",
                labels=("schema",)
            ),
            MetricDefinition(
                name="navtiming_noncompliant_total",
                metric_type=MetricType.COUNTER,
                description="Timing snapshots rejected by the compliance check",
                labels=("reason",)
            ),
            MetricDefinition(
                name="navtiming_transport_failures_total",
                metric_type=MetricType.COUNTER,
                description="Transport hand-offs that failed",
                labels=("schema",)
            ),
        ]

        for definition in defaults:
            self.register_metric(definition)

    def register_metric(self, definition: MetricDefinition):
        """Register a new metric definition."""
        self._definitions[definition.name] = definition
        if definition.name not in self._metrics:
            self._metrics[definition.name] = []

    def record(
        self,
        metric_name: str,
        value: float,
        labels: Optional[Dict[str, str]] = None
    ):
        """Record a metric data point."""
        if metric_name not in self._metrics:
            self._metrics[metric_name] = []

        label_tuple = tuple(sorted(labels.items())) if labels else ()

        self._metrics[metric_name].append(MetricPoint(
            metric_name=metric_name,
            value=value,
            timestamp=Timestamp.now(),
            labels=label_tuple
        ))

    def get_metric(
        self,
        metric_name: str,
        labels: Optional[Dict[str, str]] = None
    ) -> List[MetricPoint]:
        """Get data points, optionally only those carrying the given labels."""
        points = self._metrics.get(metric_name, [])

        if labels:
            wanted = set(labels.items())
            points = [p for p in points if wanted.issubset(set(p.labels))]

        return list(points)

    def total(self, metric_name: str, labels: Optional[Dict[str, str]] = None) -> float:
        """Sum of a counter, optionally restricted to matching labels."""
        return sum(p.value for p in self.get_metric(metric_name, labels))

    def definitions(self) -> Dict[str, MetricDefinition]:
        return dict(self._definitions)


# =============================================================================
# OBSERVABILITY ENGINE
# =============================================================================

@dataclass
class ObservabilityConfig:
    """Configuration for observability engine."""
    enable_metrics: bool = True
    enable_audit: bool = True


class ObservabilityEngine:
    """
    Central Observability Engine.

    BOUNDARY ENFORCEMENT:
    - ONLY observes, never modifies
    - Provides read-only access to collected data
    """

    def __init__(self, config: Optional[ObservabilityConfig] = None):
        self._config = config or ObservabilityConfig()
        self._collectors: Dict[str, LogCollector] = {
            layer: LogCollector(layer) for layer in LAYERS
        }
        self._metrics = MetricsCollector() if self._config.enable_metrics else None
        self._sequence = itertools.count()

    def log_audit(
        self,
        layer: str,
        event_type: AuditEventType,
        action: str,
        entity_id: Optional[str] = None,
        **details: str
    ) -> Optional[AuditLogEntry]:
        """Record an audit entry on a layer's collector."""
        if not self._config.enable_audit:
            return None

        collector = self._collectors.get(layer)
        if collector is None:
            return None

        timestamp = Timestamp.now()
        entry_hash = hashlib.sha256(
            f"{layer}_{action}|{next(self._sequence)}|{timestamp.to_iso()}".encode()
        ).hexdigest()[:16]

        entry = AuditLogEntry(
            entry_id=f"audit_{entry_hash}",
            event_type=event_type,
            timestamp=timestamp,
            layer=layer,
            action=action,
            entity_id=entity_id,
            metadata=tuple((k, str(v)) for k, v in sorted(details.items()))
        )
        collector.collect(entry)
        return entry

    def collect_metric(
        self,
        metric_name: str,
        value: float = 1,
        labels: Optional[Dict[str, str]] = None
    ):
        """Collect a metric data point."""
        if self._metrics:
            self._metrics.record(metric_name, value, labels)

    def get_layer_log(self, layer_name: str) -> List[AuditLogEntry]:
        """Get log for a specific layer."""
        collector = self._collectors.get(layer_name)
        if not collector:
            return []
        return collector.get_entries()

    def get_unified_log(self) -> List[AuditLogEntry]:
        """All entries from every layer, oldest first."""
        entries = []
        for collector in self._collectors.values():
            entries.extend(collector.get_entries())
        entries.sort(key=lambda e: e.timestamp.value)
        return entries

    def get_metrics(self) -> Optional[MetricsCollector]:
        """Get metrics collector (read-only access)."""
        return self._metrics

    def generate_audit_report(self) -> Dict:
        """Counts of audit entries by layer and event type."""
        entries = self.get_unified_log()

        by_layer = {}
        by_type = {}
        for entry in entries:
            by_layer[entry.layer] = by_layer.get(entry.layer, 0) + 1
            by_type[entry.event_type.value] = by_type.get(entry.event_type.value, 0) + 1

        return {
            'total_entries': len(entries),
            'by_layer': by_layer,
            'by_event_type': by_type,
            'generated_at': Timestamp.now().to_iso()
        }
