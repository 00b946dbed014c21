"""
Navigation Timing Reporter

Wires the pipeline to the host page lifecycle.

DESIGN:
=======
1. on_load: called once after the load event has settled
   (sampling gate -> compliance -> assembly -> transport)
2. on_post_edit: called when the post-edit signal fires
   (not sampled; emits SaveTiming when its conditions hold)
3. The two calls share no state and may happen in either order
"""

from __future__ import annotations
from typing import Optional
import random

from .assembler import (
    assemble_navigation_event, assemble_save_event, is_plain_navigation
)
from .compliance import check_compliance
from .config import HostConfig
from .contracts.base import BrowserEnvironment, ComplianceVerdict
from .contracts.events import AuditEventType, LoggedEvent, SchemaName
from .observability import ObservabilityEngine
from .sampling import SamplingGate
from .transport import EventTransport


class NavigationTimingReporter:
    """
    Emits NavigationTiming and SaveTiming events for page views.

    Holds only its collaborators; every invocation starts from the
    snapshot and configuration it is given.
    """

    def __init__(
        self,
        transport: EventTransport,
        observability: Optional[ObservabilityEngine] = None,
        rng: Optional[random.Random] = None
    ):
        self._transport = transport
        self._observability = observability or ObservabilityEngine()
        self._rng = rng

    @property
    def observability(self) -> ObservabilityEngine:
        return self._observability

    def on_load(
        self,
        env: BrowserEnvironment,
        config: HostConfig
    ) -> Optional[LoggedEvent]:
        """Handle the page load signal. Returns the emitted event, if any."""
        gate = SamplingGate(config.sampling_factor, self._rng)
        if not gate.admit():
            self._observability.log_audit(
                'sampling', AuditEventType.SAMPLING, 'not_sampled',
                factor=str(config.sampling_factor)
            )
            return None

        self._observability.log_audit(
            'sampling', AuditEventType.SAMPLING, 'sampled',
            factor=str(config.sampling_factor)
        )
        self._observability.collect_metric('navtiming_sampled_total')

        verdict = self._check(env)
        payload = assemble_navigation_event(config, env, verdict=verdict)
        return self._emit(SchemaName.NAVIGATION_TIMING, payload)

    def on_post_edit(
        self,
        env: BrowserEnvironment,
        config: HostConfig
    ) -> Optional[LoggedEvent]:
        """Handle the post-edit signal. Returns the emitted event, if any."""
        if not config.post_edit:
            return None

        verdict = self._check(env)
        payload = assemble_save_event(config, env, verdict=verdict)
        if payload is None:
            self._observability.log_audit(
                'emission', AuditEventType.EMISSION, 'save_timing_skipped',
                entity_id=SchemaName.SAVE_TIMING.value,
                compliant=str(verdict.compliant),
                plain_navigation=str(is_plain_navigation(env.timing))
            )
            return None

        return self._emit(SchemaName.SAVE_TIMING, payload)

    def _check(self, env: BrowserEnvironment) -> ComplianceVerdict:
        verdict = check_compliance(env.timing, env.user_agent)
        if not verdict:
            self._observability.log_audit(
                'compliance', AuditEventType.COMPLIANCE, 'rejected',
                reason=verdict.reason.name,
                marker=verdict.marker or ''
            )
            self._observability.collect_metric(
                'navtiming_noncompliant_total',
                labels={'reason': verdict.reason.name}
            )
        return verdict

    def _emit(self, schema: SchemaName, payload: dict) -> LoggedEvent:
        event = LoggedEvent(schema=schema, payload=payload)
        self._transport.log_event(schema, dict(payload))

        self._observability.log_audit(
            'emission', AuditEventType.EMISSION, 'event_logged',
            entity_id=schema.value,
            fields=str(len(payload))
        )
        self._observability.collect_metric(
            'navtiming_events_total',
            labels={'schema': schema.value}
        )
        return event
