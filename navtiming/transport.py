"""
Event Transport

Fire-and-forget hand-off of one payload per call. The reporter never
consults a return value and a transport never raises into it.

GUARANTEES:
===========
1. log_event() returns None
2. Encoding and network failures are recorded on the observability engine, not raised
3. Payloads are sent exactly as assembled
"""

from __future__ import annotations
from typing import List, Optional, Union
from urllib.parse import quote
import json

import httpx

from .contracts.events import (
    AuditEventType, EventPayload, LoggedEvent, SchemaName
)
from .observability import ObservabilityEngine


class EventTransport:
    """
    Interface for event sinks.

    Concrete transports decide where the payload goes; the reporter only
    knows the schema name and the payload.
    """

    def log_event(self, schema: Union[SchemaName, str], payload: EventPayload) -> None:
        """Hand off one event. Must not raise or report delivery."""
        raise NotImplementedError


class RecordingTransport(EventTransport):
    """Keeps every logged event in memory (append-only)."""

    def __init__(self):
        self._events: List[LoggedEvent] = []

    def log_event(self, schema: Union[SchemaName, str], payload: EventPayload) -> None:
        self._events.append(LoggedEvent(schema=SchemaName(schema), payload=dict(payload)))

    @property
    def events(self) -> List[LoggedEvent]:
        return list(self._events)

    def by_schema(self, schema: Union[SchemaName, str]) -> List[LoggedEvent]:
        schema = SchemaName(schema)
        return [e for e in self._events if e.schema is schema]


class BeaconTransport(EventTransport):
    """
    Sends each event to an EventLogging-style beacon endpoint.

    The capsule is URL-encoded JSON in the query string, terminated by
    ';', sent as a GET so the endpoint can answer 204 without a body.

    The GET is synchronous: log_event() returns once the endpoint answers
    or after at most ``timeout`` seconds. Hosts that cannot wait should
    call it from their own deferred task.
    """

    def __init__(
        self,
        endpoint: str,
        web_host: str = "",
        wiki: str = "",
        timeout: float = 5.0,
        observability: Optional[ObservabilityEngine] = None,
        client: Optional[httpx.Client] = None
    ):
        self._endpoint = endpoint
        self._web_host = web_host
        self._wiki = wiki
        self._timeout = timeout
        self._observability = observability
        self._client = client

    def encode_capsule(self, schema: SchemaName, payload: EventPayload) -> str:
        capsule = {
            'schema': schema.value,
            'event': payload,
            'webHost': self._web_host,
            'wiki': self._wiki,
        }
        return quote(json.dumps(capsule, separators=(',', ':'), sort_keys=True), safe='')

    def beacon_url(self, schema: SchemaName, payload: EventPayload) -> str:
        return f"{self._endpoint}?{self.encode_capsule(schema, payload)};"

    def log_event(self, schema: Union[SchemaName, str], payload: EventPayload) -> None:
        schema = SchemaName(schema)

        try:
            url = self.beacon_url(schema, payload)
        except (TypeError, ValueError):
            # Payload holds a value JSON cannot represent.
            self._record_failure(schema, "encode_error")
            return

        try:
            if self._client is not None:
                response = self._client.get(url, timeout=self._timeout)
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    response = client.get(url)
        except httpx.TimeoutException:
            self._record_failure(schema, "timeout")
            return
        except httpx.HTTPError as e:
            self._record_failure(schema, f"network_error: {e}")
            return

        if response.status_code >= 400:
            self._record_failure(schema, f"HTTP {response.status_code}")
            return

        if self._observability:
            self._observability.log_audit(
                'transport', AuditEventType.TRANSPORT, 'beacon_sent',
                entity_id=schema.value,
                http_status=str(response.status_code)
            )

    def _record_failure(self, schema: SchemaName, error: str):
        if not self._observability:
            return
        self._observability.log_audit(
            'transport', AuditEventType.TRANSPORT, 'beacon_failed',
            entity_id=schema.value,
            error=error
        )
        self._observability.collect_metric(
            'navtiming_transport_failures_total',
            labels={'schema': schema.value}
        )
