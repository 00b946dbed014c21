"""
Event Assembler
===============

Merges the outputs of the collector, normalizer and paint extractor into
the payloads handed to the transport.

MERGE ORDER (disjoint key spaces, so no overwrites occur):
1. Application context (always)
2. Normalized navigation timing (only when trusted AND plain navigation)
3. Paint timing (always; validated independently)
"""

from __future__ import annotations
from typing import Optional

from .compliance import check_compliance
from .config import HostConfig
from .context import collect_app_context
from .contracts.base import (
    BrowserEnvironment, ComplianceVerdict, NavigationType, RawTiming
)
from .contracts.events import EventPayload
from .normalization import normalize, save_duration
from .paint import extract_paint_timing


def is_plain_navigation(timing: Optional[RawTiming]) -> bool:
    """Link click or URL entry; not a reload, back/forward or prerender."""
    return timing is not None and timing.navigation_type == NavigationType.NAVIGATE


def assemble_navigation_event(
    config: HostConfig,
    env: BrowserEnvironment,
    verdict: Optional[ComplianceVerdict] = None
) -> EventPayload:
    """
    Build the NavigationTiming payload for one page view.

    ``verdict`` may be passed when the caller already evaluated
    compliance for this snapshot.
    """
    if verdict is None:
        verdict = check_compliance(env.timing, env.user_agent)

    event = collect_app_context(config, env)

    if verdict and is_plain_navigation(env.timing):
        event.update(normalize(env.timing))

    event.update(extract_paint_timing(env))

    return event


def assemble_save_event(
    config: HostConfig,
    env: BrowserEnvironment,
    verdict: Optional[ComplianceVerdict] = None
) -> Optional[EventPayload]:
    """
    Build the SaveTiming payload, or None when it must not be sent.

    Requires the post-edit flag, trusted timing, a plain navigation and a
    positive navigationStart.
    """
    if not config.post_edit:
        return None

    if verdict is None:
        verdict = check_compliance(env.timing, env.user_agent)
    if not verdict or not is_plain_navigation(env.timing):
        return None

    duration = save_duration(env.timing)
    if duration is None:
        return None

    return {
        'duration': duration,
        'runtime': config.runtime,
    }
