"""
Application-Timing Collector

Builds the base of every NavigationTiming event from host configuration
and application-level markers. Pure function of its arguments.
"""

from __future__ import annotations
from typing import Any, Callable, Mapping, Optional
import math
import time

from .config import HostConfig
from .contracts.base import BrowserEnvironment, is_numeric
from .contracts.events import ApplicationContext


def _wall_clock_ms() -> float:
    return time.time() * 1000


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _geo_country(geo: Any) -> Any:
    if geo is None:
        return None
    if isinstance(geo, Mapping):
        return geo.get('country')
    return getattr(geo, 'country', None)


def host_now(clock: Optional[Callable[[], float]] = None) -> float:
    """Current time from the host clock if offered, else wall-clock ms."""
    return clock() if clock is not None else _wall_clock_ms()


def collect_app_context(config: HostConfig, env: BrowserEnvironment) -> ApplicationContext:
    """
    Identity and context fields for one page view.

    Always present: isHttps, isAnon. Everything else appears only when
    its source is present and applicable.
    """
    load_end = host_now(env.clock)
    event: ApplicationContext = {
        'isHttps': env.protocol == 'https:',
        'isAnon': config.is_anonymous,
    }

    if is_numeric(env.load_start) and env.load_start and is_numeric(load_end):
        event['mediaWikiLoadComplete'] = _round_half_up(load_end - env.load_start)

    country = _geo_country(env.geo)
    if isinstance(country, str):
        event['originCountry'] = country

    # Special pages report 0 for page and revision ids.
    if not config.is_special_page:
        event.update({
            'pageId': config.page_id,
            'namespaceId': config.namespace_id,
            'revId': config.revision_id,
            'action': config.action,
            'runtime': config.runtime,
        })

    mobile_mode = config.mobile_mode
    if isinstance(mobile_mode, str) and 'desktop' not in mobile_mode:
        event['mobileMode'] = mobile_mode

    return event
