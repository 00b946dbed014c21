"""
Timing Fixtures

Explicit snapshots of what browsers expose. No random generation.
"""

from typing import Optional

from navtiming.config import HostConfig
from navtiming.contracts.base import BrowserEnvironment, NavigationType, RawTiming


CHROME_UA = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/39.0.2171.95 Safari/537.36"
)
FIREFOX_7_UA = "Mozilla/5.0 (Windows NT 6.1; rv:7.0.1) Gecko/20100101 Firefox/7.0.1"
FIREFOX_8_UA = "Mozilla/5.0 (X11; Linux i686; rv:8.0) Gecko/20100101 Firefox/8.0"
FIREFOX_17_UA = "Mozilla/5.0 (X11; Linux i686; rv:17.0) Gecko/20100101 Firefox/17.0"


# =============================================================================
# NAVIGATION TIMING SNAPSHOTS
# =============================================================================

# DNS, TCP and TLS all happen.
FIRST_VIEW = {
    'navigationStart': 100,
    'fetchStart': 200,
    'domainLookupStart': 210,
    'domainLookupEnd': 225,
    'connectStart': 226,
    'secureConnectionStart': 235,
    'connectEnd': 250,
    'requestStart': 250,
    'responseStart': 300,
    'responseEnd': 400,
    'domComplete': 450,
    'loadEventStart': 570,
    'loadEventEnd': 575,
}

# DNS, TCP and TLS are cached or re-used.
REPEAT_VIEW = {
    'navigationStart': 100,
    'fetchStart': 100,
    'domainLookupStart': 100,
    'domainLookupEnd': 100,
    'connectStart': 100,
    'secureConnectionStart': 0,
    'connectEnd': 100,
    'requestStart': 110,
    'responseStart': 200,
    'responseEnd': 300,
    'domComplete': 350,
    'loadEventStart': 470,
    'loadEventEnd': 475,
}

# Every ordered marker populated, strictly increasing.
FULL_VIEW = {
    'navigationStart': 1000,
    'fetchStart': 1002,
    'domainLookupStart': 1005,
    'domainLookupEnd': 1020,
    'connectStart': 1020,
    'connectEnd': 1060,
    'requestStart': 1061,
    'responseStart': 1150,
    'responseEnd': 1180,
    'domInteractive': 1400,
    'domContentLoadedEventStart': 1401,
    'domContentLoadedEventEnd': 1420,
    'domComplete': 1900,
    'loadEventStart': 1901,
    'loadEventEnd': 1910,
}


def create_timing(
    markers: dict,
    navigation_type: NavigationType = NavigationType.NAVIGATE,
    redirect_count: int = 0
) -> RawTiming:
    return RawTiming.from_mapping({
        'timing': markers,
        'navigation': {'type': int(navigation_type), 'redirectCount': redirect_count},
    })


def create_env(
    markers: Optional[dict] = FIRST_VIEW,
    navigation_type: NavigationType = NavigationType.NAVIGATE,
    user_agent: str = CHROME_UA,
    **kwargs
) -> BrowserEnvironment:
    timing = create_timing(markers, navigation_type) if markers is not None else None
    return BrowserEnvironment(timing=timing, user_agent=user_agent, **kwargs)


# =============================================================================
# PAGE CONFIGURATION
# =============================================================================

ARTICLE_CONFIG = {
    'wgNavigationTimingSamplingFactor': 1,
    'wgUserId': None,
    'wgArticleId': 15580374,
    'wgNamespaceNumber': 0,
    'wgCurRevisionId': 744210311,
    'wgAction': 'view',
    'wgPoweredByHHVM': True,
    'wgCanonicalSpecialPageName': False,
    'wgMFMode': None,
}

SPECIAL_PAGE_CONFIG = dict(
    ARTICLE_CONFIG,
    wgArticleId=0,
    wgCurRevisionId=0,
    wgNamespaceNumber=-1,
    wgCanonicalSpecialPageName='Watchlist',
    wgUserId=42,
)


def create_config(**overrides) -> HostConfig:
    return HostConfig.from_mapping(dict(ARTICLE_CONFIG, **overrides))


IDENTITY_FIELDS = ('pageId', 'namespaceId', 'revId', 'action', 'runtime')
TIMING_FIELDS = (
    'connectEnd', 'connectStart', 'domComplete', 'domInteractive', 'fetchStart',
    'loadEventEnd', 'loadEventStart', 'requestStart', 'responseEnd',
    'responseStart', 'dnsLookup', 'redirectCount', 'redirecting',
)
