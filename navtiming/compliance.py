"""
Compliance Validator
====================

Decides whether a Navigation Timing snapshot can be trusted.

GUARANTEES:
- Pure function of (timing, user agent)
- Never raises; the verdict is the only output
- Checks derived from the W3C navigation-timing attribute order test
"""

from __future__ import annotations
from typing import Optional, Tuple
import math
import re

from .contracts.base import (
    ComplianceVerdict, NonComplianceReason, RawTiming
)


# Latest phase first. Walked from the end, so each marker must be >= the
# one checked before it.
ATTRIBUTE_ORDER: Tuple[str, ...] = (
    'loadEventEnd',
    'loadEventStart',
    'domContentLoadedEventEnd',
    'domContentLoadedEventStart',
    'domInteractive',
    'responseEnd',
    'responseStart',
    'requestStart',
    'connectEnd',
    'connectStart',
)

# Navigation Timing in Firefox 7 and 8 reports inaccurate measurements
# (https://bugzilla.mozilla.org/691547). There is no feature test for it.
BROKEN_USER_AGENTS: Tuple[re.Pattern, ...] = (
    re.compile(r'Firefox/[78]\b'),
)


def _is_comparable(value) -> bool:
    """Any int or float except NaN; infinity takes part in the ordering."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def is_broken_browser(user_agent: Optional[str]) -> bool:
    """True if the user agent is on the static exclusion list."""
    if not isinstance(user_agent, str):
        return False
    return any(pattern.search(user_agent) for pattern in BROKEN_USER_AGENTS)


def check_compliance(
    timing: Optional[RawTiming],
    user_agent: Optional[str]
) -> ComplianceVerdict:
    """
    Evaluate a timing snapshot and say why it is rejected, if it is.

    A marker that is absent, NaN or not a number imposes no constraint
    and clears the baseline for the next marker. Infinite values are
    compared like any other number.
    """
    if timing is None:
        return ComplianceVerdict.rejected(NonComplianceReason.FACILITY_ABSENT)

    if is_broken_browser(user_agent):
        return ComplianceVerdict.rejected(NonComplianceReason.BROKEN_BROWSER)

    last = 0
    for marker in reversed(ATTRIBUTE_ORDER):
        current = timing.get(marker)
        if not _is_comparable(current):
            last = None
            continue
        if current < 0 or (last is not None and current < last):
            return ComplianceVerdict.rejected(
                NonComplianceReason.ORDERING_VIOLATION,
                marker=marker
            )
        last = current

    return ComplianceVerdict.trusted()


def is_compliant(timing: Optional[RawTiming], user_agent: Optional[str]) -> bool:
    """Boolean form of check_compliance()."""
    return check_compliance(timing, user_agent).compliant
