"""
Compliance Validator Tests

The verdict is the only output: no exceptions for any snapshot shape.
"""

import pytest

from navtiming.compliance import ATTRIBUTE_ORDER, check_compliance, is_broken_browser, is_compliant
from navtiming.contracts.base import NonComplianceReason, RawTiming

from tests.integration.fixtures import (
    CHROME_UA, FIREFOX_7_UA, FIREFOX_8_UA, FIREFOX_17_UA,
    FIRST_VIEW, FULL_VIEW, REPEAT_VIEW, create_timing,
)


class TestFacilityAbsent:

    def test_no_timing_is_not_compliant(self):
        assert is_compliant(None, CHROME_UA) is False

    def test_reason_is_facility_absent(self):
        verdict = check_compliance(None, CHROME_UA)
        assert not verdict
        assert verdict.reason is NonComplianceReason.FACILITY_ABSENT


class TestBrokenBrowsers:

    @pytest.mark.parametrize("ua", [FIREFOX_7_UA, FIREFOX_8_UA])
    def test_firefox_7_and_8_excluded(self, ua):
        verdict = check_compliance(create_timing(FULL_VIEW), ua)
        assert verdict.compliant is False
        assert verdict.reason is NonComplianceReason.BROKEN_BROWSER

    def test_later_firefox_not_excluded(self):
        assert is_broken_browser(FIREFOX_17_UA) is False
        assert is_compliant(create_timing(FULL_VIEW), FIREFOX_17_UA)

    def test_missing_user_agent_is_not_broken(self):
        assert is_broken_browser(None) is False
        assert is_compliant(create_timing(FULL_VIEW), None)


class TestOrdering:

    @pytest.mark.parametrize("markers", [FIRST_VIEW, REPEAT_VIEW, FULL_VIEW])
    def test_well_ordered_snapshots_are_compliant(self, markers):
        assert is_compliant(create_timing(markers), CHROME_UA)

    def test_connect_end_before_connect_start(self):
        timing = create_timing(dict(FIRST_VIEW, connectEnd=150, connectStart=226))
        verdict = check_compliance(timing, CHROME_UA)
        assert verdict.compliant is False
        assert verdict.reason is NonComplianceReason.ORDERING_VIOLATION
        assert verdict.marker == 'connectEnd'

    def test_negative_marker_fails(self):
        timing = create_timing(dict(FULL_VIEW, connectStart=-1))
        verdict = check_compliance(timing, CHROME_UA)
        assert verdict.reason is NonComplianceReason.ORDERING_VIOLATION
        assert verdict.marker == 'connectStart'

    def test_load_event_end_before_start_fails(self):
        timing = create_timing(dict(FULL_VIEW, loadEventEnd=1900))
        assert check_compliance(timing, CHROME_UA).marker == 'loadEventEnd'

    def test_equal_neighbours_are_allowed(self):
        markers = {name: 500 for name in ATTRIBUTE_ORDER}
        assert is_compliant(create_timing(markers), CHROME_UA)

    def test_zero_markers_are_allowed(self):
        # Phases that did not occur may legitimately report 0.
        markers = {name: 0 for name in ATTRIBUTE_ORDER}
        assert is_compliant(create_timing(markers), CHROME_UA)

    def test_missing_marker_resets_baseline(self):
        # domInteractive absent: responseEnd no longer constrains what follows.
        markers = dict(FULL_VIEW, domInteractive=None, domContentLoadedEventStart=1170)
        assert is_compliant(create_timing(markers), CHROME_UA)

    def test_infinite_marker_is_ordered_like_a_number(self):
        timing = create_timing(dict(FULL_VIEW, loadEventStart=float('inf'), loadEventEnd=5))
        verdict = check_compliance(timing, CHROME_UA)
        assert verdict.reason is NonComplianceReason.ORDERING_VIOLATION
        assert verdict.marker == 'loadEventEnd'

    def test_negative_infinity_fails(self):
        timing = create_timing(dict(FULL_VIEW, connectStart=float('-inf')))
        assert check_compliance(timing, CHROME_UA).marker == 'connectStart'

    def test_trailing_infinity_is_compliant(self):
        timing = create_timing(dict(FULL_VIEW, loadEventEnd=float('inf')))
        assert is_compliant(timing, CHROME_UA)

    def test_nan_marker_resets_baseline(self):
        markers = dict(FULL_VIEW, domInteractive=float('nan'), domContentLoadedEventStart=1170)
        assert is_compliant(create_timing(markers), CHROME_UA)

    def test_empty_snapshot_is_compliant(self):
        assert is_compliant(RawTiming(), CHROME_UA)

    def test_non_numeric_marker_does_not_raise(self):
        timing = create_timing(dict(FULL_VIEW, requestStart='soon'))
        assert isinstance(is_compliant(timing, CHROME_UA), bool)
