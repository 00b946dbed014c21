"""
Paint-Timing Extractor Tests
"""

from types import SimpleNamespace

from navtiming.contracts.base import BrowserEnvironment, PaintFacility, RawTiming
from navtiming.paint import detect_paint_facility, extract_paint_timing


def _raise():
    raise TypeError("chrome.loadTimes is not a function")


LOAD_TIMES = {'firstPaintTime': 1418307652.123456, 'firstPaintAfterLoadTime': 0}


class TestLoadTimesProbe:

    def test_seconds_converted_to_floored_ms(self):
        env = BrowserEnvironment(load_times=lambda: LOAD_TIMES)
        assert extract_paint_timing(env) == {
            'firstPaint': 1418307652123,
            'firstPaintAfterLoad': 0,
        }

    def test_attribute_style_result(self):
        result = SimpleNamespace(firstPaintTime=1.0005, firstPaintAfterLoadTime=2.5)
        env = BrowserEnvironment(load_times=lambda: result)
        assert extract_paint_timing(env) == {'firstPaint': 1000, 'firstPaintAfterLoad': 2500}

    def test_probe_exception_is_swallowed(self):
        env = BrowserEnvironment(load_times=_raise)
        assert extract_paint_timing(env) == {}
        assert detect_paint_facility(env).facility is PaintFacility.NONE

    def test_non_numeric_result_means_unavailable(self):
        env = BrowserEnvironment(load_times=lambda: {'firstPaintTime': None})
        assert extract_paint_timing(env) == {}


class TestMsFirstPaint:

    def test_single_field(self):
        env = BrowserEnvironment(timing=RawTiming(ms_first_paint=1418307652500))
        assert extract_paint_timing(env) == {'firstPaint': 1418307652500}

    def test_zero_is_unavailable(self):
        env = BrowserEnvironment(timing=RawTiming(ms_first_paint=0))
        assert extract_paint_timing(env) == {}

    def test_failed_vendor_probe_falls_through(self):
        env = BrowserEnvironment(timing=RawTiming(ms_first_paint=250), load_times=_raise)
        probe = detect_paint_facility(env)
        assert probe.facility is PaintFacility.MS_FIRST_PAINT
        assert extract_paint_timing(env) == {'firstPaint': 250}


class TestPriority:

    def test_vendor_probe_wins_and_sources_never_merge(self):
        env = BrowserEnvironment(
            timing=RawTiming(ms_first_paint=999),
            load_times=lambda: {'firstPaintTime': 0.5, 'firstPaintAfterLoadTime': 0.75}
        )
        assert extract_paint_timing(env) == {'firstPaint': 500, 'firstPaintAfterLoad': 750}

    def test_nothing_available(self):
        assert extract_paint_timing(BrowserEnvironment()) == {}
