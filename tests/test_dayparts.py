# tests/test_dayparts.py

import math

import pytest

from creatorcal.core.errors import ConfigError
from creatorcal.core.time import MS_PER_HOUR, MS_PER_MINUTE, parse_iso_instant
from creatorcal.core.types import CreatorTime, SolarTimes
from creatorcal.engines import dayparts as dp
from creatorcal.engines.solar import solar_times
from creatorcal.engines.specs import CREATOR_DAY_START_MINUTES, JHB_UTC_OFFSET_MINUTES


# ---------------------------------------------------------
# 18 fixed parts
# ---------------------------------------------------------

@pytest.mark.parametrize(
    "minute, part",
    [(0, 1), (79, 1), (80, 2), (160, 3), (719, 9), (720, 10), (1359, 17), (1360, 18), (1439, 18)],
)
def test_day_part18_boundaries(minute, part):
    assert dp.day_part18(minute * MS_PER_MINUTE) == part


def test_day_part18_last_millisecond_is_18():
    assert dp.day_part18(24 * MS_PER_HOUR - 1) == 18
    assert dp.day_part18(24 * MS_PER_HOUR) == 1


def test_day_part18_range():
    for t in range(0, 3 * 24 * MS_PER_HOUR, 7 * MS_PER_MINUTE + 13):
        assert 1 <= dp.day_part18(t, utc_offset_minutes=330) <= 18


def test_day_part18_local_offset():
    # 23:00Z is 01:00 at UTC+02:00
    assert dp.day_part18(23 * MS_PER_HOUR, utc_offset_minutes=120) == 1
    assert dp.day_part18(23 * MS_PER_HOUR) == 18


def test_creator_day_starts_at_sunrise():
    kw = dict(utc_offset_minutes=JHB_UTC_OFFSET_MINUTES, day_start_minutes=CREATOR_DAY_START_MINUTES)
    t = parse_iso_instant("2025-03-20T05:20:00+02:00")
    assert dp.creator_time(t, **kw) == CreatorTime(part=1, minute=1)
    assert dp.creator_time(t - 1, **kw) == CreatorTime(part=18, minute=80)
    assert dp.creator_time(t + 81 * MS_PER_MINUTE, **kw) == CreatorTime(part=2, minute=2)
    assert dp.day_part18(parse_iso_instant("2025-03-20T12:00:00+02:00"), **kw) == 6


def test_creator_time_minute_range():
    for m in range(0, 1440, 7):
        ct = dp.creator_time(m * MS_PER_MINUTE + 59_999)
        assert 1 <= ct.part <= 18
        assert 1 <= ct.minute <= 80
        assert dp.to_standard_minutes(ct) == m


def test_standard_minutes_conversion():
    assert dp.to_standard_minutes(CreatorTime(1, 1)) == 0
    assert dp.to_standard_minutes(CreatorTime(18, 80)) == 1439
    assert dp.from_standard_minutes(80) == CreatorTime(2, 1)
    assert dp.from_standard_minutes(1440 + 5) == CreatorTime(1, 6)


def test_hand_angle():
    assert dp.hand_angle(CreatorTime(1, 1)) == 90.0
    assert dp.hand_angle(CreatorTime(2, 1)) == pytest.approx(110.0)
    assert dp.hand_angle(CreatorTime(1, 41)) == pytest.approx(100.0)
    assert dp.hand_angle(CreatorTime(18, 1)) == pytest.approx(430.0)


# ---------------------------------------------------------
# 4 solar parts
# ---------------------------------------------------------

def _equator_equinox() -> SolarTimes:
    return solar_times(1, 0.0)


def test_span_hours_split():
    st = SolarTimes(sunrise=6.0, solar_noon=12.0, sunset=18.0)
    assert dp.span_hours(st) == [6.0, 3.0, 3.0, 12.0]
    assert dp.span_hours(st, split=0.25) == [6.0, 1.5, 4.5, 12.0]


@pytest.mark.parametrize("split", [0.0, 1.0, -0.2, 1.5])
def test_span_hours_rejects_bad_split(split):
    with pytest.raises(ConfigError):
        dp.span_hours(SolarTimes(6.0, 12.0, 18.0), split=split)


def test_clamp_spans_rescales_to_24():
    spans, degenerate = dp.clamp_spans([12.0, 6.0, 6.0, 0.0])
    assert degenerate
    assert sum(spans) == pytest.approx(24.0)
    assert min(spans) > 0.0

    spans, degenerate = dp.clamp_spans([6.0, 3.0, 3.0, 12.0])
    assert not degenerate
    assert spans == pytest.approx([6.0, 3.0, 3.0, 12.0])


def test_clamp_spans_non_finite():
    spans, degenerate = dp.clamp_spans([float("nan"), 6.0, 6.0, 12.0])
    assert degenerate
    assert all(math.isfinite(s) for s in spans)


@pytest.mark.parametrize("hour, part", [(10, 1), (13, 2), (16, 3), (20, 4), (3, 4)])
def test_day_part4_current_part(hour, part):
    p4 = dp.day_part4(hour * MS_PER_HOUR, _equator_equinox())
    assert p4.part == part
    assert p4.name == ("morning", "day", "evening", "night")[part - 1]
    assert not p4.degenerate


def test_day_part4_angles_at_equinox():
    p4 = dp.day_part4(0, _equator_equinox())
    a = p4.angles
    assert a.total() == pytest.approx(360.0)
    # about 12h of daylight: morning ~ 90 deg, day = evening ~ 45 deg
    assert a.morning == pytest.approx(90.0, abs=1.5)
    assert a.day == pytest.approx(a.evening)
    assert a.night == pytest.approx(180.0, abs=3.0)


def test_day_part4_sums_to_360_over_latitudes():
    for lat in range(-89, 90, 4):
        for doy in range(1, 367, 9):
            st = solar_times(doy, float(lat))
            p4 = dp.day_part4(8 * MS_PER_HOUR, st)
            a = p4.angles
            assert a.total() == pytest.approx(360.0, abs=1e-9)
            assert all(math.isfinite(v) and v > 0.0 for v in a.as_dict().values())
            assert 1 <= p4.part <= 4


def test_polar_day_is_clamped():
    # near the June solstice (day ~93 from the March equinox), lat 89 N never sets
    st = solar_times(93, 89.0)
    assert st.polar == "day"
    p4 = dp.day_part4(0, st)
    assert p4.degenerate
    assert p4.angles.total() == pytest.approx(360.0)
    assert all(math.isfinite(v) and v > 0.0 for v in p4.angles.as_dict().values())


def test_polar_night_is_clamped():
    st = solar_times(93, -89.0)
    assert st.polar == "night"
    p4 = dp.day_part4(0, st)
    assert p4.degenerate
    assert p4.angles.night == pytest.approx(360.0, abs=1.0)
    assert p4.part == 4
