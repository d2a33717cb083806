import pytest

from stellarsim.date import YMD, Date


def test_epoch_is_day_zero():
    d = Date.from_ymd(2200, 1, 1)
    assert d.days_since_epoch() == 0
    assert d.to_string() == "2200-01-01"


def test_next_day():
    assert Date(1).to_string() == "2200-01-02"


def test_2200_is_not_leap_year():
    assert Date.from_ymd(2200, 3, 1).days - Date.from_ymd(2200, 2, 28).days == 1


@pytest.mark.parametrize("days", [-800000, -36525, -1, 0, 59, 60, 365, 146097, 1000000])
def test_round_trip_days(days):
    d = Date(days)
    ymd = d.to_ymd()
    assert Date.from_ymd(ymd.year, ymd.month, ymd.day) == d
    assert Date.parse_iso_ymd(d.to_string()) == d if 0 <= ymd.year <= 9999 else True


def test_consecutive_days_are_consecutive_dates():
    prev = Date(-400).to_ymd()
    for n in range(-399, 800):
        cur = Date(n).to_ymd()
        if cur.day == 1:
            assert cur.month == prev.month % 12 + 1
        else:
            assert cur.day == prev.day + 1 and cur.month == prev.month
        prev = cur


def test_parse_iso():
    d = Date.parse_iso_ymd("2200-01-01")
    assert d.to_ymd() == YMD(2200, 1, 1)
    assert str(d) == "2200-01-01"


@pytest.mark.parametrize("bad", ["2200/01/01", "2200-1-1", "", "22000-01-01"])
def test_parse_iso_bad_format(bad):
    with pytest.raises(ValueError, match="Invalid date format"):
        Date.parse_iso_ymd(bad)


def test_parse_iso_non_numeric():
    with pytest.raises(ValueError):
        Date.parse_iso_ymd("abcd-01-01")


def test_month_out_of_range():
    with pytest.raises(ValueError, match="month out of range"):
        Date.from_ymd(2200, 13, 1)
    with pytest.raises(ValueError, match="month out of range"):
        Date.parse_iso_ymd("2200-00-10")


def test_day_out_of_range():
    with pytest.raises(ValueError, match="day out of range"):
        Date.from_ymd(2200, 1, 32)


def test_ordering():
    assert Date.from_ymd(2200, 1, 1) < Date.from_ymd(2200, 1, 2)