import pytest

from lobrl.timeutil import (
    add_hours,
    add_millis,
    add_minutes,
    add_seconds,
    string_to_time,
    time_to_string,
)


def test_unit_offsets():
    assert add_hours(1, 0) == 3600000
    assert add_minutes(1, 0) == 60000
    assert add_seconds(1, 0) == 1000
    assert add_millis(7, 5) == 12


def test_negative_updates_subtract():
    base = add_hours(17, 0)
    assert add_minutes(-30, base) == add_hours(16, add_minutes(30, 0))


def test_string_to_time_composes_fields():
    expected = add_hours(9, add_minutes(30, add_seconds(15, add_millis(250, 0))))
    assert string_to_time("09:30:15.250") == expected


@pytest.mark.parametrize("text", ["12:34:56.789", "00:00:00.0", "23:59:59.999"])
def test_round_trip(text):
    assert time_to_string(string_to_time(text)) == text


def test_millis_are_not_padded():
    assert time_to_string(string_to_time("08:00:00.005")) == "08:00:00.5"


def test_bad_text_raises():
    with pytest.raises(ValueError):
        string_to_time("bad")