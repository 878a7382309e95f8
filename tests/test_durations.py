import pytest

from gamecore.durations import DEFAULT_RANGE_SECONDS, parse_duration, validate_range


@pytest.mark.parametrize("text, seconds", [
    ("30m", 1800),
    ("2h", 7200),
    ("12H", 43200),
    ("0m", 0),
    (" 5m ", 300),
])
def test_parse_duration(text, seconds):
    assert parse_duration(text) == seconds


@pytest.mark.parametrize("text", ["", "30", "m", "1.5h", "2d", "-5m", "10 m", None])
def test_parse_duration_rejects(text):
    assert parse_duration(text) is None


@pytest.mark.parametrize("seconds, ok", [
    (None, False),
    (0, False),
    (1, True),
    (DEFAULT_RANGE_SECONDS, True),
    (43200, True),
    (43260, False),
])
def test_validate_range(seconds, ok):
    assert validate_range(seconds) is ok
