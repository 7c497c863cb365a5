"""Unit tests for interval overlap and availability slot validation."""

from datetime import datetime

import pytest

from mentorconnect.server.services.scheduling import (
    SlotValidationError,
    intervals_overlap,
    normalize_day,
    validate_slots,
)


def _at(hour: int) -> datetime:
    return datetime(2026, 3, 2, hour)


@pytest.mark.parametrize(
    ("a", "b", "expected"),
    [
        ((10, 12), (10, 12), True),
        ((10, 12), (11, 13), True),
        ((10, 12), (9, 11), True),
        ((10, 12), (9, 13), True),
        ((10, 12), (10, 11), True),
        ((10, 12), (12, 13), False),
        ((10, 12), (8, 10), False),
        ((10, 12), (14, 15), False),
    ],
)
def test_intervals_overlap(a, b, expected):
    assert intervals_overlap(_at(a[0]), _at(a[1]), _at(b[0]), _at(b[1])) is expected
    assert intervals_overlap(_at(b[0]), _at(b[1]), _at(a[0]), _at(a[1])) is expected


def test_intervals_overlap_on_time_strings():
    assert intervals_overlap("09:00", "10:00", "09:30", "11:00")
    assert not intervals_overlap("09:00", "10:00", "10:00", "11:00")


class TestNormalizeDay:
    @pytest.mark.parametrize("raw", ["monday", "MONDAY", " Monday "])
    def test_any_case(self, raw):
        assert normalize_day(raw) == "Monday"

    @pytest.mark.parametrize("raw", ["Mon", "Funday", ""])
    def test_invalid(self, raw):
        with pytest.raises(SlotValidationError):
            normalize_day(raw)


class TestValidateSlots:
    def test_sorted_by_start(self):
        result = validate_slots([("14:00", "15:00"), ("09:00", "10:00"), ("10:00", "11:30")])
        assert result == [
            {"start": "09:00", "end": "10:00"},
            {"start": "10:00", "end": "11:30"},
            {"start": "14:00", "end": "15:00"},
        ]

    def test_empty_day(self):
        assert validate_slots([]) == []

    @pytest.mark.parametrize(
        "slots",
        [
            [("9:00", "10:00")],
            [("09:00", "24:00")],
            [("09:60", "10:00")],
            [("10:00", "10:00")],
            [("11:00", "10:00")],
            [("09:00", "12:00"), ("10:00", "11:00")],
            [("09:00", "17:00"), ("10:00", "11:00"), ("12:00", "13:00")],
        ],
    )
    def test_rejected(self, slots):
        with pytest.raises(SlotValidationError):
            validate_slots(slots)
