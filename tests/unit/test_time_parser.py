from __future__ import annotations

import datetime as dt
import math

import pandas as pd
import pytest

from sheet_series.models.cells import TimeOfDay
from sheet_series.parsing.time_of_day import parse_time_of_day


def test_canonical_labels_round_trip():
    for hour in range(24):
        for minute in range(60):
            label = f"{hour:02d}:{minute:02d}"
            parsed = parse_time_of_day(label)
            assert parsed is not None
            assert parsed.label == label
            assert parsed.key == 60 * hour + minute


@pytest.mark.parametrize(
    "text,label",
    [
        ("2:05 PM", "14:05"),
        ("12:00 AM", "00:00"),
        ("12:30 PM", "12:30"),
        ("12:15 am", "00:15"),
        ("1:15 a.m.", "01:15"),
        ("11:59 p.m.", "23:59"),
        ("13:00 PM", "13:00"),
        ("9:07", "09:07"),
        ("14:30:59", "14:30"),
        ("Hora: 14:30 aprox", "14:30"),
        ("  08:00  ", "08:00"),
        ("7.45", "07:45"),
        ("23.59", "23:59"),
    ],
)
def test_text_inputs(text, label):
    parsed = parse_time_of_day(text)
    assert parsed is not None
    assert parsed.label == label


def test_meridiem_keys():
    assert parse_time_of_day("2:05 PM").key == 845
    assert parse_time_of_day("12:00 AM").key == 0


def test_attached_meridiem_is_not_standalone():
    # "PM" glued to the digits is not a word-bounded marker
    assert parse_time_of_day("2:05PM").label == "02:05"


@pytest.mark.parametrize(
    "text",
    ["24:00", "23:60", "25:00 PM", "7:5", "7.5", "12.345", "24.00", "7.45 h", "later", "", "noon"],
)
def test_rejected_text(text):
    assert parse_time_of_day(text) is None


def test_first_clock_match_wins():
    assert parse_time_of_day("from 08:15 to 09:45").label == "08:15"


@pytest.mark.parametrize(
    "serial,label",
    [
        (0, "00:00"),
        (0.5, "12:00"),
        (0.375, "09:00"),
        (45000.75, "18:00"),
    ],
)
def test_serial_numbers(serial, label):
    assert parse_time_of_day(serial).label == label


@pytest.mark.parametrize("value", [-1, -7.45, 1e12, math.nan, math.inf])
def test_undecodable_numbers_fall_back_to_text(value):
    # str() of these never looks like a time
    assert parse_time_of_day(value) is None


def test_decoded_datetime_objects():
    assert parse_time_of_day(dt.time(7, 30, 59)).label == "07:30"
    assert parse_time_of_day(dt.datetime(2024, 1, 1, 23, 59)).label == "23:59"
    assert parse_time_of_day(pd.Timestamp("2024-01-01 06:05")).label == "06:05"
    assert parse_time_of_day(dt.timedelta(hours=9, minutes=15)).label == "09:15"
    assert parse_time_of_day(dt.timedelta(days=1, hours=2)).label == "02:00"


@pytest.mark.parametrize("value", [None, True, False, object()])
def test_absent_and_unsupported(value):
    assert parse_time_of_day(value) is None


def test_time_of_day_invariants():
    t = TimeOfDay.from_components(7, 5)
    assert t.label == "07:05"
    assert len(t.label) == 5
    assert t.key == 425
    assert (t.hour, t.minute) == (7, 5)
    with pytest.raises(ValueError):
        TimeOfDay.from_components(24, 0)
    with pytest.raises(ValueError):
        TimeOfDay.from_components(0, 60)
