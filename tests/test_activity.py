"""
Unittests for journey_segment.activity
"""


import pytest

import journey_segment
from journey_segment.activity import (activity_distribution, format_compact_duration,
                                      journeys_by_day, parse_duration_to_seconds)
from journey_segment.core import process_raw_data

from support import ALGECIRAS, CEUTA, TANGER_MED


@pytest.mark.parametrize("text,seconds", [
    ("0h 0m 0s", 0),
    ("1h 2m 3s", 3723),
    ("2d 5h 0m 7s", 2 * 86400 + 5 * 3600 + 7),
    ("12.34s", 0),
    ("", 0),
    (None, 0),
    ("garbage", 0),
])
def test_parse_duration_to_seconds(text, seconds):
    assert parse_duration_to_seconds(text) == seconds


@pytest.mark.parametrize("seconds,text", [
    (0, "0s"),
    (59, "59s"),
    (61, "1m 1s"),
    (3600, "1h 0m 0s"),
    (86401, "1d 0h 0m 1s"),
])
def test_format_compact_duration(seconds, text):
    assert format_compact_duration(seconds) == text


def test_activity_distribution(row_generator):
    result = process_raw_data(row_generator.voyage())
    activities = activity_distribution(result.journeys)

    # The single row stop at the end lasts no time at all
    assert [a.name for a in activities] == [
        "Atracado en Algeciras",
        "Maniobrando en Algeciras",
        "Navegando hacia Ceuta",
        "Maniobrando en Ceuta",
    ]
    durations = {a.name: a.duration for a in activities}
    assert durations["Atracado en Algeciras"] == 90
    assert durations["Navegando hacia Ceuta"] == 270
    assert sum(a.percentage for a in activities) == pytest.approx(100)
    assert all(a.count == 1 for a in activities)


def test_activity_distribution_selection(row_generator):
    rows = row_generator.voyage(ALGECIRAS, CEUTA) + row_generator.voyage(CEUTA, TANGER_MED)
    journeys = process_raw_data(rows).journeys
    everything = activity_distribution(journeys)
    second_only = activity_distribution(journeys, journey_indices={2})
    assert "Atracado en Algeciras" in [a.name for a in everything]
    assert "Atracado en Algeciras" not in [a.name for a in second_only]
    assert "Atracado en Ceuta" in [a.name for a in second_only]
    assert activity_distribution(journeys, journey_indices=set()) == []


def test_journeys_by_day(row_generator):
    first = process_raw_data(row_generator.voyage()).journeys
    row_generator.timestamp = row_generator.timestamp.replace(day=3)
    second = process_raw_data(row_generator.voyage()).journeys
    row_generator.timestamp = row_generator.timestamp.replace(day=2)
    third = process_raw_data(row_generator.voyage()).journeys

    grouped = journeys_by_day(second + first + third)
    assert list(grouped) == ["2024-03-01", "2024-03-02", "2024-03-03"]
    assert len(grouped["2024-03-01"]) == 2


def test_package_exports():
    assert journey_segment.activity_distribution is activity_distribution
    assert journey_segment.journeys_by_day is journeys_by_day
