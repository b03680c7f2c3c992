"""
Unittests for journey_segment.boundaries
"""


from journey_segment.boundaries import UNKNOWN_PORT, detect_journey_boundaries
from journey_segment.ports import PortProximityAnalyzer
from journey_segment.rows import RawDataRow

from support import ALGECIRAS, CEUTA, OPEN_SEA, TANGER_MED


def boundaries(rows):
    return list(detect_journey_boundaries(rows, PortProximityAnalyzer()))


def test_single_voyage(row_generator):
    rows = row_generator.voyage()
    found = boundaries(rows)
    assert len(found) == 2

    first, second = found
    assert first.start_index == 0
    assert first.end_index == 18
    assert (first.start_port, first.end_port) == ("Algeciras", "Ceuta")
    assert first.is_complete

    assert second.start_index == 18
    assert second.end_index == len(rows) - 1
    assert (second.start_port, second.end_port) == ("Ceuta", UNKNOWN_PORT)
    assert not second.is_complete


def test_round_trip(row_generator):
    rows = row_generator.voyage(ALGECIRAS, CEUTA) + row_generator.voyage(CEUTA, TANGER_MED)
    found = boundaries(rows)
    assert [(b.start_port, b.end_port, b.is_complete) for b in found] == [
        ("Algeciras", "Ceuta", True),
        ("Ceuta", "Tanger Med", True),
        ("Tanger Med", UNKNOWN_PORT, False),
    ]
    # Every closed journey ends in a different port than it started
    for b in found[:-1]:
        assert b.start_port != b.end_port
    # Consecutive journeys share the dock row
    assert found[0].end_index == found[1].start_index


def test_return_to_origin_is_not_a_boundary(row_generator):
    rows = (row_generator.rows(2, "0.0", ALGECIRAS)
            + row_generator.rows(4, "2.0", OPEN_SEA)
            + row_generator.rows(2, "0.0", ALGECIRAS))
    found = boundaries(rows)
    assert len(found) == 1
    assert found[0].start_index == 0
    assert not found[0].is_complete


def test_no_dock_no_journey(row_generator):
    rows = row_generator.rows(5, "2.0", OPEN_SEA) + row_generator.rows(2, "0.0", OPEN_SEA)
    assert boundaries(rows) == []


def test_rows_without_position_are_ignored(row_generator):
    rows = row_generator.rows(2, "2.0", OPEN_SEA)
    rows.append(RawDataRow("2024-03-01 10:01:00.000", nav_status="0.0"))
    rows.append(RawDataRow("2024-03-01 10:01:30.000", latitude=float("nan"),
                           longitude=CEUTA[1], nav_status="0.0"))
    assert boundaries(rows) == []

    rows = row_generator.rows(1, "0.0", ALGECIRAS)
    rows.append(RawDataRow("2024-03-01 11:00:00.000", nav_status="0.0"))
    rows += row_generator.rows(1, "0.0", CEUTA)
    found = boundaries(rows)
    assert (found[0].start_index, found[0].end_index) == (0, 2)


def test_gap_markers_do_not_reset_state(row_generator):
    rows = row_generator.rows(2, "0.0", ALGECIRAS)
    rows.append(row_generator.gap())
    rows += row_generator.rows(3, "2.0", OPEN_SEA)
    rows += row_generator.rows(1, "0.0", CEUTA)
    found = boundaries(rows)
    assert found[0].start_index == 0
    assert found[0].end_index == 6
    assert found[0].is_complete


def test_custom_port_zone(row_generator):
    # About 1.5 km from Ceuta
    rows = row_generator.rows(1, "0.0", ALGECIRAS) + row_generator.rows(1, "0.0", (35.9025, -5.307))
    assert boundaries(rows)[0].end_port == "Ceuta"
    found = list(detect_journey_boundaries(rows, PortProximityAnalyzer(), port_zone_km=1))
    assert len(found) == 1
    assert not found[0].is_complete
