"""
Find where journeys start and end in a merged row stream.

A journey starts when the vessel is docked (`STOPPED`) inside a port zone
and ends the next time it is docked inside the zone of a *different* port.
That same row also starts the following journey.  Docking again at the port
of departure is not a boundary.  Whatever is still open when the stream ends
is reported as an incomplete journey heading to an unknown port.
"""


import logging
from collections import namedtuple

from journey_segment.navstatus import STOPPED
from journey_segment.ports import PORT_ZONE_DISTANCE_KM

logging.basicConfig()
logger = logging.getLogger(__file__)
logger.setLevel(logging.WARNING)


UNKNOWN_PORT = "Desconocido"

JourneyBoundary = namedtuple(
    "JourneyBoundary",
    ["start_index", "end_index", "start_port", "end_port", "is_complete"],
)


def detect_journey_boundaries(rows, analyzer, port_zone_km=PORT_ZONE_DISTANCE_KM):
    """
    Scan `rows` once and yield a `JourneyBoundary` for every journey.

    Gap markers and rows without a position are ignored entirely: they never
    open or close a journey.  Indexes refer to `rows` and are inclusive.

    Parameters
    ----------
    rows : sequence of RawDataRow
        Chronologically ordered, may contain gap markers.
    analyzer : PortProximityAnalyzer
    port_zone_km : float, optional
        Distance to the nearest port below which a position is in port.

    Yields
    ------
    JourneyBoundary
    """
    start_index = None
    start_port = None

    for idx, row in enumerate(rows):
        if row.is_gap or not row.has_position:
            continue
        if row.nav_status != STOPPED:
            continue

        analysis = analyzer.analyze(row.latitude, row.longitude)
        if not analysis.within(port_zone_km):
            continue
        port = analysis.nearest_port

        if start_index is None:
            logger.debug("Journey opened at row %s in %s", idx, port)
            start_index = idx
            start_port = port
        elif port != start_port:
            logger.debug("Journey %s -> %s closed at row %s", start_port, port, idx)
            yield JourneyBoundary(start_index, idx, start_port, port, True)
            start_index = idx
            start_port = port

    if start_index is not None:
        logger.debug("Journey from %s still open at end of data", start_port)
        yield JourneyBoundary(start_index, len(rows) - 1, start_port, UNKNOWN_PORT, False)
