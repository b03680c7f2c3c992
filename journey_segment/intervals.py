"""
Split a journey into intervals of constant navigational status and label
each one with the activity it represents.

An interval is a maximal run of consecutive rows sharing a status.  The
label depends on the status, on whether either end of the run lies within a
port zone, and on where the run sits in the journey: the first run, the
first maneuvering run and the run just before the last one are treated
specially.  Because of that last rule all runs are built before any of them
is labelled.

The rules, first match wins:

1. Stopped first run in a port zone: docked at the departure port.
2. Stopped first run outside a port zone: a stop.
3. First maneuvering run: maneuvering in the departure port when in a port
   zone, otherwise maneuvering speed towards the destination.
4. Maneuvering run just before the last run: maneuvering in the destination
   port when in a port zone, otherwise maneuvering speed towards the
   destination.
5. Any other maneuvering run: maneuvering speed towards the destination.
6. Underway: heading to the destination.
7. Any other stopped run: a stop.
8. Anything else is unknown.
"""


import logging
import math
from collections import namedtuple
from itertools import groupby

from journey_segment.navstatus import MANEUVERING, STOPPED, UNDERWAY, parse_nav_status
from journey_segment.ports import PORT_ZONE_DISTANCE_KM

logging.basicConfig()
logger = logging.getLogger(__file__)
logger.setLevel(logging.WARNING)


DOCKED_AT = "Atracado en {}"
MANEUVERING_AT = "Maniobrando en {}"
MANEUVERING_SPEED_TOWARDS = "Navegando en velocidad de maniobra hacia {}"
MANEUVERING_SPEED_OUTSIDE_PORT = "Navegando en velocidad de maniobra hacia Puerto B"
HEADING_TO = "Navegando hacia {}"
STOP = "Parada"
UNKNOWN = "Desconocido"

S_PER_MIN = 60
S_PER_HR = 60 * 60
S_PER_DAY = S_PER_HR * 24


CoordinatePoint = namedtuple("CoordinatePoint", ["lat", "lon", "timestamp", "speed", "nav_status"])


def _near_port(start_analysis, end_analysis, port_zone_km):
    return any(
        analysis is not None and analysis.nearest_distance <= port_zone_km
        for analysis in (start_analysis, end_analysis)
    )


def classify_interval_type(nav_status, start_analysis, end_analysis,
                           interval_index, total_intervals, start_port, end_port,
                           is_first_with_nav_status_1,
                           port_zone_km=PORT_ZONE_DISTANCE_KM):
    """
    Label one interval.

    Parameters
    ----------
    nav_status : NavStatus or str
    start_analysis, end_analysis : PortAnalysis or None
        Port distances at the first and last row of the interval.  `None`
        when the row has no position, which counts as outside every port.
    interval_index : int
        0-based position of the interval in its journey.
    total_intervals : int
        Number of intervals in the journey.
    start_port, end_port : str
        Departure and destination port of the journey.
    is_first_with_nav_status_1 : bool
        True only for the first maneuvering interval of the journey.

    Returns
    -------
    str
    """
    status = parse_nav_status(nav_status)
    near_port = _near_port(start_analysis, end_analysis, port_zone_km)

    if status == STOPPED and interval_index == 0:
        return DOCKED_AT.format(start_port) if near_port else STOP

    if status == MANEUVERING and is_first_with_nav_status_1:
        return MANEUVERING_AT.format(start_port) if near_port else MANEUVERING_SPEED_OUTSIDE_PORT

    if status == MANEUVERING and interval_index == total_intervals - 2:
        return MANEUVERING_AT.format(end_port) if near_port else MANEUVERING_SPEED_OUTSIDE_PORT

    if status == MANEUVERING:
        return MANEUVERING_SPEED_TOWARDS.format(end_port)

    if status == UNDERWAY:
        return HEADING_TO.format(end_port)

    if status == STOPPED:
        return STOP

    return UNKNOWN


def format_duration(start, end):
    """
    Format the time between two datetimes as `"{d}d {h}h {m}m {s}s"`, leaving
    out the day component when it is zero.  Unknown or negative spans are
    reported as zero.
    """
    if start is None or end is None:
        seconds = 0
    else:
        try:
            seconds = int(math.floor((end - start).total_seconds()))
        except TypeError:
            seconds = 0
    seconds = max(seconds, 0)

    days, rem = divmod(seconds, S_PER_DAY)
    hours, rem = divmod(rem, S_PER_HR)
    minutes, seconds = divmod(rem, S_PER_MIN)
    if days > 0:
        return "{}d {}h {}m {}s".format(days, hours, minutes, seconds)
    return "{}h {}m {}s".format(hours, minutes, seconds)


def average_speed(rows):
    speeds = [r.speed for r in rows if r.speed is not None and not math.isnan(r.speed)]
    if not speeds:
        return None
    return sum(speeds) / len(speeds)


class SimpleInterval(object):

    """
    A run of rows sharing one navigational status within a journey.
    """

    __slots__ = ["journey_index", "interval_number", "nav_status", "rows",
                 "start_port_distances", "end_port_distances", "classification_type"]

    def __init__(self, journey_index, interval_number, rows, start_port_distances=None,
                 end_port_distances=None, classification_type=None):

        """
        Parameters
        ----------
        journey_index : int
            1-based index of the journey.
        interval_number : int
            1-based position within the journey.
        rows : list of RawDataRow
            Non-empty, in chronological order.
        """
        if not rows:
            raise ValueError("an interval needs at least one row")
        self.journey_index = journey_index
        self.interval_number = interval_number
        self.rows = rows
        self.nav_status = rows[0].nav_status
        self.start_port_distances = start_port_distances
        self.end_port_distances = end_port_distances
        self.classification_type = classification_type

    def __repr__(self):
        return "<{cname}(journey={j}, number={n}, status={s!r}) with {cnt} rows>".format(
            cname=self.__class__.__name__,
            j=self.journey_index,
            n=self.interval_number,
            s=self.nav_status.code,
            cnt=len(self),
        )

    def __iter__(self):
        return iter(self.rows)

    def __len__(self):
        return len(self.rows)

    @property
    def first_row(self):
        return self.rows[0]

    @property
    def last_row(self):
        return self.rows[-1]

    @property
    def start_date(self):
        return self.first_row.date

    @property
    def start_time(self):
        return self.first_row.timestamp

    @property
    def end_date(self):
        return self.last_row.date or self.last_row.timestamp

    @property
    def end_time(self):
        return self.last_row.timestamp

    @property
    def sample_count(self):
        return len(self.rows)

    @property
    def duration(self):
        return format_duration(self.first_row.datetime, self.last_row.datetime)

    @property
    def avg_speed(self):
        return average_speed(self.rows)

    @property
    def coordinate_points(self):
        return [
            CoordinatePoint(r.latitude, r.longitude, r.timestamp, r.speed, r.nav_status.code)
            for r in self.rows
        ]

    def to_dict(self):
        def analysis(a):
            return a.to_dict() if a is not None else None

        return {
            "startDate": self.start_date,
            "startTime": self.start_time,
            "endDate": self.end_date,
            "endTime": self.end_time,
            "navStatus": self.nav_status.code,
            "duration": self.duration,
            "avgSpeed": self.avg_speed,
            "sampleCount": self.sample_count,
            "startLat": self.first_row.latitude,
            "startLon": self.first_row.longitude,
            "endLat": self.last_row.latitude,
            "endLon": self.last_row.longitude,
            "startPortDistances": analysis(self.start_port_distances),
            "endPortDistances": analysis(self.end_port_distances),
            "classificationType": self.classification_type,
            "journeyIndex": self.journey_index,
            "intervalNumber": self.interval_number,
            "coordinatePoints": [
                {"lat": p.lat, "lon": p.lon, "timestamp": p.timestamp,
                 "speed": p.speed, "navStatus": p.nav_status}
                for p in self.coordinate_points
            ],
        }


def _run_status(row):
    # Rows with no status at all do not break a stopped run
    if row.nav_status.code == "":
        return STOPPED
    return row.nav_status


def split_runs(rows):
    """
    Split rows into maximal runs of constant navigational status.  A row with
    an empty status is grouped as stopped, the run itself is still labelled
    from the status of its first row.

    Returns
    -------
    list of list of RawDataRow
    """
    return [list(group) for _, group in groupby(rows, key=_run_status)]


def build_intervals(rows, journey_index, start_port, end_port, analyzer,
                    port_zone_km=PORT_ZONE_DISTANCE_KM):
    """
    Segment the rows of one complete journey into labelled intervals.

    Parameters
    ----------
    rows : sequence of RawDataRow
        The journey's rows with gap markers already removed.
    journey_index : int
        1-based index of the journey.
    start_port, end_port : str
    analyzer : PortProximityAnalyzer
    port_zone_km : float, optional

    Returns
    -------
    list of SimpleInterval
    """
    intervals = [
        SimpleInterval(journey_index, number, run,
                       start_port_distances=analyzer.analyze_row(run[0]),
                       end_port_distances=analyzer.analyze_row(run[-1]))
        for number, run in enumerate(split_runs(rows), start=1)
    ]

    found_first_maneuver = False
    for idx, interval in enumerate(intervals):
        is_first_maneuver = interval.nav_status == MANEUVERING and not found_first_maneuver
        if is_first_maneuver:
            found_first_maneuver = True
        interval.classification_type = classify_interval_type(
            interval.nav_status,
            interval.start_port_distances,
            interval.end_port_distances,
            idx,
            len(intervals),
            start_port,
            end_port,
            is_first_maneuver,
            port_zone_km=port_zone_km,
        )

    logger.debug("Journey %s split into %s intervals", journey_index, len(intervals))
    return intervals
