"""
Parse CSV exports into `RawDataRow` objects.

Each export has a header line followed by one sample per line.  A usable
export has a column named exactly `time` and a column whose name contains
`navstatus`; anything else produces no rows.
"""


import csv
import logging
import math
from collections import namedtuple

import dateutil.parser

from journey_segment.navstatus import GAP_MARKER, parse_nav_status

logging.basicConfig()
logger = logging.getLogger(__file__)
logger.setLevel(logging.WARNING)


COL_TIME = "time"
COL_LAT = "00-lathr [deg]"
COL_LON = "01-lonhr [deg]"
COL_SPEED = "04-speed [knots]"
COL_NAVSTATUS = "06-navstatus [adim]"

NAVSTATUS_TOKEN = "navstatus"

TAB_DELIMITERS = ("tab", "\\t", "\t")

Columns = namedtuple("Columns", ["time", "lat", "lon", "speed", "navstatus"])

DEFAULT_COLUMNS = Columns(COL_TIME, COL_LAT, COL_LON, COL_SPEED, COL_NAVSTATUS)


def resolve_delimiter(delimiter):
    if delimiter in TAB_DELIMITERS:
        return "\t"
    return delimiter or ","


def parse_timestamp(value):
    """
    Parse a `YYYY-MM-DD HH:MM:SS.mmm` timestamp.

    Returns
    -------
    datetime.datetime or None
        `None` when the value is empty or cannot be parsed.
    """
    if not value or not isinstance(value, str):
        return None
    try:
        return dateutil.parser.parse(value)
    except (ValueError, OverflowError):
        return None


def parse_float(value):
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def is_null(v):
    return (v is None) or math.isnan(v)


class RawDataRow(object):

    """
    One telemetry sample, or a synthetic marker standing in for missing
    samples.

    Markers carry no position or speed and have `nav_status` set to
    `GAP_MARKER`.  `fields` holds the untouched CSV columns of real samples.
    """

    __slots__ = ["timestamp", "latitude", "longitude", "speed", "nav_status",
                 "is_gap_marker", "gap_duration", "fields", "_parsed"]

    def __init__(self, timestamp, latitude=None, longitude=None, speed=None,
                 nav_status="", is_gap_marker=False, gap_duration=None, fields=None):
        self.timestamp = timestamp or ""
        self.latitude = latitude
        self.longitude = longitude
        self.speed = speed
        self.nav_status = parse_nav_status(nav_status)
        self.is_gap_marker = bool(is_gap_marker)
        self.gap_duration = gap_duration
        self.fields = fields or {}
        self._parsed = None

    @classmethod
    def gap_marker(cls, timestamp, gap_duration):
        return cls(timestamp, nav_status=GAP_MARKER, is_gap_marker=True,
                   gap_duration=gap_duration)

    @classmethod
    def from_dict(cls, d):
        """
        Build a row from its serialized form, see `to_dict()`.
        """
        known = {"timestamp", "date", "time", "latitude", "longitude", "speed",
                 "navStatus", "isGapMarker", "gapDuration"}
        return cls(
            d.get("timestamp"),
            latitude=parse_float(d.get("latitude")),
            longitude=parse_float(d.get("longitude")),
            speed=parse_float(d.get("speed")),
            nav_status=d.get("navStatus"),
            is_gap_marker=d.get("isGapMarker", False),
            gap_duration=d.get("gapDuration"),
            fields={k: v for k, v in d.items() if k not in known},
        )

    def __repr__(self):
        return "<{cname}(timestamp={ts!r}, nav_status={status!r}) at {hsh}>".format(
            cname=self.__class__.__name__,
            ts=self.timestamp,
            status=self.nav_status.code,
            hsh=hash(self),
        )

    @property
    def date(self):
        parts = self.timestamp.split(" ")
        return parts[0] if len(parts) >= 2 else ""

    @property
    def time(self):
        parts = self.timestamp.split(" ")
        return parts[1] if len(parts) >= 2 else ""

    @property
    def datetime(self):
        """
        Parsed `timestamp`, or `None` if it cannot be parsed.  Parsed once.
        """
        if self._parsed is None:
            self._parsed = (parse_timestamp(self.timestamp),)
        return self._parsed[0]

    @property
    def is_gap(self):
        return self.is_gap_marker or self.nav_status == GAP_MARKER

    @property
    def has_position(self):
        return not (is_null(self.latitude) or is_null(self.longitude))

    def to_dict(self):
        d = dict(self.fields)
        d.update({
            "timestamp": self.timestamp,
            "date": self.date,
            "time": self.time,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "speed": self.speed,
            "navStatus": self.nav_status.code,
            "isGapMarker": self.is_gap_marker,
        })
        if self.gap_duration is not None:
            d["gapDuration"] = self.gap_duration
        return d


def resolve_columns(headers):
    """
    Find the columns holding each value.  An exact match on the usual export
    names wins, otherwise the first header containing a short token is used.

    Returns
    -------
    Columns
    """
    lowered = [h.lower() for h in headers]

    def find(exact, token):
        if exact in headers:
            return exact
        for header, low in zip(headers, lowered):
            if token in low:
                return header
        return None

    return Columns(
        COL_TIME,
        find(COL_LAT, "lat"),
        find(COL_LON, "lon"),
        find(COL_SPEED, "speed"),
        find(COL_NAVSTATUS, NAVSTATUS_TOKEN),
    )


def csv_text_to_rows(csv_string, delimiter=","):
    """
    Split one CSV export into dictionaries keyed by header.

    Empty cells become `None` and unnamed columns are called `column_<index>`.
    An export without the `time` and `navstatus` columns, or without a single
    data line, yields nothing.

    Returns
    -------
    list of dict
    """
    if not csv_string or not csv_string.strip():
        return []

    lines = csv_string.replace("\r\n", "\n").replace("\r", "\n").strip().split("\n")
    if len(lines) < 2:
        return []

    reader = csv.reader(lines, delimiter=resolve_delimiter(delimiter))
    headers = [h.strip() for h in next(reader)]

    has_navstatus = any(NAVSTATUS_TOKEN in h.lower() for h in headers)
    has_time = COL_TIME in headers
    if not has_navstatus or not has_time:
        logger.debug("Missing `time` or `navstatus` column in header %r", headers)
        return []

    rows = []
    for line in reader:
        values = [v.strip() for v in line]
        row = {}
        for idx, header in enumerate(headers):
            key = header or "column_{}".format(idx)
            value = values[idx] if idx < len(values) else None
            row[key] = None if value == "" else value
        rows.append(row)
    return rows


def normalize_row(row, columns=DEFAULT_COLUMNS):
    """
    Build a `RawDataRow` from one dictionary produced by `csv_text_to_rows()`.
    Values that cannot be parsed become `None`.
    """
    def get(column):
        return row.get(column) if column else None

    return RawDataRow(
        get(columns.time),
        latitude=parse_float(get(columns.lat)),
        longitude=parse_float(get(columns.lon)),
        speed=parse_float(get(columns.speed)),
        nav_status=get(columns.navstatus),
        fields=row,
    )


def read_csv_text(csv_string, delimiter=","):
    """
    Parse one CSV export straight into `RawDataRow` objects.

    Returns
    -------
    list of RawDataRow
    """
    dict_rows = csv_text_to_rows(csv_string, delimiter)
    if not dict_rows:
        return []
    columns = resolve_columns(list(dict_rows[0].keys()))
    return [normalize_row(row, columns) for row in dict_rows]
