import datetime

from journey_segment.navstatus import MANEUVERING, STOPPED, UNDERWAY
from journey_segment.rows import RawDataRow


ALGECIRAS = (36.128740148, -5.439981128)
TANGER_MED = (35.880312709, -5.515627045)
CEUTA = (35.889, -5.307)
GIBRALTAR = (36.147611, -5.365393)
OPEN_SEA = (36.01, -5.37)

HEADER = [
    "time",
    "00-lathr [deg]",
    "01-lonhr [deg]",
    "02-ellihr [m]",
    "03-mslhr [m]",
    "04-speed [knots]",
    "05-course [deg]",
    "06-navstatus [adim]",
]


def format_timestamp(ts):
    return ts.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]


def make_csv(samples, header=HEADER, delimiter=","):
    """
    Build a CSV export from `(timestamp, lat, lon, speed, navstatus)` tuples.
    """
    lines = [delimiter.join(header)]
    for timestamp, lat, lon, speed, navstatus in samples:
        values = [timestamp, lat, lon, 10.0, 52.0, speed, 180.0, navstatus]
        lines.append(delimiter.join("" if v is None else str(v) for v in values))
    return "\r\n".join(lines) + "\r\n"


def rows_to_samples(rows):
    return [(r.timestamp, r.latitude, r.longitude, r.speed, r.nav_status.code) for r in rows]


class RowGenerator(object):
    def __init__(self, step_seconds=30):
        self.step = datetime.timedelta(seconds=step_seconds)
        self.reset()

    def reset(self):
        self.timestamp = datetime.datetime(2024, 3, 1, 10, 0, 0)
        self.last_row = None

    def increment(self):
        if self.last_row is not None:
            self.timestamp += self.step

    def next_row(self, status, position, speed=0.0):
        self.increment()
        lat, lon = position
        self.last_row = RawDataRow(format_timestamp(self.timestamp), latitude=lat,
                                   longitude=lon, speed=speed, nav_status=status)
        return self.last_row

    def rows(self, count, status, position, speed=0.0):
        return [self.next_row(status, position, speed) for _ in range(count)]

    def gap(self, duration="2.00s"):
        return RawDataRow.gap_marker(self.last_row.timestamp, duration)

    def voyage(self, origin=ALGECIRAS, destination=CEUTA):
        """
        Two samples a minute: docked at `origin` for 2 minutes, maneuvering
        out for 1, underway for 5, maneuvering in for 1 and docked at
        `destination` for 1.
        """
        near_origin = (origin[0] - 0.003, origin[1] + 0.003)
        near_destination = (destination[0] + 0.004, destination[1] - 0.003)
        return (
            self.rows(4, STOPPED.code, origin)
            + self.rows(2, MANEUVERING.code, near_origin, speed=4.0)
            + self.rows(10, UNDERWAY.code, OPEN_SEA, speed=20.0)
            + self.rows(2, MANEUVERING.code, near_destination, speed=5.0)
            + self.rows(2, STOPPED.code, destination)
        )
