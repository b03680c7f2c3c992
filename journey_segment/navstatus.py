"""
Navigational status reported alongside each position.

The telemetry feed encodes the status as a numeric string (`"0.0"`, `"1.0"`,
`"2.0"`) and the merger uses `"GAP"` for the synthetic rows it inserts where
samples are missing.  The string is parsed once, when a row is built, into one
of the constants below.  Everything downstream compares against the
constants and only `NavStatus.code` is written back out.
"""


from collections import namedtuple


NavStatus = namedtuple("NavStatus", ["code", "name"])

STOPPED = NavStatus("0.0", "stopped")
MANEUVERING = NavStatus("1.0", "maneuvering")
UNDERWAY = NavStatus("2.0", "underway")
GAP_MARKER = NavStatus("GAP", "gap")

UNKNOWN_NAME = "unknown"

KNOWN_STATUSES = {s.code: s for s in (STOPPED, MANEUVERING, UNDERWAY, GAP_MARKER)}


def parse_nav_status(value):
    """
    Convert the legacy string encoding into a `NavStatus`.

    Numeric spellings of the known codes (`"0"`, `"2.00"`, `1.0`) map onto
    the same constant.  Anything else is kept as an unknown status that
    carries the original text so it still round trips.

    Returns
    -------
    NavStatus
    """
    if isinstance(value, NavStatus):
        return value
    code = "" if value is None else str(value).strip()
    if code in KNOWN_STATUSES:
        return KNOWN_STATUSES[code]
    if code.upper() == GAP_MARKER.code:
        return GAP_MARKER
    try:
        number = float(code)
    except ValueError:
        return NavStatus(code, UNKNOWN_NAME)
    canonical = "{:.1f}".format(number)
    if canonical in KNOWN_STATUSES:
        return KNOWN_STATUSES[canonical]
    return NavStatus(code, UNKNOWN_NAME)
