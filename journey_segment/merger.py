"""
Merge several CSV exports into one chronological row stream.

Exports arrive in no particular order and may overlap, so all rows are
pooled and sorted on their timestamp.  Wherever two consecutive samples are
further apart than `max_gap_ms`, a gap marker is inserted after the first
one.  The marker takes the timestamp of the sample before it and records
the size of the hole as `"<seconds>s"` with two decimals.
"""


import datetime
import logging
from collections import namedtuple
from functools import cmp_to_key

from journey_segment.rows import RawDataRow, read_csv_text

logging.basicConfig()
logger = logging.getLogger(__file__)
logger.setLevel(logging.WARNING)


DEFAULT_MAX_GAP_MS = 500
DEFAULT_DELIMITER = ","

MergeStats = namedtuple("MergeStats", ["total_rows", "files_processed", "gaps_detected"])


class RawDataResult(object):

    """
    Outcome of merging CSV exports.  On failure `data` is `None` and `error`
    says why.
    """

    __slots__ = ["success", "data", "meta", "error"]

    def __init__(self, success, data=None, meta=None, error=None):
        self.success = success
        self.data = data
        self.meta = meta
        self.error = error

    @classmethod
    def failure(cls, error):
        return cls(False, error=error)

    def __repr__(self):
        return "<{cname}(success={ok}) with {cnt} rows>".format(
            cname=self.__class__.__name__,
            ok=self.success,
            cnt=len(self.data or ()),
        )

    def to_dict(self):
        if not self.success:
            return {"success": False, "error": self.error}
        return {
            "success": True,
            "data": [row.to_dict() for row in self.data],
            "meta": {
                "totalRows": self.meta.total_rows,
                "filesProcessed": self.meta.files_processed,
                "gapsDetected": self.meta.gaps_detected,
            },
        }


def compute_row_delta(row1, row2):
    """
    Time from `row1` to `row2`.

    Returns
    -------
    datetime.timedelta or None
        `None` if either timestamp is missing or unusable.
    """
    ts1 = row1.datetime
    ts2 = row2.datetime
    if ts1 is None or ts2 is None:
        return None
    try:
        return ts2 - ts1
    except TypeError:
        # Naive and timezone aware timestamps do not mix
        return None


def _compare_rows(row1, row2):
    delta = compute_row_delta(row2, row1)
    if delta is None:
        return 0
    zero = datetime.timedelta(0)
    return (delta > zero) - (delta < zero)


def sort_rows(rows):
    """
    Sort rows by timestamp.  Rows whose timestamp cannot be parsed compare
    equal to everything, so the stable sort leaves them where it can.

    Returns
    -------
    list of RawDataRow
    """
    return sorted(rows, key=cmp_to_key(_compare_rows))


def format_gap_duration(delta):
    return "{:.2f}s".format(delta.total_seconds())


def insert_gap_markers(rows, max_gap_ms=DEFAULT_MAX_GAP_MS):
    """
    Insert a gap marker after every row followed by a jump of more than
    `max_gap_ms`.  Pairs with unusable timestamps get no marker.

    Returns
    -------
    list of RawDataRow
    """
    threshold = datetime.timedelta(milliseconds=max_gap_ms)
    result = []
    for current, following in zip(rows, rows[1:]):
        result.append(current)
        delta = compute_row_delta(current, following)
        if delta is not None and delta > threshold:
            result.append(RawDataRow.gap_marker(current.timestamp, format_gap_duration(delta)))
    if rows:
        result.append(rows[-1])
    return result


def process_csvs_to_raw_data(csv_texts, delimiter=DEFAULT_DELIMITER, max_gap_ms=DEFAULT_MAX_GAP_MS):
    """
    Parse, merge, sort and gap-mark a set of CSV exports.

    Exports without the required columns contribute nothing.  The call only
    fails when no export contributes a single row.

    Parameters
    ----------
    csv_texts : sequence of str
        Raw CSV exports in any order.
    delimiter : str, optional
        Field separator; `tab` and `\\t` mean a tab.
    max_gap_ms : float, optional
        Largest spacing between samples that is not a gap.

    Returns
    -------
    RawDataResult
    """
    csv_texts = list(csv_texts)
    logger.info("Processing %s CSV file(s)", len(csv_texts))

    combined = []
    for idx, csv_text in enumerate(csv_texts, start=1):
        rows = read_csv_text(csv_text, delimiter)
        logger.info("File %s: %s rows", idx, len(rows))
        combined.extend(rows)

    if not combined:
        return RawDataResult.failure("No valid rows could be read from the CSV files")

    logger.info("Sorting %s combined rows", len(combined))
    combined = sort_rows(combined)

    with_gaps = insert_gap_markers(combined, max_gap_ms)
    gaps_detected = len(with_gaps) - len(combined)
    logger.info("%s gap(s) detected, %s rows in total", gaps_detected, len(with_gaps))

    return RawDataResult(
        True,
        data=with_gaps,
        meta=MergeStats(
            total_rows=len(with_gaps),
            files_processed=len(csv_texts),
            gaps_detected=gaps_detected,
        ),
    )
