"""
Reconstruct vessel journeys from a merged, gap-marked row stream.

The stream is scanned once for journey boundaries (docked in one port, then
docked in another).  Each journey's rows are then checked for gap markers:
a journey with missing samples, or one that never reached a second port, is
reported as incomplete and left unsegmented.  Complete journeys are split
into intervals of constant navigational status and each interval is
labelled, see `journey_segment.intervals`.

Failures never raise out of `JourneySegmenter.process()`; they come back as
a `CSVIntervalResult` with `success=False` and an error message.
"""


import logging
from collections import namedtuple

from journey_segment.boundaries import detect_journey_boundaries
from journey_segment.gaps import detect_gaps
from journey_segment.intervals import build_intervals
from journey_segment.journey import Journey
from journey_segment.merger import (DEFAULT_DELIMITER, DEFAULT_MAX_GAP_MS,
                                    process_csvs_to_raw_data)
from journey_segment.ports import (DEFAULT_CACHE_SIZE, DEFAULT_PORTS,
                                   PORT_ZONE_DISTANCE_KM, PortProximityAnalyzer)
from journey_segment.rows import RawDataRow

logging.basicConfig()
logger = logging.getLogger(__file__)
logger.setLevel(logging.WARNING)


Summary = namedtuple(
    "Summary",
    ["total_intervals", "total_rows", "files_processed", "total_journeys",
     "incomplete_journeys", "total_gaps"],
)


class CSVIntervalResult(object):

    """
    Journeys, gaps and summary counts for one run, or the reason it failed.
    """

    __slots__ = ["success", "journeys", "gaps", "summary", "error"]

    def __init__(self, success, journeys=(), gaps=(), summary=None, error=None):
        self.success = success
        self.journeys = list(journeys)
        self.gaps = list(gaps)
        self.summary = summary
        self.error = error

    @classmethod
    def failure(cls, error):
        return cls(False, error=error)

    def __repr__(self):
        return "<{cname}(success={ok}) with {cnt} journeys>".format(
            cname=self.__class__.__name__,
            ok=self.success,
            cnt=len(self.journeys),
        )

    def to_dict(self, include_points=True):
        if not self.success:
            return {"success": False, "error": self.error}
        s = self.summary
        return {
            "success": True,
            "data": {
                "journeys": [j.to_dict(include_points=include_points) for j in self.journeys],
                "gaps": [g.to_dict() for g in self.gaps],
                "summary": {
                    "totalIntervals": s.total_intervals,
                    "totalRows": s.total_rows,
                    "filesProcessed": s.files_processed,
                    "totalJourneys": s.total_journeys,
                    "incompleteJourneys": s.incomplete_journeys,
                    "totalGaps": s.total_gaps,
                },
            },
        }


class JourneySegmenter(object):

    """
    Turn rows into journeys, intervals and gaps.

    Settings are class attributes that can be overridden per instance:

        >>> segmenter = JourneySegmenter(port_zone_km=3)
        >>> result = segmenter.process(rows)
        >>> for journey in result.journeys:
        ...     print(journey.metadata.start_port, journey.metadata.end_port)

    Attributes
    ----------
    port_zone_km : float
        A position closer than this to a port is in that port.
    max_gap_ms : float
        Samples further apart than this are separated by a gap marker when
        CSV exports are merged.
    cache_size : int
        Number of positions remembered by the port distance cache.
    delimiter : str
        CSV field separator.
    """

    port_zone_km = PORT_ZONE_DISTANCE_KM
    max_gap_ms = DEFAULT_MAX_GAP_MS
    cache_size = DEFAULT_CACHE_SIZE
    delimiter = DEFAULT_DELIMITER

    settings = ("port_zone_km", "max_gap_ms", "cache_size", "delimiter")

    def __init__(self, ports=DEFAULT_PORTS, analyzer=None, **kwargs):

        """
        Parameters
        ----------
        ports : sequence of Port, optional
            Ports that journeys start and end in.
        analyzer : PortProximityAnalyzer, optional
            Supply an analyzer to share its cache.  By default every
            segmenter builds its own.
        """
        unknown = set(kwargs) - set(self.settings)
        if unknown:
            raise ValueError("unknown settings: {}".format(", ".join(sorted(unknown))))
        for k in self.settings:
            self._update(k, kwargs)
        if analyzer is None:
            analyzer = PortProximityAnalyzer(ports, cache_size=self.cache_size)
        self._analyzer = analyzer

    def __repr__(self):
        return "<{cname}() port_zone_km={zone} max_gap_ms={gap} at {id_}>".format(
            cname=self.__class__.__name__,
            zone=self.port_zone_km,
            gap=self.max_gap_ms,
            id_=hash(self),
        )

    def _update(self, key, values):
        if key in values:
            setattr(self, key, values[key])
        elif not hasattr(self, key):
            raise ValueError('instance has no default value for "{}"'.format(key))

    @property
    def analyzer(self):
        return self._analyzer

    def clear_cache(self):
        """
        Empty the port distance cache before an unrelated run.
        """
        self._analyzer.clear()

    def _build_journey(self, journey_index, boundary, rows):
        """
        Build one journey from its boundary.

        Returns
        -------
        (Journey, list of GapInterval)
        """
        span = rows[boundary.start_index:boundary.end_index + 1]
        gaps = detect_gaps(span, journey_index)
        valid = [row for row in span if not row.is_gap]

        is_incomplete = not boundary.is_complete or bool(gaps)
        if is_incomplete:
            logger.debug("Journey %s is incomplete (closed=%s, gaps=%s)",
                         journey_index, boundary.is_complete, len(gaps))
            intervals = []
        else:
            intervals = build_intervals(
                valid, journey_index, boundary.start_port, boundary.end_port,
                self._analyzer, port_zone_km=self.port_zone_km)

        journey = Journey.build(journey_index, boundary, valid, intervals, is_incomplete)
        return journey, gaps

    def _process(self, rows, files_processed):
        journeys = []
        gaps = []
        boundaries = detect_journey_boundaries(rows, self._analyzer, self.port_zone_km)
        for journey_index, boundary in enumerate(boundaries, start=1):
            journey, journey_gaps = self._build_journey(journey_index, boundary, rows)
            journeys.append(journey)
            gaps.extend(journey_gaps)

        summary = Summary(
            total_intervals=sum(len(j) for j in journeys),
            total_rows=len(rows),
            files_processed=files_processed,
            total_journeys=len(journeys),
            incomplete_journeys=sum(1 for j in journeys if j.is_incomplete),
            total_gaps=len(gaps),
        )
        logger.info("Found %s journeys (%s incomplete), %s intervals, %s gaps",
                    summary.total_journeys, summary.incomplete_journeys,
                    summary.total_intervals, summary.total_gaps)
        return CSVIntervalResult(True, journeys=journeys, gaps=gaps, summary=summary)

    def process(self, rows, files_processed=1):
        """
        Detect journeys, gaps and intervals in an already merged stream.

        Parameters
        ----------
        rows : sequence of RawDataRow or dict
            Chronologically ordered rows, possibly including gap markers.
            Dictionaries are converted with `RawDataRow.from_dict()`.
        files_processed : int, optional
            Reported in the summary.

        Returns
        -------
        CSVIntervalResult
        """
        rows = list(rows or ())
        if not rows:
            return CSVIntervalResult.failure("No data to process")
        try:
            rows = [r if isinstance(r, RawDataRow) else RawDataRow.from_dict(r) for r in rows]
            return self._process(rows, files_processed)
        except Exception as e:
            logger.exception("Failed to process %s rows", len(rows))
            return CSVIntervalResult.failure(str(e) or e.__class__.__name__)

    def process_csv_texts(self, csv_texts):
        """
        Run the whole pipeline, from raw CSV exports to journeys.

        Returns
        -------
        CSVIntervalResult
        """
        merged = process_csvs_to_raw_data(csv_texts, self.delimiter, self.max_gap_ms)
        if not merged.success:
            return CSVIntervalResult.failure(merged.error)
        return self.process(merged.data, files_processed=merged.meta.files_processed)


def process_raw_data(rows, **kwargs):
    """
    Shortcut for `JourneySegmenter(**kwargs).process(rows)`.  Every call uses
    a fresh port distance cache.
    """
    return JourneySegmenter(**kwargs).process(rows)


def process_csv_texts(csv_texts, **kwargs):
    """
    Shortcut for `JourneySegmenter(**kwargs).process_csv_texts(csv_texts)`.
    """
    return JourneySegmenter(**kwargs).process_csv_texts(csv_texts)
