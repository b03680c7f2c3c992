"""
Report the gap markers found inside a journey.
"""


from collections import namedtuple


DEFAULT_GAP_DURATION = "0s"


class GapInterval(namedtuple("GapInterval", ["start_time", "end_time", "duration", "reason",
                                             "before_journey_index", "after_journey_index"])):

    """
    Stretch of missing samples.  Both journey indexes refer to the journey
    the gap was found in.
    """

    __slots__ = ()

    def to_dict(self):
        return {
            "startTime": self.start_time,
            "endTime": self.end_time,
            "duration": self.duration,
            "reason": self.reason,
            "beforeJourneyIndex": self.before_journey_index,
            "afterJourneyIndex": self.after_journey_index,
        }


def detect_gaps(rows, journey_index):
    """
    Find every gap marker in the unfiltered rows of one journey.

    A gap ends at the next row that is not itself a marker, or at the marker
    when nothing follows it.

    Parameters
    ----------
    rows : sequence of RawDataRow
    journey_index : int
        1-based index of the enclosing journey.

    Returns
    -------
    list of GapInterval
    """
    gaps = []
    next_valid = None
    # Walk backwards so the next real sample is always at hand
    for row in reversed(rows):
        if not row.is_gap:
            next_valid = row
            continue
        end_time = next_valid.timestamp if next_valid is not None else row.timestamp
        gaps.append(GapInterval(
            start_time=row.timestamp,
            end_time=end_time or row.timestamp,
            duration=row.gap_duration or DEFAULT_GAP_DURATION,
            reason="Gap detectado: {}".format(row.gap_duration or "duración desconocida"),
            before_journey_index=journey_index,
            after_journey_index=journey_index,
        ))
    gaps.reverse()
    return gaps
