"""
Containers for reconstructed journeys.
"""


from collections import namedtuple

from journey_segment.intervals import format_duration


Incompleteness = namedtuple("Incompleteness", ["start", "end"])


JourneyMetadata = namedtuple(
    "JourneyMetadata",
    [
        "start_port",
        "end_port",
        "start_date",
        "end_date",
        "start_time",
        "end_time",
        "total_duration",
        "is_incomplete",
        "incompleteness",
        "interval_count",
        "classification_types",
    ],
)


def unique_labels(intervals):
    """
    Distinct classification labels in order of first appearance.
    """
    seen = []
    for interval in intervals:
        if interval.classification_type not in seen:
            seen.append(interval.classification_type)
    return seen


class Journey(object):

    """
    One port-to-port transit.  Built once by `Journey.build()` and not
    modified afterwards.
    """

    __slots__ = ["journey_index", "intervals", "metadata"]

    def __init__(self, journey_index, intervals, metadata):
        self.journey_index = journey_index
        self.intervals = tuple(intervals)
        self.metadata = metadata

    @classmethod
    def build(cls, journey_index, boundary, rows, intervals, is_incomplete):

        """
        Parameters
        ----------
        journey_index : int
            1-based.
        boundary : JourneyBoundary
        rows : list of RawDataRow
            The journey's rows without gap markers.
        intervals : list of SimpleInterval
            Empty for incomplete journeys.
        is_incomplete : bool

        Returns
        -------
        Journey
        """
        first = rows[0] if rows else None
        last = rows[-1] if rows else None
        metadata = JourneyMetadata(
            start_port=boundary.start_port,
            end_port=boundary.end_port,
            start_date=first.date if first else "",
            end_date=last.date if last else "",
            start_time=first.timestamp if first else "",
            end_time=last.timestamp if last else "",
            total_duration=format_duration(
                first.datetime if first else None,
                last.datetime if last else None,
            ),
            is_incomplete=is_incomplete,
            incompleteness=Incompleteness(start=False, end=is_incomplete),
            interval_count=len(intervals),
            classification_types=unique_labels(intervals),
        )
        return cls(journey_index, intervals, metadata)

    def __repr__(self):
        return "<{cname}(index={idx}, {start} -> {end}) with {cnt} intervals>".format(
            cname=self.__class__.__name__,
            idx=self.journey_index,
            start=self.metadata.start_port,
            end=self.metadata.end_port,
            cnt=len(self),
        )

    def __iter__(self):
        return iter(self.intervals)

    def __len__(self):
        return len(self.intervals)

    @property
    def is_incomplete(self):
        return self.metadata.is_incomplete

    def to_dict(self, include_points=True):
        m = self.metadata
        intervals = []
        for interval in self.intervals:
            d = interval.to_dict()
            if not include_points:
                d.pop("coordinatePoints")
            intervals.append(d)
        return {
            "journeyIndex": self.journey_index,
            "intervals": intervals,
            "metadata": {
                "startPort": m.start_port,
                "endPort": m.end_port,
                "startDate": m.start_date,
                "endDate": m.end_date,
                "startTime": m.start_time,
                "endTime": m.end_time,
                "totalDuration": m.total_duration,
                "isIncomplete": m.is_incomplete,
                "incompleteness": {
                    "start": m.incompleteness.start,
                    "end": m.incompleteness.end,
                },
                "intervalCount": m.interval_count,
                "classificationTypes": list(m.classification_types),
            },
        }
