"""
Summaries of how time is spent across journeys.
"""



import re
from collections import OrderedDict, namedtuple

from journey_segment.intervals import S_PER_DAY, S_PER_HR, S_PER_MIN
from journey_segment.rows import parse_timestamp


DURATION_UNITS = {"d": S_PER_DAY, "h": S_PER_HR, "m": S_PER_MIN, "s": 1}

DURATION_PART = re.compile(r"^(-?\d+)([dhms])$")

Activity = namedtuple("Activity", ["name", "count", "duration", "percentage"])


def parse_duration_to_seconds(duration):
    """
    Convert a `"1d 2h 3m 4s"` style duration to seconds.  Parts that are not
    understood are ignored, so garbage gives 0.
    """
    if not duration:
        return 0
    total = 0
    for part in duration.split():
        match = DURATION_PART.match(part)
        if match:
            total += int(match.group(1)) * DURATION_UNITS[match.group(2)]
    return total


def format_compact_duration(seconds):
    """
    Format seconds leaving out leading zero components, e.g. `"3m 4s"`.
    """
    seconds = int(seconds)
    days, rem = divmod(seconds, S_PER_DAY)
    hours, rem = divmod(rem, S_PER_HR)
    minutes, secs = divmod(rem, S_PER_MIN)
    if days > 0:
        return "{}d {}h {}m {}s".format(days, hours, minutes, secs)
    elif hours > 0:
        return "{}h {}m {}s".format(hours, minutes, secs)
    elif minutes > 0:
        return "{}m {}s".format(minutes, secs)
    return "{}s".format(secs)


def activity_distribution(journeys, journey_indices=None):
    """
    Total time spent on each activity label.

    Parameters
    ----------
    journeys : iterable of Journey
    journey_indices : collection of int, optional
        Only include these journeys.  All journeys when not given.

    Returns
    -------
    list of Activity
        In order of first appearance.  Activities that add up to no time at
        all are left out.
    """
    grouped = OrderedDict()
    for journey in journeys:
        if journey_indices is not None and journey.journey_index not in journey_indices:
            continue
        for interval in journey:
            name = interval.classification_type
            count, duration = grouped.get(name, (0, 0))
            grouped[name] = (count + 1, duration + parse_duration_to_seconds(interval.duration))

    total = sum(duration for _, duration in grouped.values())
    return [
        Activity(name, count, duration, duration / total * 100 if total > 0 else 0)
        for name, (count, duration) in grouped.items()
        if duration > 0
    ]


def journeys_by_day(journeys):
    """
    Group journeys by the date they started on.

    Returns
    -------
    OrderedDict
        Start date -> list of Journey, earliest date first.  Journeys with no
        usable start date come last under `""`.
    """
    grouped = {}
    for journey in journeys:
        grouped.setdefault(journey.metadata.start_date, []).append(journey)

    def key(day):
        parsed = parse_timestamp(day)
        return (parsed is None, parsed.isoformat() if parsed else day)

    return OrderedDict((day, grouped[day]) for day in sorted(grouped, key=key))
