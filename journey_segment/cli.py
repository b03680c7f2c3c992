"""
Commandline interface for journey-segment
"""


import logging

import click
import newlinejson as nlj

import journey_segment
from journey_segment import boundaries, core, intervals, merger, ports, rows
from journey_segment.core import JourneySegmenter
from journey_segment.merger import DEFAULT_DELIMITER, DEFAULT_MAX_GAP_MS
from journey_segment.ports import PORT_ZONE_DISTANCE_KM


VERBOSE_MODULES = (boundaries, core, intervals, merger, ports, rows)


@click.command()
@click.version_option(version=journey_segment.__version__)
@click.argument('infiles', nargs=-1, required=True,
                type=click.Path(exists=True, dir_okay=False))
@click.argument('outfile', required=True)
@click.option(
    '--delimiter', default=DEFAULT_DELIMITER,
    help="CSV field separator, use 'tab' for tabs.  (default: {!r})".format(DEFAULT_DELIMITER)
)
@click.option(
    '--port-zone-km', type=click.FLOAT, default=PORT_ZONE_DISTANCE_KM,
    help="Positions closer than this to a port are in port.  Units are km. "
         "(default: {})".format(PORT_ZONE_DISTANCE_KM)
)
@click.option(
    '--max-gap-ms', type=click.FLOAT, default=DEFAULT_MAX_GAP_MS,
    help="Samples further apart than N milliseconds are separated by a gap. "
         "(default: {})".format(DEFAULT_MAX_GAP_MS)
)
@click.option(
    '--include-points/--no-include-points', default=True,
    help="Write the individual positions of every interval.  (default: include)"
)
@click.option(
    '--gaps-file', type=click.Path(dir_okay=False),
    help="Also write every detected gap to this newline JSON file."
)
@click.option(
    '-v', '--verbose', is_flag=True,
    help="Log progress information."
)
def segment(infiles, outfile, delimiter, port_zone_km, max_gap_ms,
            include_points, gaps_file, verbose):

    """
    Reconstruct journeys from CSV telemetry exports.

    Reads every INFILE, merges them in time order and writes one newline JSON
    record per journey to OUTFILE.
    """

    logger = logging.getLogger(__file__)
    if verbose:
        logger.setLevel(logging.DEBUG)
        for module in VERBOSE_MODULES:
            module.logger.setLevel(logging.DEBUG)

    csv_texts = []
    for path in infiles:
        with open(path, encoding='utf-8') as f:
            csv_texts.append(f.read())
    logger.debug("Read %s files", len(csv_texts))

    segmenter = JourneySegmenter(
        port_zone_km=port_zone_km,
        max_gap_ms=max_gap_ms,
        delimiter=delimiter,
    )
    result = segmenter.process_csv_texts(csv_texts)
    if not result.success:
        raise click.ClickException(result.error)

    with nlj.open(outfile, 'w') as dst:
        for journey in result.journeys:
            dst.write(journey.to_dict(include_points=include_points))

    if gaps_file:
        with nlj.open(gaps_file, 'w') as dst:
            for gap in result.gaps:
                dst.write(gap.to_dict())

    s = result.summary
    click.echo("{} journeys ({} incomplete), {} intervals, {} gaps from {} rows".format(
        s.total_journeys, s.incomplete_journeys, s.total_intervals, s.total_gaps, s.total_rows))
