"""
Tools for reconstructing vessel journeys from navigational telemetry.

Raw CSV exports are merged into a single chronological stream annotated with
gap markers, split into port-to-port journeys, and each journey is divided
into intervals of constant navigational status that are labelled with the
activity they represent.

Includes a command line tool, `journey-segment`, to run the whole pipeline.
"""


from journey_segment.activity import activity_distribution, journeys_by_day  # noqa: F401
from journey_segment.core import (  # noqa: F401
    CSVIntervalResult,
    JourneySegmenter,
    process_csv_texts,
    process_raw_data,
)
from journey_segment.merger import process_csvs_to_raw_data  # noqa: F401
from journey_segment.ports import Port, PortProximityAnalyzer  # noqa: F401
from journey_segment.rows import RawDataRow  # noqa: F401

__version__ = "1.0.0"

__author__ = "Journey Segment Developers"
__email__ = "journey-segment@users.noreply.github.com"
__source__ = "https://github.com/journey-segment/journey-segment"
__license__ = """
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

   http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""
