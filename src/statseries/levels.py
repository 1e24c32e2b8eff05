"""
Series for a single geographic level (country, département or commune)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Optional

from attrs import define, field

from statseries.aggregation import CompositeAggregator, CompositeDefinition
from statseries.metrics import CRIME_COMPOSITES, GeographicLevel, to_geographic_level
from statseries.serialization import SerializedSeries, Serialiser
from statseries.typing import NUMERIC_DATA, RawRow

LOGGER = logging.getLogger(__name__)


@define
class LevelSeries:
    """
    All the series shown for a geographic level
    """

    level: GeographicLevel = field(converter=to_geographic_level)
    """
    Geographic level to which the series apply
    """

    crime_series: SerializedSeries
    """
    Crime history, serialized
    """

    crime_aggregates: dict[str, tuple[Optional[NUMERIC_DATA], ...]]
    """
    Composite crime metrics, aligned with `crime_series.labels`
    """

    names_series: Optional[SerializedSeries] = None
    """
    First-names history, serialized

    `None` if no first-names history was given
    (the dashboard has none at the commune level).
    """


def build_level_series(
    level: GeographicLevel | str,
    crime_history: Iterable[RawRow],
    names_history: Optional[Iterable[RawRow]] = None,
    definitions: Mapping[str, CompositeDefinition] = CRIME_COMPOSITES,
    serialiser: Optional[Serialiser] = None,
) -> LevelSeries:
    """
    Build the series for a geographic level from its history rows

    Parameters
    ----------
    level
        Geographic level

    crime_history
        Rows from the crime history endpoint of `level`

    names_history
        Rows from the first-names history endpoint of `level`, if there is one

    definitions
        Definitions of the composite crime metrics

    serialiser
        Serialiser to use

        If not supplied, we use [Serialiser][(p).serialization.] with its defaults.

    Returns
    -------
    :
        Series for `level`

    Raises
    ------
    UnrecognisedValueError
        `level` is not a known geographic level
    """
    level_enum = to_geographic_level(level)
    if serialiser is None:
        serialiser = Serialiser()

    try:
        crime_series = serialiser(crime_history)
        crime_aggregates = CompositeAggregator(
            definitions, run_checks=serialiser.run_checks
        )(crime_series.data)

        names_series = None
        if names_history is not None:
            names_series = serialiser(names_history)

    except ValueError:
        LOGGER.exception("Failed to build the series for level %s", level_enum)
        raise

    LOGGER.debug(
        "Built %s series: %d crime indicators, %d composites",
        level_enum,
        len(crime_series.data),
        len(crime_aggregates),
    )

    return LevelSeries(
        level=level_enum,
        crime_series=crime_series,
        crime_aggregates=crime_aggregates,
        names_series=names_series,
    )
