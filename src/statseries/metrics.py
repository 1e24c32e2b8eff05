"""
Catalogue of the metrics shown on the dashboard

This holds the definitions of each metric (label, category, display format),
the composite metrics which are calculated from the raw crime series
and which metrics are available at each geographic level.
"""

from __future__ import annotations

import sys
from typing import Any, Optional

from attrs import define

from statseries.aggregation import CompositeDefinition
from statseries.exceptions import UnrecognisedValueError
from statseries.serialization import is_missing

if sys.version_info >= (3, 11):
    from enum import StrEnum
else:
    from backports.strenum import StrEnum


class GeographicLevel(StrEnum):
    """Geographic level at which data is reported"""

    COUNTRY = "country"
    """France as a whole"""

    DEPARTEMENT = "departement"
    """A single département"""

    COMMUNE = "commune"
    """A single commune"""


class MetricFormat(StrEnum):
    """Format used to display a metric's values"""

    SCORE = "score"
    """Integer with thousands grouping"""

    PERCENTAGE = "percentage"
    """Integer followed by a percent sign"""

    RATE_1K = "rate_1k"
    """Rate per thousand inhabitants, one decimal"""

    RATE_100K = "rate_100k"
    """Rate per hundred thousand inhabitants, one decimal"""

    NUMBER = "number"
    """Integer with thousands grouping, like scores"""


@define(frozen=True)
class MetricDefinition:
    """
    Definition of a metric
    """

    value: str
    """
    Key of the metric in the data
    """

    label: str
    """
    Label to show to users
    """

    category: str
    """
    Category to which the metric belongs
    """

    format: MetricFormat = MetricFormat.NUMBER
    """
    Format used to display the metric's values
    """


METRICS: tuple[MetricDefinition, ...] = (
    MetricDefinition(
        value="population",
        label="Population",
        category="général",
        format=MetricFormat.NUMBER,
    ),
    MetricDefinition(
        value="insecurite_score",
        label="Indice d'insécurité",
        category="insécurité",
        format=MetricFormat.SCORE,
    ),
    MetricDefinition(
        value="homicides_p100k",
        label="Homicides /100k hab.",
        category="insécurité",
        format=MetricFormat.RATE_100K,
    ),
    MetricDefinition(
        value="homicides_total_p100k",
        label="Homicides et tentatives /100k hab.",
        category="insécurité",
        format=MetricFormat.RATE_100K,
    ),
    MetricDefinition(
        value="violences_physiques_p1k",
        label="Violences physiques /1k hab.",
        category="insécurité",
        format=MetricFormat.RATE_1K,
    ),
    MetricDefinition(
        value="violences_sexuelles_p1k",
        label="Violences sexuelles /1k hab.",
        category="insécurité",
        format=MetricFormat.RATE_1K,
    ),
    MetricDefinition(
        value="vols_p1k",
        label="Vols /1k hab.",
        category="insécurité",
        format=MetricFormat.RATE_1K,
    ),
    MetricDefinition(
        value="destructions_p1k",
        label="Destructions et dégradations /1k hab.",
        category="insécurité",
        format=MetricFormat.RATE_1K,
    ),
    MetricDefinition(
        value="stupefiants_p1k",
        label="Trafic et usage de stupéfiants /1k hab.",
        category="insécurité",
        format=MetricFormat.RATE_1K,
    ),
    MetricDefinition(
        value="escroqueries_p1k",
        label="Escroqueries /1k hab.",
        category="insécurité",
        format=MetricFormat.RATE_1K,
    ),
    MetricDefinition(
        value="logements_sociaux_pct",
        label="% Logements sociaux",
        category="logement",
        format=MetricFormat.PERCENTAGE,
    ),
)
"""
Metrics shown on the dashboard
"""

CRIME_COMPOSITES: dict[str, CompositeDefinition] = {
    "homicides_total_p100k": ["homicides_p100k", "tentatives_homicides_p100k"],
    "violences_physiques_p1k": [
        "coups_et_blessures_volontaires_p1k",
        "coups_et_blessures_volontaires_intrafamiliaux_p1k",
        "autres_coups_et_blessures_volontaires_p1k",
        "vols_avec_armes_p1k",
        "vols_violents_sans_arme_p1k",
    ],
    "vols_p1k": [
        "vols_avec_armes_p1k",
        "vols_violents_sans_arme_p1k",
        "vols_sans_violence_contre_des_personnes_p1k",
        "cambriolages_de_logement_p1k",
        "vols_de_vehicules_p1k",
        "vols_dans_les_vehicules_p1k",
        "vols_d_accessoires_sur_vehicules_p1k",
    ],
    "stupefiants_p1k": [
        "usage_de_stupefiants_p1k",
        "usage_de_stupefiants_afd_p1k",
        "trafic_de_stupefiants_p1k",
    ],
    # Single components, renamed to the key used on the dashboard
    "destructions_p1k": ["destructions_et_degradations_volontaires_p1k"],
    "violences_sexuelles_p1k": ["violences_sexuelles_p1k"],
}
"""
Composite metrics calculated from the crime history

Armed and violent thefts count towards both physical violence and thefts.
"""

_ALL_CRIME_METRICS: tuple[str, ...] = (
    "homicides_total_p100k",
    "violences_physiques_p1k",
    "violences_sexuelles_p1k",
    "vols_p1k",
    "destructions_p1k",
    "stupefiants_p1k",
    "escroqueries_p1k",
)

DATA_AVAILABILITY: dict[GeographicLevel, tuple[str, ...]] = {
    GeographicLevel.COUNTRY: (
        "population",
        "insecurite_score",
        *_ALL_CRIME_METRICS,
        "logements_sociaux_pct",
    ),
    GeographicLevel.DEPARTEMENT: (
        "population",
        "insecurite_score",
        *_ALL_CRIME_METRICS,
        "logements_sociaux_pct",
    ),
    # Homicides are not published at the commune level
    GeographicLevel.COMMUNE: (
        "population",
        "insecurite_score",
        *(m for m in _ALL_CRIME_METRICS if m != "homicides_total_p100k"),
        "logements_sociaux_pct",
    ),
}
"""
Metrics which are available at each geographic level
"""


def to_geographic_level(level: GeographicLevel | str) -> GeographicLevel:
    """
    Convert a value to a [GeographicLevel][(m).]

    Parameters
    ----------
    level
        Value to convert

    Returns
    -------
    :
        Geographic level

    Raises
    ------
    UnrecognisedValueError
        `level` is not a known geographic level
    """
    try:
        return GeographicLevel(level)
    except ValueError as exc:
        raise UnrecognisedValueError(
            unrecognised_value=level,
            name="level",
            known_values=[lvl.value for lvl in GeographicLevel],
        ) from exc


def get_metric(value: str) -> MetricDefinition:
    """
    Get a metric's definition

    Parameters
    ----------
    value
        Key of the metric

    Returns
    -------
    :
        Definition of the metric

    Raises
    ------
    UnrecognisedValueError
        `value` is not a known metric
    """
    for metric in METRICS:
        if metric.value == value:
            return metric

    raise UnrecognisedValueError(
        unrecognised_value=value,
        name="value",
        known_values=sorted(m.value for m in METRICS),
    )


def get_metric_label(value: str) -> str:
    """
    Get a metric's label

    Parameters
    ----------
    value
        Key of the metric

    Returns
    -------
    :
        Label of the metric, `value` itself if the metric is not known
    """
    try:
        return get_metric(value).label
    except UnrecognisedValueError:
        return value


def get_metrics_by_category(category: str) -> tuple[MetricDefinition, ...]:
    """Get all metrics in a given category"""
    return tuple(m for m in METRICS if m.category == category)


def available_metrics(level: GeographicLevel | str) -> tuple[MetricDefinition, ...]:
    """
    Get the metrics available at a given geographic level

    Parameters
    ----------
    level
        Geographic level

    Returns
    -------
    :
        Definitions of the metrics available at `level`

    Raises
    ------
    UnrecognisedValueError
        `level` is not a known geographic level
    """
    return tuple(get_metric(v) for v in DATA_AVAILABILITY[to_geographic_level(level)])


def format_metric_value(value: Optional[Any], metric_key: str) -> str:
    """
    Format a metric's value for display

    Parameters
    ----------
    value
        Value to format

    metric_key
        Key of the metric, used to look up the format

        Unknown metrics are formatted as numbers.

    Returns
    -------
    :
        Formatted value, `"N/A"` if `value` is missing

    Examples
    --------
    >>> format_metric_value(12.345, "vols_p1k")
    '12.3'
    >>> format_metric_value(None, "vols_p1k")
    'N/A'
    >>> format_metric_value(3.4, "unknown_metric")
    '3'
    """
    if is_missing(value):
        return "N/A"

    try:
        metric_format = get_metric(metric_key).format
    except UnrecognisedValueError:
        metric_format = MetricFormat.NUMBER

    if metric_format == MetricFormat.PERCENTAGE:
        return f"{value:.0f}%"

    if metric_format in (MetricFormat.RATE_1K, MetricFormat.RATE_100K):
        return f"{value:.1f}"

    # French grouping uses a narrow no-break space
    return f"{value:,.0f}".replace(",", "\u202f")
