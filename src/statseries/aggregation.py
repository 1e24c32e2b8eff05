"""
Aggregation of series into composite metrics
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Optional, Union

import attr
from attrs import define, field

from statseries.assertions import assert_components_same_length
from statseries.serialization import is_missing
from statseries.typing import NUMERIC_DATA, SeriesData

LOGGER = logging.getLogger(__name__)

Formula = Callable[[Mapping[str, NUMERIC_DATA]], Optional[NUMERIC_DATA]]
"""
Formula which combines the values of each component at a single position
"""


def sum_components(values: Mapping[str, NUMERIC_DATA]) -> NUMERIC_DATA:
    """
    Sum the values of all components

    Parameters
    ----------
    values
        Map from component to value

    Returns
    -------
    :
        Sum of the values
    """
    return sum(values.values())


def mean_components(values: Mapping[str, NUMERIC_DATA]) -> float:
    """
    Get the mean of the values of all components

    Parameters
    ----------
    values
        Map from component to value

    Returns
    -------
    :
        Mean of the values
    """
    return sum(values.values()) / len(values)


@define(frozen=True)
class CompositeMetric:
    """
    Definition of a metric which is calculated from other metrics
    """

    components: tuple[str, ...] = field(converter=tuple)
    """
    Metrics from which this metric is calculated
    """

    formula: Formula = sum_components
    """
    Formula used to combine the components at each position

    It receives a map from component to value.
    """

    fill_missing: bool = True
    """
    Should missing component values be treated as zero?

    If `False`, any position at which a component is missing is `None`
    in the output and the formula is not called.
    This is what you want for e.g. averages or ratios.
    """

    @components.validator
    def validate_components(
        self, attribute: attr.Attribute[Any], value: tuple[str, ...]
    ) -> None:
        """
        Validate the components
        """
        if not value:
            msg = "A composite metric needs at least one component"
            raise ValueError(msg)

    def calculate(
        self, data_point: Mapping[str, Optional[NUMERIC_DATA]]
    ) -> Optional[NUMERIC_DATA]:
        """
        Calculate the metric for a single data point

        Parameters
        ----------
        data_point
            Map from metric to value at a given position

            Components which are not in `data_point` are treated as missing.

        Returns
        -------
        :
            Value of the composite metric
        """
        values = {c: data_point.get(c) for c in self.components}
        if any(is_missing(v) for v in values.values()):
            if not self.fill_missing:
                return None

            values = {c: 0 if is_missing(v) else v for c, v in values.items()}

        return self.formula(values)  # type: ignore # missing values filled above


CompositeDefinition = Union[CompositeMetric, Sequence[str], Mapping[str, Any]]
"""
Accepted ways of defining a composite metric

Either a [CompositeMetric][(m).],
a sequence of components to sum
or a mapping with a `components` key and, optionally, a `formula` key.
"""


def to_composite_metric(definition: CompositeDefinition) -> CompositeMetric:
    """
    Convert a definition to a [CompositeMetric][(m).]

    Parameters
    ----------
    definition
        Definition to convert

    Returns
    -------
    :
        Composite metric

    Raises
    ------
    TypeError
        `definition` is a string (which is almost certainly a mistake,
        it would be split into single character components)

    Examples
    --------
    >>> to_composite_metric(["a", "b"]).components
    ('a', 'b')
    >>> to_composite_metric({"components": ["a"], "fill_missing": False}).fill_missing
    False
    """
    if isinstance(definition, CompositeMetric):
        return definition

    if isinstance(definition, str):
        msg = f"Components must be a sequence of metric names, received {definition!r}"
        raise TypeError(msg)

    if isinstance(definition, Mapping):
        return CompositeMetric(**definition)

    return CompositeMetric(components=definition)


def aggregate(
    data: SeriesData, definitions: Mapping[str, CompositeDefinition]
) -> dict[str, tuple[Optional[NUMERIC_DATA], ...]]:
    """
    Calculate composite metrics

    Parameters
    ----------
    data
        Series from which to calculate the composite metrics

        All series are assumed to have the same length,
        which is guaranteed if `data` is the output of
        [serialize][(p).serialization.].
        This is not checked, see [CompositeAggregator][(m).]
        if you want it to be.

    definitions
        Map from composite metric to its definition

    Returns
    -------
    :
        Map from composite metric to its series

        Composite metrics for which none of the components are in `data`
        are not included.

    Examples
    --------
    >>> aggregate({"a": [5, 7], "b": [2, None]}, {"c": ["a", "b"], "d": ["x"]})
    {'c': (7, 7)}
    """
    res = {}
    for metric_key, definition in definitions.items():
        metric = to_composite_metric(definition)

        component_series = {
            c: data[c] for c in metric.components if data.get(c) is not None
        }
        if not component_series:
            LOGGER.debug("None of the components of %r are available", metric_key)
            continue

        # Length is taken from the first available component
        n_values = len(next(iter(component_series.values())))

        res[metric_key] = tuple(
            metric.calculate(
                {
                    c: values[i] if i < len(values) else None
                    for c, values in component_series.items()
                }
            )
            for i in range(n_values)
        )

    LOGGER.debug("Calculated %d of %d composite metrics", len(res), len(definitions))

    return res


def calculate_metric(
    metric_key: str,
    data_point: Mapping[str, Optional[NUMERIC_DATA]],
    definitions: Mapping[str, CompositeDefinition],
) -> Optional[NUMERIC_DATA]:
    """
    Calculate a metric for a single data point

    Parameters
    ----------
    metric_key
        Metric to calculate

    data_point
        Map from metric to value (e.g. a single row from a history endpoint)

    definitions
        Definitions of composite metrics

    Returns
    -------
    :
        Value of the composite metric if `metric_key` is in `definitions`,
        otherwise the value of `metric_key` in `data_point` (`None` if absent)
    """
    if metric_key in definitions:
        return to_composite_metric(definitions[metric_key]).calculate(data_point)

    return data_point.get(metric_key)


def _convert_definitions(
    definitions: Mapping[str, CompositeDefinition],
) -> dict[str, CompositeMetric]:
    return {k: to_composite_metric(v) for k, v in definitions.items()}


@define
class CompositeAggregator:
    """
    Aggregator of series into composite metrics
    """

    definitions: dict[str, CompositeMetric] = field(converter=_convert_definitions)
    """
    Map from composite metric to its definition
    """

    run_checks: bool = True
    """
    If `True`, check that the components of each composite metric
    have the same length before aggregating
    """

    def __call__(self, data: SeriesData) -> dict[str, tuple[Optional[NUMERIC_DATA], ...]]:
        """
        Aggregate

        Parameters
        ----------
        data
            Series from which to calculate the composite metrics

        Returns
        -------
        :
            Map from composite metric to its series

        Raises
        ------
        SeriesLengthMismatchError
            `self.run_checks` is `True`
            and the components of a composite metric have different lengths
        """
        if self.run_checks:
            for metric_key, metric in self.definitions.items():
                assert_components_same_length(
                    metric_key, data=data, components=metric.components
                )

        return aggregate(data, self.definitions)
