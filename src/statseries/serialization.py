"""
Serialization of raw history rows into aligned series

The history endpoints return one row per year,
with an arbitrary set of indicator columns.
Charts need the opposite layout:
one ordered sequence of labels (years)
and, for each indicator, a sequence of values aligned with those labels.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Optional

import numpy as np
import pandas as pd
from attrs import define, field

from statseries.assertions import (
    assert_labels_unique_and_sorted,
    assert_series_aligned,
)
from statseries.exceptions import MissingYearColumnError, MixedYearTypesError
from statseries.typing import (
    NUMERIC_DATA,
    TIME_POINT,
    RawRow,
    TimeseriesDataFrame,
)

LOGGER = logging.getLogger(__name__)

YEAR_COLUMNS: tuple[str, ...] = ("annee", "annais", "year", "birth-year", "birth_year")
"""
Known year columns, in the order in which we look for them

`annee` is used by the crime history, `annais` (birth year) by the first-names history.
"""

IDENTIFIER_COLUMNS: tuple[str, ...] = ("COG", "dep", "country")
"""
Columns which identify the location rather than hold an indicator
"""


def _convert_data(
    data: Mapping[str, Iterable[Optional[NUMERIC_DATA]]],
) -> dict[str, tuple[Optional[NUMERIC_DATA], ...]]:
    return {k: tuple(v) for k, v in data.items()}


@define(frozen=True)
class SerializedSeries:
    """
    Series aligned with a common set of labels
    """

    labels: tuple[TIME_POINT, ...] = field(converter=tuple, factory=tuple)
    """
    Labels of the series, in ascending order (normally years)
    """

    data: dict[str, tuple[Optional[NUMERIC_DATA], ...]] = field(
        converter=_convert_data, factory=dict
    )
    """
    Map from indicator to values

    Each value is positionally aligned with `labels`,
    missing values are `None`.
    """


def is_missing(value: Any) -> bool:
    """
    Check whether a value is missing (`None` or NaN)
    """
    if value is None:
        return True

    return isinstance(value, (float, np.floating)) and math.isnan(value)


def detect_year_column(
    rows: Sequence[RawRow], year_columns: Sequence[str] = YEAR_COLUMNS
) -> str:
    """
    Detect the column which holds the year

    Only the first row is inspected.

    Parameters
    ----------
    rows
        Rows in which to detect the year column

    year_columns
        Candidate year columns, in order of preference

    Returns
    -------
    :
        The first of `year_columns` which is in the first row

    Raises
    ------
    MissingYearColumnError
        None of `year_columns` is in the first row
    """
    first_row = rows[0]
    for year_column in year_columns:
        if year_column in first_row:
            return year_column

    raise MissingYearColumnError(columns=first_row.keys(), year_columns=year_columns)


def serialize(
    rows: Iterable[RawRow],
    year_columns: Sequence[str] = YEAR_COLUMNS,
    identifier_columns: Iterable[str] = IDENTIFIER_COLUMNS,
) -> SerializedSeries:
    """
    Serialize raw rows into series aligned with their years

    Parameters
    ----------
    rows
        Rows to serialize, one per year

        If several rows share a year, the last row carrying an indicator wins
        for that indicator.

    year_columns
        Candidate year columns, see [detect_year_column][(m).]

    identifier_columns
        Columns which are not indicators and hence are not serialized

    Returns
    -------
    :
        Serialized series

        The labels are the distinct years, in ascending order.
        Each series is aligned with the labels,
        with `None` wherever a row did not give a value.

    Raises
    ------
    MissingYearColumnError
        None of `year_columns` could be found in the first row

    MixedYearTypesError
        The years are of different types (e.g. `"2020"` and `2021`)
        and hence can't be sorted

    Examples
    --------
    >>> serialize(
    ...     [
    ...         {"year": 2021, "a": 7},
    ...         {"year": 2020, "a": 5},
    ...         {"year": 2020, "b": 2},
    ...     ]
    ... )
    SerializedSeries(labels=(2020, 2021), data={'a': (5, 7), 'b': (2, None)})
    >>> serialize([])
    SerializedSeries(labels=(), data={})
    """
    rows_l = list(rows)
    if not rows_l:
        return SerializedSeries(labels=(), data={})

    year_column = detect_year_column(rows_l, year_columns=year_columns)
    not_indicators = {year_column, *identifier_columns}

    years = set()
    values_by_indicator: dict[str, dict[TIME_POINT, Any]] = {}
    for row in rows_l:
        year = row.get(year_column)
        if year is None:
            continue

        years.add(year)
        for key, value in row.items():
            if key in not_indicators:
                continue

            values_by_indicator.setdefault(key, {})[year] = (
                None if is_missing(value) else value
            )

    try:
        labels = tuple(sorted(years))
    except TypeError as exc:
        raise MixedYearTypesError(years) from exc

    data = {
        indicator: tuple(values.get(year) for year in labels)
        for indicator, values in values_by_indicator.items()
    }
    LOGGER.debug(
        "Serialized %d rows (year column %r) into %d labels and %d indicators",
        len(rows_l),
        year_column,
        len(labels),
        len(data),
    )

    return SerializedSeries(labels=labels, data=data)


def flatten(series: SerializedSeries, year_column: str = "year") -> list[dict[str, Any]]:
    """
    Flatten serialized series back into rows

    This is the inverse of [serialize][(m).].
    Null values are dropped, hence an indicator with only null values
    does not survive the round trip.

    Parameters
    ----------
    series
        Series to flatten

    year_column
        Name of the column in which to write the labels

    Returns
    -------
    :
        One row per label

    Examples
    --------
    >>> flatten(SerializedSeries(labels=(2020, 2021), data={"a": (5, None)}))
    [{'year': 2020, 'a': 5}, {'year': 2021}]
    """
    res = []
    for i, label in enumerate(series.labels):
        row: dict[str, Any] = {year_column: label}
        for indicator, values in series.data.items():
            if values[i] is not None:
                row[indicator] = values[i]

        res.append(row)

    return res


def to_timeseries_dataframe(
    series: SerializedSeries,
    indicator_level: str = "indicator",
    time_name: str = "year",
) -> TimeseriesDataFrame:
    """
    Convert serialized series to a [TimeseriesDataFrame][(p).typing]

    Parameters
    ----------
    series
        Series to convert

    indicator_level
        Name to give the index

    time_name
        Name to give the columns

    Returns
    -------
    :
        One timeseries per indicator, missing values are NaN
    """
    return pd.DataFrame(
        [list(v) for v in series.data.values()],
        index=pd.Index(list(series.data.keys()), name=indicator_level),
        columns=pd.Index(list(series.labels), name=time_name),
        dtype=float,
    )


def from_timeseries_dataframe(df: TimeseriesDataFrame) -> SerializedSeries:
    """
    Convert a [TimeseriesDataFrame][(p).typing] to serialized series

    Parameters
    ----------
    df
        Data to convert

        The index should hold the indicator, the columns the labels.

    Returns
    -------
    :
        Serialized series, NaN values become `None`
    """
    df_sorted = df.sort_index(axis="columns")
    data = {
        str(indicator): tuple(None if is_missing(v) else v for v in values)
        for indicator, values in zip(df_sorted.index, df_sorted.to_numpy().tolist())
    }

    return SerializedSeries(labels=tuple(df_sorted.columns.tolist()), data=data)


@define
class Serialiser:
    """
    Serialiser of raw history rows
    """

    year_columns: tuple[str, ...] = YEAR_COLUMNS
    """
    Candidate year columns, in order of preference
    """

    identifier_columns: tuple[str, ...] = IDENTIFIER_COLUMNS
    """
    Columns which identify the location and hence are not serialized
    """

    run_checks: bool = True
    """
    If `True`, check that the output is sorted and aligned
    """

    def __call__(self, rows: Iterable[RawRow]) -> SerializedSeries:
        """
        Serialize

        Parameters
        ----------
        rows
            Rows to serialize

        Returns
        -------
        :
            Serialized series
        """
        res = serialize(
            rows,
            year_columns=self.year_columns,
            identifier_columns=self.identifier_columns,
        )

        if self.run_checks:
            assert_labels_unique_and_sorted(res.labels)
            assert_series_aligned(res.labels, res.data)

        return res
