"""
Reading and writing of history rows and serialized series
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Callable

import pandas as pd
from pandas_openscm.io import load_timeseries_csv

from statseries.serialization import (
    IDENTIFIER_COLUMNS,
    SerializedSeries,
    from_timeseries_dataframe,
    to_timeseries_dataframe,
)

LOGGER = logging.getLogger(__name__)


def load_history_rows_csv(
    fp: Path, identifier_columns: Iterable[str] = IDENTIFIER_COLUMNS
) -> list[dict[str, Any]]:
    """
    Load rows exported from a history table

    Parameters
    ----------
    fp
        File to load

    identifier_columns
        Columns to read as strings (commune and département codes
        such as `"01"` or `"2A"` must not be parsed as numbers)

    Returns
    -------
    :
        One row per line of the file, empty cells are `None`
    """
    df = pd.read_csv(fp, dtype={c: str for c in identifier_columns})
    res = df.astype(object).where(df.notna(), None).to_dict(orient="records")
    LOGGER.debug("Loaded %d rows from %s", len(res), fp)

    return res


def save_serialized_series_csv(
    series: SerializedSeries, fp: Path, indicator_level: str = "indicator"
) -> None:
    """
    Save serialized series as a wide CSV

    One line per indicator, one column per label.

    Parameters
    ----------
    series
        Series to save

    fp
        File in which to save

    indicator_level
        Name of the column which holds the indicators
    """
    to_timeseries_dataframe(series, indicator_level=indicator_level).to_csv(fp)
    LOGGER.debug("Saved %d series to %s", len(series.data), fp)


def load_serialized_series_csv(
    fp: Path,
    indicator_level: str = "indicator",
    label_type: Callable[[Any], Any] = int,
) -> SerializedSeries:
    """
    Load serialized series saved with [save_serialized_series_csv][(m).]

    Parameters
    ----------
    fp
        File to load

    indicator_level
        Name of the column which holds the indicators

    label_type
        Type to which to convert the labels

        CSV headers are always read as strings.

    Returns
    -------
    :
        Loaded series
    """
    df = load_timeseries_csv(
        fp, index_columns=[indicator_level], out_columns_type=label_type
    )

    return from_timeseries_dataframe(df)
