"""
Code to support our tests

This is here, rather than in our `tests` directory
because of the issues that come
when you turn your tests into a package using `__init__.py` files
(for details, see https://docs.pytest.org/en/7.1.x/explanation/goodpractices.html#choosing-an-import-mode).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Optional

import numpy as np
import pandas as pd

from statseries.serialization import SerializedSeries
from statseries.typing import NUMERIC_DATA

RNG = np.random.default_rng()


def get_crime_history_rows() -> list[dict[str, Any]]:
    """
    Get crime history rows like those returned for a département

    The rows are deliberately out of order and incomplete:
    2017 has no homicide data,
    2019 is only reported for some indicators.

    Returns
    -------
    :
        Crime history rows
    """
    return [
        {
            "dep": "13",
            "annee": 2018,
            "homicides_p100k": 2.1,
            "tentatives_homicides_p100k": 3.2,
            "coups_et_blessures_volontaires_p1k": 4.0,
            "vols_avec_armes_p1k": 0.2,
            "cambriolages_de_logement_p1k": 5.5,
            "destructions_et_degradations_volontaires_p1k": 8.1,
        },
        {
            "dep": "13",
            "annee": 2017,
            "homicides_p100k": None,
            "tentatives_homicides_p100k": None,
            "coups_et_blessures_volontaires_p1k": 3.8,
            "vols_avec_armes_p1k": 0.3,
            "cambriolages_de_logement_p1k": 5.9,
            "destructions_et_degradations_volontaires_p1k": 8.4,
        },
        {
            "dep": "13",
            "annee": 2019,
            "coups_et_blessures_volontaires_p1k": 4.2,
            "cambriolages_de_logement_p1k": 5.1,
        },
    ]


def get_names_history_rows() -> list[dict[str, Any]]:
    """
    Get first-names history rows like those returned for a département

    Returns
    -------
    :
        First-names history rows
    """
    return [
        {"dep": "13", "annais": 2001, "traditionnel_pct": 40.5, "moderne_pct": 20.1},
        {"dep": "13", "annais": 2000, "traditionnel_pct": 42.0, "moderne_pct": 19.0},
    ]


def get_random_history_rows(
    years: Sequence[int],
    indicators: Sequence[str],
    year_column: str = "annee",
    missing_fraction: float = 0.2,
) -> list[dict[str, Any]]:
    """
    Get random history rows, with some values missing

    Parameters
    ----------
    years
        Years for which to create rows

    indicators
        Indicators to include in the rows

    year_column
        Column in which to put the year

    missing_fraction
        Fraction of values to leave out of the rows

    Returns
    -------
    :
        One row per year, in random order
    """
    res = []
    for year in RNG.permutation(np.asarray(years)).tolist():
        row: dict[str, Any] = {year_column: year}
        for indicator in indicators:
            if RNG.random() >= missing_fraction:
                row[indicator] = float(np.round(RNG.random() * 100.0, 3))

        res.append(row)

    return res


def compare_close(
    left: Mapping[str, Sequence[Optional[NUMERIC_DATA]]],
    right: Mapping[str, Sequence[Optional[NUMERIC_DATA]]],
    left_name: str,
    right_name: str,
    rtol: float = 1e-8,
    **kwargs: Any,
) -> pd.DataFrame:
    """
    Compare two sets of series

    Parameters
    ----------
    left
        First set of series

    right
        Second set of series

    left_name
        Name to use for `left` in the output

    right_name
        Name to use for `right` in the output

    rtol
        Relative tolerance

    **kwargs
        Passed to [np.isclose][numpy.isclose]

    Returns
    -------
    :
        Values that differ, empty if `left` and `right` are close
    """
    left_stacked = pd.DataFrame.from_dict(
        {k: list(v) for k, v in left.items()}, orient="index", dtype=float
    ).stack(future_stack=True)
    left_stacked.name = left_name

    right_stacked = pd.DataFrame.from_dict(
        {k: list(v) for k, v in right.items()}, orient="index", dtype=float
    ).stack(future_stack=True)
    right_stacked.name = right_name

    left_stacked_aligned, right_stacked_aligned = left_stacked.align(right_stacked)
    differences_locator = ~np.isclose(
        left_stacked_aligned,
        right_stacked_aligned,
        rtol=rtol,
        equal_nan=True,
        **kwargs,
    )

    res = pd.concat(
        [
            left_stacked_aligned[differences_locator],
            right_stacked_aligned[differences_locator],
        ],
        axis="columns",
    )

    return res


def assert_serialized_series_close(
    res: SerializedSeries, exp: SerializedSeries, rtol: float = 1e-8
) -> None:
    """
    Assert that two serialized series are close

    Parameters
    ----------
    res
        Result

    exp
        Expected result

    rtol
        Relative tolerance

    Raises
    ------
    AssertionError
        The labels or indicators differ or the values are not close
    """
    if res.labels != exp.labels:
        raise AssertionError(f"Labels differ: {res.labels=} {exp.labels=}")

    if set(res.data) != set(exp.data):
        raise AssertionError(
            f"Indicators differ: {sorted(res.data)=} {sorted(exp.data)=}"
        )

    comparison = compare_close(
        left=res.data, right=exp.data, left_name="res", right_name="exp", rtol=rtol
    )
    if not comparison.empty:
        raise AssertionError(f"Values differ:\n{comparison}")
