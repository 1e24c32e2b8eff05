"""
Tests of `statseries.levels`
"""

from __future__ import annotations

import logging

import pytest

from statseries.exceptions import MissingYearColumnError, UnrecognisedValueError
from statseries.levels import LevelSeries, build_level_series
from statseries.metrics import GeographicLevel
from statseries.serialization import Serialiser, serialize


def test_build_level_series(crime_history_rows, names_history_rows):
    res = build_level_series(
        "departement",
        crime_history=crime_history_rows,
        names_history=names_history_rows,
    )

    assert isinstance(res, LevelSeries)
    assert res.level == GeographicLevel.DEPARTEMENT
    assert res.crime_series == serialize(crime_history_rows)
    assert res.names_series == serialize(names_history_rows)
    assert res.names_series.labels == (2000, 2001)

    # All composites are aligned with the crime labels
    for values in res.crime_aggregates.values():
        assert len(values) == len(res.crime_series.labels)

    # 2017, 2018, 2019
    assert res.crime_aggregates["homicides_total_p100k"] == pytest.approx(
        (0.0, 5.3, 0.0)
    )
    assert res.crime_aggregates["violences_physiques_p1k"] == pytest.approx(
        (4.1, 4.2, 4.2)
    )
    assert res.crime_aggregates["vols_p1k"] == pytest.approx((6.2, 5.7, 5.1))
    assert res.crime_aggregates["destructions_p1k"] == pytest.approx((8.4, 8.1, 0.0))
    # Nothing in the history for these
    assert "stupefiants_p1k" not in res.crime_aggregates
    assert "escroqueries_p1k" not in res.crime_aggregates


def test_build_level_series_commune(crime_history_rows):
    res = build_level_series(GeographicLevel.COMMUNE, crime_history=crime_history_rows)

    assert res.level == GeographicLevel.COMMUNE
    assert res.names_series is None


def test_build_level_series_custom_definitions(crime_history_rows):
    res = build_level_series(
        "country",
        crime_history=crime_history_rows,
        definitions={"cambriolages": ["cambriolages_de_logement_p1k"]},
    )

    assert res.crime_aggregates == {"cambriolages": (5.9, 5.5, 5.1)}


def test_build_level_series_empty():
    res = build_level_series("country", crime_history=[])

    assert res.crime_series.labels == ()
    assert res.crime_aggregates == {}


def test_build_level_series_unknown_level(crime_history_rows):
    with pytest.raises(UnrecognisedValueError):
        build_level_series("region", crime_history=crime_history_rows)


def test_build_level_series_error_is_logged_and_raised(caplog):
    with caplog.at_level(logging.ERROR, logger="statseries.levels"):
        with pytest.raises(MissingYearColumnError):
            build_level_series(
                "country",
                crime_history=[{"vols_p1k": 1.0}],
                serialiser=Serialiser(run_checks=False),
            )

    assert "Failed to build the series for level country" in caplog.text
