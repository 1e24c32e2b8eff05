"""
Integration tests of serializing then aggregating history rows
"""

from __future__ import annotations

import pytest

from statseries import CompositeAggregator, Serialiser, aggregate, serialize
from statseries.metrics import CRIME_COMPOSITES
from statseries.serialization import flatten
from statseries.testing import get_random_history_rows

INDICATORS = (
    "homicides_p100k",
    "tentatives_homicides_p100k",
    "vols_avec_armes_p1k",
    "cambriolages_de_logement_p1k",
    "escroqueries_p1k",
)


def test_serialize_then_aggregate_example():
    series = serialize(
        [
            {"year": 2020, "a": 5},
            {"year": 2021, "a": 7},
            {"year": 2020, "b": 2},
        ]
    )

    assert series.labels == (2020, 2021)
    assert series.data == {"a": (5, 7), "b": (2, None)}
    assert aggregate(series.data, {"c": ["a", "b"]}) == {"c": (7, 7)}


@pytest.mark.parametrize("seed_run", range(5))
def test_random_rows(seed_run):
    rows = get_random_history_rows(years=range(2010, 2022), indicators=INDICATORS)

    series = Serialiser()(rows)

    assert series.labels == tuple(range(2010, 2022))
    for values in series.data.values():
        assert len(values) == len(series.labels)

    # Every non-null value in the input is in the output at the right label
    for row in rows:
        i = series.labels.index(row["annee"])
        for indicator in INDICATORS:
            if indicator in row:
                assert series.data[indicator][i] == row[indicator]

    # Re-serializing the flattened output gives the same non-null values
    reserialized = serialize(flatten(series, year_column="annee"))
    for indicator, values in reserialized.data.items():
        assert values == series.data[indicator]

    aggregates = CompositeAggregator(CRIME_COMPOSITES)(series.data)
    for values in aggregates.values():
        assert len(values) == len(series.labels)

    assert "stupefiants_p1k" not in aggregates
