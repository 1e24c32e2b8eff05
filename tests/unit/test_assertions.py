"""
Tests of `statseries.assertions`
"""

import re
from contextlib import nullcontext as does_not_raise

import pytest

from statseries.assertions import (
    assert_components_same_length,
    assert_labels_unique_and_sorted,
    assert_series_aligned,
)
from statseries.exceptions import NotAlignedError, SeriesLengthMismatchError


@pytest.mark.parametrize(
    "labels, data, exp",
    (
        pytest.param((2020, 2021), {"a": (1, 2), "b": (None, 3)}, does_not_raise()),
        pytest.param((), {}, does_not_raise(), id="empty"),
        pytest.param(
            (2020, 2021),
            {"a": (1, 2), "b": (3,), "c": (1, 2, 3)},
            pytest.raises(
                NotAlignedError,
                match=re.escape(
                    "The series are not aligned with the 2 labels. "
                    "Misaligned series lengths: {'b': 1, 'c': 3}"
                ),
            ),
            id="misaligned",
        ),
    ),
)
def test_assert_series_aligned(labels, data, exp):
    with exp:
        assert_series_aligned(labels, data)


@pytest.mark.parametrize(
    "labels, exp",
    (
        pytest.param((2019, 2020, 2021), does_not_raise(), id="sorted"),
        pytest.param(
            (2020, 2019),
            pytest.raises(AssertionError, match="Labels are not sorted"),
            id="unsorted",
        ),
        pytest.param(
            (2020, 2020),
            pytest.raises(AssertionError, match="Duplicate labels"),
            id="duplicates",
        ),
    ),
)
def test_assert_labels_unique_and_sorted(labels, exp):
    with exp:
        assert_labels_unique_and_sorted(labels)


@pytest.mark.parametrize(
    "data, exp",
    (
        pytest.param({"a": (1, 2), "b": (3, 4)}, does_not_raise(), id="same-length"),
        pytest.param({"a": (1, 2)}, does_not_raise(), id="absent-component"),
        pytest.param(
            {"a": (1, 2), "b": (3,)},
            pytest.raises(SeriesLengthMismatchError),
            id="different-lengths",
        ),
    ),
)
def test_assert_components_same_length(data, exp):
    with exp:
        assert_components_same_length("c", data=data, components=["a", "b"])
