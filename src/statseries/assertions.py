"""
Useful assertions
"""

from __future__ import annotations

from collections.abc import Sequence

from statseries.exceptions import NotAlignedError, SeriesLengthMismatchError
from statseries.typing import TIME_POINT, SeriesData


def assert_series_aligned(labels: Sequence[TIME_POINT], data: SeriesData) -> None:
    """
    Assert that every series is aligned with the labels

    Parameters
    ----------
    labels
        Labels of the series

    data
        Series to verify

    Raises
    ------
    NotAlignedError
        At least one series does not have the same length as `labels`
    """
    misaligned = {k: len(v) for k, v in data.items() if len(v) != len(labels)}
    if misaligned:
        raise NotAlignedError(n_labels=len(labels), misaligned=misaligned)


def assert_labels_unique_and_sorted(labels: Sequence[TIME_POINT]) -> None:
    """
    Assert that labels are unique and in ascending order

    Parameters
    ----------
    labels
        Labels to verify

    Raises
    ------
    AssertionError
        `labels` contains duplicates or is not sorted
    """
    labels_l = list(labels)
    if len(set(labels_l)) != len(labels_l):
        raise AssertionError(f"Duplicate labels: {labels_l=}")

    if labels_l != sorted(labels_l):
        raise AssertionError(f"Labels are not sorted: {labels_l=}")


def assert_components_same_length(
    metric_key: str, data: SeriesData, components: Sequence[str]
) -> None:
    """
    Assert that the components of a composite metric all have the same length

    Components that are not in `data` are ignored.

    Parameters
    ----------
    metric_key
        Composite metric being calculated

        Only used to provide a helpful error message.

    data
        Series data

    components
        Components of the composite metric

    Raises
    ------
    SeriesLengthMismatchError
        The components present in `data` do not all have the same length
    """
    lengths = {c: len(data[c]) for c in components if data.get(c) is not None}
    if len(set(lengths.values())) > 1:
        raise SeriesLengthMismatchError(metric_key=metric_key, lengths=lengths)
