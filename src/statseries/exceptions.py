"""
Exceptions used throughout
"""

from __future__ import annotations

from collections.abc import Collection, Mapping, Sequence
from typing import Any


class MissingYearColumnError(ValueError):
    """
    Raised when none of the known year columns can be found in the rows
    """

    def __init__(self, columns: Collection[str], year_columns: Sequence[str]) -> None:
        """
        Initialise the error

        Parameters
        ----------
        columns
            Columns that were found in the first row

        year_columns
            Year columns we looked for
        """
        error_msg = (
            "Could not find a year column. "
            f"Looked for {list(year_columns)}, found columns {sorted(columns)}"
        )
        super().__init__(error_msg)


class NotAlignedError(ValueError):
    """
    Raised when serialized series are not aligned with their labels
    """

    def __init__(self, n_labels: int, misaligned: Mapping[str, int]) -> None:
        """
        Initialise the error

        Parameters
        ----------
        n_labels
            Number of labels (i.e. the expected length of every series)

        misaligned
            Map from indicator to the length of its series,
            for the indicators whose length differs from `n_labels`
        """
        error_msg = (
            f"The series are not aligned with the {n_labels} labels. "
            f"Misaligned series lengths: {dict(misaligned)}"
        )
        super().__init__(error_msg)


class SeriesLengthMismatchError(ValueError):
    """
    Raised when the components of a composite metric have different lengths
    """

    def __init__(self, metric_key: str, lengths: Mapping[str, int]) -> None:
        """
        Initialise the error

        Parameters
        ----------
        metric_key
            Composite metric being calculated

        lengths
            Map from component to the length of its series
        """
        error_msg = (
            f"The components of {metric_key!r} do not have the same length. "
            f"Component lengths: {dict(lengths)}"
        )
        super().__init__(error_msg)


class UnrecognisedValueError(ValueError):
    """
    Raised when a value is not recognised
    """

    def __init__(
        self, unrecognised_value: Any, name: str, known_values: Collection[Any]
    ) -> None:
        """
        Initialise the error

        Parameters
        ----------
        unrecognised_value
            The value that was not recognised

        name
            Name of the variable which holds the value

        known_values
            The values we do recognise
        """
        error_msg = (
            f"{name}={unrecognised_value!r} is not recognised. "
            f"Known values: {list(known_values)}"
        )
        super().__init__(error_msg)


class MixedYearTypesError(ValueError):
    """
    Raised when the years cannot be sorted because their types differ
    """

    def __init__(self, years: Collection[Any]) -> None:
        """
        Initialise the error

        Parameters
        ----------
        years
            Years that were found
        """
        year_types = sorted({type(y).__name__ for y in years})
        error_msg = (
            "The years can't be sorted because they are not all of the same type. "
            f"Found types: {year_types}. Years: {sorted(map(repr, years))}"
        )
        super().__init__(error_msg)
