"""
Type hints that are used throughout
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Optional, Union

import numpy as np
import pandas as pd
from typing_extensions import TypeAlias

NUMERIC_DATA: TypeAlias = Union[float, int, np.floating, np.integer]
"""
Type alias for a value that can appear in a series
"""

TIME_POINT: TypeAlias = Union[int, float, str]
"""
Type alias for a value that can be used as a label (normally a year)
"""

RawRow: TypeAlias = Mapping[str, Any]
"""
Type alias for a raw row, as returned by the history endpoints

One row per year (or per year and location).
The year is held in one of the known year columns,
every other column is either an identifier (e.g. `"COG"`)
or an indicator, whose value is numeric or null.

```python
{"annee": 2020, "COG": "75056", "vols_p1k": 12.3, "homicides_p100k": None}
```
"""

SeriesData: TypeAlias = Mapping[str, Sequence[Optional[NUMERIC_DATA]]]
"""
Type alias for series data

Map from indicator name to values,
positionally aligned with a sequence of labels.
Missing values are `None`.
"""

TimeseriesDataFrame: TypeAlias = pd.DataFrame
"""
Type alias for the [pandas.DataFrame][pd.DataFrame] shape we use for export

For typing purposes, this is just a direct alias of [pandas.DataFrame][pd.DataFrame].
However, the point of defining this
is to provide greater clarity of the kind of data we expect.

We expect a collection of timeseries.
The columns are the labels (normally years).
The index holds the indicator name of each timeseries.
Missing values are NaN.

```python
                 2020  2021
indicator
homicides_p100k   1.2   NaN
vols_p1k         12.3  11.9
```
"""
