"""
Reshaping of yearly statistics into aligned, chart-ready series, with composite indicators.
"""

import importlib.metadata

from statseries.aggregation import CompositeAggregator, CompositeMetric, aggregate
from statseries.serialization import SerializedSeries, Serialiser, serialize

__version__ = importlib.metadata.version("statseries")

__all__ = [
    "CompositeAggregator",
    "CompositeMetric",
    "SerializedSeries",
    "Serialiser",
    "aggregate",
    "serialize",
]
