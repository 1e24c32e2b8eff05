# ---
# jupyter:
#   jupytext:
#     text_representation:
#       extension: .py
#       format_name: percent
#       format_version: '1.3'
#       jupytext_version: 1.16.6
#   kernelspec:
#     display_name: Python 3 (ipykernel)
#     language: python
#     name: python3
# ---

# %% [markdown]
# # How to build the series shown on the dashboard
#
# Here we demonstrate how to go from the rows returned
# by a history endpoint to the series and composite metrics
# that the dashboard's charts use.

# %% [markdown]
# ## Imports

# %%
from statseries.aggregation import CompositeMetric, aggregate, mean_components
from statseries.levels import build_level_series
from statseries.metrics import format_metric_value, get_metric_label
from statseries.serialization import serialize, to_timeseries_dataframe

# %% [markdown]
# ## Starting point
#
# The history endpoints return one row per year.
# Not every year has every indicator
# and the rows don't come back in any particular order.

# %%
crime_history = [
    {
        "dep": "13",
        "annee": 2018,
        "homicides_p100k": 2.1,
        "tentatives_homicides_p100k": 3.2,
        "cambriolages_de_logement_p1k": 5.5,
    },
    {
        "dep": "13",
        "annee": 2017,
        "homicides_p100k": None,
        "cambriolages_de_logement_p1k": 5.9,
    },
    {"dep": "13", "annee": 2019, "cambriolages_de_logement_p1k": 5.1},
]

# %% [markdown]
# ## Serializing
#
# Serializing gives us one sorted set of labels
# and, for each indicator, values aligned with those labels.
# Gaps are filled with `None`.

# %%
crime_series = serialize(crime_history)
crime_series

# %% [markdown]
# For anything more involved, it is often easier to work with pandas.

# %%
to_timeseries_dataframe(crime_series)

# %% [markdown]
# ## Composite metrics
#
# Composite metrics are defined by their components.
# By default, the components are summed
# and missing values are treated as zero.

# %%
aggregate(
    crime_series.data,
    {"homicides_total_p100k": ["homicides_p100k", "tentatives_homicides_p100k"]},
)

# %% [markdown]
# Treating missing values as zero isn't right for e.g. averages.
# In that case, turn it off and missing positions stay missing.

# %%
aggregate(
    crime_series.data,
    {
        "mean_homicides_p100k": CompositeMetric(
            components=["homicides_p100k", "tentatives_homicides_p100k"],
            formula=mean_components,
            fill_missing=False,
        )
    },
)

# %% [markdown]
# ## Everything for a geographic level
#
# `build_level_series` does all of the above for a level,
# using the dashboard's composite crime metrics.

# %%
departement = build_level_series("departement", crime_history=crime_history)
departement.crime_aggregates

# %% [markdown]
# ## Displaying values

# %%
for key, values in departement.crime_aggregates.items():
    print(
        get_metric_label(key),
        [format_metric_value(v, key) for v in values],
    )
