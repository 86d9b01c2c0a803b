"""Data sources for the map.

Importing this package registers the built-in sources (``"Sample"`` and
``"Dispatch simulation"``) with :func:`make_data_source`.
"""

from location_tracking.sources.base import (
    DataSource,
    data_source_names,
    make_data_source,
    register_data_source,
)
from location_tracking.sources.dispatch import DispatchDataSource
from location_tracking.sources.sample import SampleDataSource

__all__ = [
    "DataSource",
    "DispatchDataSource",
    "SampleDataSource",
    "data_source_names",
    "make_data_source",
    "register_data_source",
]
