from __future__ import annotations

from typing import Callable, Dict, List, Protocol, runtime_checkable

from location_tracking.models import ApiResponse


@runtime_checkable
class DataSource(Protocol):
    """Anything with a coroutine ``load()`` returning an :class:`ApiResponse`.

    ``load`` may raise; the poller treats exceptions, error payloads and
    responses without data alike.
    """

    async def load(self) -> ApiResponse: ...


DataSourceFactory = Callable[[], DataSource]

_DATA_SOURCE_REGISTRY: Dict[str, DataSourceFactory] = {}


def register_data_source(name: str, factory: DataSourceFactory) -> None:
    # Re-registering replaces the entry (keeps module reloads harmless).
    _DATA_SOURCE_REGISTRY[name] = factory


def data_source_names() -> List[str]:
    """Registered names sorted for stable UI ordering."""
    return sorted(_DATA_SOURCE_REGISTRY, key=str.lower)


def make_data_source(name: str) -> DataSource:
    if name not in _DATA_SOURCE_REGISTRY:
        raise ValueError(
            f"Unknown data source '{name}'; expected one of {data_source_names()}"
        )
    return _DATA_SOURCE_REGISTRY[name]()
