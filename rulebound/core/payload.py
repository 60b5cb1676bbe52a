"""
Payload sources.

A payload is anything exposing its fields by name: a plain mapping, or an
object with all() and get() such as a request wrapper.
"""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class PayloadSource(Protocol):
    """Keyed accessor over incoming data."""

    def all(self) -> Mapping[str, Any]:
        ...

    def get(self, name: str, default: Any = None) -> Any:
        ...


class MappingPayload:
    """PayloadSource over a plain dictionary."""

    def __init__(self, data: Mapping[str, Any] | None = None):
        self._data = dict(data or {})

    def all(self) -> dict[str, Any]:
        return dict(self._data)

    def get(self, name: str, default: Any = None) -> Any:
        return self._data.get(name, default)


def as_mapping(payload: Mapping[str, Any] | PayloadSource) -> dict[str, Any]:
    """
    Return the payload's fields as a new dictionary.

    Raises:
        TypeError: If the payload is neither a mapping nor a PayloadSource
    """
    if isinstance(payload, Mapping):
        return dict(payload)
    if isinstance(payload, PayloadSource):
        return dict(payload.all())
    raise TypeError(f"Unsupported payload type: {type(payload).__name__}")
