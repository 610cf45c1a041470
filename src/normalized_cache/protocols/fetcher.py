"""Fetch function protocol.

A fetcher is any async callable returning a composite response,
``{"body": {type: entity | [entities]}, "headers": ...}``.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Fetcher(Protocol):
    """Protocol for the underlying data-fetch functions."""

    async def __call__(self, *args: Any) -> Any:
        ...
