"""Request records, metadata records and composite responses."""

from collections.abc import Hashable, Mapping
from dataclasses import dataclass
from typing import Any, TypedDict, Union


@dataclass(frozen=True)
class Single:
    """Reference to one entity. ``id`` is None when the entity had no id."""

    id: Hashable | None


@dataclass(frozen=True)
class Many:
    """Ordered references to a sequence of entities.

    ``sequence`` is the container type the body field arrived in (list or
    tuple); reconstruction rebuilds the field with it.
    """

    ids: tuple[Hashable | None, ...]
    sequence: type = list


Reference = Union[Single, Many]


@dataclass(frozen=True)
class RequestRecord:
    """Entity references for one (operation, fingerprint).

    Never holds entity data: only ids, keyed by entity type.
    """

    refs: Mapping[str, Reference]

    @classmethod
    def from_ids(cls, ids: Mapping[str, Any]) -> "RequestRecord":
        """Build a record from raw ``{type: id | [ids]}`` references."""
        refs: dict[str, Reference] = {}
        for entity_type, value in ids.items():
            if isinstance(value, (list, tuple)):
                sequence = tuple if isinstance(value, tuple) else list
                refs[entity_type] = Many(tuple(value), sequence=sequence)
            else:
                refs[entity_type] = Single(value)
        return cls(refs=refs)


@dataclass(frozen=True)
class RecordedMetadata:
    """Response metadata captured at write time.

    A ``RecordedMetadata(headers=None)`` means the response carried no
    metadata; a missing record means nothing was ever recorded.
    """

    headers: Any = None


class CompositeResponse(TypedDict, total=False):
    """Shape of a fetch result: a body of entities plus metadata."""

    body: dict[str, Any]
    headers: Any
