"""Parameter fingerprinting.

Parameters are serialized to canonical JSON (sorted keys, compact
separators) and hashed with SHA-1. Values JSON cannot encode natively,
such as pydantic models, dataclasses and datetimes, go through pydantic's
``to_jsonable_python``. Structurally equal params always produce the same
fingerprint; two params with the same fingerprint are the same request.

Before serialization, mapping keys are converted to the strings JSON
would write for them, so mixed key types sort without error, and set
members are ordered by their own canonical form.
"""

import hashlib
import json
from collections.abc import Mapping
from typing import Any

from pydantic_core import to_jsonable_python

_SCALARS = (str, int, float, bool)


def _dumps(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if key is None or isinstance(key, (int, float)):
        return json.dumps(key)
    return str(key)


def _normalize(value: Any) -> Any:
    if value is None or isinstance(value, _SCALARS):
        return value
    if isinstance(value, Mapping):
        return {_key(key): _normalize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return sorted((_normalize(item) for item in value), key=_dumps)
    return _normalize(to_jsonable_python(value))


def canonical_json(params: Any) -> str:
    """Serialize params to their canonical textual form.

    ``None`` maps to the empty string.
    """
    if params is None:
        return ""
    return _dumps(_normalize(params))


def fingerprint(params: Any) -> str:
    """Return the SHA-1 hex digest of the canonical form of params."""
    return hashlib.sha1(canonical_json(params).encode("utf-8")).hexdigest()
