"""Per-call fetch options."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from .cache_policy import CachePolicy

Rule = Callable[[Any], bool]
BodyTransform = Callable[[Any], Any]


@dataclass(frozen=True)
class FetchOptions:
    """Options controlling how one fetch is cached.

    Attributes:
        name: Operation key. Defaults to the fetch function's name.
        cache: Policy for the operation's request and metadata stores.
            Required the first time an operation is used, unless the
            cache has a default request policy.
        rules: Predicates over the params. If any returns False the
            cached value is bypassed and the fetch function is called.
        format: Applied to a copy of the body before it is cached
        unformat: Applied to a reconstructed body before it is returned
    """

    name: str | None = None
    cache: CachePolicy | None = None
    rules: Sequence[Rule] = field(default_factory=tuple)
    format: BodyTransform | None = None
    unformat: BodyTransform | None = None

    def with_defaults(self, defaults: "FetchOptions") -> "FetchOptions":
        """Fill a missing cache policy from the default request options."""
        if self.cache is None and defaults.cache is not None:
            return replace(self, cache=defaults.cache)
        return self
