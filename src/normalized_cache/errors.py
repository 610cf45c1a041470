"""Exception hierarchy for the normalized cache."""


class NormalizedCacheError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(NormalizedCacheError, ValueError):
    """The cache was set up or called with an unusable configuration.

    These errors signal a setup mistake, not a transient condition,
    and are never retried.
    """


class MissingOperationKeyError(ConfigurationError):
    """No operation key could be derived for a fetch."""

    def __init__(self) -> None:
        super().__init__("No key was passed in, and the fetch function does not have a name.")


class MissingCachePolicyError(ConfigurationError):
    """A store had to be created but no capacity policy is configured for it."""

    def __init__(self, store: str) -> None:
        super().__init__(f"No cache policy configured for {store!r}, aborting.")
        self.store = store
