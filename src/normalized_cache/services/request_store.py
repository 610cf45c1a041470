"""Per-operation request and metadata stores."""

from normalized_cache.entities import RecordedMetadata, RequestRecord
from normalized_cache.protocols import BoundedCache


class RequestStore:
    """Request records and response metadata for one operation.

    Both caches are keyed by parameter fingerprint and share the
    operation's policy, but evict independently: a fingerprint may still
    have metadata after its request record is gone, and the reverse.
    """

    def __init__(self, operation: str, requests: BoundedCache, metadata: BoundedCache) -> None:
        """Initialize the request store.

        Args:
            operation: Operation key the store belongs to
            requests: Bounded cache for request records
            metadata: Bounded cache for metadata records
        """
        self._operation = operation
        self._requests = requests
        self._metadata = metadata

    def set_request(self, fingerprint: str, record: RequestRecord) -> None:
        self._requests.set(fingerprint, record)

    def set_metadata(self, fingerprint: str, metadata: RecordedMetadata) -> None:
        self._metadata.set(fingerprint, metadata)

    def get_request(self, fingerprint: str) -> RequestRecord | None:
        return self._requests.get(fingerprint)

    def get_metadata(self, fingerprint: str) -> RecordedMetadata | None:
        """Return the recorded metadata, or None if never recorded (or evicted)."""
        return self._metadata.get(fingerprint)

    def invalidate(self, fingerprint: str) -> bool:
        """Drop one request record. Its metadata record is kept."""
        return self._requests.delete(fingerprint)

    def reset(self) -> None:
        """Clear both the request and the metadata cache."""
        self._requests.clear()
        self._metadata.clear()

    def __len__(self) -> int:
        return len(self._requests)

    @property
    def operation(self) -> str:
        return self._operation
