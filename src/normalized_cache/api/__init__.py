"""HTTP inspection surface."""
