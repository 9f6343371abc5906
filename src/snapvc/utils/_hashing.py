"""Content fingerprints for change detection."""

import hashlib
from typing import Final

DEFAULT_HASH_ALGORITHM: Final = "sha1"


def hash_bytes(data: bytes, algorithm: str = DEFAULT_HASH_ALGORITHM) -> str:
    """Return the hex digest of a file body.

    Digests are only compared for equality, never verified.

    Args:
        data: File content.
        algorithm: Any name accepted by ``hashlib.new``.

    Returns:
        Lowercase hex digest string.

    Raises:
        ValueError: If the algorithm is not available.
    """
    return hashlib.new(algorithm, data).hexdigest()


def is_supported_algorithm(algorithm: str) -> bool:
    """Check whether hashlib can produce a fixed-length digest for a name.

    Variable-length algorithms (shake_128, shake_256) are rejected because
    ``hexdigest()`` requires a length for them.
    """
    name = algorithm.lower()
    return name in hashlib.algorithms_available and not name.startswith("shake_")
