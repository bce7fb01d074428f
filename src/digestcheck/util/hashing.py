"""Hashing helpers for file integrity checks."""

from __future__ import annotations

import hashlib
from pathlib import Path

DEFAULT_ALGORITHM = "sha256"

SUPPORTED_ALGORITHMS: tuple[str, ...] = ("md5", "sha1", "sha224", "sha256", "sha384", "sha512")


def _new_digest(algorithm: str):
    if algorithm not in SUPPORTED_ALGORITHMS:
        raise ValueError(f"Unsupported digest algorithm {algorithm!r}; expected one of {SUPPORTED_ALGORITHMS}.")
    return hashlib.new(algorithm)


def hash_bytes(data: bytes, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Return the lowercase hex digest of `data`."""
    digest = _new_digest(algorithm)
    digest.update(data)
    return digest.hexdigest()


def hash_file(path: Path, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Return the hex digest for the full contents of `path`.

    The file is read in one go. ``OSError`` from the read propagates to the
    caller, which decides how the failure is reported.
    """
    return hash_bytes(Path(path).read_bytes(), algorithm)


def digest_hex_length(algorithm: str = DEFAULT_ALGORITHM) -> int:
    """Return the number of hex characters a digest of `algorithm` has."""
    return _new_digest(algorithm).digest_size * 2


def describe_os_error(exc: OSError) -> str:
    """Return the human readable cause used in ``<path>: <cause>`` lines."""
    return exc.strerror or str(exc)


__all__ = [
    "DEFAULT_ALGORITHM",
    "SUPPORTED_ALGORITHMS",
    "describe_os_error",
    "digest_hex_length",
    "hash_bytes",
    "hash_file",
]
