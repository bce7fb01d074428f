"""Digest line codec: ``<hex digest><two spaces><path>``.

A line is parsed by stripping surrounding whitespace and splitting on the
first occurrence of the two-space separator. Everything after that separator
is the path, so paths may themselves contain double spaces. The digest
segment must be exactly as long as the configured algorithm's hex digest and
contain only hex digits.
"""

from __future__ import annotations

import string
from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict

from digestcheck.util.hashing import DEFAULT_ALGORITHM, digest_hex_length

SEPARATOR = "  "

_HEX_DIGITS = frozenset(string.hexdigits)


class ImproperFormat(ValueError):
    """Raised when a manifest line does not follow the digest line grammar."""

    def __init__(self, line: str, *, reason: str, line_number: int | None = None) -> None:
        self.line = line
        self.reason = reason
        self.line_number = line_number
        super().__init__(f"improperly formatted checksum line ({reason}): {line.strip()}")


class DigestRecord(BaseModel):
    """A digest paired with the path it was computed for."""

    model_config = ConfigDict(frozen=True)

    digest: str
    path: str


def format_record(record: DigestRecord) -> str:
    """Render `record` as a single digest line without a trailing newline."""

    return f"{record.digest}{SEPARATOR}{record.path}"


def parse_line(line: str, *, algorithm: str = DEFAULT_ALGORITHM, line_number: int | None = None) -> DigestRecord:
    """Parse one digest line, raising :class:`ImproperFormat` on bad input."""

    stripped = line.strip()
    digest, sep, path = stripped.partition(SEPARATOR)
    if not sep:
        raise ImproperFormat(line, reason="missing two-space separator", line_number=line_number)
    if not path:
        raise ImproperFormat(line, reason="empty path", line_number=line_number)

    expected = digest_hex_length(algorithm)
    if len(digest) != expected:
        raise ImproperFormat(
            line,
            reason=f"expected {expected} hex characters for {algorithm}, got {len(digest)}",
            line_number=line_number,
        )
    if not _HEX_DIGITS.issuperset(digest):
        raise ImproperFormat(line, reason="digest is not hexadecimal", line_number=line_number)

    return DigestRecord(digest=digest.lower(), path=path)


def iter_manifest_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, line)`` for every non-blank line of `text`.

    Only ``\\n`` ends a line; form feeds and other characters that
    ``str.splitlines`` treats as breaks can appear in file names.
    """

    for number, line in enumerate(text.split("\n"), start=1):
        line = line.removesuffix("\r")
        if line.strip():
            yield number, line


__all__ = [
    "DigestRecord",
    "ImproperFormat",
    "SEPARATOR",
    "format_record",
    "iter_manifest_lines",
    "parse_line",
]
