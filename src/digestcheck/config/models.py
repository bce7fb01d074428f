"""Pydantic model describing a single checksum run."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field

AlgorithmName = Literal["md5", "sha1", "sha224", "sha256", "sha384", "sha512"]


class ChecksumConfig(BaseModel):
    """Immutable policy flags and inputs for one generate or verify pass."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    check: bool = False
    ignore_missing: bool = False
    quiet: bool = False
    strict: bool = False
    warn: bool = False
    algorithm: AlgorithmName = "sha256"
    input_files: Tuple[Path, ...] = Field(default_factory=tuple)

    @property
    def quiet_outside_check(self) -> bool:
        """True when ``quiet`` was requested for a generation run."""

        return self.quiet and not self.check


__all__ = ["AlgorithmName", "ChecksumConfig"]
