from __future__ import annotations

import hashlib
import io
from pathlib import Path
from typing import Mapping

from digestcheck.config import ChecksumConfig
from digestcheck.io.channels import OutputChannels


def sha256_hex(content: str | bytes) -> str:
    data = content.encode("utf-8") if isinstance(content, str) else content
    return hashlib.sha256(data).hexdigest()


def write_files(root: Path, files: Mapping[str, str | bytes]) -> dict[str, Path]:
    """Create files under `root` and return their paths keyed by name."""

    paths: dict[str, Path] = {}
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        paths[name] = path
    return paths


def make_config(*input_files: Path | str, **flags: object) -> ChecksumConfig:
    return ChecksumConfig(input_files=tuple(Path(p) for p in input_files), **flags)


class CapturedChannels(OutputChannels):
    """OutputChannels writing into in-memory buffers."""

    def __init__(self) -> None:
        super().__init__(out=io.StringIO(), err=io.StringIO())

    @property
    def out_lines(self) -> list[str]:
        return self.out.getvalue().splitlines()

    @property
    def err_lines(self) -> list[str]:
        return self.err.getvalue().splitlines()
