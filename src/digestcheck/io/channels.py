"""Primary and diagnostic output sinks."""

from __future__ import annotations

import sys
from typing import TextIO

import typer


class OutputChannels:
    """Two independently flushable text writers.

    ``out`` receives checksum lines, ``OK`` notices and run summaries;
    ``err`` receives per-file errors, ``FAILED`` notices and format warnings.
    """

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr

    def emit(self, line: str) -> None:
        typer.echo(line, file=self.out)

    def diagnose(self, line: str) -> None:
        typer.echo(line, file=self.err)

    def flush(self) -> None:
        self.out.flush()
        self.err.flush()


__all__ = ["OutputChannels"]
