"""Command-line entry point: generate or verify file checksums."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional

import typer

from digestcheck.config import ConfigError, load_config
from digestcheck.io.channels import OutputChannels
from digestcheck.services.generator import generate
from digestcheck.services.verifier import verify
from digestcheck.util.hashing import SUPPORTED_ALGORITHMS
from digestcheck.util.logging import configure_logging

app = typer.Typer(add_completion=False, help="Print or check cryptographic checksums of files")


def _flag_overrides(**flags: bool) -> dict[str, Any]:
    """Only flags given on the command line override the config file."""

    return {name: True for name, value in flags.items() if value}


@app.command()
def checksum(
    input_files: List[Path] = typer.Argument(None, help="Files to hash, or manifests to check with --check"),
    check: bool = typer.Option(False, "--check", "-c", help="Read checksums from the FILEs and check them"),
    ignore_missing: bool = typer.Option(
        False, "--ignore-missing", help="Don't fail or report status for missing files"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Don't print OK for each successfully verified file"),
    strict: bool = typer.Option(False, "--strict", help="Exit non-zero for improperly formatted checksum lines"),
    warn: bool = typer.Option(False, "--warn", "-w", help="Warn about improperly formatted checksum lines"),
    algorithm: Optional[str] = typer.Option(
        None, "--algorithm", "-a", help=f"Digest algorithm ({', '.join(SUPPORTED_ALGORITHMS)}); default sha256"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", envvar="DIGESTCHECK_CONFIG", help="YAML/TOML/JSON file with default policy flags"
    ),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Log progress to stderr (-vv for debug)"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write log records to this file"),
) -> None:
    """Print or check checksums, one ``<digest>  <path>`` line per file."""

    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logger = configure_logging(level=level, log_path=log_file)

    overrides: dict[str, Any] = _flag_overrides(
        check=check, ignore_missing=ignore_missing, quiet=quiet, strict=strict, warn=warn
    )
    if algorithm:
        overrides["algorithm"] = algorithm.lower()
    if input_files:
        overrides["input_files"] = input_files

    try:
        cfg = load_config(config_path, overrides=overrides)
    except ConfigError as exc:
        typer.echo(f"digestcheck: {exc}", err=True)
        raise typer.Exit(code=2)

    logger.debug("Running with %s", cfg)
    channels = OutputChannels()
    if cfg.check:
        report = verify(cfg, channels)
    else:
        report = generate(cfg, channels)

    raise typer.Exit(code=report.exit_code)


def main() -> None:
    app()


__all__ = ["main", "app"]
