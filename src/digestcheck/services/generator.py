"""Checksum generation: hash each input file and emit a digest line."""

from __future__ import annotations

import logging

from digestcheck.config import ChecksumConfig
from digestcheck.io.channels import OutputChannels
from digestcheck.parse.digest_line import DigestRecord, format_record
from digestcheck.util.hashing import describe_os_error, hash_file

LOGGER = logging.getLogger(__name__)

QUIET_NOTICE = "digestcheck: --quiet is only meaningful when verifying checksums (use --check)"


class GenerationReport:
    """Counts for one generation pass."""

    def __init__(self) -> None:
        self.hashed = 0
        self.unreadable = 0
        self.skipped = False

    @property
    def exit_code(self) -> int:
        return 1 if self.unreadable else 0


def generate(config: ChecksumConfig, channels: OutputChannels | None = None) -> GenerationReport:
    """Write ``<digest>  <path>`` for every input file, in input order.

    Unreadable inputs produce ``<path>: <cause>`` on the diagnostic channel and
    never stop the batch.
    """

    channels = channels or OutputChannels()
    report = GenerationReport()

    if config.quiet_outside_check:
        channels.diagnose(QUIET_NOTICE)
        channels.flush()
        report.skipped = True
        return report

    for path in config.input_files:
        try:
            digest = hash_file(path, config.algorithm)
        except OSError as exc:
            LOGGER.debug("Could not read %s: %s", path, exc)
            channels.diagnose(f"{path}: {describe_os_error(exc)}")
            report.unreadable += 1
            continue

        LOGGER.debug("Hashed %s with %s", path, config.algorithm)
        channels.emit(format_record(DigestRecord(digest=digest, path=str(path))))
        report.hashed += 1

    channels.flush()
    LOGGER.info("Generated %s checksum(s), %s unreadable", report.hashed, report.unreadable)
    return report


__all__ = ["GenerationReport", "QUIET_NOTICE", "generate"]
