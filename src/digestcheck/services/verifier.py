"""Checksum verification against previously generated digest lines.

Each input file is read as a manifest. Every non-blank line is parsed into a
record, the referenced file is hashed again and the result is classified.
Nothing aborts the batch: unreadable manifests, unreadable targets and
malformed lines are reported (or not) according to the policy flags and
processing moves on.

Reporting policy:

* ``OK: <path>`` goes to the primary channel unless ``quiet`` is set.
* ``FAILED: <path>`` goes to the diagnostic channel, always.
* ``<path>: <cause>`` for unreadable manifests and targets goes to the
  diagnostic channel unless ``ignore_missing`` is set.
* Malformed lines are reported on the diagnostic channel only with ``warn``.

Unreadable targets are counted apart from mismatches, so they never change
the ``did NOT match`` total. They do make the exit status non-zero unless
``ignore_missing`` is set. ``strict`` turns any malformed line into a
non-zero exit status whether or not ``warn`` reported it.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict

from digestcheck.config import ChecksumConfig
from digestcheck.io.channels import OutputChannels
from digestcheck.parse.digest_line import DigestRecord, ImproperFormat, iter_manifest_lines, parse_line
from digestcheck.util.hashing import describe_os_error, hash_file

LOGGER = logging.getLogger(__name__)


class OutcomeKind(str, Enum):
    MATCHED = "matched"
    MISMATCHED = "mismatched"
    TARGET_UNREADABLE = "target_unreadable"
    LINE_MALFORMED = "line_malformed"
    MANIFEST_UNREADABLE = "manifest_unreadable"


class VerificationOutcome(BaseModel):
    """Result for one manifest entry (or for a whole unreadable manifest)."""

    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind
    path: str
    manifest: Optional[str] = None
    cause: Optional[str] = None
    line_number: Optional[int] = None


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


class VerificationReport:
    """Accumulated outcomes of one verification pass."""

    def __init__(self, config: ChecksumConfig) -> None:
        self._config = config
        self.outcomes: list[VerificationOutcome] = []
        self.matched = 0
        self.mismatched = 0
        self.unreadable_targets = 0
        self.unreadable_manifests = 0
        self.malformed_lines = 0

    def record(self, outcome: VerificationOutcome) -> VerificationOutcome:
        self.outcomes.append(outcome)
        if outcome.kind is OutcomeKind.MATCHED:
            self.matched += 1
        elif outcome.kind is OutcomeKind.MISMATCHED:
            self.mismatched += 1
        elif outcome.kind is OutcomeKind.TARGET_UNREADABLE:
            self.unreadable_targets += 1
        elif outcome.kind is OutcomeKind.LINE_MALFORMED:
            self.malformed_lines += 1
        else:
            self.unreadable_manifests += 1
        return outcome

    def summary_lines(self) -> list[str]:
        """Return the trailing ``WARNING:`` lines for the primary channel."""

        lines: list[str] = []
        cfg = self._config
        if self.malformed_lines and (cfg.warn or cfg.strict):
            n = self.malformed_lines
            lines.append(f"WARNING: {n} {_plural(n, 'line is', 'lines are')} improperly formatted")
        if self.unreadable_targets and not cfg.ignore_missing:
            n = self.unreadable_targets
            lines.append(f"WARNING: {n} listed {_plural(n, 'file', 'files')} could not be read")
        if self.mismatched:
            n = self.mismatched
            lines.append(f"WARNING: {n} computed {_plural(n, 'checksum', 'checksums')} did NOT match")
        return lines

    @property
    def exit_code(self) -> int:
        cfg = self._config
        if self.mismatched:
            return 1
        if not cfg.ignore_missing and (self.unreadable_targets or self.unreadable_manifests):
            return 1
        if cfg.strict and self.malformed_lines:
            return 1
        return 0


class Verifier:
    """Verify every manifest named by ``config.input_files``, in order."""

    def __init__(self, config: ChecksumConfig, channels: OutputChannels | None = None) -> None:
        self.config = config
        self.channels = channels or OutputChannels()

    def verify(self) -> VerificationReport:
        report = VerificationReport(self.config)
        for manifest in self.config.input_files:
            self._verify_manifest(Path(manifest), report)

        for line in report.summary_lines():
            self.channels.emit(line)
        self.channels.flush()

        LOGGER.info(
            "Verified %s record(s): %s ok, %s mismatched, %s unreadable, %s malformed",
            report.matched + report.mismatched + report.unreadable_targets,
            report.matched,
            report.mismatched,
            report.unreadable_targets,
            report.malformed_lines,
        )
        return report

    def verify_record(self, record: DigestRecord) -> VerificationOutcome:
        """Recompute the digest of the file ``record`` points at and compare."""

        try:
            actual = hash_file(Path(record.path), self.config.algorithm)
        except OSError as exc:
            return VerificationOutcome(
                kind=OutcomeKind.TARGET_UNREADABLE, path=record.path, cause=describe_os_error(exc)
            )
        if actual.lower() == record.digest.lower():
            return VerificationOutcome(kind=OutcomeKind.MATCHED, path=record.path)
        return VerificationOutcome(kind=OutcomeKind.MISMATCHED, path=record.path)

    def _verify_manifest(self, manifest: Path, report: VerificationReport) -> None:
        try:
            text = manifest.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            cause = describe_os_error(exc) if isinstance(exc, OSError) else str(exc)
            report.record(
                VerificationOutcome(
                    kind=OutcomeKind.MANIFEST_UNREADABLE, path=str(manifest), manifest=str(manifest), cause=cause
                )
            )
            if not self.config.ignore_missing:
                self.channels.diagnose(f"{manifest}: {cause}")
            return

        LOGGER.debug("Reading manifest %s", manifest)
        for number, line in iter_manifest_lines(text):
            try:
                record = parse_line(line, algorithm=self.config.algorithm, line_number=number)
            except ImproperFormat as exc:
                report.record(
                    VerificationOutcome(
                        kind=OutcomeKind.LINE_MALFORMED,
                        path=line.strip(),
                        manifest=str(manifest),
                        cause=exc.reason,
                        line_number=number,
                    )
                )
                if self.config.warn:
                    self.channels.diagnose(f"{manifest}: {number}: {exc}")
                continue

            outcome = self.verify_record(record)
            report.record(outcome.model_copy(update={"manifest": str(manifest), "line_number": number}))
            self._report_outcome(outcome)

    def _report_outcome(self, outcome: VerificationOutcome) -> None:
        if outcome.kind is OutcomeKind.MATCHED:
            if not self.config.quiet:
                self.channels.emit(f"OK: {outcome.path}")
        elif outcome.kind is OutcomeKind.MISMATCHED:
            self.channels.diagnose(f"FAILED: {outcome.path}")
        elif not self.config.ignore_missing:
            self.channels.diagnose(f"{outcome.path}: {outcome.cause}")


def verify(config: ChecksumConfig, channels: OutputChannels | None = None) -> VerificationReport:
    """Run a :class:`Verifier` over ``config`` and return its report."""

    return Verifier(config, channels).verify()


__all__ = [
    "OutcomeKind",
    "VerificationOutcome",
    "VerificationReport",
    "Verifier",
    "verify",
]
