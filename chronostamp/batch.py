from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from .date import AttributePlan, ExtractionOutcome, YearBound, extract, plan
from .errors import AttributeWriteError
from .writers import AppliedAttributes, AttributeWriter, build_writer

FailReason = Literal["no-date", "write-failed"]


@dataclass(frozen=True)
class FileOutcome:
    path: Path
    extraction: ExtractionOutcome
    plan: AttributePlan | None = None
    applied: AppliedAttributes | None = None
    error: FailReason | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ProcessingResult:
    success_count: int = 0
    failed_files: list[str] = field(default_factory=list)
    outcomes: list[FileOutcome] = field(default_factory=list)

    def add(self, outcome: FileOutcome) -> None:
        self.outcomes.append(outcome)
        if outcome.ok:
            self.success_count += 1
        else:
            self.failed_files.append(outcome.path.name)


def process_file(path: Path, *, bound: YearBound | None = None, writer: AttributeWriter | None = None) -> FileOutcome:
    """Extract, plan and write for a single file. Nothing is written for a rejected name."""

    writer = writer or build_writer("filesystem")
    ext = extract(path.name, bound)
    if not ext.parsed:
        return FileOutcome(path=path, extraction=ext, error="no-date", message="no date at start of filename")

    try:
        current = writer.read_modification_time(path)
        p = plan(ext.parsed, current)
        applied = writer.apply(path, p)
    except AttributeWriteError as e:
        return FileOutcome(path=path, extraction=ext, error="write-failed", message=e.message)

    return FileOutcome(path=path, extraction=ext, plan=p, applied=applied)


def process_files(
    paths: Iterable[Path],
    *,
    bound: YearBound | None = None,
    writer: AttributeWriter | None = None,
) -> ProcessingResult:
    """Process each path once (first occurrence wins) and collect per-file outcomes."""

    writer = writer or build_writer("filesystem")
    result = ProcessingResult()
    seen: set[Path] = set()
    for p in paths:
        if p in seen:
            continue
        seen.add(p)
        result.add(process_file(p, bound=bound, writer=writer))
    return result


def format_summary(result: ProcessingResult) -> str:
    messages: list[str] = []
    if result.success_count > 0:
        messages.append(f"Successfully updated {result.success_count} files.")
    if result.failed_files:
        failed = "\n".join(result.failed_files)
        messages.append(f"Failed to update {len(result.failed_files)} files:\n{failed}")
    if not messages:
        return "No changes were made."
    return "\n\n".join(messages)
