from __future__ import annotations

from .base import AttributeWriter
from .filesystem import DryRunWriter, FilesystemWriter


def build_writer(name: str) -> AttributeWriter:
    n = (name or "filesystem").lower()
    if n in ("filesystem", "fs", "os"):
        return FilesystemWriter()
    if n in ("dry-run", "dry_run", "dryrun"):
        return DryRunWriter()

    raise ValueError(f"Unsupported attribute writer: {name} (expected 'filesystem' or 'dry-run')")
