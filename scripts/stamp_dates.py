#!/usr/bin/env python3
"""Set file creation/modification dates from the date at the start of each filename.

Recognized prefixes (separator '-' or '_', or none):
  YYYY-MM-DD / YYYYMMDD   that day
  YYYY-MM / YYYYMM        last day of that month
  YYYY-YYYY / YYYYYYYY    Dec 31 of the second year

'Date created' always takes the filename date. 'Date modified' is only moved when the
filename date is more recent than the current one.

Usage:
  PYTHONPATH=. python3 scripts/stamp_dates.py ~/Scans --recursive --dry-run
  PYTHONPATH=. python3 scripts/stamp_dates.py 2023-04_receipt.pdf 20240229_note.txt

Year bound defaults to 1900..2200; override with --min-year/--max-year or
CHRONOSTAMP_MIN_YEAR/CHRONOSTAMP_MAX_YEAR (env or .env).
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from chronostamp.batch import FileOutcome, format_summary, process_files
from chronostamp.date import YearBound
from chronostamp.errors import ConfigError
from chronostamp.writers import build_writer


def collect_files(paths: list[Path], *, recursive: bool) -> list[Path]:
    out: list[Path] = []
    for p in paths:
        p = p.expanduser()
        if p.is_dir():
            it = p.rglob("*") if recursive else p.iterdir()
            for f in sorted(it):
                if f.is_file() and not f.name.startswith("."):
                    out.append(f)
        else:
            # Missing files are passed through so they show up as failures.
            out.append(p)
    return out


def report_line(o: FileOutcome, *, dry_run: bool) -> str:
    if o.error == "no-date":
        return f"SKIP {o.path.name}: {o.message}"
    if o.error:
        return f"FAIL {o.path.name}: {o.message}"

    assert o.plan is not None and o.extraction.parsed is not None
    fields = "creation+modification" if o.plan.modification is not None else "creation"
    tag = "DRY" if dry_run else "OK"
    line = f"{tag} {o.path.name}: {o.extraction.parsed} ({o.extraction.shape}) -> {fields}"
    if o.applied and o.applied.note and not dry_run:
        line += f" [{o.applied.note}]"
    return line


def to_json(outcomes: list[FileOutcome]) -> list[dict]:
    rows = []
    for o in outcomes:
        rows.append(
            {
                "path": str(o.path),
                "ok": o.ok,
                "error": o.error,
                "message": o.message,
                "date": str(o.extraction.parsed) if o.extraction.parsed else None,
                "shape": o.extraction.shape,
                "plan": {k: v.isoformat() for k, v in o.plan.as_dict().items()} if o.plan else None,
                "note": o.applied.note if o.applied else None,
            }
        )
    return rows


def main() -> None:
    ap = argparse.ArgumentParser(description="Stamp file dates from filename prefixes.")
    ap.add_argument("paths", nargs="+", help="Files or directories to process.")
    ap.add_argument("--recursive", action="store_true", help="Descend into subdirectories.")
    ap.add_argument("--dry-run", action="store_true", help="Show the plan without writing anything.")
    ap.add_argument("--min-year", type=int, default=None)
    ap.add_argument("--max-year", type=int, default=None)
    ap.add_argument("--json", action="store_true", help="Print a JSON report instead of text.")
    args = ap.parse_args()

    try:
        bound = YearBound.from_env(min_year=args.min_year, max_year=args.max_year)
    except ConfigError as e:
        raise SystemExit(str(e))

    files = collect_files([Path(p) for p in args.paths], recursive=args.recursive)
    if not files:
        raise SystemExit("No files to process")

    writer = build_writer("dry-run" if args.dry_run else "filesystem")
    result = process_files(files, bound=bound, writer=writer)

    if args.json:
        print(json.dumps(to_json(result.outcomes), indent=2))
    else:
        for o in result.outcomes:
            print(report_line(o, dry_run=args.dry_run))
        print()
        if args.dry_run:
            print("Dry run: nothing was written.")
        print(format_summary(result))

    if result.failed_files:
        sys.exit(1)


if __name__ == "__main__":
    main()
