from __future__ import annotations

import os
import shutil
import subprocess
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from ..date.types import AttributePlan
from ..errors import AttributeWriteError
from .base import AppliedAttributes, AttributeWriter

# Offset between the Windows FILETIME epoch (1601) and the Unix epoch, in 100ns ticks.
_FILETIME_EPOCH = 116444736000000000

# Errors a bad path or an out-of-range timestamp can raise while reading or writing times.
_TIME_ERRORS = (OSError, OverflowError, ValueError)


def _reason(e: Exception) -> str:
    return getattr(e, "strerror", None) or str(e)


def _declare_prototypes(kernel32):
    """Give the kernel32 calls real signatures so 64-bit handles are not truncated to int."""
    import ctypes
    from ctypes import wintypes

    lp_filetime = ctypes.POINTER(wintypes.FILETIME)

    kernel32.CreateFileW.argtypes = [
        wintypes.LPCWSTR,
        wintypes.DWORD,
        wintypes.DWORD,
        wintypes.LPVOID,
        wintypes.DWORD,
        wintypes.DWORD,
        wintypes.HANDLE,
    ]
    kernel32.CreateFileW.restype = wintypes.HANDLE
    kernel32.SetFileTime.argtypes = [wintypes.HANDLE, lp_filetime, lp_filetime, lp_filetime]
    kernel32.SetFileTime.restype = wintypes.BOOL
    kernel32.CloseHandle.argtypes = [wintypes.HANDLE]
    kernel32.CloseHandle.restype = wintypes.BOOL
    return kernel32


def _set_creation_time_windows(path: Path, ts: float) -> None:
    import ctypes
    from ctypes import wintypes

    FILE_WRITE_ATTRIBUTES = 0x100
    FILE_SHARE_READ_WRITE = 0x1 | 0x2
    OPEN_EXISTING = 3
    FILE_ATTRIBUTE_NORMAL = 0x80
    INVALID_HANDLE_VALUE = wintypes.HANDLE(-1).value

    kernel32 = _declare_prototypes(ctypes.WinDLL("kernel32", use_last_error=True))

    wintime = int(ts * 10_000_000) + _FILETIME_EPOCH
    ft = wintypes.FILETIME(wintime & 0xFFFFFFFF, wintime >> 32)

    try:
        handle = kernel32.CreateFileW(
            str(path), FILE_WRITE_ATTRIBUTES, FILE_SHARE_READ_WRITE, None, OPEN_EXISTING, FILE_ATTRIBUTE_NORMAL, None
        )
    except ctypes.ArgumentError as e:
        raise OSError(f"CreateFileW: {e}") from e
    if not handle or handle == INVALID_HANDLE_VALUE:
        raise ctypes.WinError(ctypes.get_last_error())
    try:
        if not kernel32.SetFileTime(handle, ctypes.byref(ft), None, None):
            raise ctypes.WinError(ctypes.get_last_error())
    except ctypes.ArgumentError as e:
        raise OSError(f"SetFileTime: {e}") from e
    finally:
        kernel32.CloseHandle(handle)


def _set_creation_time_macos(path: Path, when: datetime, setfile: str) -> None:
    # SetFile takes local time as "MM/DD/YYYY HH:MM:SS".
    p = subprocess.run(
        [setfile, "-d", when.strftime("%m/%d/%Y %H:%M:%S"), str(path)],
        capture_output=True,
        text=True,
    )
    if p.returncode != 0:
        err = (p.stderr or "").strip()
        msg = err.splitlines()[-1] if err else f"SetFile exited with {p.returncode}"
        raise OSError(msg)


@dataclass
class FilesystemWriter(AttributeWriter):
    """Writes timestamps to the local filesystem.

    Modification time goes through os.utime (access time is kept). Creation time can only be
    set on Windows (SetFileTime) and macOS (the SetFile developer tool); elsewhere the creation
    entry is skipped and reported in the note.
    """

    name: str = "filesystem"

    def read_modification_time(self, path: Path) -> datetime | None:
        try:
            return datetime.fromtimestamp(os.stat(path).st_mtime)
        except _TIME_ERRORS as e:
            raise AttributeWriteError(path, _reason(e)) from e

    def _set_creation_time(self, path: Path, when: datetime) -> str | None:
        """Set birth time where supported. Returns a note when it was skipped."""
        if sys.platform == "win32":
            _set_creation_time_windows(path, when.timestamp())
            return None
        if sys.platform == "darwin":
            setfile = shutil.which("SetFile")
            if not setfile:
                return "creation date skipped: SetFile not found (install Xcode command line tools)"
            _set_creation_time_macos(path, when, setfile)
            return None
        return f"creation date skipped: not supported on {sys.platform}"

    def apply(self, path: Path, plan: AttributePlan) -> AppliedAttributes:
        try:
            # Creation first: on macOS a modification time older than the birth time drags it back.
            note = self._set_creation_time(path, plan.creation)
            if plan.modification is not None:
                st = os.stat(path)
                os.utime(path, (st.st_atime, plan.modification.timestamp()))
        except _TIME_ERRORS as e:
            raise AttributeWriteError(path, _reason(e)) from e

        return AppliedAttributes(
            creation_set=note is None,
            modification_set=plan.modification is not None,
            note=note,
        )


@dataclass
class DryRunWriter(FilesystemWriter):
    """Reads real modification times but never writes anything."""

    name: str = "dry-run"

    def apply(self, path: Path, plan: AttributePlan) -> AppliedAttributes:
        return AppliedAttributes(creation_set=False, modification_set=False, note="dry-run")
