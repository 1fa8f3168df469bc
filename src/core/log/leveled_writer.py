"""
Module: leveled_writer.py
Location: src/core/log/
Version: 0.1.0

Severity-filtered line writer for long-running processes.

Lines look like:

    2006-01-02T15:04:05+07:00 INFO: message

The destination is a file opened for append, or standard error when the
path is empty or "/dev/stderr". reopen() swaps the file handle under the
writer lock so an external rotation tool can rename the file and signal
the process to start a fresh one at the same path.

Logging must never break the caller: write errors are swallowed and only
counted. Construction errors propagate.
"""

from __future__ import annotations

import logging
import os
import sys
import threading
from datetime import datetime
from typing import Any, Optional, TextIO

from src.core.log.log_exceptions import FileOpenError
from src.core.log.log_severity import Severity, parse_level
from src.core.log.signal_dispatcher import SignalDispatcher, SignalSubscription

STDERR_PATH = "/dev/stderr"

FILE_MODE = 0o644

_diag = logging.getLogger("src.core.log")


# ----------------------------
# Line formatting
# ----------------------------

def format_timestamp(now: Optional[datetime] = None) -> str:
    """
    RFC 3339 timestamp, seconds precision, numeric offset or Z for UTC.
    """
    if now is None:
        now = datetime.now().astimezone()
    elif now.tzinfo is None:
        now = now.astimezone()

    stamp = now.replace(tzinfo=None).isoformat(timespec="seconds")
    offset = now.utcoffset()
    if not offset:
        return stamp + "Z"

    # Whole minutes only; any seconds in the offset are dropped.
    total = int(offset.total_seconds())
    sign = "-" if total < 0 else "+"
    hours, mins = divmod(abs(total) // 60, 60)
    return f"{stamp}{sign}{hours:02d}:{mins:02d}"


def render_message(template: str, args: tuple) -> str:
    if not args:
        return template
    try:
        return template % args
    except (TypeError, ValueError):
        # Keep the line; show what could not be substituted.
        extra = ", ".join(repr(a) for a in args)
        return f"{template} %!(EXTRA {extra})"


def format_line(severity: Severity, message: str, now: Optional[datetime] = None) -> str:
    return f"{format_timestamp(now)} {severity}: {message}\n"


def _encodable(line: str, encoding: Optional[str]) -> str:
    encoding = encoding or "utf-8"
    return line.encode(encoding, "backslashreplace").decode(encoding)


def _open_append(path: str) -> TextIO:
    def opener(p, flags):
        return os.open(p, flags, FILE_MODE)

    return open(path, "a", encoding="utf-8", errors="backslashreplace", opener=opener)


# ----------------------------
# Writer
# ----------------------------

class LeveledWriter:
    """
    Owns the destination handle, the severity threshold and the lock
    guarding the handle.

    Every write and every reopen holds the lock for exactly one
    operation. The threshold check happens before the lock, so a line
    accepted just before a concurrent reopen may land in either file.
    """

    def __init__(self, path: str, level: Severity):
        self._path = path
        self._level = level
        self._lock = threading.Lock()
        self._fh: Optional[TextIO] = None
        self._failed_writes = 0

    @classmethod
    def open(cls, path: str, level: str) -> "LeveledWriter":
        """
        Parse the level, then open the destination.

        Raises InvalidLevelError or FileOpenError; no writer is returned
        on failure.
        """
        writer = cls(path, parse_level(level))
        writer.reopen()
        return writer

    @property
    def path(self) -> str:
        return self._path

    @property
    def level(self) -> Severity:
        return self._level

    @property
    def failed_writes(self) -> int:
        """Lines dropped because the handle was unset or the write failed."""
        with self._lock:
            return self._failed_writes

    def uses_stderr(self) -> bool:
        return self._path in ("", STDERR_PATH)

    def is_enabled_for(self, severity: Severity) -> bool:
        return severity >= self._level

    # -------------------------------------------------
    # Rotation
    # -------------------------------------------------
    def reopen(self) -> None:
        """
        Close the current file and open the path again.

        Standard error is bound, never closed. If the open fails the old
        handle stays closed and the writer drops lines until a later
        reopen succeeds.
        """
        with self._lock:
            if self.uses_stderr():
                self._fh = sys.stderr
                return

            if self._fh is not None:
                try:
                    self._fh.close()
                except OSError:
                    pass
                self._fh = None

            try:
                self._fh = _open_append(self._path)
            except OSError as e:
                raise FileOpenError(self._path, e) from e

    def reopen_on_signal(
        self,
        signum: int,
        dispatcher: Optional[SignalDispatcher] = None,
    ) -> SignalSubscription:
        """
        Reopen the destination every time signum arrives.

        The reopen runs on a dedicated background thread. Failures go to
        the fallback diagnostic logger, since the log file itself may be
        the thing that is broken, and do not stop the listener.
        """
        if dispatcher is None:
            dispatcher = SignalDispatcher.default()
        return dispatcher.subscribe(signum, self._reopen_reporting, name=f"reopen:{self._path or 'stderr'}")

    def _reopen_reporting(self) -> None:
        try:
            self.reopen()
        except FileOpenError as e:
            _diag.error("failed to reopen log file: %s", e)

    # -------------------------------------------------
    # Writing
    # -------------------------------------------------
    def log(self, severity: Severity, msg: str) -> None:
        self.logf(severity, "%s", msg)

    def logf(self, severity: Severity, template: str, *args: Any) -> None:
        message = render_message(template, args)
        if severity < self._level:
            return
        self._write(format_line(severity, message))

    def _write(self, line: str) -> None:
        with self._lock:
            fh = self._fh
            if fh is None:
                self._failed_writes += 1
                return
            if self.uses_stderr():
                # Not opened by us, so its error handler may be strict.
                line = _encodable(line, getattr(fh, "encoding", None))
            try:
                fh.write(line)
                fh.flush()
            except (OSError, ValueError):
                # ValueError: write to a closed file
                self._failed_writes += 1

    def debug(self, msg: str) -> None:
        self.logf(Severity.DEBUG, "%s", msg)

    def info(self, msg: str) -> None:
        self.logf(Severity.INFO, "%s", msg)

    def warn(self, msg: str) -> None:
        self.logf(Severity.WARN, "%s", msg)

    def error(self, msg: str) -> None:
        self.logf(Severity.ERROR, "%s", msg)

    def fatal(self, msg: str) -> None:
        """Log at FATAL. Does not exit."""
        self.logf(Severity.FATAL, "%s", msg)

    def debugf(self, template: str, *args: Any) -> None:
        self.logf(Severity.DEBUG, template, *args)

    def infof(self, template: str, *args: Any) -> None:
        self.logf(Severity.INFO, template, *args)

    def warnf(self, template: str, *args: Any) -> None:
        self.logf(Severity.WARN, template, *args)

    def errorf(self, template: str, *args: Any) -> None:
        self.logf(Severity.ERROR, template, *args)

    def fatalf(self, template: str, *args: Any) -> None:
        self.logf(Severity.FATAL, template, *args)

    warning = warn
    warningf = warnf


def open_log(path: str, level: str) -> LeveledWriter:
    return LeveledWriter.open(path, level)
