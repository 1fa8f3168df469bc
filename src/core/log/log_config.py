"""
Caller-supplied settings for opening a LeveledWriter.

Parsing these values out of files, environment or argv belongs to the
caller; this only holds and applies them.
"""

from __future__ import annotations

import signal
from dataclasses import dataclass
from typing import Optional, Union

from src.core.log.leveled_writer import LeveledWriter
from src.core.log.signal_dispatcher import SignalDispatcher

SignalSpec = Union[signal.Signals, int, str]


def resolve_signal(spec: SignalSpec) -> signal.Signals:
    """
    Accept a Signals member, a signal number, or a name such as
    "SIGHUP", "hup" or "usr1".
    """
    if isinstance(spec, signal.Signals):
        return spec
    if isinstance(spec, int):
        return signal.Signals(spec)

    name = spec.strip().upper()
    if not name.startswith("SIG"):
        name = "SIG" + name
    try:
        return signal.Signals[name]
    except KeyError:
        raise ValueError(f"unknown signal {spec!r}") from None


@dataclass(frozen=True)
class LogConfig:
    """Destination, threshold and optional rotation signal for one writer."""

    path: str = ""              # "" or "/dev/stderr" means standard error
    level: str = "info"         # debug, info, warn(ing), err(or), fatal
    rotate_signal: Optional[SignalSpec] = None

    def resolved_signal(self) -> Optional[signal.Signals]:
        if self.rotate_signal is None:
            return None
        return resolve_signal(self.rotate_signal)


def open_from_config(
    config: LogConfig,
    dispatcher: Optional[SignalDispatcher] = None,
) -> LeveledWriter:
    writer = LeveledWriter.open(config.path, config.level)

    signum = config.resolved_signal()
    if signum is not None:
        writer.reopen_on_signal(signum, dispatcher=dispatcher)

    return writer
