from typing import Any

from src.core.log.leveled_writer import LeveledWriter

# Labels used by the repair and recovery subsystems
REPAIR_PREFIX = "repair"
RECOVERY_PREFIX = "recovery"


class PrefixLogger:
    """
    Convenience façade that tags every message with a fixed label.

    Filtering, timestamps, locking and error handling all belong to the
    wrapped LeveledWriter. The writer is shared, not owned.
    """

    def __init__(self, writer: LeveledWriter, prefix: str):
        self._writer = writer
        self._prefix = prefix

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def writer(self) -> LeveledWriter:
        return self._writer

    def _template(self, template: str) -> str:
        # Arguments are substituted later by the writer, untouched here.
        return f"{self._prefix}: {template}"

    def debug(self, msg: str) -> None:
        self._writer.debugf("%s: %s", self._prefix, msg)

    def info(self, msg: str) -> None:
        self._writer.infof("%s: %s", self._prefix, msg)

    def warn(self, msg: str) -> None:
        self._writer.warnf("%s: %s", self._prefix, msg)

    def error(self, msg: str) -> None:
        self._writer.errorf("%s: %s", self._prefix, msg)

    def fatal(self, msg: str) -> None:
        self._writer.fatalf("%s: %s", self._prefix, msg)

    def debugf(self, template: str, *args: Any) -> None:
        self._writer.debugf(self._template(template), *args)

    def infof(self, template: str, *args: Any) -> None:
        self._writer.infof(self._template(template), *args)

    def warnf(self, template: str, *args: Any) -> None:
        self._writer.warnf(self._template(template), *args)

    def errorf(self, template: str, *args: Any) -> None:
        self._writer.errorf(self._template(template), *args)

    def fatalf(self, template: str, *args: Any) -> None:
        self._writer.fatalf(self._template(template), *args)

    warning = warn
    warningf = warnf
