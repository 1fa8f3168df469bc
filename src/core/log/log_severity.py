from enum import Enum, auto

from src.core.log.log_exceptions import InvalidLevelError


class Severity(Enum):
    """
    Ordered severity level for log lines.

    The writer drops any line whose severity is below its threshold.
    """

    DEBUG = auto()   # Developer-focused diagnostic information
    INFO = auto()    # Normal operation
    WARN = auto()    # Unexpected but recoverable condition
    ERROR = auto()   # Operation failed, process continued
    FATAL = auto()   # Logged only; never terminates the process

    def __str__(self) -> str:
        return self.name

    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.value >= other.value

    @classmethod
    def parse(cls, text: str) -> "Severity":
        return parse_level(text)


# Accepted spellings, already lowercased
_LEVEL_NAMES = {
    "debug": Severity.DEBUG,
    "info": Severity.INFO,
    "warn": Severity.WARN,
    "warning": Severity.WARN,
    "err": Severity.ERROR,
    "error": Severity.ERROR,
    "fatal": Severity.FATAL,
}


def parse_level(text: str) -> Severity:
    """
    Convert a case-insensitive level name into a Severity.

    Raises InvalidLevelError for anything outside the accepted set.
    """
    if not isinstance(text, str):
        raise InvalidLevelError(text)

    try:
        return _LEVEL_NAMES[text.lower()]
    except KeyError:
        raise InvalidLevelError(text) from None
