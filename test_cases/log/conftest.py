import re

import pytest

from src.core.log.leveled_writer import LeveledWriter
from src.core.log.signal_dispatcher import SignalDispatcher

LINE_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:Z|[+-]\d{2}:\d{2})) "
    r"(DEBUG|INFO|WARN|ERROR|FATAL): (.*)$"
)


def _parse_lines(path):
    text = path.read_text(encoding="utf-8")
    lines = text.splitlines()
    parsed = []
    for line in lines:
        m = LINE_RE.match(line)
        assert m is not None, f"malformed line: {line!r}"
        parsed.append(m.groups())
    return parsed


@pytest.fixture
def read_log():
    """Split a log file into (timestamp, level, message) tuples."""
    return _parse_lines


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "service.log"


@pytest.fixture
def dispatcher():
    # No OS handlers: tests dispatch by hand.
    return SignalDispatcher(install_handlers=False)


@pytest.fixture
def open_writer(log_path):
    def _open(level: str = "debug", path=None) -> LeveledWriter:
        return LeveledWriter.open(str(path or log_path), level)

    return _open
