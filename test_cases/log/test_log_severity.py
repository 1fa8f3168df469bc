import pytest

from src.core.log.log_exceptions import InvalidLevelError
from src.core.log.log_severity import Severity, parse_level


@pytest.mark.parametrize(
    "text, expected",
    [
        ("debug", Severity.DEBUG),
        ("DEBUG", Severity.DEBUG),
        ("info", Severity.INFO),
        ("Info", Severity.INFO),
        ("warn", Severity.WARN),
        ("warning", Severity.WARN),
        ("WARNING", Severity.WARN),
        ("err", Severity.ERROR),
        ("error", Severity.ERROR),
        ("ErRoR", Severity.ERROR),
        ("fatal", Severity.FATAL),
        ("FATAL", Severity.FATAL),
    ],
)
def test_parse_level_valid(text, expected) -> None:
    assert parse_level(text) is expected


@pytest.mark.parametrize("text", ["", "trace", "critical", " info", "info ", "warnings", "e", None, 3])
def test_parse_level_invalid(text) -> None:
    with pytest.raises(InvalidLevelError) as exc_info:
        parse_level(text)
    assert exc_info.value.level == text


def test_invalid_level_is_value_error() -> None:
    with pytest.raises(ValueError, match="unknown log level 'loud'"):
        Severity.parse("loud")


def test_severity_total_order() -> None:
    ordered = [Severity.DEBUG, Severity.INFO, Severity.WARN, Severity.ERROR, Severity.FATAL]
    assert sorted(reversed(ordered)) == ordered
    assert Severity.DEBUG < Severity.INFO < Severity.WARN < Severity.ERROR < Severity.FATAL
    assert Severity.ERROR >= Severity.ERROR
    assert not Severity.WARN > Severity.ERROR


def test_severity_names() -> None:
    assert [str(s) for s in Severity] == ["DEBUG", "INFO", "WARN", "ERROR", "FATAL"]
