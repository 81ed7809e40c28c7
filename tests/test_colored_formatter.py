"""Tests for ColoredFormatter."""

import logging
from io import StringIO
from unittest.mock import patch

import pytest

from discord_jukebox.utils.logging import ColoredFormatter

RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}


def _make_record(level: int, message: str = "test") -> logging.LogRecord:
    return logging.LogRecord(
        name="discord_jukebox.test",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )


class _TtyStream(StringIO):
    def isatty(self) -> bool:
        return True


class TestColoredFormatter:
    """Tests for ANSI color formatting."""

    @pytest.mark.parametrize("level", list(LEVEL_COLORS))
    def test_color_applied_per_level(self, level: int):
        fmt = ColoredFormatter("%(levelname)s | %(message)s", stream=_TtyStream())

        output = fmt.format(_make_record(level))

        assert output.startswith(LEVEL_COLORS[level])
        assert RESET in output

    def test_logger_name_is_dimmed(self):
        fmt = ColoredFormatter("%(name)s", force_color=True)

        output = fmt.format(_make_record(logging.INFO))

        assert output == f"{ColoredFormatter.DIM}discord_jukebox.test{RESET}"

    def test_no_color_when_no_color_env_set(self):
        fmt = ColoredFormatter("%(levelname)s | %(message)s", stream=_TtyStream())

        with patch.dict("os.environ", {"NO_COLOR": "1"}):
            output = fmt.format(_make_record(logging.INFO))

        assert output == "INFO | test"

    def test_no_color_when_stream_not_tty(self):
        fmt = ColoredFormatter("%(levelname)s | %(message)s", stream=StringIO())

        output = fmt.format(_make_record(logging.ERROR))

        assert "\033[" not in output

    def test_force_color_overrides_environment(self):
        fmt = ColoredFormatter("%(levelname)s", stream=StringIO(), force_color=True)

        with patch.dict("os.environ", {"NO_COLOR": "1"}):
            output = fmt.format(_make_record(logging.WARNING))

        assert output == f"{LEVEL_COLORS[logging.WARNING]}WARNING{RESET}"

    def test_original_record_is_untouched(self):
        """Should not leak colour codes to other handlers sharing the record."""
        fmt = ColoredFormatter("%(levelname)s", force_color=True)
        record = _make_record(logging.INFO)

        fmt.format(record)

        assert record.levelname == "INFO"
        assert record.name == "discord_jukebox.test"

    def test_plain_format_with_arguments(self):
        fmt = ColoredFormatter("%(levelname)s | %(message)s", force_color=False)
        record = logging.LogRecord("x", logging.INFO, "t.py", 1, "Joined guild %s", (42,), None)

        assert fmt.format(record) == "INFO | Joined guild 42"
