"""Tests for the library-scoped structlog handler."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest

from preludekit import VariantRow, match
from preludekit.config.logging import PreludeHandler, configure_logging
from preludekit.config.settings import reset_settings


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Put the root and ``preludekit`` loggers back as they were."""
    root = logging.getLogger()
    prelude = logging.getLogger("preludekit")
    root_handlers, root_level = root.handlers[:], root.level
    prelude_handlers, prelude_level = prelude.handlers[:], prelude.level
    yield
    root.handlers = root_handlers
    root.setLevel(root_level)
    prelude.handlers = prelude_handlers
    prelude.setLevel(prelude_level)
    prelude.propagate = True


def last_json_line(err: str) -> dict:
    return json.loads(err.strip().splitlines()[-1])


class TestScope:
    def test_root_logger_untouched(self) -> None:
        root = logging.getLogger()
        host_handler = logging.NullHandler()
        root.addHandler(host_handler)
        root.setLevel(logging.INFO)

        configure_logging(verbose=True, log_json=False)

        assert host_handler in root.handlers
        assert root.level == logging.INFO
        assert not any(isinstance(h, PreludeHandler) for h in root.handlers)

    def test_handler_lives_on_package_logger(self) -> None:
        logger = configure_logging(verbose=False, log_json=False)
        assert logger is logging.getLogger("preludekit")
        assert logger.propagate is False
        assert sum(isinstance(h, PreludeHandler) for h in logger.handlers) == 1

    def test_repeated_calls_replace_handler(self) -> None:
        configure_logging(verbose=True, log_json=False)
        first = [h for h in logging.getLogger("preludekit").handlers if isinstance(h, PreludeHandler)]
        configure_logging(verbose=True, log_json=True)
        current = [h for h in logging.getLogger("preludekit").handlers if isinstance(h, PreludeHandler)]
        assert len(current) == 1
        assert current[0] is not first[0]

    def test_foreign_handlers_on_package_logger_kept(self) -> None:
        prelude = logging.getLogger("preludekit")
        mine = logging.NullHandler()
        prelude.addHandler(mine)
        configure_logging(verbose=False, log_json=False)
        assert mine in prelude.handlers


class TestLevels:
    @pytest.mark.parametrize(
        ("verbose", "level"),
        [
            (True, logging.DEBUG),
            (False, logging.WARNING),
        ],
    )
    def test_verbose_flag(self, verbose: bool, level: int) -> None:
        configure_logging(verbose=verbose, log_json=False)
        assert logging.getLogger("preludekit").level == level

    def test_defaults_come_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PRELUDEKIT_VERBOSE", "true")
        reset_settings()
        configure_logging()
        assert logging.getLogger("preludekit").level == logging.DEBUG

    def test_debug_suppressed_when_not_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("preludekit.folds").debug("fold noise")
        assert capfd.readouterr().err == ""


class TestRendering:
    def test_json_lines(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("preludekit.folds").warning("json test")
        parsed = last_json_line(capfd.readouterr().err)
        assert parsed["event"] == "json test"
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "preludekit.folds"
        assert "timestamp" in parsed

    def test_library_debug_records(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        row = VariantRow("Outcome", ok=int, error=str)
        match({"ok": str, "error": len, "warning": len}, row.inj(ok=1))
        parsed = last_json_line(capfd.readouterr().err)
        assert parsed["event"].startswith("Ignoring handlers outside Outcome")
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "preludekit.domain.variant"

    def test_console_mode(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=False)
        logging.getLogger("preludekit.folds").warning("hello world")
        assert "hello world" in capfd.readouterr().err
