from __future__ import annotations

import logging

from todo_app.logging_setup import _ConsoleNoiseFilter, setup_logging


def _record(name, level):
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_keeps_our_logs_and_quiets_libraries():
    f = _ConsoleNoiseFilter()
    assert f.filter(_record("todo_app.sync", logging.DEBUG))
    assert not f.filter(_record("urllib3.connectionpool", logging.INFO))
    assert f.filter(_record("streamlit", logging.WARNING))


def test_setup_logging_writes_file(tmp_path, restore_logging):
    setup_logging(level="warning", log_dir=tmp_path)
    logging.getLogger("todo_app.test").debug("hello file")
    for h in logging.getLogger().handlers:
        h.flush()
    assert "hello file" in (tmp_path / "todo.log").read_text(encoding="utf-8")


def test_setup_logging_replaces_handlers(restore_logging):
    setup_logging()
    setup_logging()
    assert len(logging.getLogger().handlers) == 1
