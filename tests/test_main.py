from __future__ import annotations

import json
import logging

import pytest

from forcelayout.main import build_parser, main, parameters_from_args
from forcelayout.logging_config import setup_logging
from tests.helpers import chain_records


@pytest.fixture(autouse=True)
def _quiet_logging():
    yield
    logger = logging.getLogger("forcelayout")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def test_main_runs_layout_from_file(tmp_path) -> None:
    path = tmp_path / "graph.json"
    path.write_text(json.dumps(chain_records(6)), encoding="utf-8")

    status = main([str(path), "--ticks", "5", "--seed", "1", "--log-level", "WARNING"])

    assert status == 0


def test_main_merges_inline_payload(tmp_path) -> None:
    path = tmp_path / "graph.json"
    path.write_text(json.dumps([{"Name": "a", "dep": ["b"]}]), encoding="utf-8")

    status = main([str(path), "--inline", '[{"Name": "b"}]', "--ticks", "2", "--log-level", "WARNING"])

    assert status == 0


def test_main_reports_missing_dependency(capsys) -> None:
    status = main(["--inline", '[{"Name": "a", "dep": ["missing"]}]', "--ticks", "1"])

    assert status == 1
    assert "missing" in capsys.readouterr().out


def test_main_reports_unreadable_file(tmp_path) -> None:
    status = main([str(tmp_path / "nope.json"), "--log-level", "ERROR"])

    assert status == 1


def test_parameter_overrides_from_flags() -> None:
    args = build_parser().parse_args(["--max-step", "2", "--repulsion", "90"])

    store = parameters_from_args(args)

    assert store.max_step == 2.0
    assert store.repulsion == 90.0


def test_setup_logging_writes_log_file(tmp_path) -> None:
    log_file = tmp_path / "layout.log"

    setup_logging(level=logging.DEBUG, log_file=str(log_file))
    logging.getLogger("forcelayout.test").debug("hello")
    for handler in logging.getLogger("forcelayout").handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "Logging initialized." in text
    assert "hello" in text


def test_main_reports_non_utf8_file(tmp_path) -> None:
    path = tmp_path / "graph.json"
    path.write_bytes(b'[{"Name": "\xff\xfe", "dep": []}]')

    status = main([str(path), "--ticks", "1", "--log-level", "ERROR"])

    assert status == 1


def test_setup_logging_keeps_numba_quiet_at_debug() -> None:
    setup_logging(level=logging.DEBUG)

    assert logging.getLogger("numba").getEffectiveLevel() >= logging.INFO
