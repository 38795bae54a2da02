import logging

import pytest

from scciter import config
from scciter.core.graph import build_graph
from scciter.core.scc import strongly_connected_components


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("yes", True), (" TRUE ", True), ("0", False), ("no", False), ("", False), ("maybe", False)],
)
def test_trace_flag_parsing(monkeypatch, raw, expected):
    monkeypatch.setenv(config._TRACE_ENV, raw)
    assert config.trace_enabled() is expected


def test_flags_default_off():
    assert config.trace_enabled() is False
    assert config.check_state_enabled() is False


def test_trace_logs_each_visit(monkeypatch, caplog):
    monkeypatch.setenv(config._TRACE_ENV, "1")
    caplog.set_level(logging.DEBUG, logger="scciter.core.scc")
    strongly_connected_components(build_graph([("A", "B"), ("B", "A")]))
    assert "visit node 'A' discovery=1" in caplog.text
    assert "visit node 'B' discovery=2" in caplog.text
    assert "completed SCC of 2 node(s) rooted at 'A'" in caplog.text


def test_completed_sccs_logged_without_trace(caplog):
    caplog.set_level(logging.DEBUG, logger="scciter.core.scc")
    strongly_connected_components(build_graph([("A", "B")]))
    assert "visit node" not in caplog.text
    assert "completed SCC of 1 node(s) rooted at 'B'" in caplog.text
