"""Tests for logging setup"""
import logging

import pytest

from src.core.models import Player, Position, VBDBreakdown
from src.core.vbd import log_breakdown
from src.utils.logging import setup_logging, ProductionFilter, TraceFilter


def record(name, level):
    return logging.LogRecord(name, level, __file__, 1, "message", None, None)


class TestFilters:
    """Test console filters"""

    def test_production_filter(self):
        f = ProductionFilter()

        assert not f.filter(record("main", logging.DEBUG))
        assert not f.filter(record("src.core.board", logging.INFO))
        assert f.filter(record("src.core.pool", logging.WARNING))
        assert f.filter(record("main", logging.INFO))

    def test_trace_filter(self):
        f = TraceFilter()

        assert not f.filter(record("src.core.vbd", logging.DEBUG))
        assert f.filter(record("src.core.vbd", logging.WARNING))
        assert f.filter(record("src.core.tiers", logging.DEBUG))


class TestSetupLogging:
    """Test handler wiring"""

    @pytest.fixture(autouse=True)
    def reset(self):
        yield
        setup_logging()

    def test_trace_file_receives_breakdowns(self, tmp_path):
        trace_file = tmp_path / "logs" / "trace.log"
        setup_logging(debug=True, trace_file=trace_file)

        player = Player(player_id="wr1", name="Elite Receiver", position=Position.WR, adp=9.1)
        log_breakdown(player, VBDBreakdown.empty())

        for handler in logging.getLogger("src.core.vbd").handlers:
            handler.flush()
        assert "Elite Receiver (WR)" in trace_file.read_text()

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "debug.log"
        setup_logging(debug=True, log_file=log_file)

        logging.getLogger("src.core.board").info("built board")

        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "built board" in log_file.read_text()
