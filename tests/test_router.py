"""
Unit Tests for Output Routing

Tests which lines reach the application callbacks and which reach the log.
"""

import logging

import pytest

from engine_link.router import OutputRouter
from engine_link.sync import LineStatus

LOGGER_NAME = "tests.router"


@pytest.fixture
def received():
    """Lines delivered to each consumer."""
    return {"fresh": [], "error": []}


@pytest.fixture
def router(received, caplog):
    """Router with both consumers attached, capturing its log."""
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    router = OutputRouter(log_info_lines=False, logger=logging.getLogger(LOGGER_NAME))
    router.attach(received["fresh"].append, received["error"].append)
    return router


def logged(caplog):
    return [record.getMessage() for record in caplog.records if record.name == LOGGER_NAME]


class TestRoute:
    """Tests for routing stdout lines."""

    def test_fresh_line_forwarded_and_logged(self, router, received, caplog):
        router.route(LineStatus.FRESH, "bestmove e2e4")

        assert received["fresh"] == ["bestmove e2e4"]
        assert logged(caplog) == ["< bestmove e2e4"]

    def test_stale_lines_not_forwarded(self, router, received, caplog):
        router.route(LineStatus.STALE_RESULT, "bestmove a2a3")
        router.route(LineStatus.STALE_ACK, "id name Engine")

        assert received["fresh"] == []
        assert logged(caplog) == [
            "(bestmove desync) < bestmove a2a3",
            "(readyok desync) < id name Engine",
        ]

    def test_info_lines_not_logged_by_default(self, router, received, caplog):
        router.route(LineStatus.FRESH, "info depth 3 score cp 12")
        router.route(LineStatus.STALE_ACK, "info depth 2 score cp 9")

        assert received["fresh"] == ["info depth 3 score cp 12"]
        assert logged(caplog) == []

    def test_info_lines_logged_when_enabled(self, router, received, caplog):
        router.log_info_lines = True

        router.route(LineStatus.FRESH, "info depth 3 score cp 12")
        router.route(LineStatus.STALE_RESULT, "info depth 2 score cp 9")

        assert logged(caplog) == [
            "< info depth 3 score cp 12",
            "(bestmove desync) < info depth 2 score cp 9",
        ]


class TestRouteError:
    """Tests for routing stderr lines."""

    def test_error_lines_always_forwarded(self, router, received, caplog):
        router.route_error("info string NNUE missing")
        router.route_error("segfault imminent")

        assert received["error"] == ["info string NNUE missing", "segfault imminent"]
        assert received["fresh"] == []
        assert logged(caplog) == ["! info string NNUE missing", "! segfault imminent"]


class TestAttachDetach:
    """Tests for consumer binding."""

    def test_unattached_router_drops_lines(self):
        router = OutputRouter()

        router.route(LineStatus.FRESH, "bestmove e2e4")
        router.route_error("oops")

        assert not router.attached

    def test_detach_silences_consumers(self, router, received):
        assert router.attached

        router.detach()
        router.route(LineStatus.FRESH, "bestmove e2e4")
        router.route_error("oops")

        assert not router.attached
        assert received == {"fresh": [], "error": []}
