"""Tests for stop control."""

import logging

import pytest

from apocalypse_search.config import SearchParameters
from apocalypse_search.core.stopping import FIXED, SAFETY, StopController
from apocalypse_search.errors import InvalidParameterError


class TestStopController:
    """Tests for StopController."""

    def test_fixed_mode(self):
        controller = StopController(stop=5)
        assert controller.mode == FIXED
        assert not controller.should_stop(4, 4)
        assert controller.should_stop(5, 0)

    def test_safety_mode(self):
        controller = StopController(safety=3)
        assert controller.mode == SAFETY
        assert not controller.should_stop(10, 8)
        assert controller.should_stop(11, 8)
        assert not controller.should_stop(11, 11)

    def test_safety_takes_precedence(self, caplog):
        with caplog.at_level(logging.WARNING):
            controller = StopController(stop=5, safety=3)
        assert controller.mode == SAFETY
        assert controller.stop is None
        assert not controller.should_stop(5, 4)
        assert "safety value takes precedence" in caplog.text

    def test_from_parameters(self):
        controller = StopController.from_parameters(SearchParameters(stop=20))
        assert controller.mode == FIXED
        assert controller.stop == 20

    def test_invalid(self):
        with pytest.raises(InvalidParameterError):
            StopController()
        with pytest.raises(InvalidParameterError):
            StopController(safety=0)
