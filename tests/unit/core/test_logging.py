"""
Unit tests for logging configuration.
"""

import json
import logging
from decimal import Decimal
from fractions import Fraction

import structlog

from v3d.core.config import KernelConfig
from v3d.core.environment import Environment, set_default_environment
from v3d.core.logging import (
    add_precision,
    configure_from_config,
    configure_logging,
    get_logger,
    render_rationals,
)
from v3d.core.precision import RoundingMode


class TestRenderRationals:
    """Tests for the rational-rendering processor."""

    def test_renders_exact_numbers(self):
        """Test fractions and decimals become strings and ints are kept."""
        event = {"event": "x", "length": Fraction(1, 3), "rounded": Decimal("0.333"), "count": 2}
        result = render_rationals(None, "info", event)
        assert result["length"] == "1/3"
        assert result["rounded"] == "0.333"
        assert result["count"] == 2


class TestAddPrecision:
    """Tests for the precision-stamping processor."""

    def test_stamps_default_precision(self):
        """Test events get the default environment's oom and rounding mode."""
        set_default_environment(Environment(KernelConfig(oom=-6, rounding=RoundingMode.FLOOR)))
        result = add_precision(None, "info", {"event": "x"})
        assert result["oom"] == -6
        assert result["rm"] == "FLOOR"

    def test_keeps_explicit_precision(self):
        """Test an event's own oom is not overwritten."""
        result = add_precision(None, "info", {"event": "x", "oom": -2})
        assert result["oom"] == -2
        assert result["rm"] == "HALF_UP"

class TestConfigureLogging:
    """Tests for configure_logging."""

    def teardown_method(self):
        structlog.reset_defaults()
        logging.basicConfig(force=True)

    def test_json_output_to_file(self, temp_dir):
        """Test JSON lines are written with rationals as strings."""
        log_file = temp_dir / "v3d.log"
        configure_logging(level="DEBUG", json_output=True, log_file=str(log_file))

        get_logger("v3d.test").info("measured", length=Fraction(1, 3))
        for handler in logging.root.handlers:
            handler.flush()

        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["event"] == "measured"
        assert record["length"] == "1/3"
        assert record["level"] == "info"
        assert record["oom"] == -3

    def test_level_filters(self, temp_dir):
        """Test events below the level are dropped."""
        log_file = temp_dir / "v3d.log"
        configure_logging(level="WARNING", json_output=True, log_file=str(log_file))

        get_logger("v3d.test").info("hidden")
        for handler in logging.root.handlers:
            handler.flush()

        assert "hidden" not in log_file.read_text()

    def test_configure_from_config(self, temp_dir):
        """Test the kernel config sets the log level."""
        log_file = temp_dir / "from_config.log"
        config = KernelConfig(log_level="ERROR", json_logs=True, log_file=str(log_file))
        configure_from_config(config)

        assert logging.root.level == logging.ERROR
