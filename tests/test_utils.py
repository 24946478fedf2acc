"""
Logging setup and formatting helper tests
"""

import logging

import pytest

from apic_lifecycle.core.utils import (
    APIC_OUTPUT_LOGGER, format_banner, format_step, product_identifier, setup_logging
)


@pytest.fixture
def restore_logging():
    """Put root and apic output loggers back the way pytest left them"""
    root = logging.getLogger()
    output = logging.getLogger(APIC_OUTPUT_LOGGER)
    saved = (root.level, root.handlers[:], output.level, output.handlers[:], output.propagate)
    yield
    root.setLevel(saved[0])
    root.handlers[:] = saved[1]
    output.setLevel(saved[2])
    output.handlers[:] = saved[3]
    output.propagate = saved[4]


class TestSetupLogging:
    """Test console logging configuration"""

    def test_info_level_hides_apic_output(self, restore_logging):
        """Test that apic output is suppressed outside debug mode"""
        setup_logging(debug=False)

        output = logging.getLogger(APIC_OUTPUT_LOGGER)
        assert logging.getLogger().level == logging.INFO
        assert not output.isEnabledFor(logging.DEBUG)
        assert output.propagate is False

    def test_debug_level_shows_prefixed_apic_output(self, restore_logging):
        """Test that debug mode prints apic output with its own prefix"""
        setup_logging(debug=True)

        output = logging.getLogger(APIC_OUTPUT_LOGGER)
        assert output.isEnabledFor(logging.DEBUG)
        assert len(output.handlers) == 1
        assert "apic> %(message)s" in output.handlers[0].formatter._fmt

    def test_repeated_setup_keeps_single_handlers(self, restore_logging):
        """Test that calling setup twice does not duplicate handlers"""
        setup_logging(debug=True)
        setup_logging(debug=False)

        assert len(logging.getLogger().handlers) == 1
        assert len(logging.getLogger(APIC_OUTPUT_LOGGER).handlers) == 1


class TestFormatting:
    """Test banner and identifier helpers"""

    def test_banner(self):
        banner = format_banner("APIC retire operation completed successfully.")

        lines = banner.splitlines()
        assert lines[1] == "=" * 53
        assert lines[3] == "=" * 53
        assert "APIC retire operation completed successfully." in lines[2]

    def test_step(self):
        assert format_step("STEP 1: Logging in").splitlines()[2] == " STEP 1: Logging in"

    def test_product_identifier(self):
        assert product_identifier("orders-api", "1.0.0") == "orders-api:1.0.0"
