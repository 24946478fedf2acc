"""
Core Utilities

Common utility functions used across the APIC Lifecycle tool.
"""

import logging
from typing import List, Optional, Sequence

BANNER_WIDTH = 53

MASK = "***MASKED***"

# Captured stdout/stderr of apic invocations
APIC_OUTPUT_LOGGER = "apic_lifecycle.apic.output"

LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _reset_handlers(target: logging.Logger, handler: logging.Handler) -> None:
    for existing in target.handlers[:]:
        target.removeHandler(existing)
    target.addHandler(handler)


def setup_logging(debug: bool = False) -> None:
    """
    Set up logging configuration for the application.

    Tool messages go through the root logger. Output captured from the apic
    CLI goes through its own logger with an ``apic>`` prefix and is only
    shown in debug mode.

    Args:
        debug: Enable debug logging level
    """
    level = logging.DEBUG if debug else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt=LOG_DATE_FORMAT
    ))
    _reset_handlers(root_logger, console_handler)

    output_logger = logging.getLogger(APIC_OUTPUT_LOGGER)
    output_logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    output_logger.propagate = False

    output_handler = logging.StreamHandler()
    output_handler.setFormatter(logging.Formatter(
        '%(asctime)s - apic> %(message)s',
        datefmt=LOG_DATE_FORMAT
    ))
    _reset_handlers(output_logger, output_handler)

    if debug:
        logging.getLogger(__name__).debug("Debug mode enabled, apic output will be shown")


def mask_command(args: Sequence[str], secrets: Optional[Sequence[str]] = None) -> List[str]:
    """
    Mask sensitive values in a command line for logging.

    The value following a --password flag is always masked, as is any
    argument equal to one of the given secrets.

    Args:
        args: Command line arguments
        secrets: Additional literal values to mask

    Returns:
        Copy of args with sensitive values replaced
    """
    secrets = [s for s in (secrets or []) if s]
    masked = []
    hide_next = False

    for arg in args:
        if hide_next:
            masked.append(MASK)
            hide_next = False
            continue

        if arg == "--password":
            hide_next = True
            masked.append(arg)
        elif arg.startswith("--password="):
            masked.append(f"--password={MASK}")
        elif arg in secrets:
            masked.append(MASK)
        else:
            masked.append(arg)

    return masked


def format_banner(title: str, width: int = BANNER_WIDTH) -> str:
    """Format a title between two '=' rules"""
    rule = "=" * width
    return f"\n{rule}\n{title.center(width).rstrip()}\n{rule}"


def format_step(title: str, width: int = BANNER_WIDTH) -> str:
    """Format a step header between two '-' rules"""
    rule = "-" * width
    return f"\n{rule}\n {title}\n{rule}"


def product_identifier(name: str, version: str) -> str:
    """Build the name:version identifier used by apic product commands"""
    return f"{name}:{version}"
