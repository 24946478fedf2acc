"""
Main Application

Orchestrates a lifecycle run: load configuration, validate, log in, and
dispatch to exactly one product operation.
"""

import argparse
import logging
import sys
from typing import Optional

from .apic import ApicClient, ProductOperations
from .core import ApicAuth, ConfigManager, setup_logging
from .core.constants import ActionType, FileConstants
from .core.exceptions import LifecycleError
from .core.utils import format_banner, format_step

logger = logging.getLogger(__name__)

TOOL_TITLE = "IBM API Connect Product Lifecycle Tool"


class LifecycleManager:
    """Main application orchestrator for the APIC Lifecycle tool"""

    def __init__(
        self,
        config_provider: Optional[ConfigManager] = None,
        client: Optional[ApicClient] = None,
        auth_provider: Optional[ApicAuth] = None,
        operations: Optional[ProductOperations] = None,
        work_dir: str = None,
        apic_binary: str = None
    ):
        """
        Initialize Lifecycle Manager with dependency injection

        Collaborators left as None are built on demand from the loaded
        configuration.

        Args:
            config_provider: Configuration provider (defaults to ConfigManager)
            client: apic CLI client (defaults to ApicClient)
            auth_provider: Authentication provider (defaults to ApicAuth)
            operations: Product operations (defaults to ProductOperations)
            work_dir: Directory for product and mapping files
            apic_binary: apic executable, overriding APIC_BINARY
        """
        self.config_provider = config_provider or ConfigManager()
        self.client = client
        self.auth_provider = auth_provider
        self.operations = operations
        self.work_dir = work_dir
        self.apic_binary = apic_binary

    def run(self, config_path: str = FileConstants.DEFAULT_CONFIG_FILE, action: str = None) -> int:
        """
        Execute one lifecycle run

        Args:
            config_path: Environment file to load
            action: Action overriding ACTION from the file (optional)

        Returns:
            Exit code 0 on success

        Raises:
            LifecycleError: On any validation, login or command failure
        """
        logger.info(format_banner(TOOL_TITLE))

        config = self.config_provider.load_config(config_path)
        config = config.with_overrides(action=action)
        selected = self.config_provider.validate(config)

        client = self.client or ApicClient(
            apic_binary=self.apic_binary or config.apic_binary or None,
            work_dir=self.work_dir
        )
        auth = self.auth_provider or ApicAuth(client)
        operations = self.operations or ProductOperations(client)

        logger.info(format_step("STEP 1: Logging in to IBM API Connect"))
        auth.login(config)

        handler = operations.handler_for(selected)
        handler(config)

        logger.info(format_banner(f"APIC {selected} operation completed successfully."))
        return 0

    def generate_config(self, output_dir: str = None) -> str:
        """Write an environment file template and return its path"""
        return self.config_provider.generate_config_template(output_dir)


def create_lifecycle_manager(work_dir: str = None, apic_binary: str = None) -> LifecycleManager:
    """
    Factory function to create LifecycleManager with default dependencies

    Args:
        work_dir: Directory for product and mapping files
        apic_binary: apic executable to use

    Returns:
        LifecycleManager: Configured LifecycleManager instance
    """
    return LifecycleManager(work_dir=work_dir, apic_binary=apic_binary)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser"""
    parser = argparse.ArgumentParser(
        prog='apic-lifecycle',
        description='APIC Lifecycle - publish, supersede, replace, deprecate or retire API products',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  apic-lifecycle
  apic-lifecycle --config prod_inputs.env
  apic-lifecycle --action retire --debug
  apic-lifecycle --generate-config --output ./config

Actions: {ActionType.usage()}
"""
    )
    parser.add_argument('--config', default=FileConstants.DEFAULT_CONFIG_FILE,
                        help=f'Environment file (default: {FileConstants.DEFAULT_CONFIG_FILE})')
    parser.add_argument('--action', help='Action to perform, overriding ACTION from the environment file')
    parser.add_argument('--work-dir', help='Directory for product and mapping files (default: current directory)')
    parser.add_argument('--apic-binary', help='Path to the apic CLI (default: APIC_BINARY or apic on PATH)')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--generate-config', action='store_true',
                        help='Write an environment file template and exit')
    parser.add_argument('--output', help='Output directory for --generate-config')
    return parser


def main(argv=None) -> int:
    """
    Main entry point

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for any failure)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    setup_logging(args.debug)

    manager = create_lifecycle_manager(work_dir=args.work_dir, apic_binary=args.apic_binary)

    try:
        if args.generate_config:
            manager.generate_config(args.output)
            return 0

        return manager.run(args.config, action=args.action)

    except LifecycleError as e:
        logger.error(f"ERROR: {e}")
        return 1
    except KeyboardInterrupt:
        logger.error("Operation cancelled by user.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
