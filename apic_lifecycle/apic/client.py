"""
APIC Client

Handles low-level apic CLI invocations. Every command runs synchronously and
blocks until the process exits.
"""

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from ..core.constants import ApicConstants, ErrorMessages
from ..core.exceptions import (
    ApicBinaryNotFoundError, ApicError, CommandFailedError, ConfigurationError
)
from ..core.utils import APIC_OUTPUT_LOGGER, mask_command

logger = logging.getLogger(__name__)
output_logger = logging.getLogger(APIC_OUTPUT_LOGGER)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a single apic invocation"""
    args: tuple
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Combined stderr/stdout text, preferring stderr when present"""
        return (self.stderr or self.stdout).strip()


@dataclass(frozen=True)
class CatalogTarget:
    """Organization, catalog and space a product command is scoped to"""
    server: str
    org: str
    catalog: str
    space: str

    def to_args(self) -> List[str]:
        """Render the shared server/scope flags"""
        return [
            "--server", self.server,
            "-o", self.org,
            "-c", self.catalog,
            "--scope", ApicConstants.SCOPE_SPACE,
            "--space", self.space,
        ]

    def __str__(self) -> str:
        return f"{self.org} > {self.catalog} > {self.space}"


class ApicClient:
    """Low-level client for apic binary operations"""

    def __init__(self, apic_binary: str = None, work_dir: str = None):
        """
        Initialize APIC client

        Args:
            apic_binary: Path or name of the apic executable (defaults to 'apic')
            work_dir: Directory commands run in; product and mapping files live here

        Raises:
            ConfigurationError: If work_dir is not an existing directory
        """
        self.apic_binary = apic_binary or ApicConstants.DEFAULT_BINARY
        self.work_dir = Path(work_dir) if work_dir else Path.cwd()
        if not self.work_dir.is_dir():
            raise ConfigurationError(ErrorMessages.WORK_DIR_NOT_FOUND.format(work_dir=self.work_dir))
        self._resolved_binary = None

    def _find_apic_binary(self) -> str:
        """
        Find apic binary, either at the configured path or in system PATH

        Returns:
            str: Path to apic binary

        Raises:
            ApicBinaryNotFoundError: If apic binary not found
        """
        if self._resolved_binary:
            return self._resolved_binary

        resolved = shutil.which(self.apic_binary)
        if not resolved:
            raise ApicBinaryNotFoundError(ErrorMessages.BINARY_NOT_FOUND.format(binary=self.apic_binary))

        logger.debug(f"Found apic binary at: {resolved}")
        self._resolved_binary = resolved
        return resolved

    def run(self, args: Sequence[str], secrets: Sequence[str] = None) -> CommandResult:
        """
        Run an apic command and capture its result

        Args:
            args: Arguments following the apic binary
            secrets: Literal values to mask in the logged command line

        Returns:
            CommandResult: Exit status and captured output

        Raises:
            ApicBinaryNotFoundError: If the binary is missing
        """
        cmd = [self._find_apic_binary(), *args]
        logger.debug(f"Running command: {' '.join(mask_command(cmd, secrets))}")

        try:
            completed = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                cwd=str(self.work_dir)
            )
        except FileNotFoundError as e:
            # subprocess names the missing path; only the executable means a missing binary
            if e.filename not in (None, cmd[0], self.apic_binary):
                raise ApicError(f"Failed to run apic in {self.work_dir}: {e}")
            raise ApicBinaryNotFoundError(ErrorMessages.BINARY_NOT_FOUND.format(binary=self.apic_binary))

        result = CommandResult(
            args=tuple(args),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or ""
        )

        if result.stdout.strip():
            output_logger.debug(result.stdout.rstrip())
        if not result.succeeded:
            output_logger.debug(f"exited with status {result.returncode}: {result.stderr.rstrip()}")

        return result

    def _check(self, result: CommandResult, operation: str) -> CommandResult:
        """Raise CommandFailedError for a non-zero exit status"""
        if not result.succeeded:
            message = ErrorMessages.OPERATION_FAILED.format(operation=operation)
            if result.output:
                message = f"{message} {result.output}"
            raise CommandFailedError(message, result)
        return result

    def login(self, server: str, username: str, password: str, realm: str) -> CommandResult:
        """
        Log in to the management server

        The result is returned unchecked; the caller decides how a failed
        login is reported.
        """
        return self.run(
            [
                ApicConstants.Command.LOGIN.value,
                "--server", server,
                "--username", username,
                "--password", password,
                "--realm", realm,
            ],
            secrets=[password]
        )

    def create_product(self, title: str, name: str, version: str, api_file: str) -> CommandResult:
        """Create a product definition file <name>.yaml in the working directory"""
        return self._check(
            self.run([
                ApicConstants.Command.CREATE.value, ApicConstants.CREATE_PRODUCT_TYPE,
                "--title", title,
                "--name", name,
                "--version", version,
                "--apis", api_file,
            ]),
            "Create product"
        )

    def publish_product(self, product_file: str, target: CatalogTarget) -> CommandResult:
        """Publish a product file to the target space"""
        return self._check(
            self.run([ApicConstants.Command.PUBLISH.value, product_file, *target.to_args()]),
            "Publish"
        )

    def list_products(self, target: CatalogTarget) -> str:
        """
        List all products in the target space

        Returns:
            str: Raw listing output, one product per line
        """
        result = self._check(
            self.run([ApicConstants.Command.LIST_ALL.value, *target.to_args()]),
            "List products"
        )
        return result.stdout

    def supersede_product(self, target: CatalogTarget, identifier: str, mapping_file: str) -> CommandResult:
        """Supersede a published product with identifier using a plan mapping file"""
        return self._check(
            self.run([ApicConstants.Command.SUPERSEDE.value, *target.to_args(), identifier, mapping_file]),
            "Supersede"
        )

    def replace_product(self, target: CatalogTarget, identifier: str, mapping_file: str) -> CommandResult:
        """Replace a published product with identifier using a plan mapping file"""
        return self._check(
            self.run([ApicConstants.Command.REPLACE.value, *target.to_args(), identifier, mapping_file]),
            "Replace"
        )

    def update_product(self, target: CatalogTarget, identifier: str, state_file: str,
                       operation: str = "Update") -> CommandResult:
        """Apply a state document to a published product"""
        return self._check(
            self.run([ApicConstants.Command.UPDATE.value, *target.to_args(), identifier, state_file]),
            operation
        )
