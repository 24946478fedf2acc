"""
Configuration Management

Loads the KEY=value environment file that drives a lifecycle run and
validates it before anything is sent to the management server.
"""

import logging
import os
import re
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Dict, Optional

from decouple import RepositoryEnv

from .constants import ActionType, ConfigKeys, ErrorMessages, FileConstants
from .exceptions import ConfigurationError, InvalidActionError, MissingFieldError

logger = logging.getLogger(__name__)

EXPORT_PREFIX = re.compile(r"^export\s+")
TRAILING_COMMENT = re.compile(r"(?:^|\s+)#.*$")


class SourcedRepositoryEnv(RepositoryEnv):
    """
    decouple repository that reads an env file the way a shell sources it.

    Accepts ``export KEY=value`` lines and drops unquoted trailing
    ``# comments``. Quoted values are taken verbatim up to the closing quote.
    """

    def __init__(self, source, encoding="UTF-8"):
        self.data = {}
        with open(source, encoding=encoding) as file_:
            for line in file_:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                key = EXPORT_PREFIX.sub("", key.strip())
                self.data[key] = self.parse_value(value.strip())

    @staticmethod
    def parse_value(value: str) -> str:
        """Strip shell quoting or an unquoted trailing comment"""
        if value[:1] in ("'", '"'):
            end = value.find(value[0], 1)
            if end != -1:
                return value[1:end]
        return TRAILING_COMMENT.sub("", value).strip()


@dataclass(frozen=True)
class LifecycleConfig:
    """
    Immutable configuration for a single lifecycle run.

    Every field maps to the upper-cased key of the environment file
    (``server`` <- ``SERVER``). Absent keys are empty strings.
    """
    action: str = ""

    # Connection and target scope
    server: str = ""
    org: str = ""
    catalog: str = ""
    space: str = ""
    username: str = ""
    password: str = ""
    realm: str = ""

    # publish
    name: str = ""
    title: str = ""
    version: str = ""
    api_file: str = ""

    # supersede
    product_supersede: str = ""
    old_version_supersede: str = ""
    new_version_supersede: str = ""
    plan_supersede: str = ""

    # replace
    old_product_replace: str = ""
    old_version_replace: str = ""
    new_version_replace: str = ""
    plan_replace: str = ""
    new_product_replace: str = ""

    # deprecate / retire
    product_deprecate: str = ""
    version_deprecate: str = ""
    product_retire: str = ""
    version_retire: str = ""

    apic_binary: str = ""

    @classmethod
    def env_keys(cls) -> list:
        """Get the environment file keys understood by the tool"""
        return [f.name.upper() for f in fields(cls)]

    @classmethod
    def from_mapping(cls, values: Dict[str, str]) -> "LifecycleConfig":
        """
        Build a configuration from a KEY -> value mapping

        Args:
            values: Mapping keyed by environment file keys

        Returns:
            LifecycleConfig with unknown keys ignored
        """
        kwargs = {}
        for key in cls.env_keys():
            value = values.get(key)
            if value is not None:
                kwargs[key.lower()] = str(value).strip()
        return cls(**kwargs)

    def get(self, key: str) -> str:
        """Get a value by its environment file key"""
        return getattr(self, key.lower())

    def with_overrides(self, **overrides) -> "LifecycleConfig":
        """Return a copy with non-empty overrides applied"""
        applied = {k: v for k, v in overrides.items() if v}
        return replace(self, **applied) if applied else self

    @property
    def action_type(self) -> Optional[ActionType]:
        """The selected action, or None when ACTION is not a known literal"""
        try:
            return ActionType(self.action)
        except ValueError:
            return None

    @property
    def replacement_product(self) -> str:
        """Product name published by a replace, defaulting to the replaced product"""
        return self.new_product_replace or self.old_product_replace

    def to_dict(self) -> Dict[str, str]:
        """Convert to a KEY -> value dictionary with sensitive values masked"""
        data = {}
        for key in self.env_keys():
            value = self.get(key)
            if key in ConfigKeys.SENSITIVE and value:
                value = "***"
            data[key] = value
        return data


class ConfigManager:
    """Manages environment file loading and validation"""

    def __init__(self):
        """Initialize configuration manager"""
        self.config_file_path = None

    def load_config(self, config_path: str = FileConstants.DEFAULT_CONFIG_FILE) -> LifecycleConfig:
        """
        Load configuration from a KEY=value environment file

        Values in the file win over variables exported in the process
        environment, as when the file is sourced by a shell. Keys absent
        from the file fall back to the environment.

        Args:
            config_path: Path to environment file

        Returns:
            LifecycleConfig with the loaded values

        Raises:
            ConfigurationError: If the file does not exist or cannot be read
        """
        config_file = Path(config_path)

        if not config_file.exists():
            raise ConfigurationError(ErrorMessages.CONFIG_FILE_NOT_FOUND.format(config_path=config_path))

        if not config_file.is_file():
            raise ConfigurationError(ErrorMessages.CONFIG_PATH_NOT_FILE.format(config_path=config_path))

        logger.info(f"Loading configuration from: {config_path}")

        try:
            file_values = SourcedRepositoryEnv(str(config_file)).data
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Failed to read environment file {config_path}: {e}")

        values = {}
        for key in LifecycleConfig.env_keys():
            if key in file_values:
                values[key] = file_values[key]
            else:
                values[key] = os.environ.get(key, "")

        self.config_file_path = str(config_path)
        config = LifecycleConfig.from_mapping(values)
        logger.debug(f"Loaded configuration: {config.to_dict()}")
        return config

    def validate(self, config: LifecycleConfig) -> ActionType:
        """
        Validate the configuration for its selected action

        Checks run in order: ACTION present, connection variables present,
        ACTION is a known action, action-specific variables present.

        Args:
            config: Configuration to validate

        Returns:
            ActionType: The validated action

        Raises:
            MissingFieldError: If a required variable is empty
            InvalidActionError: If ACTION is not a supported action
        """
        config_path = self.config_file_path or FileConstants.DEFAULT_CONFIG_FILE

        if not config.action:
            raise MissingFieldError(
                ConfigKeys.ACTION,
                ErrorMessages.ACTION_NOT_SET.format(config_path=config_path)
            )

        self._require(config, ConfigKeys.REQUIRED)

        action = config.action_type
        if action is None:
            raise InvalidActionError(
                config.action,
                ErrorMessages.INVALID_ACTION.format(action=config.action, choices=ActionType.usage())
            )

        self._require(config, ConfigKeys.ACTION_REQUIRED[action])

        logger.debug(f"Configuration valid for action: {action}")
        return action

    def _require(self, config: LifecycleConfig, keys: list) -> None:
        """Raise MissingFieldError naming the first empty key"""
        for key in keys:
            if not config.get(key):
                raise MissingFieldError(key, ErrorMessages.MISSING_VARIABLE.format(name=key))

    def get_config_template_content(self) -> str:
        """
        Generate environment file template content as string without file I/O

        Returns:
            str: Environment file template
        """
        sections = [
            ("IBM API Connect - Product Lifecycle configuration", []),
            ("Action to perform: " + ActionType.usage(), [("ACTION", "publish")]),
            ("Management server and target scope", [
                ("SERVER", "apim.example.com"),
                ("ORG", "my-org"),
                ("CATALOG", "sandbox"),
                ("SPACE", "default"),
            ]),
            ("Credentials", [
                ("USERNAME", "apic-user"),
                ("PASSWORD", ""),
                ("REALM", "provider/default-idp-2"),
            ]),
            ("publish", [
                ("NAME", "orders-api"),
                ("TITLE", "Orders API"),
                ("VERSION", "1.0.0"),
                ("API_FILE", "orders-api_1.0.0.yaml"),
            ]),
            ("supersede", [
                ("PRODUCT_SUPERSEDE", "orders-api"),
                ("OLD_VERSION_SUPERSEDE", "1.0.0"),
                ("NEW_VERSION_SUPERSEDE", "2.0.0"),
                ("PLAN_SUPERSEDE", "default-plan"),
            ]),
            ("replace (NEW_PRODUCT_REPLACE defaults to OLD_PRODUCT_REPLACE)", [
                ("OLD_PRODUCT_REPLACE", "orders-api"),
                ("OLD_VERSION_REPLACE", "1.0.0"),
                ("NEW_VERSION_REPLACE", "2.0.0"),
                ("PLAN_REPLACE", "default-plan"),
                ("NEW_PRODUCT_REPLACE", ""),
            ]),
            ("deprecate", [
                ("PRODUCT_DEPRECATE", "orders-api"),
                ("VERSION_DEPRECATE", "1.0.0"),
            ]),
            ("retire", [
                ("PRODUCT_RETIRE", "orders-api"),
                ("VERSION_RETIRE", "1.0.0"),
            ]),
            ("Optional path to the apic binary (defaults to 'apic' on PATH)", [
                ("APIC_BINARY", ""),
            ]),
        ]

        lines = []
        for comment, entries in sections:
            if lines:
                lines.append("")
            lines.append(f"# {comment}")
            for key, value in entries:
                lines.append(f'{key}="{value}"' if value else f"{key}=")

        return "\n".join(lines) + "\n"

    def generate_config_template(self, output_dir: str = None) -> str:
        """
        Generate environment file template

        Args:
            output_dir: Directory to save template (optional)

        Returns:
            str: Path to generated template file

        Raises:
            ConfigurationError: If the template already exists or cannot be written
        """
        if output_dir:
            output_path = Path(output_dir)
            output_path.mkdir(parents=True, exist_ok=True)
            config_file = output_path / FileConstants.DEFAULT_CONFIG_FILE
        else:
            config_file = Path(FileConstants.DEFAULT_CONFIG_FILE)

        if config_file.exists():
            raise ConfigurationError(f"Refusing to overwrite existing file: {config_file}")

        try:
            config_file.write_text(self.get_config_template_content())
        except OSError as e:
            raise ConfigurationError(f"Failed to generate configuration template: {e}")

        logger.info(f"Configuration template generated: {config_file}")
        return str(config_file)
