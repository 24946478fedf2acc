"""
Shared fixtures for the APIC Lifecycle test suite.
"""

import pytest
from unittest.mock import Mock

from apic_lifecycle.apic.client import CommandResult
from apic_lifecycle.core.config import LifecycleConfig


BASE_VALUES = {
    "SERVER": "apim.example.com",
    "ORG": "acme",
    "CATALOG": "sandbox",
    "SPACE": "team-a",
    "USERNAME": "deployer",
    "PASSWORD": "s3cret",
    "REALM": "provider/default-idp-2",
}

ACTION_VALUES = {
    "publish": {
        "NAME": "orders-api",
        "TITLE": "Orders API",
        "VERSION": "1.0.0",
        "API_FILE": "orders-api_1.0.0.yaml",
    },
    "supersede": {
        "PRODUCT_SUPERSEDE": "orders-api",
        "OLD_VERSION_SUPERSEDE": "1.0.0",
        "NEW_VERSION_SUPERSEDE": "2.0.0",
        "PLAN_SUPERSEDE": "gold",
    },
    "replace": {
        "OLD_PRODUCT_REPLACE": "orders-api",
        "OLD_VERSION_REPLACE": "1.0.0",
        "NEW_VERSION_REPLACE": "2.0.0",
        "PLAN_REPLACE": "silver",
    },
    "deprecate": {
        "PRODUCT_DEPRECATE": "orders-api",
        "VERSION_DEPRECATE": "1.0.0",
    },
    "retire": {
        "PRODUCT_RETIRE": "orders-api",
        "VERSION_RETIRE": "1.0.0",
    },
}


def action_values(action: str, **overrides) -> dict:
    """Complete KEY -> value mapping for an action"""
    values = {"ACTION": action, **BASE_VALUES, **ACTION_VALUES.get(action, {})}
    values.update(overrides)
    return values


def write_env(path, values: dict) -> str:
    """Write a KEY=value environment file and return its path"""
    lines = [f"{key}={value}" for key, value in values.items()]
    path.write_text("\n".join(lines) + "\n")
    return str(path)


def ok(stdout: str = "") -> CommandResult:
    return CommandResult(args=(), returncode=0, stdout=stdout)


def failed(returncode: int = 1, stderr: str = "boom") -> CommandResult:
    return CommandResult(args=(), returncode=returncode, stderr=stderr)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep exported variables from filling keys absent from the environment file"""
    for key in LifecycleConfig.env_keys():
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def env_file(tmp_path):
    """Factory writing an environment file for an action"""
    def _env_file(action: str, **overrides) -> str:
        return write_env(tmp_path / "apic_inputs.env", action_values(action, **overrides))
    return _env_file


@pytest.fixture
def mock_client(tmp_path):
    """ApicClient stand-in working in tmp_path"""
    client = Mock()
    client.work_dir = tmp_path
    client.login.return_value = ok()
    return client
