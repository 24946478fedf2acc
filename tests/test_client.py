"""
APIC client tests

subprocess.run is patched; no apic binary is required.
"""

import subprocess

import pytest
from unittest.mock import patch

from apic_lifecycle.apic.client import ApicClient, CatalogTarget, CommandResult
from apic_lifecycle.core.exceptions import (
    ApicBinaryNotFoundError, ApicError, CommandFailedError, ConfigurationError
)
from apic_lifecycle.core.utils import APIC_OUTPUT_LOGGER, MASK, mask_command

APIC = "/usr/local/bin/apic"

TARGET = CatalogTarget(server="apim.example.com", org="acme", catalog="sandbox", space="team-a")

TARGET_ARGS = [
    "--server", "apim.example.com", "-o", "acme", "-c", "sandbox",
    "--scope", "space", "--space", "team-a",
]


def completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def client(tmp_path):
    with patch("apic_lifecycle.apic.client.shutil.which", return_value=APIC):
        yield ApicClient(work_dir=str(tmp_path))


@pytest.fixture
def run():
    with patch("apic_lifecycle.apic.client.subprocess.run", return_value=completed()) as mock_run:
        yield mock_run


def called_command(mock_run):
    return mock_run.call_args[0][0]


class TestCommandExecution:
    """Test process invocation and result typing"""

    def test_run_returns_typed_result(self, client, run, tmp_path):
        """Test that run captures output in the working directory"""
        run.return_value = completed(stdout="ok\n")

        result = client.run(["version"])

        assert isinstance(result, CommandResult)
        assert result.succeeded is True
        assert result.stdout == "ok\n"
        assert result.args == ("version",)
        assert called_command(run) == [APIC, "version"]
        assert run.call_args[1]["cwd"] == str(tmp_path)
        assert run.call_args[1]["capture_output"] is True

    def test_run_reports_failure_without_raising(self, client, run):
        """Test that a non-zero exit is returned, not raised"""
        run.return_value = completed(returncode=3, stderr="bad flag")

        result = client.run(["version"])

        assert result.succeeded is False
        assert result.returncode == 3
        assert result.output == "bad flag"

    def test_binary_not_on_path(self, tmp_path):
        """Test that a missing binary raises ApicBinaryNotFoundError"""
        with patch("apic_lifecycle.apic.client.shutil.which", return_value=None):
            client = ApicClient(apic_binary="apic-missing", work_dir=str(tmp_path))

            with pytest.raises(ApicBinaryNotFoundError) as exc_info:
                client.run(["version"])

        assert "apic-missing" in str(exc_info.value)

    def test_binary_disappears_before_exec(self, client, run):
        """Test that FileNotFoundError from subprocess is translated"""
        run.side_effect = FileNotFoundError(2, "No such file or directory", APIC)

        with pytest.raises(ApicBinaryNotFoundError):
            client.run(["version"])

    def test_missing_work_dir(self, tmp_path):
        """Test that a non-existent working directory is a configuration error"""
        with pytest.raises(ConfigurationError) as exc_info:
            ApicClient(work_dir=str(tmp_path / "nope"))

        assert "Working directory" in str(exc_info.value)
        assert "nope" in str(exc_info.value)

    def test_vanished_work_dir_is_not_reported_as_missing_binary(self, client, run, tmp_path):
        """Test that FileNotFoundError naming another path is not a binary error"""
        run.side_effect = FileNotFoundError(2, "No such file or directory", str(tmp_path))

        with pytest.raises(ApicError) as exc_info:
            client.run(["version"])

        assert not isinstance(exc_info.value, ApicBinaryNotFoundError)
        assert str(tmp_path) in str(exc_info.value)

    def test_output_goes_to_apic_output_logger(self, client, run, caplog):
        """Test that captured stdout is logged under the apic output logger"""
        caplog.set_level("DEBUG", logger=APIC_OUTPUT_LOGGER)
        run.return_value = completed(stdout="orders-api:1.0.0 published https://x/1\n")

        client.run(["products:list-all"])

        records = [r for r in caplog.records if r.name == APIC_OUTPUT_LOGGER]
        assert [r.getMessage() for r in records] == ["orders-api:1.0.0 published https://x/1"]

    def test_custom_binary(self, tmp_path):
        """Test that a configured binary is resolved instead of 'apic'"""
        with patch("apic_lifecycle.apic.client.shutil.which", return_value="/opt/apic/bin/apic") as which:
            client = ApicClient(apic_binary="/opt/apic/bin/apic", work_dir=str(tmp_path))
            with patch("apic_lifecycle.apic.client.subprocess.run", return_value=completed()) as mock_run:
                client.run(["version"])

        which.assert_called_once_with("/opt/apic/bin/apic")
        assert called_command(mock_run)[0] == "/opt/apic/bin/apic"


class TestCommands:
    """Test apic command lines"""

    def test_login(self, client, run):
        """Test login arguments and unchecked result"""
        run.return_value = completed(returncode=1, stderr="invalid credentials")

        result = client.login("apim.example.com", "deployer", "s3cret", "provider/default-idp-2")

        assert result.succeeded is False
        assert called_command(run) == [
            APIC, "login",
            "--server", "apim.example.com",
            "--username", "deployer",
            "--password", "s3cret",
            "--realm", "provider/default-idp-2",
        ]

    def test_create_product(self, client, run):
        """Test create product arguments"""
        client.create_product("Orders API", "orders-api", "1.0.0", "orders.yaml")

        assert called_command(run) == [
            APIC, "create", "product",
            "--title", "Orders API",
            "--name", "orders-api",
            "--version", "1.0.0",
            "--apis", "orders.yaml",
        ]

    def test_publish_product(self, client, run):
        """Test publish arguments"""
        client.publish_product("orders-api.yaml", TARGET)

        assert called_command(run) == [APIC, "products:publish", "orders-api.yaml", *TARGET_ARGS]

    def test_list_products_returns_output(self, client, run):
        """Test that list-all returns the raw listing"""
        run.return_value = completed(stdout="orders-api:1.0.0 published https://x/1\n")

        listing = client.list_products(TARGET)

        assert listing == "orders-api:1.0.0 published https://x/1\n"
        assert called_command(run) == [APIC, "products:list-all", *TARGET_ARGS]

    @pytest.mark.parametrize("method,sub_command", [
        ("supersede_product", "products:supersede"),
        ("replace_product", "products:replace"),
        ("update_product", "products:update"),
    ])
    def test_mapping_commands(self, client, run, method, sub_command):
        """Test that mapping commands put identifier and file after the scope flags"""
        getattr(client, method)(TARGET, "orders-api:2.0.0", "mapping.yaml")

        assert called_command(run) == [APIC, sub_command, *TARGET_ARGS, "orders-api:2.0.0", "mapping.yaml"]

    def test_failed_command_raises(self, client, run):
        """Test that checked commands raise CommandFailedError with the result"""
        run.return_value = completed(returncode=2, stderr="product not found")

        with pytest.raises(CommandFailedError) as exc_info:
            client.update_product(TARGET, "orders-api:1.0.0", "retire_product.yaml", operation="Retire")

        assert exc_info.value.returncode == 2
        assert str(exc_info.value).startswith("Retire operation failed.")
        assert "product not found" in str(exc_info.value)


class TestMasking:
    """Test command line masking"""

    def test_password_flag_value_is_masked(self):
        """Test that the value after --password is hidden"""
        masked = mask_command(["apic", "login", "--password", "s3cret", "--realm", "r"])

        assert masked == ["apic", "login", "--password", MASK, "--realm", "r"]

    def test_inline_password_and_secrets(self):
        """Test --password=value and literal secrets"""
        masked = mask_command(["--password=s3cret", "token-abc"], secrets=["token-abc"])

        assert masked == [f"--password={MASK}", MASK]

    def test_logged_login_command_is_masked(self, client, run, caplog):
        """Test that the debug log never contains the password"""
        caplog.set_level("DEBUG", logger="apic_lifecycle")

        client.login("apim.example.com", "deployer", "s3cret", "realm")

        assert "s3cret" not in caplog.text
        assert MASK in caplog.text
