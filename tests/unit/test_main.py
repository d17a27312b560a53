"""Unit tests for the server entry point settings."""

from unittest.mock import patch

import pytest
import pytest_check as check
from pydantic import ValidationError

from src.main import ServerSettings, ui_process_env


class TestServerSettings:
    """Tests for ServerSettings environment loading."""

    def test_defaults(self) -> None:
        """Unset variables give integrated mode on port 8000."""
        with patch.dict("os.environ", {}, clear=True):
            settings = ServerSettings()

        check.equal(settings.mode, "integrated")
        check.equal(settings.host, "0.0.0.0")
        check.equal(settings.port, 8000)
        check.equal(settings.ui_port, 8080)
        check.equal(settings.log_level, "INFO")

    def test_reads_environment(self) -> None:
        """Mode, host, ports and log level come from the environment."""
        env = {
            "RUN_MODE": "Separate",
            "HOST": "127.0.0.1",
            "PORT": "9000",
            "UI_PORT": "9001",
            "LOG_LEVEL": "debug",
        }
        with patch.dict("os.environ", env):
            settings = ServerSettings()

        check.equal(settings.mode, "separate")
        check.equal(settings.host, "127.0.0.1")
        check.equal(settings.port, 9000)
        check.equal(settings.ui_port, 9001)
        check.equal(settings.log_level, "DEBUG")

    @pytest.mark.parametrize(
        "env", [{"RUN_MODE": "cluster"}, {"PORT": "http"}, {"PORT": "0"}]
    )
    def test_rejects_invalid_values(self, env: dict[str, str]) -> None:
        """Unknown modes and unusable ports fail validation."""
        with patch.dict("os.environ", env):
            with pytest.raises(ValidationError):
                ServerSettings()

    @pytest.mark.parametrize("host", ["0.0.0.0", "::", ""])
    def test_api_base_url_maps_wildcard_host_to_localhost(self, host: str) -> None:
        """Wildcard bind addresses are reached through localhost."""
        settings = ServerSettings(host=host, port=9000)

        assert settings.api_base_url == "http://localhost:9000"

    def test_api_base_url_keeps_explicit_host(self) -> None:
        """A concrete host is used as is."""
        settings = ServerSettings(host="10.0.0.5", port=8123)

        assert settings.api_base_url == "http://10.0.0.5:8123"


class TestUiProcessEnv:
    """Tests for the environment handed to the separate UI process."""

    def test_points_ui_at_configured_api_port(self) -> None:
        """API_BASE_URL follows PORT instead of a fixed port."""
        overrides = {"HOST": "0.0.0.0", "PORT": "9000", "UI_PORT": "9001"}
        with patch.dict("os.environ", overrides):
            env = ui_process_env(ServerSettings())

        check.equal(env["API_BASE_URL"], "http://localhost:9000")
        check.equal(env["UI_PORT"], "9001")
        check.equal(env["HOST"], "0.0.0.0")

    def test_keeps_existing_variables(self) -> None:
        """The child inherits the parent's environment."""
        with patch.dict("os.environ", {"GEMINI_API_KEY": "env-key"}):
            env = ui_process_env(ServerSettings())

        assert env["GEMINI_API_KEY"] == "env-key"
