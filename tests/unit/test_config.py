"""Unit tests for GeminiConfig."""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.gemini.config import (
    DEFAULT_BASE_URL,
    DEFAULT_SYSTEM_INSTRUCTION,
    GeminiConfig,
    get_gemini_config,
)


class TestGeminiConfig:
    """Tests for GeminiConfig validation."""

    def test_valid_config_with_all_fields(self) -> None:
        """Config accepts explicit values for all fields."""
        config = GeminiConfig(
            api_key="key-123",
            base_url="http://localhost:9000",
            system_instruction="Be brief.",
            timeout=30.0,
        )

        assert config.api_key == "key-123"
        assert config.base_url == "http://localhost:9000"
        assert config.system_instruction == "Be brief."
        assert config.timeout == 30.0

    def test_strips_api_key_whitespace(self) -> None:
        """Leading/trailing whitespace is removed from the key."""
        assert GeminiConfig(api_key="  key  ").api_key == "key"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_api_key_is_missing(self, value: str | None) -> None:
        """Blank keys are normalized to None rather than rejected."""
        assert GeminiConfig(api_key=value).api_key is None

    def test_rejects_non_positive_timeout(self) -> None:
        """Timeout must be positive when set."""
        with pytest.raises(ValidationError) as exc_info:
            GeminiConfig(api_key="k", timeout=0)

        assert "timeout" in str(exc_info.value).lower()


class TestGetGeminiConfig:
    """Tests for loading configuration from the environment."""

    def test_reads_environment(self) -> None:
        """Every setting can come from environment variables."""
        env = {
            "GEMINI_API_KEY": "env-key",
            "GEMINI_API_BASE_URL": "http://proxy.local/",
            "GEMINI_SYSTEM_INSTRUCTION": "Answer in French.",
            "GEMINI_TIMEOUT": "12.5",
        }
        with patch.dict("os.environ", env):
            config = get_gemini_config()

        assert config.api_key == "env-key"
        assert config.base_url == "http://proxy.local"
        assert config.system_instruction == "Answer in French."
        assert config.timeout == 12.5

    def test_defaults(self) -> None:
        """Unset variables fall back to defaults and no timeout."""
        with patch.dict("os.environ", {}, clear=True):
            config = get_gemini_config()

        assert config.api_key is None
        assert config.base_url == DEFAULT_BASE_URL
        assert config.system_instruction == DEFAULT_SYSTEM_INSTRUCTION
        assert config.timeout is None

    @pytest.mark.parametrize("timeout", ["-1", "0"])
    def test_rejects_non_positive_timeout_from_env(self, timeout: str) -> None:
        """Environment timeouts go through the same validation."""
        with patch.dict("os.environ", {"GEMINI_TIMEOUT": timeout}):
            with pytest.raises(ValidationError):
                get_gemini_config()
