"""
Tests for configuration models and loading.
"""

import json

import pytest
import yaml

from vk.config import ConfigLoader, LogLevel, RetrySettings, VkConfig, resolve_token
from vk.exceptions import ConfigurationError


@pytest.fixture
def loader():
    """Loader with an empty environment and no default config files."""
    loader = ConfigLoader(environ={})
    loader.config_paths = []
    return loader


class TestResolveToken:
    """Test token precedence."""

    def test_explicit_wins(self):
        env = {"VK_GITHUB_TOKEN": "vk", "GITHUB_TOKEN": "gh"}
        assert resolve_token("explicit", env) == "explicit"

    def test_vk_variable_before_github_variable(self):
        assert resolve_token(None, {"VK_GITHUB_TOKEN": "vk", "GITHUB_TOKEN": "gh"}) == "vk"

    def test_empty_values_skipped(self):
        assert resolve_token("", {"VK_GITHUB_TOKEN": "", "GITHUB_TOKEN": "gh"}) == "gh"

    def test_anonymous(self):
        assert resolve_token(None, {}) == ""


class TestConfigModels:
    """Test configuration models."""

    def test_defaults(self):
        config = VkConfig()
        assert config.token == ""
        assert config.endpoint is None
        assert config.retry.attempts == 5
        assert config.logging.level == LogLevel.WARNING

    def test_token_not_in_repr(self):
        assert "s3cret" not in repr(VkConfig(token="s3cret"))

    def test_blank_strings_become_none(self):
        config = VkConfig(endpoint="  ", repo="")
        assert config.endpoint is None
        assert config.repo is None

    def test_retry_settings_validation(self):
        with pytest.raises(ValueError):
            RetrySettings(attempts=0)
        with pytest.raises(ValueError):
            RetrySettings(request_timeout=0)

    def test_to_retry_config(self):
        retry = RetrySettings(attempts=2, base_delay=1.5, jitter=False).to_retry_config()
        assert retry.attempts == 2
        assert retry.base_delay == 1.5
        assert retry.jitter is False


class TestConfigLoader:
    """Test configuration sources and their precedence."""

    def test_defaults(self, loader, caplog):
        config = loader.load_config()

        assert config.token == ""
        assert config.repo is None
        assert "requests will be anonymous" in caplog.text

    def test_environment(self):
        loader = ConfigLoader(
            environ={
                "GITHUB_TOKEN": "gh",
                "VK_REPO": "octo/repo",
                "VK_HTTP_TIMEOUT": "12.5",
                "VK_RETRY_ATTEMPTS": "2",
                "VK_LOG_LEVEL": "debug",
                "GITHUB_GRAPHQL_URL": "https://ghe.example/api/graphql",
            }
        )
        loader.config_paths = []

        config = loader.load_config()

        assert config.token == "gh"
        assert config.repo == "octo/repo"
        assert config.retry.request_timeout == 12.5
        assert config.retry.attempts == 2
        assert config.logging.level == LogLevel.DEBUG
        assert config.endpoint == "https://ghe.example/api/graphql"

    def test_yaml_file(self, loader, temp_dir):
        path = temp_dir / "vk.yaml"
        path.write_text(
            yaml.safe_dump(
                {
                    "repo": "file/repo",
                    "token": "from-file",
                    "retry": {"attempts": 7, "jitter": False},
                }
            )
        )

        config = loader.load_config(path)

        assert config.repo == "file/repo"
        assert config.token == "from-file"
        assert config.retry.attempts == 7
        assert config.retry.jitter is False
        assert config.retry.request_timeout == 30.0

    def test_json_file(self, loader, temp_dir):
        path = temp_dir / "vk.json"
        path.write_text(json.dumps({"endpoint": "https://example/graphql"}))

        assert loader.load_config(path).endpoint == "https://example/graphql"

    def test_precedence(self, temp_dir):
        """Test that overrides beat the environment, which beats the file."""
        path = temp_dir / "vk.yaml"
        path.write_text("repo: file/repo\nretry:\n  attempts: 7\n  request_timeout: 5\n")
        loader = ConfigLoader(environ={"VK_REPO": "env/repo", "VK_HTTP_TIMEOUT": "9"})

        config = loader.load_config(
            path, {"repo": "cli/repo", "transcript": None, "retry": {"request_timeout": None}}
        )

        assert config.repo == "cli/repo"
        assert config.retry.request_timeout == 9
        assert config.retry.attempts == 7
        assert config.transcript is None

    def test_default_paths_searched(self, temp_dir):
        path = temp_dir / "config.yml"
        path.write_text("repo: found/repo\n")
        loader = ConfigLoader(environ={})
        loader.config_paths = [temp_dir / "missing.yaml", path]

        assert loader.load_config().repo == "found/repo"

    def test_missing_explicit_file(self, loader, temp_dir):
        with pytest.raises(ConfigurationError):
            loader.load_config(temp_dir / "nope.yaml")

    def test_unsupported_format(self, loader, temp_dir):
        path = temp_dir / "vk.toml"
        path.write_text("repo = 'x/y'\n")
        with pytest.raises(ConfigurationError):
            loader.load_config(path)

    def test_invalid_yaml(self, loader, temp_dir):
        path = temp_dir / "vk.yaml"
        path.write_text("repo: [unclosed\n")
        with pytest.raises(ConfigurationError):
            loader.load_config(path)

    def test_non_mapping(self, loader, temp_dir):
        path = temp_dir / "vk.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError):
            loader.load_config(path)

    def test_invalid_value(self, loader):
        """Test that validation errors become ConfigurationError."""
        with pytest.raises(ConfigurationError):
            loader.load_config(overrides={"retry": {"attempts": 0}})

    def test_empty_file(self, loader, temp_dir):
        path = temp_dir / "vk.yaml"
        path.write_text("")
        assert loader.load_config(path) == VkConfig()
