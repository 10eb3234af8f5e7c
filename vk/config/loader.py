"""
Configuration loader for vk.

This module handles loading configuration from configuration files,
environment variables and command-line overrides.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from ..exceptions import ConfigurationError
from .models import VkConfig

logger = logging.getLogger(__name__)

TOKEN_ENV_VARS = ("VK_GITHUB_TOKEN", "GITHUB_TOKEN")


def resolve_token(
    explicit: Optional[str] = None, environ: Optional[Mapping[str, str]] = None
) -> str:
    """
    Pick the GitHub token to use.

    The explicit value wins, then ``VK_GITHUB_TOKEN``, then ``GITHUB_TOKEN``.
    Empty values are skipped. An empty result means anonymous access.

    Args:
        explicit: Token from a config file or the command line
        environ: Environment mapping, defaults to ``os.environ``
    """
    if explicit:
        return explicit

    env = os.environ if environ is None else environ
    for name in TOKEN_ENV_VARS:
        value = env.get(name)
        if value:
            return value

    return ""


class ConfigLoader:
    """Configuration loader with support for multiple sources."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        """
        Initialize configuration loader.

        Args:
            environ: Environment mapping, defaults to ``os.environ``
        """
        self.environ = os.environ if environ is None else environ

        self.config_paths = [
            Path("vk.yaml"),
            Path("vk.yml"),
            Path("vk.json"),
            Path.home() / ".config" / "vk" / "config.yaml",
            Path.home() / ".config" / "vk" / "config.yml",
            Path.home() / ".config" / "vk" / "config.json",
        ]

        # Map environment variables to config structure
        self.env_mappings = {
            "VK_REPO": ("repo",),
            "VK_TRANSCRIPT": ("transcript",),
            "VK_HTTP_TIMEOUT": ("retry", "request_timeout"),
            "VK_RETRY_ATTEMPTS": ("retry", "attempts"),
            "VK_LOG_LEVEL": ("logging", "level"),
            "GITHUB_GRAPHQL_URL": ("endpoint",),
        }

    def load_config(
        self,
        config_file: Optional[Union[str, Path]] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> VkConfig:
        """
        Load configuration from all available sources.

        Later sources win: defaults, configuration file, environment
        variables, then ``overrides``.

        Args:
            config_file: Specific config file to load
            overrides: Values from the command line; ``None`` entries are ignored

        Returns:
            VkConfig instance with merged configuration

        Raises:
            ConfigurationError: If a file cannot be parsed or a value is invalid
        """
        config_data: Dict[str, Any] = {}

        file_config = self._load_from_file(config_file)
        if file_config:
            config_data = self._deep_merge(config_data, file_config)

        env_config = self._load_from_environment()
        if env_config:
            config_data = self._deep_merge(config_data, env_config)

        if overrides:
            config_data = self._deep_merge(config_data, self._drop_none(overrides))

        config_data["token"] = resolve_token(config_data.get("token"), self.environ)
        if not config_data["token"]:
            logger.warning("No GitHub token found; requests will be anonymous")

        try:
            return VkConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e

    def _load_from_file(
        self, config_file: Optional[Union[str, Path]] = None
    ) -> Optional[Dict[str, Any]]:
        """Load configuration from file."""
        if config_file:
            config_path = Path(config_file)
            if not config_path.exists():
                raise ConfigurationError(f"config file {config_path} does not exist")
            return self._parse_config_file(config_path)

        for config_path in self.config_paths:
            if config_path.exists():
                logger.debug("Loading configuration from %s", config_path)
                return self._parse_config_file(config_path)

        return None

    def _parse_config_file(self, config_path: Path) -> Dict[str, Any]:
        """Parse configuration file based on extension."""
        suffix = config_path.suffix.lower()
        if suffix not in (".yaml", ".yml", ".json"):
            raise ConfigurationError(
                f"Unsupported config file format: {config_path.suffix}"
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                if suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Failed to parse config file {config_path}: {e}"
            ) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"config file {config_path} must contain a mapping"
            )
        return data

    def _load_from_environment(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config: Dict[str, Any] = {}

        for env_var, config_path in self.env_mappings.items():
            value = self.environ.get(env_var)
            if value is None or not value.strip():
                continue

            current = config
            for key in config_path[:-1]:
                current = current.setdefault(key, {})
            current[config_path[-1]] = value.strip()

        return config

    def _drop_none(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Remove unset command-line values, recursing into sections."""
        result: Dict[str, Any] = {}
        for key, value in data.items():
            if isinstance(value, dict):
                nested = self._drop_none(value)
                if nested:
                    result[key] = nested
            elif value is not None:
                result[key] = value
        return result

    def _deep_merge(
        self, base: Dict[str, Any], override: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def load_config(
    config_file: Optional[Union[str, Path]] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> VkConfig:
    """Load configuration using a default :class:`ConfigLoader`."""
    return ConfigLoader().load_config(config_file, overrides)
