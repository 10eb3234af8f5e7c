"""
Configuration models for vk.

This module defines the configuration data models with validation and defaults.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.error_handler import RetryConfig


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default=LogLevel.WARNING, description="Default logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )
    file_path: Optional[Path] = Field(default=None, description="Log file path")
    enable_console: bool = Field(default=True, description="Enable console logging")
    structured: bool = Field(
        default=False, description="Emit JSON lines instead of plain text"
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


class RetrySettings(BaseModel):
    """Retry and timeout settings for GraphQL requests."""

    attempts: int = Field(default=5, ge=1, description="Total attempts per request")
    base_delay: float = Field(
        default=0.2, ge=0, description="Initial backoff delay in seconds"
    )
    request_timeout: float = Field(
        default=30.0, gt=0, description="Per-request timeout in seconds"
    )
    jitter: bool = Field(default=True, description="Randomize backoff delays")
    max_delay: float = Field(
        default=60.0, gt=0, description="Upper bound for backoff delays in seconds"
    )

    def to_retry_config(self) -> RetryConfig:
        """Build the immutable retry configuration used by the client."""
        return RetryConfig(
            attempts=self.attempts,
            base_delay=self.base_delay,
            request_timeout=self.request_timeout,
            jitter=self.jitter,
            max_delay=self.max_delay,
        )


class VkConfig(BaseModel):
    """Fully resolved configuration for the vk client and CLI."""

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    token: str = Field(default="", repr=False, description="GitHub token; empty for anonymous access")
    endpoint: Optional[str] = Field(
        default=None, description="GraphQL endpoint override"
    )
    repo: Optional[str] = Field(
        default=None, description="Default repository as owner/repo"
    )
    transcript: Optional[Path] = Field(
        default=None, description="Write request/response transcript to this file"
    )
    retry: RetrySettings = Field(default_factory=RetrySettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("endpoint", "repo", mode="before")
    @classmethod
    def empty_as_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v
