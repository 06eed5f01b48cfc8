"""
Configuration loaded from the environment.

A Config is built once at process start with load_config() and passed
explicitly to the fetcher, translator and processor.
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping

from dotenv import load_dotenv

from .exceptions import ConfigError


def _parse_bool(value: str | None, default: bool = False) -> bool:
    """Parse boolean from environment variable."""
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def _parse_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")


@dataclass(frozen=True)
class Config:
    """Application configuration."""
    gas_url: str
    default_source_lang: str = "auto"
    default_target_lang: str = "ja"
    # Feed titles are usually brand names, so they are left alone unless asked
    default_exclude_feed_title: bool = True

    feed_timeout: float = 10.0
    batch_timeout: float = 25.0  # Stays under a 30s serverless request ceiling
    translate_timeout: float = 5.0
    validate_feed_urls: bool = True

    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Config":
        """
        Build a Config from environment variables.

        Values are taken as-is (no trimming). DEFAULT_EXCLUDE_FEED_TITLE is
        only disabled by the literal string "false".

        Raises:
            ConfigError: If GAS_URL is missing or a timeout is not numeric
        """
        if env is None:
            env = os.environ

        gas_url = env.get("GAS_URL")
        if not gas_url:
            raise ConfigError("GAS_URL environment variable is required")

        return cls(
            gas_url=gas_url,
            default_source_lang=env.get("DEFAULT_SOURCE_LANG", "auto"),
            default_target_lang=env.get("DEFAULT_TARGET_LANG", "ja"),
            default_exclude_feed_title=env.get("DEFAULT_EXCLUDE_FEED_TITLE") != "false",
            feed_timeout=_parse_float(env, "FEED_TIMEOUT", 10.0),
            batch_timeout=_parse_float(env, "BATCH_TIMEOUT", 25.0),
            translate_timeout=_parse_float(env, "TRANSLATE_TIMEOUT", 5.0),
            validate_feed_urls=_parse_bool(env.get("VALIDATE_FEED_URLS"), default=True),
            log_level=env.get("LOG_LEVEL", "INFO"),
        )


def load_config() -> Config:
    """Load .env (if present) and build the process configuration."""
    load_dotenv()
    return Config.from_env()


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for command-line use."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
