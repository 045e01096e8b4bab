"""
cloudflash configuration.

Settings are read from an INI file and may be overridden by environment
variables.

Example config.ini:
    [cloud]
    api_url = https://api.particle.io
    access_token = 0123456789abcdef
    timeout = 30

Environment overrides:
    CLOUDFLASH_CONFIG        path of the config file
    CLOUDFLASH_API_URL       api_url
    CLOUDFLASH_ACCESS_TOKEN  access_token
    CLOUDFLASH_TIMEOUT       timeout
"""

import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from ..cloud.auth import StaticTokenProvider
from ..cloud.client import DEFAULT_API_URL
from ..errors import ConfigError

DEFAULT_CONFIG_PATH = Path.home() / ".cloudflash" / "config.ini"
SECTION = "cloud"


def _parse_timeout(value: str, source: str) -> float:
    try:
        timeout = float(value)
    except ValueError:
        raise ConfigError(f"Invalid timeout '{value}' in {source}") from None
    if timeout <= 0:
        raise ConfigError(f"Timeout must be positive, got {value} in {source}")
    return timeout


@dataclass
class CloudConfig:
    """Settings for talking to the cloud API.

    Usage:
        config = CloudConfig.load()
        client = CloudClient(config.token_provider(), RequestsTransport(config.timeout), config.api_url)
    """

    api_url: str = DEFAULT_API_URL
    access_token: Optional[str] = None
    timeout: float = 30

    @classmethod
    def load(
        cls,
        config_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "CloudConfig":
        """
        Load configuration from file and environment.

        Args:
            config_path: Config file to read. If None, CLOUDFLASH_CONFIG or
                ~/.cloudflash/config.ini is used when it exists.
            environ: Environment mapping (default: os.environ)

        Returns:
            CloudConfig with environment overrides applied

        Raises:
            ConfigError: If an explicitly named config file is missing or
                any setting is invalid
        """
        if environ is None:
            environ = os.environ

        config = cls()

        explicit = config_path is not None or bool(environ.get("CLOUDFLASH_CONFIG"))
        if config_path is None:
            config_path = Path(environ.get("CLOUDFLASH_CONFIG") or DEFAULT_CONFIG_PATH)
        config_path = Path(config_path).expanduser()

        if config_path.exists():
            config._read_file(config_path)
        elif explicit:
            raise ConfigError(f"Configuration file not found: {config_path}")

        if environ.get("CLOUDFLASH_API_URL"):
            config.api_url = environ["CLOUDFLASH_API_URL"]
        if environ.get("CLOUDFLASH_ACCESS_TOKEN"):
            config.access_token = environ["CLOUDFLASH_ACCESS_TOKEN"]
        if environ.get("CLOUDFLASH_TIMEOUT"):
            config.timeout = _parse_timeout(environ["CLOUDFLASH_TIMEOUT"], "CLOUDFLASH_TIMEOUT")

        return config

    def _read_file(self, config_path: Path) -> None:
        parser = configparser.ConfigParser()
        try:
            parser.read(config_path, encoding="utf-8")
        except configparser.Error as e:
            raise ConfigError(f"Failed to parse {config_path}: {e}") from e

        if SECTION not in parser:
            logging.debug(f"No [{SECTION}] section in {config_path}")
            return

        section = parser[SECTION]
        self.api_url = section.get("api_url", self.api_url).strip() or self.api_url
        self.access_token = section.get("access_token", self.access_token) or self.access_token
        if section.get("timeout"):
            self.timeout = _parse_timeout(section["timeout"].strip(), str(config_path))

        logging.debug(f"Loaded configuration from {config_path}")

    def token_provider(self) -> StaticTokenProvider:
        """Token provider for the configured access token."""
        return StaticTokenProvider(self.access_token)
