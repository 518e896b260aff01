"""Module containing the downloader configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

import dacite
import yaml

from .errors import ConfigError

DEFAULT_BASE_URL: Final[str] = "https://binaries.eveonline.com"
"""Host serving build info, manifests and client files."""

DEFAULT_USER_AGENT: Final[str] = (
    "EveClientDownloader/1.0 (https://github.com/Eve-Utils/EveClientDownloader)"
)
"""User-Agent identifying us on every request."""


@dataclass(frozen=True, kw_only=True)
class DownloaderConfig:
    """
    Settings shared by a downloader session.

    Attributes:
        version: configuration format version (only 0 is supported)
        base_url: URL of the binaries host, without trailing slash
        user_agent: value of the User-Agent header
        timeout: per-request timeout in seconds, None to wait forever
        progress: whether to show a progress bar while downloading
    """

    version: int = 0
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float | None = None
    progress: bool = False

    def __post_init__(self):
        if self.version != 0:
            raise ConfigError(f"Unsupported config version: {self.version} (only v=0 supported)")
        if not self.base_url.strip():
            raise ConfigError("base_url must not be empty")
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got: {self.timeout}")

    def root_url(self) -> str:
        """Return the base URL without any trailing slash."""
        return self.base_url.rstrip("/")


def load_config(config_path: Path) -> DownloaderConfig:
    """
    Load the configuration from the given YAML file.

    An empty file yields the default configuration.

    Raises:
        ConfigError: if the file is missing or does not describe
            a valid DownloaderConfig.
    """
    try:
        content = config_path.read_text()
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {config_path}") from exc

    try:
        data = yaml.safe_load(content) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Config must be a mapping.")

    try:
        return dacite.from_dict(
            DownloaderConfig,
            data,
            config=dacite.Config(strict=True, type_hooks={float: float}),
        )
    except ConfigError:
        raise
    except (dacite.DaciteError, TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid config: {exc}") from exc
