"""Unified configuration loaded from .schoerke.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from schoerke.i18n.locale import LocaleConfig
from schoerke.integrations.payload import PayloadConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".schoerke.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG = Path.home() / ".config" / "schoerke" / "config.toml"


class SiteSectionConfig(BaseModel):
    """[site] section."""

    locales: list[str] = Field(default_factory=lambda: ["de", "en"])
    default_locale: str = "de"


class StoreSectionConfig(BaseModel):
    """[store] section: local JSON store used when no CMS is configured."""

    directory: str = "./data"


class PayloadSectionConfig(BaseModel):
    """[payload] section."""

    url: str = ""
    api_key: str = ""
    timeout: int = 30


class SchoerkeConfig(BaseModel):
    """Top-level configuration model."""

    site: SiteSectionConfig = Field(default_factory=SiteSectionConfig)
    store: StoreSectionConfig = Field(default_factory=StoreSectionConfig)
    payload: PayloadSectionConfig = Field(default_factory=PayloadSectionConfig)

    def to_locale_config(self) -> LocaleConfig:
        """Convert the [site] section into the resolver's LocaleConfig.

        Raises:
            pydantic.ValidationError: If the default is not a configured locale.
        """
        return LocaleConfig(
            locales=tuple(self.site.locales),
            default=self.site.default_locale,
        )

    def to_payload_config(self) -> PayloadConfig:
        """Convert to PayloadConfig for the CMS REST client."""
        return PayloadConfig(
            url=self.payload.url,
            api_key=self.payload.api_key,
            timeout=self.payload.timeout,
        )


def load_config(path: str | Path | None = None) -> SchoerkeConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .schoerke.toml in CWD
    3. ~/.config/schoerke/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged SchoerkeConfig.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG.exists():
            data = _load_toml(GLOBAL_CONFIG)
            logger.info("Loaded config from %s", GLOBAL_CONFIG)

    config = SchoerkeConfig.model_validate(data) if data else SchoerkeConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: SchoerkeConfig, **cli_kwargs: object) -> SchoerkeConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "store_directory": ("store", "directory"),
        "default_locale": ("site", "default_locale"),
        "payload_url": ("payload", "url"),
        "payload_key": ("payload", "api_key"),
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key in mapping:
            section, field = mapping[key]
            data[section][field] = value

    return SchoerkeConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: SchoerkeConfig) -> SchoerkeConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "SCHOERKE_STORE_DIR": ("store", "directory"),
        "SCHOERKE_DEFAULT_LOCALE": ("site", "default_locale"),
        "PAYLOAD_URL": ("payload", "url"),
        "PAYLOAD_API_KEY": ("payload", "api_key"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    locales_raw = os.environ.get("SCHOERKE_LOCALES")
    if locales_raw is not None:
        data["site"]["locales"] = [loc.strip() for loc in locales_raw.split(",") if loc.strip()]

    return SchoerkeConfig.model_validate(data)
