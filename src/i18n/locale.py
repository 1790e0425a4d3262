"""Locale validation and fallback handling.

Every request path and script invocation passes its raw locale string
through :func:`resolve_locale` before anything assumes a valid locale.
"""

from __future__ import annotations

import logging
from enum import StrEnum

from pydantic import BaseModel, model_validator

logger = logging.getLogger(__name__)


class Locale(StrEnum):
    """Locales the site is published in."""

    DE = "de"
    EN = "en"


class LocaleConfig(BaseModel):
    """Supported locale set and its default."""

    locales: tuple[str, ...] = (Locale.DE.value, Locale.EN.value)
    default: str = Locale.DE.value

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _default_is_supported(self) -> LocaleConfig:
        if not self.locales:
            raise ValueError("At least one locale must be configured")
        if self.default not in self.locales:
            raise ValueError(
                f"Default locale {self.default!r} is not one of {list(self.locales)}"
            )
        return self


DEFAULT_LOCALE_CONFIG = LocaleConfig()


def is_supported_locale(
    value: str | None, config: LocaleConfig = DEFAULT_LOCALE_CONFIG
) -> bool:
    """Check whether ``value`` is exactly one of the supported locale codes."""
    return value is not None and value in config.locales


def resolve_locale(
    value: str | None, config: LocaleConfig = DEFAULT_LOCALE_CONFIG
) -> str:
    """Return ``value`` if it is supported, else the configured default.

    Unsupported non-empty values are logged before falling back; a missing
    or empty value falls back silently.

    Examples:
        >>> resolve_locale("en")
        'en'
        >>> resolve_locale("fr")
        'de'
    """
    if is_supported_locale(value, config):
        return value  # type: ignore[return-value]

    if value:
        logger.warning(
            'Invalid locale "%s" provided. Falling back to default locale "%s".',
            value,
            config.default,
        )
    return config.default
