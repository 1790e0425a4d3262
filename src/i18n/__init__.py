"""Locale resolution, routing and display helpers for the bilingual site."""

from schoerke.i18n.formatting import format_date, localized_value, quote_marks
from schoerke.i18n.locale import (
    DEFAULT_LOCALE_CONFIG,
    Locale,
    LocaleConfig,
    is_supported_locale,
    resolve_locale,
)
from schoerke.i18n.routing import (
    LOCALIZED_PATHNAMES,
    internal_pathname,
    localized_path,
    split_locale_prefix,
    switch_locale_path,
)

__all__ = [
    "DEFAULT_LOCALE_CONFIG",
    "LOCALIZED_PATHNAMES",
    "Locale",
    "LocaleConfig",
    "format_date",
    "internal_pathname",
    "is_supported_locale",
    "localized_path",
    "localized_value",
    "quote_marks",
    "resolve_locale",
    "split_locale_prefix",
    "switch_locale_path",
]
