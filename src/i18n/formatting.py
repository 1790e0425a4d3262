"""Locale-aware display helpers."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from schoerke.i18n.locale import DEFAULT_LOCALE_CONFIG, LocaleConfig

QUOTE_MARKS: dict[str, tuple[str, str]] = {
    "de": ("„", "“"),
    "en": ("“", "”"),
    "fr": ("«\u00a0", "\u00a0»"),
}


def quote_marks(locale: str) -> tuple[str, str]:
    """Opening and closing quotation marks for a locale (English if unknown)."""
    return QUOTE_MARKS.get(locale, QUOTE_MARKS["en"])


MONTH_NAMES: dict[str, tuple[str, ...]] = {
    "de": (
        "Januar", "Februar", "März", "April", "Mai", "Juni",
        "Juli", "August", "September", "Oktober", "November", "Dezember",
    ),
    "en": (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
}


def format_date(value: str | date, locale: str) -> str:
    """Long-form date for display, e.g. ``4. März 2019`` or ``March 4, 2019``.

    ``value`` is a date/datetime or an ISO 8601 string as stored by the
    CMS (``2019-03-04T09:30:00.000Z``).  Locales without month names
    are formatted in English.

    Raises:
        ValueError: If ``value`` is a string that is not ISO 8601.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if locale == "de":
        return f"{value.day}. {MONTH_NAMES['de'][value.month - 1]} {value.year}"
    return f"{MONTH_NAMES['en'][value.month - 1]} {value.day}, {value.year}"


def localized_value(
    field: Any, locale: str, config: LocaleConfig = DEFAULT_LOCALE_CONFIG
) -> Any:
    """Pick the value for ``locale`` out of a localized CMS field.

    Localized fields arrive as ``{"de": ..., "en": ...}``.  Missing or
    empty translations fall back to the default locale.  Non-dict values
    are not localized and are returned as-is.
    """
    if not isinstance(field, dict):
        return field
    value = field.get(locale)
    if value in (None, ""):
        value = field.get(config.default)
    return value if value not in (None, "") else None
