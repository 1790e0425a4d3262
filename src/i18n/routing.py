"""Locale-prefixed URL routing.

Every public URL carries its locale as the first path segment
(``/de/artists``, ``/en/news/some-post``).  A few pages use a
different slug per locale; those are listed in ``LOCALIZED_PATHNAMES``
so the locale switcher can translate between them.
"""

from __future__ import annotations

import re

from schoerke.i18n.locale import (
    DEFAULT_LOCALE_CONFIG,
    LocaleConfig,
    is_supported_locale,
    resolve_locale,
)

# Internal pathname -> public pathname per locale.
LOCALIZED_PATHNAMES: dict[str, dict[str, str]] = {
    "/kontakt": {"de": "/kontakt", "en": "/contact"},
    "/impressum": {"de": "/impressum", "en": "/imprint"},
    "/datenschutz": {"de": "/datenschutz", "en": "/privacy-policy"},
}

_PARAM_RE = re.compile(r"\[(\w+)\]")


def split_locale_prefix(
    path: str, config: LocaleConfig = DEFAULT_LOCALE_CONFIG
) -> tuple[str, str]:
    """Split a request path into ``(locale, remainder)``.

    The first segment is only treated as a locale prefix when it is a
    supported code; otherwise the whole path is returned as the remainder
    together with the resolved fallback locale.
    """
    stripped = path.lstrip("/")
    segment, _, rest = stripped.partition("/")

    if is_supported_locale(segment, config):
        return segment, "/" + rest

    return resolve_locale(segment or None, config), "/" + stripped


def localized_path(
    pathname: str,
    locale: str,
    config: LocaleConfig = DEFAULT_LOCALE_CONFIG,
    **params: str,
) -> str:
    """Build the public URL for an internal pathname.

    Dynamic segments such as ``[slug]`` are filled from ``params``.

    Raises:
        KeyError: If a dynamic segment has no matching parameter.
    """
    locale = resolve_locale(locale, config)
    public = LOCALIZED_PATHNAMES.get(pathname, {}).get(locale, pathname)
    public = _PARAM_RE.sub(lambda m: params[m.group(1)], public)
    if public == "/":
        return f"/{locale}"
    return f"/{locale}{public}"


def internal_pathname(public_path: str, locale: str) -> str:
    """Map a locale-specific public pathname back to its internal name."""
    for internal, by_locale in LOCALIZED_PATHNAMES.items():
        if by_locale.get(locale) == public_path:
            return internal
    return public_path


def switch_locale_path(
    path: str, target: str, config: LocaleConfig = DEFAULT_LOCALE_CONFIG
) -> str:
    """Rewrite a request path so it points at the same page in ``target``."""
    current, remainder = split_locale_prefix(path, config)
    target = resolve_locale(target, config)
    public = LOCALIZED_PATHNAMES.get(internal_pathname(remainder, current), {}).get(
        target, remainder
    )
    if public == "/":
        return f"/{target}"
    return f"/{target}{public}"
