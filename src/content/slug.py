"""URL slugs for artists, posts and other routed content."""

from __future__ import annotations

import re
import unicodedata
from typing import Any

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")
_COMBINING_MARKS = re.compile(r"[\u0300-\u036f]")
_NOT_SLUG_CHAR = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE_RUN = re.compile(r"\s+")
_HYPHEN_RUN = re.compile(r"-+")


def slugify(name: str) -> str:
    """Derive a slug from a display name.

    Every run of characters outside ``[a-z0-9]`` becomes one hyphen, so
    accented letters are *not* transliterated:
    ``"Künstlersekretariat Astrid Schörke"`` becomes
    ``"k-nstlersekretariat-astrid-sch-rke"``.  Used by the slug backfill,
    which must treat an empty result as unresolvable.
    """
    slug = _NON_ALNUM_RUN.sub("-", name.lower())
    if slug.startswith("-"):
        slug = slug[1:]
    if slug.endswith("-"):
        slug = slug[:-1]
    return slug


def generate_slug(text: str) -> str:
    """Transliterating slug used when editors save content.

    ``"Post über Música"`` becomes ``"post-uber-musica"``.
    """
    text = unicodedata.normalize("NFD", text.lower())
    text = _COMBINING_MARKS.sub("", text)
    text = _NOT_SLUG_CHAR.sub("", text).strip()
    text = _WHITESPACE_RUN.sub("-", text)
    return _HYPHEN_RUN.sub("-", text)


def slug_for_field(
    data: dict[str, Any] | None,
    source_field: str,
    *,
    existing: str | None = None,
    creating: bool = False,
    locale: str | None = None,
) -> str | None:
    """Compute the slug to store when a record is saved.

    An existing slug is kept on update.  Otherwise the slug is generated
    from ``data[source_field]``, which may be a plain string or a
    localized ``{"de": ..., "en": ...}`` dict (requires ``locale``).
    Returns ``existing`` when there is nothing to generate from.
    """
    if not creating and existing:
        return existing

    source = (data or {}).get(source_field)
    if not source:
        return existing

    if isinstance(source, dict):
        if locale is None:
            return existing
        localized = source.get(locale)
        if isinstance(localized, str) and localized:
            return generate_slug(localized)
        return existing

    if isinstance(source, str):
        return generate_slug(source)

    return existing
