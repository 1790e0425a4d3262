"""WordPress export (WXR) migration.

Reads the XML file produced by *Tools > Export* on the old WordPress
site and creates the matching CMS records.  Each item is migrated on
its own; problems are collected in a report instead of aborting the run.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from urllib.parse import urlparse

from pydantic import BaseModel, Field

from schoerke.content.models import Artist, Collection, Post, PostCategory, PublishStatus
from schoerke.content.slug import slugify
from schoerke.content.store import ContentBackend, find_all
from schoerke.errors import MaintenanceReport
from schoerke.i18n.locale import DEFAULT_LOCALE_CONFIG, LocaleConfig, resolve_locale

logger = logging.getLogger(__name__)

INSTRUMENT_MAPPING: dict[str, str] = {
    "piano": "piano",
    "pianoforte": "piano-forte",
    "piano-forte": "piano-forte",
    "harpsichord": "harpsichord",
    "cembalo": "harpsichord",
    "conductor": "conductor",
    "conducting": "conductor",
    "violin": "violin",
    "viola": "viola",
    "cello": "cello",
    "violoncello": "cello",
    "bass": "bass",
    "double bass": "bass",
    "horn": "horn",
    "recorder": "recorder",
    "chamber music": "chamber-music",
}

_QUOTED_FIRST_LINE = re.compile(r'^["“„](.+?)["”“](\n|$)', re.DOTALL)
_FIRST_PARAGRAPH = re.compile(r"<p[^>]*>([^<]+)</p>")


class WordPressItem(BaseModel):
    """One ``<item>`` of a WordPress export."""

    title: str = ""
    post_id: int | None = None
    post_name: str = ""
    post_type: str = ""
    status: str = ""
    post_date: str = ""
    content: str = ""
    categories: list[str] = Field(default_factory=list)
    meta: dict[str, str] = Field(default_factory=dict)


def _local(tag: str) -> str:
    """Strip the ``{namespace}`` prefix; the ``wp:`` namespace URI varies by version."""
    return tag.rsplit("}", 1)[-1]


def parse_post_meta(elements: list[ET.Element]) -> dict[str, str]:
    """Collapse ``<wp:postmeta>`` elements into a key/value dict."""
    meta: dict[str, str] = {}
    for element in elements:
        key = value = None
        for child in element:
            name = _local(child.tag)
            if name == "meta_key":
                key = (child.text or "").strip()
            elif name == "meta_value":
                value = child.text or ""
        if key and value is not None:
            meta[key] = value
    return meta


def _parse_item(element: ET.Element) -> WordPressItem:
    fields: dict[str, str] = {}
    postmeta: list[ET.Element] = []
    categories: list[str] = []

    for child in element:
        name = _local(child.tag)
        if name == "postmeta":
            postmeta.append(child)
        elif name == "category":
            if child.get("domain", "category") == "category" and child.text:
                categories.append(child.text.strip())
        elif name == "encoded" and child.tag.startswith("{http://purl.org/rss/1.0/modules/content"):
            fields["content"] = child.text or ""
        elif name in {"title", "post_name", "post_type", "status", "post_date"}:
            fields[name] = (child.text or "").strip()
        elif name == "post_id":
            fields[name] = (child.text or "").strip()

    return WordPressItem(
        title=fields.get("title", ""),
        post_id=int(fields["post_id"]) if fields.get("post_id", "").isdigit() else None,
        post_name=fields.get("post_name", ""),
        post_type=fields.get("post_type", ""),
        status=fields.get("status", ""),
        post_date=fields.get("post_date", ""),
        content=fields.get("content", ""),
        categories=categories,
        meta=parse_post_meta(postmeta),
    )


def parse_wordpress_export(path: Path) -> list[WordPressItem]:
    """Parse every ``<item>`` in a WordPress export file.

    Raises:
        FileNotFoundError: If the export file does not exist.
        xml.etree.ElementTree.ParseError: If the file is not valid XML.
    """
    tree = ET.parse(path)
    channel = tree.getroot().find("channel")
    if channel is None:
        logger.warning("No <channel> in %s", path)
        return []
    items = [_parse_item(el) for el in channel.findall("item")]
    logger.info("Parsed %d items from %s", len(items), path)
    return items


# ── Field mappers ────────────────────────────────────────────────


def extract_first_paragraph(html: str) -> str:
    """Return the artist quote: a quoted first line, else the first ``<p>``."""
    if not html:
        return ""
    match = _QUOTED_FIRST_LINE.match(html)
    if match:
        return match.group(1).strip()
    match = _FIRST_PARAGRAPH.search(html)
    if match:
        return match.group(1).strip()
    return ""


def clean_biography_html(html: str) -> str:
    """Drop a leading quoted line, which is migrated separately as the quote."""
    if not html:
        return ""
    if html[0] in '"“„':
        first_line_end = html.find("\n")
        if first_line_end > 0:
            return html[first_line_end + 1 :].strip()
    return html.strip()


def map_instruments(value: str) -> list[str]:
    """Map WordPress's comma-separated instrument list onto CMS option values."""
    if not value:
        return []
    names = (part.strip().lower() for part in value.split(","))
    return [INSTRUMENT_MAPPING[n] for n in names if n in INSTRUMENT_MAPPING]


def validate_and_clean_url(url: str | None) -> str | None:
    """Trim a url and add ``https://`` when the scheme is missing."""
    if not url or not isinstance(url, str):
        return None
    trimmed = url.strip()
    if not trimmed:
        return None
    if not trimmed.startswith(("http://", "https://")):
        trimmed = f"https://{trimmed}"
    parsed = urlparse(trimmed)
    if not parsed.netloc or " " in parsed.netloc:
        return None
    return trimmed


def _parse_post_date(value: str) -> datetime | None:
    try:
        return datetime.strptime(value, "%Y-%m-%d %H:%M:%S")
    except ValueError:
        return None


# ── Migrations ───────────────────────────────────────────────────


def _slug_for(item: WordPressItem) -> str:
    return item.post_name or slugify(item.title)


def _find_employee_id(backend: ContentBackend, name: str | None) -> int | None:
    if not name or not name.strip():
        return None
    result = backend.find(Collection.EMPLOYEES, where={"name": name.strip()}, limit=1)
    if not result.docs:
        logger.warning("Contact person %r not found in employees", name)
        return None
    return result.docs[0].get("id")


def _migrate(
    backend: ContentBackend,
    items: list[WordPressItem],
    *,
    post_type: str,
    collection: str,
    build: Callable[[WordPressItem, str], dict],
    dry_run: bool,
) -> MaintenanceReport:
    report = MaintenanceReport(operation=f"migrate-wordpress:{collection}", dry_run=dry_run)
    taken = {r["slug"] for r in find_all(backend, collection) if r.get("slug")}

    for item in items:
        if item.post_type != post_type:
            continue
        label = item.title or f"#{item.post_id}"
        if item.status != "publish":
            report.add_skip(item.post_id, label, f"status is {item.status!r}")
            continue

        slug = _slug_for(item)
        if not slug:
            logger.warning("No slug derivable for %r; manual resolution required", label)
            report.add_skip(item.post_id, label, "derived slug is empty; manual resolution required")
            continue
        if slug in taken:
            report.add_skip(item.post_id, label, f"slug {slug!r} already exists")
            continue

        try:
            data = build(item, slug)
            if not dry_run:
                created = backend.create(collection, data)
                logger.info("Created %s %s (%s)", collection, created.get("id"), slug)
        except Exception as exc:
            logger.debug("Migration of %r failed", label, exc_info=True)
            report.add_error(item.post_id, label, str(exc))
            continue

        taken.add(slug)
        report.add_success(item.post_id, label, f"would create {slug!r}" if dry_run else slug)

    logger.info(report.summary())
    return report


def migrate_posts(
    backend: ContentBackend,
    items: list[WordPressItem],
    *,
    locale: str | None = None,
    locale_config: LocaleConfig = DEFAULT_LOCALE_CONFIG,
    dry_run: bool = False,
) -> MaintenanceReport:
    """Create a news post for every published WordPress post."""
    lang = resolve_locale(locale, locale_config)

    def build(item: WordPressItem, slug: str) -> dict:
        post = Post(
            title={lang: item.title},
            slug=slug,
            content={lang: item.content.strip()},
            categories=[PostCategory.NEWS],
            status=PublishStatus.PUBLISHED,
            published_at=_parse_post_date(item.post_date),
            metadata={"wordpress_id": item.post_id, "wordpress_categories": item.categories},
        )
        return post.model_dump(mode="json")

    return _migrate(
        backend, items, post_type="post", collection=Collection.POSTS, build=build, dry_run=dry_run
    )


def migrate_artists(
    backend: ContentBackend,
    items: list[WordPressItem],
    *,
    locale: str | None = None,
    locale_config: LocaleConfig = DEFAULT_LOCALE_CONFIG,
    dry_run: bool = False,
) -> MaintenanceReport:
    """Create an artist for every published WordPress ``artist`` item.

    The first quoted line of the body becomes the artist quote; contact
    persons are matched to existing employees by name.
    """
    lang = resolve_locale(locale, locale_config)

    def build(item: WordPressItem, slug: str) -> dict:
        quote = extract_first_paragraph(item.content)
        biography = clean_biography_html(item.content) if quote else item.content.strip()
        contacts = [
            employee_id
            for key in ("contact-person", "contact-person-2")
            if (employee_id := _find_employee_id(backend, item.meta.get(key))) is not None
        ]
        artist = Artist(
            name=item.title,
            slug=slug,
            instruments=map_instruments(item.meta.get("instruments", "")),
            quote={lang: quote} if quote else {},
            biography={lang: biography},
            homepage_url=validate_and_clean_url(item.meta.get("homepage")),
            contact_persons=contacts,
            status=PublishStatus.PUBLISHED,
        )
        return artist.model_dump(mode="json")

    return _migrate(
        backend,
        items,
        post_type="artist",
        collection=Collection.ARTISTS,
        build=build,
        dry_run=dry_run,
    )
