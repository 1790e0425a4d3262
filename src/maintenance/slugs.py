"""Slug backfill and cleanup for CMS collections.

Both procedures treat every record independently and only touch
records that still lack a slug, so an interrupted run can simply be
started again.
"""

from __future__ import annotations

import logging

from schoerke.content.models import Collection
from schoerke.content.slug import slugify
from schoerke.content.store import ContentBackend, find_all
from schoerke.errors import MaintenanceReport
from schoerke.i18n.formatting import localized_value
from schoerke.i18n.locale import DEFAULT_LOCALE_CONFIG, LocaleConfig, resolve_locale

logger = logging.getLogger(__name__)


def _label(record: dict, source_field: str) -> str:
    value = record.get(source_field)
    if isinstance(value, dict):
        value = next((v for v in value.values() if v), "")
    return str(value or f"#{record.get('id')}")


def populate_slugs(
    backend: ContentBackend,
    collection: str = Collection.ARTISTS,
    source_field: str = "name",
    *,
    locale: str | None = None,
    locale_config: LocaleConfig = DEFAULT_LOCALE_CONFIG,
    dry_run: bool = False,
) -> MaintenanceReport:
    """Give every record in ``collection`` without a slug one derived from its name.

    Records are skipped, never written, when the derived slug is empty or
    already belongs to another record.

    Args:
        backend: Local store or CMS client.
        collection: Collection to backfill.
        source_field: Field holding the display name. Localized fields
            (``{"de": ..., "en": ...}``) are read in ``locale``.
        locale: Locale to take localized names from; defaults to the
            configured default locale.
        locale_config: Supported locales and the default.
        dry_run: Compute slugs and report without writing.

    Returns:
        Report with one outcome per record.
    """
    locale = resolve_locale(locale, locale_config)
    report = MaintenanceReport(operation=f"populate-slugs:{collection}", dry_run=dry_run)
    records = list(find_all(backend, collection))

    taken = {r["slug"] for r in records if r.get("slug")}

    for record in records:
        record_id = record.get("id")
        label = _label(record, source_field)

        if record.get("slug"):
            report.add_skip(record_id, label, f"already has slug {record['slug']!r}")
            continue

        name = localized_value(record.get(source_field), locale, locale_config)
        if not isinstance(name, str):
            logger.warning("%s %s has no usable %r, skipping", collection, record_id, source_field)
            report.add_skip(record_id, label, f"no {source_field} to derive a slug from")
            continue

        slug = slugify(name)
        if not slug:
            logger.warning(
                "Slug for %s %s (%r) is empty; manual resolution required",
                collection,
                record_id,
                name,
            )
            report.add_skip(record_id, label, "derived slug is empty; manual resolution required")
            continue
        if slug in taken:
            logger.warning(
                "Slug %r for %s %s collides with an existing slug, skipping",
                slug,
                collection,
                record_id,
            )
            report.add_skip(record_id, label, f"slug {slug!r} already taken")
            continue

        if dry_run:
            taken.add(slug)
            report.add_success(record_id, label, f"would set slug {slug!r}")
            continue

        try:
            backend.update(collection, record_id, {"slug": slug})
        except Exception as exc:
            logger.debug("Update of %s %s failed", collection, record_id, exc_info=True)
            report.add_error(record_id, label, str(exc))
            continue

        taken.add(slug)
        logger.info("Updated %s → slug: %s", label, slug)
        report.add_success(record_id, label, f"slug set to {slug!r}")

    logger.info(report.summary())
    return report


def cleanup_records_without_slug(
    backend: ContentBackend,
    collection: str = Collection.POSTS,
    *,
    source_field: str = "title",
    dry_run: bool = False,
) -> MaintenanceReport:
    """Delete records that were created before the slug field existed."""
    report = MaintenanceReport(operation=f"cleanup-slugless:{collection}", dry_run=dry_run)
    orphans = list(find_all(backend, collection, where={"slug": None}))
    logger.info("Found %d %s without slugs", len(orphans), collection)

    for record in orphans:
        record_id = record.get("id")
        label = _label(record, source_field)
        if dry_run:
            report.add_success(record_id, label, "would delete")
            continue
        try:
            backend.delete(collection, record_id)
        except Exception as exc:
            logger.debug("Delete of %s %s failed", collection, record_id, exc_info=True)
            report.add_error(record_id, label, str(exc))
            continue
        report.add_success(record_id, label, "deleted")

    logger.info(report.summary())
    return report
