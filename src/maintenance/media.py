"""Media integrity check."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from schoerke.content.media import Image, MediaShapeError, parse_media
from schoerke.content.models import Collection
from schoerke.content.store import ContentBackend, find_all
from schoerke.errors import MaintenanceReport

logger = logging.getLogger(__name__)


def validate_media(
    backend: ContentBackend, collection: str = Collection.IMAGES
) -> MaintenanceReport:
    """Classify every record in a media collection as image or document.

    Records that are neither are reported as failures; they point at a
    modeling gap and must be fixed by hand.
    """
    report = MaintenanceReport(operation=f"validate-media:{collection}")
    for record in find_all(backend, collection):
        record_id = record.get("id")
        label = str(record.get("filename") or f"#{record_id}")
        try:
            media = parse_media(record)
        except (MediaShapeError, ValidationError) as exc:
            report.add_error(record_id, label, str(exc))
            continue
        report.add_success(record_id, label, "image" if isinstance(media, Image) else "document")

    logger.info(report.summary())
    return report
