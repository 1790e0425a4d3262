"""Re-runnable maintenance procedures over the content store."""

from schoerke.maintenance.media import validate_media
from schoerke.maintenance.slugs import cleanup_records_without_slug, populate_slugs

__all__ = ["cleanup_records_without_slug", "populate_slugs", "validate_media"]
