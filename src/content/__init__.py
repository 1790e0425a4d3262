"""Content domain: CMS collection models, media variants, slugs and store.

The media discriminator and slug generator are leaf utilities used by
page rendering and the maintenance procedures; the local store mirrors
the CMS's query/update surface.
"""

from schoerke.content.media import (
    Document,
    Image,
    Media,
    MediaShapeError,
    is_document,
    is_image,
    media_presentation,
    parse_media,
)
from schoerke.content.models import (
    Artist,
    Collection,
    Employee,
    Post,
    PostCategory,
    PublishStatus,
    Recording,
    is_employee,
    related_artists,
)
from schoerke.content.pagination import (
    PaginationParams,
    parse_pagination_params,
    should_redirect_to_last_page,
)
from schoerke.content.slug import generate_slug, slug_for_field, slugify
from schoerke.content.store import ContentBackend, ContentStore, FindResult, find_all

__all__ = [
    "Artist",
    "Collection",
    "ContentBackend",
    "ContentStore",
    "Document",
    "Employee",
    "FindResult",
    "Image",
    "Media",
    "MediaShapeError",
    "PaginationParams",
    "Post",
    "PostCategory",
    "PublishStatus",
    "Recording",
    "find_all",
    "generate_slug",
    "is_document",
    "is_employee",
    "is_image",
    "media_presentation",
    "parse_media",
    "parse_pagination_params",
    "related_artists",
    "should_redirect_to_last_page",
    "slug_for_field",
    "slugify",
]
