"""Image and document media variants.

The CMS stores images and documents in separate collections, but
relationship fields hand back either one without a type tag.  Records
are sniffed once, at :func:`parse_media`, and are typed ``Image`` or
``Document`` from there on.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

DEFAULT_AVATAR_PATH = "/images/default-avatar.webp"


class MediaShapeError(ValueError):
    """A media record is shaped like neither an image nor a document."""


class ImageSize(BaseModel):
    """One generated rendition of an image (thumbnail, card, tablet)."""

    url: str | None = None
    width: int | None = None
    height: int | None = None
    filename: str | None = None


class Image(BaseModel):
    """An uploaded image with pixel dimensions."""

    kind: Literal["image"] = "image"
    id: int | None = None
    filename: str = ""
    url: str | None = None
    alt: str = ""
    credit: str = ""
    width: int | None = None
    height: int | None = None
    sizes: dict[str, ImageSize] = Field(default_factory=dict)


class Document(BaseModel):
    """A downloadable file (press kit, repertoire list, ...)."""

    kind: Literal["document"] = "document"
    id: int | None = None
    filename: str = ""
    url: str | None = None
    title: str = ""
    description: str = ""
    file_size: int | None = Field(default=None, alias="fileSize")

    model_config = {"populate_by_name": True}


Media = Annotated[Image | Document, Field(discriminator="kind")]


def is_image(record: Mapping[str, Any]) -> bool:
    """True if the record carries both ``width`` and ``height``.

    Only presence is checked; zero or negative dimensions still count.
    """
    return "width" in record and "height" in record


def is_document(record: Mapping[str, Any]) -> bool:
    """True if the record has no ``width``."""
    return "width" not in record


def parse_media(record: Mapping[str, Any] | Image | Document) -> Image | Document:
    """Turn an untyped media record into an ``Image`` or ``Document``.

    Raises:
        MediaShapeError: If the record matches neither variant, e.g. it has
            a width but no height.
    """
    if isinstance(record, (Image, Document)):
        return record

    data = {k: v for k, v in record.items() if k != "kind"}
    if is_image(record):
        return Image.model_validate(data)
    if is_document(record):
        return Document.model_validate(data)
    raise MediaShapeError(
        f"Media record {record.get('id')!r} has width but no height; "
        "cannot tell image from document"
    )


def media_presentation(media: Image | Document) -> Literal["image", "download"]:
    """How the display layer should present a media item."""
    if isinstance(media, Image):
        return "image"
    return "download"


def is_valid_url(url: str | None) -> bool:
    """Reject empty urls and the ``null`` placeholders the CMS emits."""
    return isinstance(url, str) and url != "" and url != "null" and "/null" not in url


def image_url(image: Image) -> str | None:
    """Best url for an image, preferring the ``tablet`` rendition."""
    tablet = image.sizes.get("tablet")
    if tablet is not None and tablet.url:
        return tablet.url
    return image.url or None


def valid_image_url(image: Image | int | None) -> str:
    """Like :func:`image_url` but never fails; falls back to the default avatar.

    Unpopulated relationships arrive as bare integer ids.
    """
    if image is None or isinstance(image, int):
        return DEFAULT_AVATAR_PATH

    tablet = image.sizes.get("tablet")
    if tablet is not None and is_valid_url(tablet.url):
        return tablet.url  # type: ignore[return-value]
    if is_valid_url(image.url):
        return image.url  # type: ignore[return-value]
    return DEFAULT_AVATAR_PATH
