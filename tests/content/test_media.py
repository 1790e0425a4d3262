"""Tests for image/document discrimination."""

import pytest
from pydantic import TypeAdapter

from schoerke.content.media import (
    DEFAULT_AVATAR_PATH,
    Document,
    Image,
    ImageSize,
    Media,
    MediaShapeError,
    image_url,
    is_document,
    is_image,
    is_valid_url,
    media_presentation,
    parse_media,
    valid_image_url,
)


class TestPredicates:
    def test_image_record(self):
        record = {"width": 400, "height": 300}
        assert is_image(record) is True
        assert is_document(record) is False

    def test_empty_record_is_document(self):
        assert is_document({}) is True
        assert is_image({}) is False

    def test_document_record(self):
        record = {"id": 7, "filename": "press-kit.pdf", "fileSize": 120_000}
        assert is_document(record) is True
        assert is_image(record) is False

    @pytest.mark.parametrize("width,height", [(0, 0), (-1, 5), (None, None)])
    def test_dimension_values_not_validated(self, width, height):
        assert is_image({"width": width, "height": height}) is True

    def test_width_without_height_is_neither(self):
        record = {"width": 400}
        assert is_image(record) is False
        assert is_document(record) is False

    def test_height_without_width_is_document(self):
        record = {"height": 300}
        assert is_image(record) is False
        assert is_document(record) is True


class TestParseMedia:
    def test_parses_image(self):
        media = parse_media(
            {
                "id": 1,
                "filename": "steger.jpg",
                "url": "/media/steger.jpg",
                "alt": "Maurice Steger",
                "width": 1200,
                "height": 800,
                "sizes": {"tablet": {"url": "/media/steger-tablet.jpg", "width": 768}},
                "mimeType": "image/jpeg",
            }
        )
        assert isinstance(media, Image)
        assert media.kind == "image"
        assert media.width == 1200
        assert media.sizes["tablet"].width == 768

    def test_parses_document(self):
        media = parse_media({"id": 2, "filename": "bio.pdf", "fileSize": 2048})
        assert isinstance(media, Document)
        assert media.kind == "document"
        assert media.file_size == 2048

    def test_empty_record_is_document(self):
        assert isinstance(parse_media({}), Document)

    def test_neither_raises(self):
        with pytest.raises(MediaShapeError, match="width but no height"):
            parse_media({"id": 3, "width": 400})

    def test_shape_error_is_value_error(self):
        assert issubclass(MediaShapeError, ValueError)

    def test_typed_media_passthrough(self):
        image = Image(width=1, height=1)
        assert parse_media(image) is image

    def test_stored_kind_ignored(self):
        media = parse_media({"kind": "document", "width": 10, "height": 10})
        assert isinstance(media, Image)


class TestMediaUnion:
    def test_discriminated_by_kind(self):
        adapter = TypeAdapter(Media)
        assert isinstance(adapter.validate_python({"kind": "image", "width": 1, "height": 2}), Image)
        assert isinstance(adapter.validate_python({"kind": "document"}), Document)


class TestPresentation:
    def test_image(self):
        assert media_presentation(Image(width=10, height=10)) == "image"

    def test_document(self):
        assert media_presentation(Document(title="Repertoire")) == "download"


class TestImageUrls:
    def test_prefers_tablet(self):
        image = Image(url="/a.jpg", sizes={"tablet": ImageSize(url="/a-tablet.jpg")})
        assert image_url(image) == "/a-tablet.jpg"

    def test_falls_back_to_original(self):
        assert image_url(Image(url="/a.jpg")) == "/a.jpg"

    def test_none_when_no_url(self):
        assert image_url(Image()) is None

    @pytest.mark.parametrize("url", [None, "", "null", "/media/null", "https://cdn/null/x.jpg"])
    def test_invalid_urls(self, url):
        assert is_valid_url(url) is False

    def test_valid_url(self):
        assert is_valid_url("/media/steger.jpg") is True

    def test_valid_image_url_skips_null_tablet(self):
        image = Image(url="/a.jpg", sizes={"tablet": ImageSize(url="null")})
        assert valid_image_url(image) == "/a.jpg"

    @pytest.mark.parametrize("value", [None, 42, Image(url="null")])
    def test_valid_image_url_falls_back_to_avatar(self, value):
        assert valid_image_url(value) == DEFAULT_AVATAR_PATH
