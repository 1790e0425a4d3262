"""Tests for the media integrity check."""

from pathlib import Path

from schoerke.content.store import ContentStore
from schoerke.maintenance.media import validate_media


class TestValidateMedia:
    def test_classifies_records(self, tmp_path: Path):
        store = ContentStore(tmp_path)
        store.create("images", {"filename": "steger.jpg", "width": 800, "height": 600})
        store.create("images", {"filename": "bio.pdf"})

        report = validate_media(store, "images")

        assert [o.message for o in report.succeeded] == ["image", "document"]
        assert report.ok is True

    def test_neither_reported_as_failure(self, tmp_path: Path):
        store = ContentStore(tmp_path)
        store.create("images", {"filename": "broken.jpg", "width": 800})

        report = validate_media(store, "images")

        assert report.ok is False
        assert report.failed[0].label == "broken.jpg"
        assert "width but no height" in report.failed[0].message

    def test_invalid_field_types_reported(self, tmp_path: Path):
        store = ContentStore(tmp_path)
        store.create("images", {"filename": "odd.jpg", "width": "wide", "height": 1})

        report = validate_media(store, "images")

        assert report.counts["failed"] == 1
