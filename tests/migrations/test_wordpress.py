"""Tests for the WordPress export migration."""

from pathlib import Path

import pytest

from schoerke.content.store import ContentStore
from schoerke.migrations.wordpress import (
    WordPressItem,
    clean_biography_html,
    extract_first_paragraph,
    map_instruments,
    migrate_artists,
    migrate_posts,
    parse_wordpress_export,
    validate_and_clean_url,
)

EXPORT = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"
     xmlns:content="http://purl.org/rss/1.0/modules/content/"
     xmlns:dc="http://purl.org/dc/elements/1.1/"
     xmlns:wp="http://wordpress.org/export/1.2/">
<channel>
  <title>Künstlersekretariat Astrid Schörke</title>
  <item>
    <title>Neue CD erschienen</title>
    <dc:creator><![CDATA[admin]]></dc:creator>
    <content:encoded><![CDATA[<p>Die neue Aufnahme ist da.</p>]]></content:encoded>
    <wp:post_id>11</wp:post_id>
    <wp:post_date>2019-03-04 09:30:00</wp:post_date>
    <wp:post_name>neue-cd-erschienen</wp:post_name>
    <wp:status>publish</wp:status>
    <wp:post_type>post</wp:post_type>
    <category domain="category" nicename="news"><![CDATA[News]]></category>
    <category domain="post_tag" nicename="cd"><![CDATA[CD]]></category>
  </item>
  <item>
    <title>Tournée 2024</title>
    <content:encoded><![CDATA[<p>Termine</p>]]></content:encoded>
    <wp:post_id>12</wp:post_id>
    <wp:post_date>2024-01-10 12:00:00</wp:post_date>
    <wp:post_name></wp:post_name>
    <wp:status>publish</wp:status>
    <wp:post_type>post</wp:post_type>
  </item>
  <item>
    <title>Entwurf</title>
    <wp:post_id>13</wp:post_id>
    <wp:status>draft</wp:status>
    <wp:post_type>post</wp:post_type>
  </item>
  <item>
    <title>Maurice Steger</title>
    <content:encoded><![CDATA["Der Paganini der Blockflöte"
<p>Maurice Steger ist ein Schweizer Blockflötist.</p>]]></content:encoded>
    <wp:post_id>21</wp:post_id>
    <wp:post_name>maurice-steger</wp:post_name>
    <wp:status>publish</wp:status>
    <wp:post_type>artist</wp:post_type>
    <wp:postmeta>
      <wp:meta_key><![CDATA[instruments]]></wp:meta_key>
      <wp:meta_value><![CDATA[Recorder, Conducting]]></wp:meta_value>
    </wp:postmeta>
    <wp:postmeta>
      <wp:meta_key><![CDATA[homepage]]></wp:meta_key>
      <wp:meta_value><![CDATA[www.mauricesteger.com ]]></wp:meta_value>
    </wp:postmeta>
    <wp:postmeta>
      <wp:meta_key><![CDATA[contact-person]]></wp:meta_key>
      <wp:meta_value><![CDATA[Astrid Schörke]]></wp:meta_value>
    </wp:postmeta>
  </item>
</channel>
</rss>
"""


@pytest.fixture
def export_file(tmp_path: Path) -> Path:
    path = tmp_path / "export.xml"
    path.write_text(EXPORT, encoding="utf-8")
    return path


@pytest.fixture
def store(tmp_path: Path) -> ContentStore:
    return ContentStore(tmp_path / "store")


class TestParseExport:
    def test_parses_items(self, export_file: Path):
        items = parse_wordpress_export(export_file)
        assert [i.post_id for i in items] == [11, 12, 13, 21]

        post = items[0]
        assert post.title == "Neue CD erschienen"
        assert post.post_name == "neue-cd-erschienen"
        assert post.post_type == "post"
        assert post.status == "publish"
        assert post.content == "<p>Die neue Aufnahme ist da.</p>"
        assert post.categories == ["News"]

    def test_post_meta(self, export_file: Path):
        artist = parse_wordpress_export(export_file)[3]
        assert artist.meta["instruments"] == "Recorder, Conducting"
        assert artist.meta["contact-person"] == "Astrid Schörke"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            parse_wordpress_export(tmp_path / "missing.xml")


class TestFieldMappers:
    def test_quoted_first_line(self):
        html = '"Der Paganini der Blockflöte"\n<p>Bio</p>'
        assert extract_first_paragraph(html) == "Der Paganini der Blockflöte"
        assert clean_biography_html(html) == "<p>Bio</p>"

    def test_first_paragraph(self):
        assert extract_first_paragraph("<p class='x'>Hello</p><p>World</p>") == "Hello"

    def test_no_quote(self):
        assert extract_first_paragraph("plain text") == ""
        assert clean_biography_html("  <p>Bio</p> ") == "<p>Bio</p>"

    def test_map_instruments(self):
        assert map_instruments("Violoncello, Chamber Music, Kazoo") == ["cello", "chamber-music"]
        assert map_instruments("") == []

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("www.example.com", "https://www.example.com"),
            (" http://example.com ", "http://example.com"),
            ("", None),
            (None, None),
            ("   ", None),
        ],
    )
    def test_validate_url(self, raw, expected):
        assert validate_and_clean_url(raw) == expected


class TestMigratePosts:
    def test_creates_published_posts(self, store: ContentStore, export_file: Path):
        report = migrate_posts(store, parse_wordpress_export(export_file), locale="de")

        posts = store.find("posts", limit=10).docs
        assert [p["slug"] for p in posts] == ["neue-cd-erschienen", "tourn-e-2024"]
        assert posts[0]["title"] == {"de": "Neue CD erschienen"}
        assert posts[0]["status"] == "published"
        assert posts[0]["published_at"] == "2019-03-04T09:30:00"
        assert report.counts == {"succeeded": 2, "skipped": 1, "failed": 0}

    def test_invalid_locale_uses_default(self, store: ContentStore, export_file: Path):
        migrate_posts(store, parse_wordpress_export(export_file), locale="fr")
        assert "de" in store.find("posts").docs[0]["title"]

    def test_rerun_skips_existing(self, store: ContentStore, export_file: Path):
        items = parse_wordpress_export(export_file)
        migrate_posts(store, items)
        report = migrate_posts(store, items)
        assert report.counts["succeeded"] == 0
        assert store.find("posts").total_docs == 2

    def test_empty_slug_skipped(self, store: ContentStore):
        items = [WordPressItem(title="!!!", post_id=1, post_type="post", status="publish")]
        report = migrate_posts(store, items)
        assert "manual resolution required" in report.skipped[0].message

    def test_dry_run(self, store: ContentStore, export_file: Path):
        report = migrate_posts(store, parse_wordpress_export(export_file), dry_run=True)
        assert store.find("posts").total_docs == 0
        assert report.counts["succeeded"] == 2


class TestMigrateArtists:
    def test_creates_artist(self, store: ContentStore, export_file: Path):
        employee = store.create("employees", {"name": "Astrid Schörke", "email": "a@b.c"})

        report = migrate_artists(store, parse_wordpress_export(export_file), locale="en")

        assert report.ok is True
        artist = store.find("artists").docs[0]
        assert artist["slug"] == "maurice-steger"
        assert artist["instruments"] == ["recorder", "conductor"]
        assert artist["quote"] == {"en": "Der Paganini der Blockflöte"}
        assert artist["biography"]["en"].startswith("<p>Maurice Steger")
        assert artist["homepage_url"] == "https://www.mauricesteger.com"
        assert artist["contact_persons"] == [employee["id"]]

    def test_unknown_contact_person(self, store: ContentStore, export_file: Path, caplog):
        migrate_artists(store, parse_wordpress_export(export_file))
        assert store.find("artists").docs[0]["contact_persons"] == []
        assert "not found in employees" in caplog.text
