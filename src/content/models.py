"""Content domain models: pure Pydantic v2 data types.

These mirror the CMS collections the website renders: artists with
their recordings, agency employees, news posts, and the two media
collections (images and documents).  Localized text fields are stored
as ``{"de": ..., "en": ...}`` dicts.  The guards at the bottom check
raw CMS records, where relationships may or may not be populated.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

LocalizedText = dict[str, str]


class Collection(StrEnum):
    """CMS collection slugs."""

    ARTISTS = "artists"
    EMPLOYEES = "employees"
    POSTS = "posts"
    RECORDINGS = "recordings"
    IMAGES = "images"
    DOCUMENTS = "documents"
    PAGES = "pages"


class PostCategory(StrEnum):
    """News post category."""

    NEWS = "news"
    PROJECTS = "projects"
    HOME = "home"


class PublishStatus(StrEnum):
    """Draft/published state shared by all versioned collections."""

    DRAFT = "draft"
    PUBLISHED = "published"


class Artist(BaseModel):
    """An artist represented by the agency."""

    name: str
    slug: str = ""
    instruments: list[str] = Field(default_factory=list)
    quote: LocalizedText = Field(default_factory=dict)
    biography: LocalizedText = Field(default_factory=dict)
    homepage_url: str | None = None
    contact_persons: list[int] = Field(default_factory=list)
    image: int | None = None
    status: PublishStatus = PublishStatus.DRAFT


class Employee(BaseModel):
    """A member of the agency team."""

    name: str
    email: str
    title: LocalizedText = Field(default_factory=dict)
    phone: str = ""
    mobile: str = ""
    image: int | None = None
    order: int = 0


class Post(BaseModel):
    """A news or project post."""

    title: LocalizedText
    slug: str = ""
    content: LocalizedText = Field(default_factory=dict)
    categories: list[PostCategory] = Field(default_factory=list)
    artists: list[int] = Field(default_factory=list)
    image: int | None = None
    status: PublishStatus = PublishStatus.DRAFT
    published_at: datetime | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class Recording(BaseModel):
    """A discography entry linked to one or more artists."""

    title: LocalizedText
    artists: list[int] = Field(default_factory=list)
    label: str = ""
    catalog_number: str = ""
    release_year: int | None = None
    role: str = ""
    cover: int | None = None
    status: PublishStatus = PublishStatus.DRAFT


def is_employee(obj: Any) -> bool:
    """True for a populated employee record (integer id, name and email)."""
    if not isinstance(obj, Mapping):
        return False
    record_id = obj.get("id")
    return (
        isinstance(record_id, int)
        and not isinstance(record_id, bool)
        and isinstance(obj.get("name"), str)
        and isinstance(obj.get("email"), str)
    )


def related_artists(artists: Any) -> list[dict[str, Any]]:
    """Populated artist records from a post's ``artists`` relationship.

    Unpopulated relationships arrive as bare ids and are dropped.
    """
    if not isinstance(artists, list):
        return []
    return [artist for artist in artists if isinstance(artist, Mapping)]
