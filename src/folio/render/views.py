"""View models handed to templates.

Templates only see these types, never raw content records, so every
field a template needs is derived in one place by the renderer.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class TemplateKind(StrEnum):
    """Page shapes the renderer can produce."""

    LISTING = "listing"
    DETAIL = "detail"


class EntryView(BaseModel):
    """One row of a listing page."""

    model_config = ConfigDict(frozen=True)

    slug: str
    collection: str
    title: str
    description: str
    date: str
    date_iso: str
    tags: tuple[str, ...] = ()
    excerpt: str = ""
    url: str


class ArticleView(EntryView):
    """A full detail page."""

    body_html: str = ""
    updated: str | None = None
    updated_iso: str | None = None
    hero_image: str | None = None
    repo_url: str | None = None
    demo_url: str | None = None


class ListingView(BaseModel):
    """A listing page: entries in display order."""

    model_config = ConfigDict(frozen=True)

    collection: str
    title: str
    url: str
    entries: tuple[EntryView, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.entries
