"""Page renderer: maps content records into template view models.

Rendering is a pure transformation. Records are only read, so pages may
be rendered in any order without changing the output.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from datetime import date

import markdown

from folio.config import RenderSection
from folio.content.models import ContentRecord, ProjectFrontmatter
from folio.content.slugs import slugify
from folio.errors import RenderError
from folio.render.views import ArticleView, EntryView, ListingView, TemplateKind

logger = logging.getLogger(__name__)

# Fixed English month names keep dates independent of the process locale.
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

COLLECTION_TITLES = {
    "blog": "Blog",
    "projects": "Projects",
}

_REQUIRED_FIELDS = ("title", "publish_date")

_LINK = re.compile(r"!?\[([^\]]*)\]\([^)]*\)")
_EMPHASIS = re.compile(r"(\*\*|__|\*|_|`|~~)")
_HTML_TAG = re.compile(r"<[^>]+>")


def format_date(value: date) -> str:
    """Format a date as ``MMM D, YYYY`` (e.g. ``Jun 15, 2024``)."""
    return f"{MONTH_ABBREVIATIONS[value.month - 1]} {value.day}, {value.year}"


def record_url(collection: str, slug: str) -> str:
    """URL path of a record's detail page."""
    return f"/{collection}/{slug}/"


def collection_url(collection: str) -> str:
    return f"/{collection}/"


def strip_markdown(text: str) -> str:
    """Reduce a Markdown fragment to plain text."""
    text = _LINK.sub(r"\1", text)
    text = _HTML_TAG.sub("", text)
    text = _EMPHASIS.sub("", text)
    return " ".join(text.split())


def first_paragraph(body: str) -> str:
    """Return the first prose paragraph of a Markdown body."""
    paragraph: list[str] = []
    in_fence = False
    for line in body.splitlines():
        stripped = line.strip()
        if stripped.startswith("```"):
            in_fence = not in_fence
            continue
        if in_fence:
            continue
        if not stripped:
            if paragraph:
                break
            continue
        if stripped.startswith(("#", ">", "|", "<", "---")):
            if paragraph:
                break
            continue
        paragraph.append(stripped)
    return strip_markdown(" ".join(paragraph))


def truncate(text: str, length: int) -> str:
    """Cut ``text`` at a word boundary no longer than ``length``, with an ellipsis."""
    if len(text) <= length:
        return text
    cut = text[:length].rsplit(" ", 1)[0].rstrip(",.;:")
    return f"{cut or text[:length]}…"


class PageRenderer:
    """Builds listing and detail view models from content records."""

    def __init__(self, settings: RenderSection | None = None) -> None:
        self._settings = settings or RenderSection()

    def render(
        self,
        kind: TemplateKind | str,
        records: Sequence[ContentRecord],
        collection: str | None = None,
    ) -> ListingView | ArticleView:
        """Dispatch on the template kind.

        Raises:
            RenderError: If the kind is unknown, or a detail page is requested
                for anything other than exactly one record.
        """
        try:
            kind = TemplateKind(kind)
        except ValueError:
            raise RenderError(f"Unknown template kind: {kind!r}") from None

        if kind is TemplateKind.DETAIL:
            if len(records) != 1:
                raise RenderError(
                    f"Detail pages take exactly one record, got {len(records)}"
                )
            return self.render_detail(records[0])

        if collection is None:
            if not records:
                raise RenderError("Empty listing needs an explicit collection name")
            collection = records[0].collection.value
        return self.render_listing(collection, records)

    def render_listing(
        self, collection: str, records: Sequence[ContentRecord]
    ) -> ListingView:
        """Render a listing page, keeping the caller's record order."""
        collection = str(collection)
        entries = tuple(self.render_entry(r) for r in records)
        return ListingView(
            collection=collection,
            title=COLLECTION_TITLES.get(collection, collection.title()),
            url=collection_url(collection),
            entries=entries,
        )

    def render_entry(self, record: ContentRecord) -> EntryView:
        """Render one listing row; tags are truncated to ``max_tags``."""
        self._check_required(record)
        return EntryView(**self._entry_fields(record, self._settings.max_tags))

    def render_detail(self, record: ContentRecord) -> ArticleView:
        """Render a full detail page including the body HTML."""
        self._check_required(record)
        meta = record.metadata
        fields = self._entry_fields(record, None)
        fields.update(
            body_html=self.render_body(record.body),
            hero_image=meta.hero_image,
        )
        if meta.updated_date is not None:
            fields.update(
                updated=format_date(meta.updated_date),
                updated_iso=meta.updated_date.isoformat(),
            )
        if isinstance(meta, ProjectFrontmatter):
            fields.update(repo_url=meta.repo_url, demo_url=meta.demo_url)
        return ArticleView(**fields)

    def render_body(self, body: str) -> str:
        return markdown.markdown(body, extensions=self._settings.markdown_extensions)

    def excerpt(self, record: ContentRecord) -> str:
        """Description if set, otherwise the opening paragraph of the body."""
        text = record.metadata.description.strip() or first_paragraph(record.body)
        return truncate(text, self._settings.excerpt_length)

    def _entry_fields(self, record: ContentRecord, max_tags: int | None) -> dict[str, object]:
        meta = record.metadata
        # Tags without a slug have no tag page to link to.
        tags = [t for t in meta.tags if slugify(t)]
        if max_tags is not None:
            tags = tags[:max_tags]
        collection = record.collection.value
        return {
            "slug": record.slug,
            "collection": collection,
            "title": meta.title,
            "description": meta.description,
            "date": format_date(meta.publish_date),
            "date_iso": meta.publish_date.isoformat(),
            "tags": tuple(tags),
            "excerpt": self.excerpt(record),
            "url": record_url(collection, record.slug),
        }

    @staticmethod
    def _check_required(record: ContentRecord) -> None:
        for field in _REQUIRED_FIELDS:
            value = getattr(record.metadata, field, None)
            if value is None or value == "":
                raise RenderError(
                    f"{record.collection.value}/{record.slug}: missing {field} at render time"
                )
