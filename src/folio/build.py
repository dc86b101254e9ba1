"""Build pipeline — content collections → static HTML site.

A build runs as one synchronous pass: load every collection, sort it,
render the view models, and write the pages. Any error aborts the whole
build; there is no partial-success mode.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time
from email.utils import format_datetime
from pathlib import Path

from jinja2 import Environment

from folio.config import FolioConfig
from folio.content import (
    CollectionLoader,
    CollectionName,
    ContentRecord,
    ProjectFrontmatter,
    is_published,
    latest,
    slugify,
    sort_by_publish_date,
)
from folio.render import PageRenderer, create_environment, render_template
from folio.render.templates import (
    DETAIL_TEMPLATE,
    FEED_TEMPLATE,
    HOME_TEMPLATE,
    LISTING_TEMPLATE,
    TAG_TEMPLATE,
)
from folio.site import SiteWriter

logger = logging.getLogger(__name__)

FEED_URL = "/rss.xml"


@dataclass
class BuildReport:
    """Summary of a finished build."""

    output_dir: Path
    written: list[Path] = field(default_factory=list)
    counts: dict[str, int] = field(default_factory=dict)
    drafts_skipped: int = 0
    tags: int = 0

    @property
    def pages(self) -> int:
        return len(self.written)


class BuildContext:
    """Everything one build needs, created fresh for every build.

    Loaded collections are memoized here rather than in module state, so
    nothing survives from one build to the next.
    """

    def __init__(self, config: FolioConfig) -> None:
        self.config = config
        self.loader = CollectionLoader(config.content_dir)
        self.renderer = PageRenderer(config.render)
        self.env: Environment = create_environment(config.site)
        self.writer = SiteWriter(config.output_dir)
        self._all: dict[CollectionName, list[ContentRecord]] = {}

    def all_records(self, name: CollectionName) -> list[ContentRecord]:
        """Every record in a collection, drafts included, in path order."""
        if name not in self._all:
            self._all[name] = self.loader.get_collection(name)
        return self._all[name]

    def published(self, name: CollectionName) -> list[ContentRecord]:
        """Non-draft records, newest first."""
        records = [r for r in self.all_records(name) if is_published(r.metadata)]
        return sort_by_publish_date(records)


def build_site(config: FolioConfig, *, clean: bool = False) -> BuildReport:
    """Build the whole site into ``config.output_dir``.

    Args:
        config: Site configuration.
        clean: Remove the output directory before writing.

    Returns:
        BuildReport describing what was written.

    Raises:
        FolioError: On any load, validation, or render failure.
    """
    ctx = BuildContext(config)
    report = BuildReport(output_dir=ctx.writer.output_dir)

    published: dict[CollectionName, list[ContentRecord]] = {}
    for name in CollectionName:
        records = ctx.published(name)
        published[name] = records
        report.counts[name.value] = len(records)
        report.drafts_skipped += len(ctx.all_records(name)) - len(records)

    if clean:
        ctx.writer.clean(protect=[config.content_dir])

    for name, records in published.items():
        _write_collection(ctx, name, records)

    _write_home(ctx, published)
    tagged = published[CollectionName.BLOG] + published[CollectionName.PROJECTS]
    report.tags = _write_tags(ctx, sort_by_publish_date(tagged))
    _write_feed(ctx, published[CollectionName.BLOG])

    report.written = ctx.writer.written
    logger.info(
        "Built %d pages into %s (%d drafts skipped)",
        report.pages,
        report.output_dir,
        report.drafts_skipped,
    )
    return report


def check_content(config: FolioConfig) -> dict[str, int]:
    """Load and validate every collection without writing anything.

    Returns:
        Record count per collection, drafts included.
    """
    loader = CollectionLoader(config.content_dir)
    return {name.value: len(loader.get_collection(name)) for name in CollectionName}


def _write_collection(
    ctx: BuildContext, name: CollectionName, records: list[ContentRecord]
) -> None:
    listing = ctx.renderer.render_listing(name.value, records)
    ctx.writer.write_page(
        listing.url, render_template(ctx.env, LISTING_TEMPLATE, listing=listing)
    )
    for record in records:
        article = ctx.renderer.render_detail(record)
        ctx.writer.write_page(
            article.url, render_template(ctx.env, DETAIL_TEMPLATE, article=article)
        )


def _write_home(
    ctx: BuildContext, published: dict[CollectionName, list[ContentRecord]]
) -> None:
    posts = latest(published[CollectionName.BLOG], ctx.config.render.latest_count)
    featured = [
        r
        for r in published[CollectionName.PROJECTS]
        if isinstance(r.metadata, ProjectFrontmatter) and r.metadata.featured
    ]
    html = render_template(
        ctx.env,
        HOME_TEMPLATE,
        posts=[ctx.renderer.render_entry(r) for r in posts],
        projects=[ctx.renderer.render_entry(r) for r in featured],
    )
    ctx.writer.write_page("/", html)


def _write_tags(ctx: BuildContext, records: list[ContentRecord]) -> int:
    """Write one page per tag across all collections; returns the page count."""
    by_tag: dict[str, list[ContentRecord]] = defaultdict(list)
    labels: dict[str, str] = {}
    for record in records:
        for tag in record.metadata.tags:
            tag_slug = slugify(tag)
            if not tag_slug:
                continue
            labels.setdefault(tag_slug, tag)
            if record not in by_tag[tag_slug]:
                by_tag[tag_slug].append(record)

    for tag_slug in sorted(by_tag):
        entries = [ctx.renderer.render_entry(r) for r in by_tag[tag_slug]]
        html = render_template(ctx.env, TAG_TEMPLATE, tag=labels[tag_slug], entries=entries)
        ctx.writer.write_page(f"/tags/{tag_slug}/", html)
    return len(by_tag)


def _rfc822(day: date) -> str:
    return format_datetime(datetime.combine(day, time(), tzinfo=UTC))


def _write_feed(ctx: BuildContext, posts: list[ContentRecord]) -> None:
    recent = latest(posts, ctx.config.render.feed_limit)
    items = [
        {"entry": ctx.renderer.render_entry(r), "pub_date": _rfc822(r.metadata.publish_date)}
        for r in recent
    ]
    # Newest post date rather than wall-clock time.
    build_date = _rfc822(recent[0].metadata.publish_date) if recent else ""
    xml = render_template(ctx.env, FEED_TEMPLATE, items=items, build_date=build_date)
    ctx.writer.write_page(FEED_URL, xml)
