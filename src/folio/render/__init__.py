"""Rendering — view models, the page renderer, and templates."""

from folio.render.renderer import PageRenderer, format_date, record_url
from folio.render.templates import create_environment, render_template
from folio.render.views import ArticleView, EntryView, ListingView, TemplateKind

__all__ = [
    "ArticleView",
    "EntryView",
    "ListingView",
    "PageRenderer",
    "TemplateKind",
    "create_environment",
    "format_date",
    "record_url",
    "render_template",
]
