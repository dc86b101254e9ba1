"""Jinja2 template environment for page output."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    TemplateError,
    select_autoescape,
)

from folio.config import SiteSection
from folio.content.slugs import slugify
from folio.errors import RenderError

logger = logging.getLogger(__name__)

LISTING_TEMPLATE = "listing.html"
DETAIL_TEMPLATE = "detail.html"
HOME_TEMPLATE = "home.html"
TAG_TEMPLATE = "tag.html"
FEED_TEMPLATE = "feed.xml"


def absolute_url(base_url: str, path: str) -> str:
    """Join the site base URL and a root-relative path."""
    return base_url.rstrip("/") + "/" + path.lstrip("/")


def create_environment(site: SiteSection) -> Environment:
    """Build the template environment.

    Templates in ``site.templates_dir`` take precedence over the bundled
    defaults, so a site can override a single page.
    """
    loaders: list[BaseLoader] = []
    if site.templates_dir:
        templates_dir = Path(site.templates_dir)
        if templates_dir.is_dir():
            loaders.append(FileSystemLoader(templates_dir))
        else:
            logger.warning("Templates directory not found: %s", templates_dir)
    loaders.append(PackageLoader("folio", "templates"))

    env = Environment(
        loader=ChoiceLoader(loaders),
        autoescape=select_autoescape(["html", "xml"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.globals["site"] = site
    env.filters["absolute_url"] = lambda path: absolute_url(site.base_url, path)
    env.filters["tag_slug"] = slugify
    return env


def render_template(env: Environment, name: str, **context: Any) -> str:
    """Render a named template.

    Raises:
        RenderError: If the template is missing or fails to render.
    """
    try:
        return env.get_template(name).render(**context)
    except TemplateError as exc:
        raise RenderError(f"Template {name} failed: {exc}") from exc
