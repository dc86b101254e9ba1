"""Content domain — collection schemas, loading, and ordering."""

from folio.content.frontmatter import render_frontmatter, split_frontmatter
from folio.content.loader import CollectionLoader, is_published, resolve_collection
from folio.content.models import (
    COLLECTION_SCHEMAS,
    CollectionName,
    ContentRecord,
    PostFrontmatter,
    ProjectFrontmatter,
)
from folio.content.slugs import slug_from_path, slugify
from folio.content.sorting import latest, sort_by_publish_date

__all__ = [
    "COLLECTION_SCHEMAS",
    "CollectionLoader",
    "CollectionName",
    "ContentRecord",
    "PostFrontmatter",
    "ProjectFrontmatter",
    "is_published",
    "latest",
    "render_frontmatter",
    "resolve_collection",
    "slug_from_path",
    "slugify",
    "sort_by_publish_date",
    "split_frontmatter",
]
