"""Content domain models — pure Pydantic v2 data types.

Each collection has its own frontmatter schema, validated once when a
file is loaded. Records are frozen: nothing downstream of the loader
may mutate them during a build.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CollectionName(StrEnum):
    """Known content collections."""

    BLOG = "blog"
    PROJECTS = "projects"


class PostFrontmatter(BaseModel):
    """Frontmatter schema for the blog collection."""

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, extra="ignore", str_strip_whitespace=True
    )

    title: str = Field(min_length=1)
    description: str
    publish_date: date = Field(alias="publishDate")
    updated_date: date | None = Field(default=None, alias="updatedDate")
    tags: tuple[str, ...] = ()
    draft: bool = False
    hero_image: str | None = Field(default=None, alias="heroImage")

    @field_validator("publish_date", "updated_date", mode="before")
    @classmethod
    def _whole_date(cls, value: Any) -> Any:
        """Accept dates, datetimes (date part) and ISO strings only."""
        if value is None or (isinstance(value, date) and not isinstance(value, datetime)):
            return value
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str):
            text = value.strip()
            try:
                return date.fromisoformat(text)
            except ValueError:
                pass
            try:
                return datetime.fromisoformat(text).date()
            except ValueError:
                raise ValueError(f"not an ISO-8601 date: {value!r}") from None
        raise ValueError(f"not an ISO-8601 date: {value!r}")

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return value


class ProjectFrontmatter(PostFrontmatter):
    """Frontmatter schema for the projects collection."""

    repo_url: str | None = Field(default=None, alias="repoUrl")
    demo_url: str | None = Field(default=None, alias="demoUrl")
    featured: bool = False


COLLECTION_SCHEMAS: dict[CollectionName, type[PostFrontmatter]] = {
    CollectionName.BLOG: PostFrontmatter,
    CollectionName.PROJECTS: ProjectFrontmatter,
}


class ContentRecord(BaseModel):
    """A single loaded content file: slug, typed frontmatter, and body."""

    model_config = ConfigDict(frozen=True)

    slug: str
    collection: CollectionName
    metadata: PostFrontmatter
    body: str = ""
    file_path: Path = Path(".")

    @property
    def publish_date(self) -> date:
        return self.metadata.publish_date
