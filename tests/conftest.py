"""Shared fixtures: a throwaway content tree on disk."""

from collections.abc import Callable
from pathlib import Path

import pytest


def make_markdown(
    title: str = "Hello",
    publish_date: str = "2024-01-01",
    description: str = "A post.",
    body: str = "Body text.",
    extra: str = "",
) -> str:
    """Build a Markdown file with blog frontmatter."""
    return (
        "---\n"
        f"title: {title}\n"
        f"description: {description}\n"
        f"publishDate: {publish_date}\n"
        f"{extra}"
        "---\n\n"
        f"{body}\n"
    )


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    path = tmp_path / "content"
    path.mkdir()
    return path


@pytest.fixture
def write_content(content_dir: Path) -> Callable[..., Path]:
    """Write ``<content_dir>/<collection>/<name>.md`` and return its path."""

    def _write(collection: str, name: str, text: str | None = None, **kwargs: str) -> Path:
        path = content_dir / collection / f"{name}.md"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text if text is not None else make_markdown(**kwargs), encoding="utf-8")
        return path

    return _write
