"""Slug helpers shared by the loader, the renderer, and the scaffolder."""

from __future__ import annotations

import re
from pathlib import PurePath

_NON_WORD = re.compile(r"[^\w]+", re.UNICODE)

INDEX_STEM = "index"


def slugify(text: str) -> str:
    """Lowercase ``text`` and collapse anything non-alphanumeric into dashes."""
    text = _NON_WORD.sub("-", text.lower())
    return text.strip("-_").replace("_", "-")


def slug_from_path(relative: PurePath) -> str:
    """Derive a record slug from its path inside a collection directory.

    ``hello-world.md`` becomes ``hello-world``; ``2024/trip/index.md``
    becomes ``2024/trip``.
    """
    parts = list(relative.with_suffix("").parts)
    if len(parts) > 1 and parts[-1] == INDEX_STEM:
        parts.pop()
    slugs = (slugify(part) for part in parts)
    return "/".join(s for s in slugs if s)
