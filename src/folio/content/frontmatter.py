"""YAML frontmatter splitting for Markdown content files."""

from __future__ import annotations

from typing import Any

import yaml

from folio.errors import FrontmatterError

DELIMITER = "---"


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Split a Markdown document into its frontmatter mapping and body.

    Documents that do not open with ``---`` have no frontmatter and are
    returned whole as the body.

    Raises:
        FrontmatterError: If the block is unterminated, is not valid YAML,
            or does not hold a mapping.
    """
    text = text.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != DELIMITER:
        return {}, text

    end: int | None = None
    for i in range(1, len(lines)):
        if lines[i].rstrip() == DELIMITER:
            end = i
            break
    if end is None:
        raise FrontmatterError("unterminated frontmatter block")

    raw = "".join(lines[1:end])
    body = "".join(lines[end + 1 :]).lstrip("\n")

    try:
        data = yaml.safe_load(raw)
    except (yaml.YAMLError, ValueError) as exc:
        raise FrontmatterError(f"invalid YAML frontmatter: {exc}") from exc

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        raise FrontmatterError(
            f"frontmatter must be a mapping, got {type(data).__name__}"
        )
    return data, body


def render_frontmatter(data: dict[str, Any], body: str = "") -> str:
    """Serialize a mapping and body back into a Markdown document."""
    dumped = yaml.safe_dump(data, sort_keys=False, allow_unicode=True).rstrip()
    return f"{DELIMITER}\n{dumped}\n{DELIMITER}\n\n{body}"
