"""Collection loader: discovers, parses, and validates content files."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from folio.content.frontmatter import split_frontmatter
from folio.content.models import (
    COLLECTION_SCHEMAS,
    CollectionName,
    ContentRecord,
    PostFrontmatter,
)
from folio.content.slugs import slug_from_path
from folio.errors import FrontmatterError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

CONTENT_GLOB = "*.md"

Predicate = Callable[[PostFrontmatter], bool]


def is_published(metadata: PostFrontmatter) -> bool:
    """Standard listing predicate: everything not explicitly a draft."""
    return metadata.draft is not True


def resolve_collection(name: CollectionName | str) -> CollectionName:
    """Map a collection name to its enum member.

    Raises:
        NotFoundError: If the name is not a known collection.
    """
    try:
        return CollectionName(name)
    except ValueError:
        known = ", ".join(c.value for c in CollectionName)
        raise NotFoundError(f"Unknown collection {name!r} (known: {known})") from None


def _format_errors(exc: PydanticValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "frontmatter"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


class CollectionLoader:
    """Reads content collections from ``<content_dir>/<collection>/``."""

    def __init__(self, content_dir: Path) -> None:
        self._content_dir = Path(content_dir)

    @property
    def content_dir(self) -> Path:
        return self._content_dir

    def collection_dir(self, name: CollectionName | str) -> Path:
        return self._content_dir / resolve_collection(name).value

    def get_collection(
        self,
        name: CollectionName | str,
        predicate: Predicate | None = None,
    ) -> list[ContentRecord]:
        """Load every record in a collection, optionally filtered.

        Files are read in sorted path order so the result is stable from
        one build to the next.

        Args:
            name: Collection name.
            predicate: Optional filter over each record's metadata.

        Returns:
            List of records; empty if the collection has no files.

        Raises:
            NotFoundError: If ``name`` is not a known collection.
            ValidationError: If any file fails to parse or validate, or two
                files map to the same slug.
        """
        collection = resolve_collection(name)
        directory = self._content_dir / collection.value
        if not directory.is_dir():
            logger.info("No %s directory at %s", collection.value, directory)
            return []

        records: list[ContentRecord] = []
        seen: dict[str, Path] = {}
        for md_file in sorted(directory.rglob(CONTENT_GLOB)):
            record = self.load_file(collection, md_file, directory)
            if record.slug in seen:
                raise ValidationError(
                    f"duplicate slug {record.slug!r} (also used by {seen[record.slug]})",
                    path=md_file,
                )
            seen[record.slug] = md_file
            records.append(record)

        logger.debug("Loaded %d %s records", len(records), collection.value)

        if predicate is None:
            return records
        return [r for r in records if predicate(r.metadata)]

    def load_file(
        self,
        collection: CollectionName,
        path: Path,
        root: Path | None = None,
    ) -> ContentRecord:
        """Parse and validate a single content file.

        Raises:
            ValidationError: If the file cannot be read, parsed, or validated.
        """
        root = root if root is not None else self.collection_dir(collection)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ValidationError(f"could not read file: {exc}", path=path) from exc

        try:
            data, body = split_frontmatter(text)
        except FrontmatterError as exc:
            raise FrontmatterError(str(exc), path=path) from exc

        schema = COLLECTION_SCHEMAS[collection]
        try:
            metadata = schema.model_validate(data)
        except PydanticValidationError as exc:
            raise ValidationError(_format_errors(exc), path=path) from exc

        slug = slug_from_path(path.relative_to(root))
        if not slug:
            raise ValidationError("file name yields an empty slug", path=path)

        return ContentRecord(
            slug=slug,
            collection=collection,
            metadata=metadata,
            body=body,
            file_path=path,
        )
