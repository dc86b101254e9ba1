"""Build errors.

Every error here is fatal to a build: the pipeline has no partial-success
mode, so these propagate up to the CLI, which reports them and exits.
"""

from __future__ import annotations

from pathlib import Path


class FolioError(Exception):
    """Base class for all build errors."""


class NotFoundError(FolioError):
    """Raised when a collection name is not one of the known collections."""


class ValidationError(FolioError):
    """Raised when a content file fails schema validation at load time."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class FrontmatterError(ValidationError):
    """Raised when a frontmatter block cannot be parsed."""


class RenderError(FolioError):
    """Raised when a record cannot be mapped into a page.

    Records are validated at load time, so this signals a programming
    error rather than bad content.
    """


class ConfigError(FolioError):
    """Raised when a config file holds values outside their allowed range."""
