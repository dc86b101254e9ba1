"""Writes rendered pages into the output directory."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from collections.abc import Iterable
from pathlib import Path

from folio.errors import FolioError

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.html"


def _atomic_write(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` via a temp file and ``os.replace``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class SiteWriter:
    """Maps URL paths to files under the output directory."""

    def __init__(self, output_dir: Path) -> None:
        self._output_dir = Path(output_dir)
        self._written: list[Path] = []

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    @property
    def written(self) -> list[Path]:
        return list(self._written)

    def clean(self, protect: Iterable[Path] = ()) -> None:
        """Remove the output directory and everything in it.

        Raises:
            FolioError: If the output directory is, or contains, the working
                directory or any of the ``protect`` paths.
        """
        target = self._output_dir.resolve()
        for kept in (Path.cwd(), *protect):
            kept = Path(kept).resolve()
            if kept == target or target in kept.parents:
                raise FolioError(f"refusing to clean {self._output_dir}: it contains {kept}")
        if self._output_dir.exists():
            logger.info("Removing %s", self._output_dir)
            shutil.rmtree(self._output_dir)

    def path_for(self, url: str) -> Path:
        """Resolve a URL path to its output file.

        Directory-style URLs (``/blog/``, ``/blog/hello/``) map to an
        ``index.html`` inside that directory.
        """
        relative = url.strip("/")
        if not relative:
            return self._output_dir / INDEX_FILENAME
        if url.endswith("/"):
            return self._output_dir / relative / INDEX_FILENAME
        return self._output_dir / relative

    def write_page(self, url: str, content: str) -> Path:
        path = self.path_for(url)
        _atomic_write(path, content)
        self._written.append(path)
        logger.debug("Wrote %s", path)
        return path
