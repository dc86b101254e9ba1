"""Tests for SiteWriter — URL to file mapping and atomic writes."""

from pathlib import Path

import pytest
from folio.errors import FolioError
from folio.site import SiteWriter


class TestPathFor:
    def test_root(self, tmp_path: Path):
        assert SiteWriter(tmp_path).path_for("/") == tmp_path / "index.html"

    def test_directory_url(self, tmp_path: Path):
        writer = SiteWriter(tmp_path)
        assert writer.path_for("/blog/hello/") == tmp_path / "blog" / "hello" / "index.html"

    def test_file_url(self, tmp_path: Path):
        assert SiteWriter(tmp_path).path_for("/rss.xml") == tmp_path / "rss.xml"


class TestWritePage:
    def test_creates_parents(self, tmp_path: Path):
        writer = SiteWriter(tmp_path / "dist")
        path = writer.write_page("/blog/a/", "<p>hi</p>")
        assert path.read_text(encoding="utf-8") == "<p>hi</p>"
        assert writer.written == [path]

    def test_overwrites_without_leftovers(self, tmp_path: Path):
        writer = SiteWriter(tmp_path)
        writer.write_page("/", "one")
        writer.write_page("/", "two")
        assert (tmp_path / "index.html").read_text(encoding="utf-8") == "two"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["index.html"]

    def test_clean(self, tmp_path: Path):
        out = tmp_path / "dist"
        writer = SiteWriter(out)
        writer.write_page("/x/", "x")
        writer.clean()
        assert not out.exists()

    def test_clean_missing_dir(self, tmp_path: Path):
        SiteWriter(tmp_path / "never").clean()

    def test_clean_refuses_working_directory(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "keep.txt").write_text("x", encoding="utf-8")
        with pytest.raises(FolioError, match="refusing to clean"):
            SiteWriter(Path(".")).clean()
        assert (tmp_path / "keep.txt").exists()

    def test_clean_refuses_protected_subtree(self, tmp_path: Path):
        content = tmp_path / "site" / "content"
        content.mkdir(parents=True)
        with pytest.raises(FolioError, match="refusing to clean"):
            SiteWriter(tmp_path / "site").clean(protect=[content])
        assert content.exists()

    def test_clean_sibling_is_allowed(self, tmp_path: Path):
        (tmp_path / "content").mkdir()
        out = tmp_path / "dist"
        out.mkdir()
        SiteWriter(out).clean(protect=[tmp_path / "content"])
        assert not out.exists()
