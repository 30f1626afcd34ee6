"""Tests for the Markdown output writer."""

from pathlib import Path

import pytest

from docsync.output.markdown import MarkdownWriter


@pytest.fixture
def writer(tmp_path: Path) -> MarkdownWriter:
    """Create a MarkdownWriter with a nested, not yet existing directory."""
    return MarkdownWriter(output_dir=str(tmp_path / "out" / "nested"))


class TestWriteUpdate:
    """Tests for MarkdownWriter.write_update."""

    def test_creates_directory_and_uses_basename(
        self, writer: MarkdownWriter, tmp_path: Path
    ) -> None:
        path = writer.write_update("/some/docs/guide/a.md", "# Updated\n")
        assert path == tmp_path / "out" / "nested" / "a.md"
        assert path.read_text(encoding="utf-8") == "# Updated\n"

    def test_overwrites_existing(self, writer: MarkdownWriter) -> None:
        writer.write_update("a.md", "first")
        path = writer.write_update("a.md", "second")
        assert path.read_text(encoding="utf-8") == "second"

    def test_content_written_exactly(self, writer: MarkdownWriter) -> None:
        content = "# Title\r\n\nünïcode ✓\n"
        path = writer.write_update("a.md", content)
        assert path.read_bytes() == content.encode("utf-8")

    def test_output_path_for(self, writer: MarkdownWriter, tmp_path: Path) -> None:
        assert writer.output_path_for("x/y/README.md") == (
            tmp_path / "out" / "nested" / "README.md"
        )

    def test_unwritable_directory_raises(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        with pytest.raises(OSError):
            MarkdownWriter(str(blocker)).write_update("a.md", "x")
