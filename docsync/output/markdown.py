"""Markdown output for updated documentation files."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class MarkdownWriter:
    """Writes updated documents into an output directory.

    Each document keeps the base name of the file it replaces. Writes
    overwrite existing files and are not atomic.
    """

    def __init__(self, output_dir: str) -> None:
        """Initialize the Markdown writer.

        Args:
            output_dir: Directory where updated files will be written.
                It is created on first write if absent.
        """
        self.output_dir = Path(output_dir)

    def output_path_for(self, doc_path: str) -> Path:
        """Return where the update for a document will be written."""
        return self.output_dir / os.path.basename(doc_path)

    def write_update(self, doc_path: str, content: str) -> Path:
        """Write the updated content of a document.

        Args:
            doc_path: Path of the original document.
            content: The replacement Markdown.

        Returns:
            Path to the written file.

        Raises:
            OSError: If the directory or file cannot be written.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        md_path = self.output_path_for(doc_path)
        with open(md_path, "w", encoding="utf-8", newline="") as f:
            f.write(content)

        logger.info("Updated documentation saved to: %s", md_path)
        return md_path
