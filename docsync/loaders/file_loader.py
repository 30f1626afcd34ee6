"""Recursive file loading for code and documentation trees.

Walks a directory depth-first and reads every file whose extension
matches a filter. Unreadable files are skipped with a warning; an
unreadable directory aborts the whole load.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Iterable

from docsync.pipeline.structure import SourceFile
from docsync.utils.config import FileSetConfig, LoaderConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileFilter:
    """Extension predicate deciding which files a loader keeps.

    Attributes:
        extensions: Accepted extensions including the leading dot.
        case_sensitive: Whether ``.MD`` counts as ``.md``.
    """

    extensions: tuple[str, ...] = field(default_factory=tuple)
    case_sensitive: bool = True

    def matches(self, file_name: str) -> bool:
        """Check whether a file name carries an accepted extension.

        Args:
            file_name: Base name of the file.

        Returns:
            True if the extension is accepted.
        """
        ext = os.path.splitext(file_name)[1]
        if not ext:
            return False
        if self.case_sensitive:
            return ext in self.extensions
        return ext.lower() in {e.lower() for e in self.extensions}

    @classmethod
    def from_config(cls, config: FileSetConfig) -> "FileFilter":
        return cls(
            extensions=tuple(config.extensions),
            case_sensitive=config.case_sensitive,
        )


def load_files(
    root_dir: str,
    file_filter: FileFilter,
    exclude_dirs: Iterable[str] = (),
) -> list[SourceFile]:
    """Load every matching file below a directory.

    Directories whose name appears in ``exclude_dirs`` are not entered
    at all. Results follow directory enumeration order, which is
    platform dependent.

    Args:
        root_dir: Directory to walk.
        file_filter: Predicate selecting the files to read.
        exclude_dirs: Directory names to skip wherever they occur.

    Returns:
        The loaded files, possibly empty.

    Raises:
        OSError: If a directory cannot be listed.
    """
    excluded = frozenset(exclude_dirs)
    files: list[SourceFile] = []
    _walk(root_dir, file_filter, excluded, files)
    return files


def _walk(
    directory: str,
    file_filter: FileFilter,
    excluded: frozenset[str],
    files: list[SourceFile],
) -> None:
    try:
        with os.scandir(directory) as it:
            entries = list(it)
    except OSError as e:
        logger.error("Error reading directory %s: %s", directory, e)
        raise

    for entry in entries:
        full_path = os.path.join(directory, entry.name)
        if entry.is_dir(follow_symlinks=False):
            if entry.name in excluded:
                logger.debug("Skipping excluded directory %s", full_path)
                continue
            _walk(full_path, file_filter, excluded, files)
        elif entry.is_file() and file_filter.matches(entry.name):
            try:
                with open(full_path, encoding="utf-8", newline="") as f:
                    content = f.read()
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Skipping unreadable file %s: %s", full_path, e)
                continue
            files.append(SourceFile(path=full_path, content=content))


def load_codebase(root_dir: str, config: LoaderConfig) -> list[SourceFile]:
    """Load source files using the configured code filter."""
    files = load_files(
        root_dir,
        FileFilter.from_config(config.code),
        config.code.exclude_dirs,
    )
    logger.info("Loaded %d code file(s) from %s", len(files), root_dir)
    return files


def load_documentation(root_dir: str, config: LoaderConfig) -> list[SourceFile]:
    """Load documentation files using the configured docs filter."""
    files = load_files(
        root_dir,
        FileFilter.from_config(config.docs),
        config.docs.exclude_dirs,
    )
    logger.info("Loaded %d documentation file(s) from %s", len(files), root_dir)
    return files
