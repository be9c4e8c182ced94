"""File loading for the initial sandbox contents.

Combines files read from a local directory with inline files into one
ordered mapping of relative path -> content.
"""

from __future__ import annotations

import logging
import posixpath
from pathlib import Path

from .output import is_binary
from .types import UploadDirectory

logger = logging.getLogger(__name__)


def _read_directory(upload: UploadDirectory) -> dict[str, str]:
    root = Path(upload.source)
    if not root.is_dir():
        raise FileNotFoundError(f"Upload directory does not exist: {upload.source}")

    files: dict[str, str] = {}
    for path in sorted(root.glob(upload.include)):
        if not path.is_file():
            continue
        data = path.read_bytes()
        relative = path.relative_to(root).as_posix()
        if is_binary(data):
            logger.debug("Skipping binary file %s", relative)
            continue
        files[relative] = data.decode("utf-8", errors="replace")
    return files


def _relative_path(path: str) -> str:
    """Normalize an inline file key to a path relative to the destination.

    Leading slashes are dropped so every file nests under the destination.
    """
    relative = posixpath.normpath(path.lstrip("/"))
    if relative == "." or relative == ".." or relative.startswith("../"):
        raise ValueError(f"File path must name a file inside the destination: {path!r}")
    return relative


def load_files(
    files: dict[str, str] | None = None,
    upload_directory: UploadDirectory | None = None,
) -> dict[str, str]:
    """Load the files to materialize in the sandbox.

    Directory files come first (sorted), then inline files. Inline paths are
    normalized and made relative, so "/etc/x" nests as "etc/x". An inline
    file overrides a directory file with the same path and keeps its position.

    Args:
        files: Inline files as relative path -> content.
        upload_directory: Local directory to read files from.

    Returns:
        Ordered mapping of relative POSIX path -> content.

    Raises:
        FileNotFoundError: If the upload directory does not exist.
        ValueError: If an inline path points outside the destination.
    """
    loaded: dict[str, str] = {}
    if upload_directory is not None:
        loaded.update(_read_directory(upload_directory))
    if files:
        for path, content in files.items():
            loaded[_relative_path(path)] = content
    return loaded
