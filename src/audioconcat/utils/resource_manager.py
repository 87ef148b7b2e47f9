"""
Temporary resource management for audioconcat.

Both context managers remove what they created on every exit path, including
exceptions and KeyboardInterrupt.
"""

import os
import shutil
import tempfile
import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from ..exceptions import ManifestError, ResourceError


@contextmanager
def managed_temp_directory(prefix: str = "audioconcat_", parent: Optional[str] = None) -> Iterator[str]:
    """
    Context manager for a process-scoped temporary directory with guaranteed cleanup.

    Args:
        prefix: Directory name prefix
        parent: Directory to create it in (default: system temp location)

    Raises:
        ResourceError: If the directory cannot be created
    """
    try:
        temp_dir = tempfile.mkdtemp(prefix=prefix, dir=parent)
    except OSError as e:
        raise ResourceError(f"Failed to create temporary directory: {e}", "temp_directory") from e

    logging.info(f"Created temporary directory: {temp_dir}")
    try:
        yield temp_dir
    finally:
        if os.path.exists(temp_dir):
            try:
                shutil.rmtree(temp_dir)
                logging.info(f"Cleaned up temporary directory: {temp_dir}")
            except OSError as e:
                logging.error(f"Failed to cleanup temporary directory {temp_dir}: {e}")


def escape_concat_path(path: str) -> str:
    """
    Escape a path for a single-quoted entry in an FFmpeg concat list.

    Backslashes are only separators on Windows; elsewhere they are ordinary
    file name characters and are kept.
    """
    if os.sep == '\\':
        path = path.replace('\\', '/')
    return path.replace("'", "'\\''")


def format_manifest(file_paths: Sequence[str]) -> str:
    """Render the concat demuxer list for ``file_paths`` in order."""
    return "".join(f"file '{escape_concat_path(path)}'\n" for path in file_paths)


@contextmanager
def managed_manifest_file(file_paths: Sequence[str], parent: Optional[str] = None) -> Iterator[str]:
    """
    Write a concatenation manifest and delete it when the block exits.

    Args:
        file_paths: Intermediate files, in concatenation order
        parent: Directory to create the manifest in (default: system temp location)

    Yields:
        str: Path of the manifest file

    Raises:
        ResourceError: If the manifest file cannot be created
        ManifestError: If writing the list fails
    """
    try:
        fd, manifest_path = tempfile.mkstemp(prefix="concat-list-", suffix=".txt", dir=parent)
    except OSError as e:
        raise ResourceError(f"Failed to create temporary file: {e}", "manifest_file") from e

    os.close(fd)

    try:
        try:
            with open(manifest_path, 'w', encoding='utf-8') as f:
                f.write(format_manifest(file_paths))
        except OSError as e:
            raise ManifestError(f"Failed to write to temporary file list: {e}", manifest_path) from e

        logging.info(f"Temporary concatenation list file: {manifest_path}")
        yield manifest_path
    finally:
        try:
            os.remove(manifest_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logging.error(f"Failed to remove concatenation list {manifest_path}: {e}")


def read_manifest(manifest_path: str) -> str:
    """
    Read a manifest back for logging.

    Raises:
        ManifestError: If the file cannot be read
    """
    try:
        with open(manifest_path, 'r', encoding='utf-8') as f:
            return f.read()
    except OSError as e:
        raise ManifestError(f"Failed to read temporary file: {e}", manifest_path) from e
