"""
File utility functions for audio concatenation.
"""

import os
import logging
from typing import Iterable, List, Optional

INTERMEDIATE_SUFFIX = "_converted"


def get_file_size_mb(file_path: str) -> float:
    """
    Get file size in megabytes.

    Args:
        file_path: Path to the file

    Returns:
        float: File size in MB, 0.0 if the file cannot be inspected
    """
    try:
        return os.path.getsize(file_path) / (1024 * 1024)
    except OSError:
        return 0.0


def log_file_size(file_path: str, label: str, verbose: bool):
    """Log the size and location of a file when verbose mode is enabled."""
    if not verbose or not os.path.exists(file_path):
        return

    logging.info(f"{label} file size: {get_file_size_mb(file_path):.2f} MB")
    logging.info(f"{label} file location: {file_path}")


def intermediate_file_names(input_files: Iterable[str], extension: str) -> List[str]:
    """
    Name the intermediate file for each input.

    The name is the input's base name (extension included) plus a suffix, so
    ``book/ch1.mp3`` becomes ``ch1.mp3_converted.flac``. A name that is
    already taken gets a counter (``ch1.mp3_2_converted.flac``), bumped until
    it is unused, so every input gets its own file.

    Args:
        input_files: Input paths in order
        extension: Intermediate extension including the dot

    Returns:
        list: One distinct file name per input, same order
    """
    names = []
    used = set()
    for input_file in input_files:
        base_name = os.path.basename(input_file)
        name = f"{base_name}{INTERMEDIATE_SUFFIX}{extension}"
        count = 1
        while name in used:
            count += 1
            name = f"{base_name}_{count}{INTERMEDIATE_SUFFIX}{extension}"

        used.add(name)
        names.append(name)
    return names


def replace_extension(file_path: str, extension: str) -> str:
    """Swap the extension of ``file_path`` for ``extension`` (dot included)."""
    return os.path.splitext(file_path)[0] + extension


def ensure_parent_directory(file_path: str) -> Optional[str]:
    """
    Ensure that the directory holding ``file_path`` exists.

    Args:
        file_path: Path of a file about to be written

    Returns:
        str: Outermost directory that had to be created, or None if the
        directory already existed
    """
    directory = os.path.dirname(os.path.abspath(file_path))

    created = None
    ancestor = directory
    while not os.path.isdir(ancestor):
        created = ancestor
        parent = os.path.dirname(ancestor)
        if parent == ancestor:
            break
        ancestor = parent

    if created is not None:
        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as e:
            logging.error(f"Failed to create directory {directory}: {e}")
            raise
    return created
