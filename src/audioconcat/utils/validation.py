"""
Input file validation for audioconcat.

Validation is fail-fast: the first problem raises a typed ValidationError
subclass and nothing further is checked. An unrecognised extension is not an
error, only a logged warning, since FFmpeg reads far more formats than the
common ones listed here.
"""

import os
import stat
import logging
from dataclasses import dataclass
from typing import Iterable, List

from ..exceptions import (
    InputNotFoundError, InputNotReadableError, NotRegularFileError
)


@dataclass(frozen=True)
class ValidatedInput:
    """An input file that passed validation."""
    path: str
    absolute_path: str
    size_bytes: int
    extension: str
    recognized_extension: bool

    @property
    def size_mb(self) -> float:
        return self.size_bytes / (1024 * 1024)


class InputFileValidator:
    """Checks that input paths are readable regular files."""

    KNOWN_AUDIO_EXTENSIONS = frozenset({
        '.mp3', '.wav', '.flac', '.aac', '.ogg', '.m4a', '.wma', '.opus'
    })

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def validate_file(self, file_path: str) -> ValidatedInput:
        """
        Validate a single input path.

        Args:
            file_path: Path as supplied by the user

        Returns:
            ValidatedInput describing the file

        Raises:
            InputNotFoundError: The path does not exist
            InputNotReadableError: The path cannot be inspected or opened
            NotRegularFileError: The path is a directory or special file
        """
        absolute_path = os.path.abspath(file_path)

        try:
            file_stat = os.stat(absolute_path)
        except FileNotFoundError:
            raise InputNotFoundError("file does not exist", absolute_path)
        except OSError as e:
            raise InputNotReadableError(f"failed to access file: {e}", absolute_path) from e

        if not stat.S_ISREG(file_stat.st_mode):
            raise NotRegularFileError("path is not a regular file", absolute_path)

        try:
            with open(absolute_path, 'rb'):
                pass
        except OSError as e:
            raise InputNotReadableError(f"file is not readable: {e}", absolute_path) from e

        extension = os.path.splitext(absolute_path)[1].lower()
        recognized = extension in self.KNOWN_AUDIO_EXTENSIONS
        if not recognized:
            self.logger.warning(
                f"File {absolute_path} does not have a common audio extension ({extension})"
            )

        return ValidatedInput(
            path=file_path,
            absolute_path=absolute_path,
            size_bytes=file_stat.st_size,
            extension=extension,
            recognized_extension=recognized,
        )

    def validate_all(self, file_paths: Iterable[str]) -> List[ValidatedInput]:
        """Validate paths in order, stopping at the first failure."""
        validated = []
        for file_path in file_paths:
            result = self.validate_file(file_path)
            self.logger.info(f"OK: {file_path}")
            validated.append(result)
        return validated
