"""
Utility modules for audio concatenation.
"""

from .validation import InputFileValidator, ValidatedInput
from .progress_parser import parse_progress_line
from .progress_tracker import create_progress_tracker, ProcessingTimer
from .resource_manager import managed_manifest_file, managed_temp_directory

__all__ = [
    "InputFileValidator",
    "ValidatedInput",
    "parse_progress_line",
    "create_progress_tracker",
    "ProcessingTimer",
    "managed_manifest_file",
    "managed_temp_directory"
]
