"""
audioconcat - Concatenate audio files with FFmpeg

Re-encodes every input to a common intermediate format, joins them with the
FFmpeg concat demuxer and, if needed, encodes the result to the requested
output format.
"""

__version__ = "1.0.0"
__author__ = "audioconcat Project"

from .config import ConcatConfig, ProgressMode
from .core.pipeline import ConcatPipeline, ConcatResult
from .exceptions import AudioConcatError

__all__ = [
    "ConcatConfig",
    "ConcatPipeline",
    "ConcatResult",
    "ProgressMode",
    "AudioConcatError",
    "__version__"
]
