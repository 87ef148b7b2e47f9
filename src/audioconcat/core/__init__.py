"""
Core concatenation modules.
"""

from .ffmpeg import FFmpegCommandBuilder
from .runner import ProcessRunner
from .pipeline import ConcatPipeline, ConcatResult

__all__ = [
    "FFmpegCommandBuilder",
    "ProcessRunner",
    "ConcatPipeline",
    "ConcatResult"
]
