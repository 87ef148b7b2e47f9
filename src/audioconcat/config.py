"""
Immutable run configuration for audioconcat.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from .exceptions import ConfigurationError

DEFAULT_SAMPLE_RATE = 48000
DEFAULT_CHANNELS = 2
DEFAULT_FFMPEG = "ffmpeg"
FFMPEG_ENV_VAR = "AUDIOCONCAT_FFMPEG"
MIN_INPUT_FILES = 2


class ProgressMode(Enum):
    """Where phase progress comes from."""
    PARSED = "parsed"    # Percentages parsed from the FFmpeg diagnostic stream
    TICKER = "ticker"    # Fixed-interval synthetic increments


@dataclass(frozen=True)
class ConcatConfig:
    """Settings for one concatenation run."""
    input_files: Tuple[str, ...]
    output_file: str
    sample_rate: int = DEFAULT_SAMPLE_RATE
    channels: int = DEFAULT_CHANNELS
    verbose: bool = False
    quiet: bool = False
    ffmpeg_path: str = DEFAULT_FFMPEG
    progress_mode: ProgressMode = ProgressMode.PARSED
    temp_root: Optional[str] = None

    def __post_init__(self):
        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, 'input_files', tuple(self.input_files))
        if not isinstance(self.progress_mode, ProgressMode):
            object.__setattr__(self, 'progress_mode', ProgressMode(self.progress_mode))

        if len(self.input_files) < MIN_INPUT_FILES:
            raise ConfigurationError(
                f"at least {MIN_INPUT_FILES} input files are required",
                "input_files", len(self.input_files)
            )
        if not self.output_file:
            raise ConfigurationError("an output file must be specified", "output_file")
        if self.sample_rate <= 0:
            raise ConfigurationError("sample rate must be a positive integer",
                                     "sample_rate", self.sample_rate)
        if self.channels <= 0:
            raise ConfigurationError("channel count must be a positive integer",
                                     "channels", self.channels)
        if not self.ffmpeg_path:
            raise ConfigurationError("FFmpeg executable path is empty", "ffmpeg_path")

    @property
    def output_extension(self) -> str:
        """Lower-cased extension of the requested output, including the dot."""
        return os.path.splitext(self.output_file)[1].lower()

    @classmethod
    def from_arguments(cls, args, environ=None) -> "ConcatConfig":
        """
        Build a configuration from parsed command line arguments.

        The FFmpeg path falls back to the AUDIOCONCAT_FFMPEG environment
        variable, then to ``ffmpeg`` on the PATH.

        Args:
            args: argparse.Namespace produced by ``cli.parse_arguments``
            environ: Mapping used instead of ``os.environ`` (for tests)

        Raises:
            ConfigurationError: If any value is out of range
        """
        environ = os.environ if environ is None else environ
        ffmpeg_path = args.ffmpeg or environ.get(FFMPEG_ENV_VAR) or DEFAULT_FFMPEG

        return cls(
            input_files=tuple(args.input_files),
            output_file=args.output,
            sample_rate=args.sample_rate,
            verbose=args.verbose,
            quiet=args.quiet,
            ffmpeg_path=ffmpeg_path,
            progress_mode=ProgressMode(args.progress),
        )


def count_is_sufficient(input_files: Sequence[str]) -> bool:
    """Check the input count invariant without building a config."""
    return len(input_files) >= MIN_INPUT_FILES
