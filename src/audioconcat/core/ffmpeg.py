"""
FFmpeg command lines used by the concatenation pipeline.
"""

from typing import List

from ..config import DEFAULT_CHANNELS, DEFAULT_FFMPEG, DEFAULT_SAMPLE_RATE

INTERMEDIATE_CODEC = "flac"
INTERMEDIATE_EXTENSION = ".flac"


class FFmpegCommandBuilder:
    """Builds argument lists for each FFmpeg invocation."""

    def __init__(self, ffmpeg_path: str = DEFAULT_FFMPEG,
                 sample_rate: int = DEFAULT_SAMPLE_RATE,
                 channels: int = DEFAULT_CHANNELS):
        self.ffmpeg_path = ffmpeg_path
        self.sample_rate = sample_rate
        self.channels = channels

    def _base_command(self) -> List[str]:
        return [
            self.ffmpeg_path,
            '-hide_banner',
            '-nostdin',  # Never wait on the terminal
            '-y',        # Automatically overwrite existing files
        ]

    def version_command(self) -> List[str]:
        return [self.ffmpeg_path, '-version']

    def reencode_command(self, input_file: str, output_file: str) -> List[str]:
        """Transcode one input to the common intermediate format."""
        return self._base_command() + [
            '-i', input_file,
            '-vn',
            '-ar', str(self.sample_rate),
            '-ac', str(self.channels),
            '-c:a', INTERMEDIATE_CODEC,
            output_file,
        ]

    def concat_command(self, manifest_file: str, output_file: str) -> List[str]:
        """Join the intermediates listed in ``manifest_file`` without re-encoding."""
        return self._base_command() + [
            '-f', 'concat',
            '-safe', '0',
            '-i', manifest_file,
            '-c', 'copy',
            output_file,
        ]

    def final_encode_command(self, input_file: str, output_file: str) -> List[str]:
        """Encode the combined intermediate; FFmpeg picks the codec from the extension."""
        return self._base_command() + [
            '-i', input_file,
            output_file,
        ]
