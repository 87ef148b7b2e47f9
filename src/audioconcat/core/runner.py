"""
External process supervision with live progress.
"""

import subprocess
import logging
from collections import deque
from typing import Sequence

from .ffmpeg import FFmpegCommandBuilder
from ..config import DEFAULT_FFMPEG, ProgressMode
from ..exceptions import DependencyError, ExternalToolError
from ..utils.progress_tracker import (
    ProgressTracker, create_progress_source, create_progress_tracker
)

# Lines of diagnostic output kept for error messages
OUTPUT_TAIL_LINES = 20


class ProcessRunner:
    """Runs FFmpeg commands, turning their stderr into progress updates."""

    def __init__(self, ffmpeg_path: str = DEFAULT_FFMPEG, progress_tracker: ProgressTracker = None,
                 progress_mode: ProgressMode = ProgressMode.PARSED, verbose: bool = False):
        """
        Initialize the runner.

        Args:
            ffmpeg_path: Executable used for the dependency check
            progress_tracker: Creates the per-phase indicators
            progress_mode: Which progress source drives the indicators
            verbose: Echo every diagnostic line
        """
        self.ffmpeg_path = ffmpeg_path
        self.progress_tracker = progress_tracker or create_progress_tracker()
        self.progress_mode = progress_mode
        self.verbose = verbose
        self.logger = logging.getLogger(__name__)

    def check_dependency(self) -> str:
        """
        Check if FFmpeg is available and accessible.

        Returns:
            str: First line of the version banner

        Raises:
            DependencyError: If FFmpeg is not found or not working.
        """
        try:
            result = subprocess.run(FFmpegCommandBuilder(self.ffmpeg_path).version_command(),
                                    capture_output=True, check=True, text=True)
        except FileNotFoundError:
            raise DependencyError(
                "ffmpeg",
                f"FFmpeg is not installed or not found in system PATH ({self.ffmpeg_path})"
            )
        except subprocess.CalledProcessError as e:
            raise DependencyError(
                "ffmpeg",
                f"FFmpeg is installed but not working properly: {e}"
            )
        except OSError as e:
            raise DependencyError("ffmpeg", f"FFmpeg could not be started: {e}")

        version_line = (result.stdout or result.stderr).split('\n')[0]
        self.logger.info(f"FFmpeg dependency check passed: {version_line}")
        return version_line

    def run(self, command: Sequence[str], description: str, multiplier: float = 1):
        """
        Run one command to completion while showing its progress.

        Args:
            command: Full argument list
            description: Label for the progress indicator
            multiplier: Scale factor passed to the progress parser

        Raises:
            ExternalToolError: If the process cannot start or exits non-zero
        """
        self.logger.debug(f"Running command: {' '.join(command)}")

        with self.progress_tracker.phase_progress(description) as indicator:
            try:
                process = subprocess.Popen(
                    list(command),
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.PIPE,
                    text=True,
                    encoding="utf-8",
                    errors="replace",
                )
            except OSError as e:
                raise ExternalToolError(f"failed to start ffmpeg: {e}", command,
                                        operation=description) from e

            source = create_progress_source(self.progress_mode, multiplier)
            output_tail = deque(maxlen=OUTPUT_TAIL_LINES)
            source.start(indicator)
            try:
                for line in process.stderr:
                    line = line.rstrip()
                    if not line:
                        continue
                    output_tail.append(line)
                    if self.verbose:
                        indicator.write(f"FFmpeg: {line}")
                    source.feed(line)

                returncode = process.wait()
            finally:
                source.stop()
                if process.poll() is None:
                    process.kill()
                    process.wait()
                process.stderr.close()

            if returncode != 0:
                self.logger.error(f"FFmpeg exited with status {returncode}: {' '.join(command)}")
                raise ExternalToolError("ffmpeg failed", command, returncode,
                                        "\n".join(output_tail), operation=description)

            indicator.complete()
