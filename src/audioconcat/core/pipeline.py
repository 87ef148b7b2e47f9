"""
Concatenation pipeline orchestrating validation and the FFmpeg phases.
"""

import os
import shutil
import logging
from dataclasses import dataclass
from typing import List, Optional

from .ffmpeg import FFmpegCommandBuilder, INTERMEDIATE_EXTENSION
from .runner import ProcessRunner
from ..config import ConcatConfig
from ..exceptions import AudioConcatError, ResourceError
from ..utils.file_utils import (
    ensure_parent_directory, get_file_size_mb, intermediate_file_names,
    log_file_size, replace_extension
)
from ..utils.progress_parser import (
    CONCAT_MULTIPLIER, FINAL_MULTIPLIER, REENCODE_MULTIPLIER
)
from ..utils.progress_tracker import ProcessingTimer, ProgressTracker, create_progress_tracker
from ..utils.resource_manager import managed_manifest_file, managed_temp_directory, read_manifest
from ..utils.validation import InputFileValidator, ValidatedInput

TOTAL_STEPS = 5
COMBINED_SUFFIX = ".combined"


@dataclass
class ConcatResult:
    """Result of a concatenation run."""
    success: bool
    output_file: Optional[str] = None
    error: Optional[AudioConcatError] = None
    error_message: Optional[str] = None
    processing_seconds: float = 0.0
    output_size_mb: float = 0.0
    final_encode_performed: bool = False


class ConcatPipeline:
    """
    Runs validate -> re-encode -> manifest -> concatenate -> final encode.

    Every phase blocks on its external process before the next one starts,
    and the first failure ends the run. Temporary files are removed on every
    exit path.
    """

    def __init__(self, config: ConcatConfig, runner: ProcessRunner = None,
                 validator: InputFileValidator = None, progress_tracker: ProgressTracker = None):
        """
        Initialize the pipeline.

        Args:
            config: Run configuration
            runner: Executes external commands (default: ProcessRunner from config)
            validator: Input validator
            progress_tracker: Progress display shared with the default runner
        """
        self.config = config
        self.progress_tracker = progress_tracker or create_progress_tracker(quiet=config.quiet)
        self.runner = runner or ProcessRunner(
            ffmpeg_path=config.ffmpeg_path,
            progress_tracker=self.progress_tracker,
            progress_mode=config.progress_mode,
            verbose=config.verbose,
        )
        self.validator = validator or InputFileValidator()
        self.commands = FFmpegCommandBuilder(
            ffmpeg_path=config.ffmpeg_path,
            sample_rate=config.sample_rate,
            channels=config.channels,
        )
        self.logger = logging.getLogger(__name__)

    @property
    def needs_final_encode(self) -> bool:
        """Whether the output format differs from the intermediate codec."""
        return self.config.output_extension != INTERMEDIATE_EXTENSION

    def run(self) -> ConcatResult:
        """
        Execute the whole pipeline.

        Returns:
            ConcatResult: success flag plus the output path, or the error that
            stopped the run
        """
        timer = ProcessingTimer()
        timer.start()

        try:
            output_file = self._run_pipeline()
        except AudioConcatError as e:
            self.logger.error(f"Concatenation failed: {e}")
            return ConcatResult(
                success=False,
                error=e,
                error_message=e.get_user_message(),
                processing_seconds=timer.stop(),
            )

        return ConcatResult(
            success=True,
            output_file=output_file,
            processing_seconds=timer.stop(),
            output_size_mb=get_file_size_mb(output_file),
            final_encode_performed=self.needs_final_encode,
        )

    def _run_pipeline(self) -> str:
        tracker = self.progress_tracker

        tracker.print_step("Validating input files", 1, TOTAL_STEPS)
        self.logger.info("Validating input files...")
        inputs = self.validator.validate_all(self.config.input_files)
        self._log_inputs(inputs)

        self.runner.check_dependency()

        with managed_temp_directory(parent=self.config.temp_root) as temp_dir:
            if self.config.verbose:
                self.logger.info(f"Temporary directory for re-encoded files: {temp_dir}")

            tracker.print_step("Re-encoding input files", 2, TOTAL_STEPS)
            converted_files = self._reencode_inputs(inputs, temp_dir)

            tracker.print_step("Building concatenation list", 3, TOTAL_STEPS)
            combined_file = os.path.join(
                temp_dir,
                os.path.basename(replace_extension(self.config.output_file,
                                                   COMBINED_SUFFIX + INTERMEDIATE_EXTENSION))
            )
            with managed_manifest_file(converted_files, parent=self.config.temp_root) as manifest:
                self.logger.info(f"Temporary file created at: {manifest}")
                self.logger.info(f"Temporary file content:\n{read_manifest(manifest)}")

                tracker.print_step("Concatenating files", 4, TOTAL_STEPS)
                self.runner.run(
                    self.commands.concat_command(manifest, combined_file),
                    "Concatenating files",
                    CONCAT_MULTIPLIER,
                )
            self.logger.info(f"Concatenation of audio files is successful! Combined file: {combined_file}")
            log_file_size(combined_file, "Combined", self.config.verbose)

            tracker.print_step("Writing output", 5, TOTAL_STEPS)
            self._finalize(combined_file)

        log_file_size(self.config.output_file, "Final output", self.config.verbose)
        return self.config.output_file

    def _reencode_inputs(self, inputs: List[ValidatedInput], temp_dir: str) -> List[str]:
        names = intermediate_file_names((i.absolute_path for i in inputs), INTERMEDIATE_EXTENSION)
        converted_files = []

        for index, (validated, name) in enumerate(zip(inputs, names), 1):
            converted_file = os.path.join(temp_dir, name)
            self.logger.info(f"Re-encoding {validated.absolute_path} to {converted_file}")

            self.runner.run(
                self.commands.reencode_command(validated.absolute_path, converted_file),
                f"Re-encoding file {index}/{len(inputs)}",
                REENCODE_MULTIPLIER,
            )
            converted_files.append(converted_file)

        return converted_files

    def _finalize(self, combined_file: str):
        try:
            created_directory = ensure_parent_directory(self.config.output_file)
        except OSError as e:
            raise ResourceError(f"Cannot create output directory: {e}", "output_directory") from e

        try:
            self._write_output(combined_file)
        except BaseException:
            if created_directory is not None:
                self.logger.info(f"Removing output directory created by this run: {created_directory}")
                shutil.rmtree(created_directory, ignore_errors=True)
            raise

    def _write_output(self, combined_file: str):
        output_file = self.config.output_file

        if not self.needs_final_encode:
            # The combined intermediate already is the requested format
            self.logger.info(f"Moving {combined_file} to {output_file}")
            try:
                shutil.move(combined_file, output_file)
            except OSError as e:
                raise ResourceError(f"Failed to move combined file to {output_file}: {e}",
                                    "output_file") from e
            return

        self.logger.info(f"Re-encoding {combined_file} to {output_file}")
        self.runner.run(
            self.commands.final_encode_command(combined_file, output_file),
            "Final encoding",
            FINAL_MULTIPLIER,
        )
        self.logger.info(f"Re-encoding to {output_file} successful!")

    def _log_inputs(self, inputs: List[ValidatedInput]):
        if not self.config.verbose:
            return

        self.logger.info("Files to be processed:")
        for i, validated in enumerate(inputs, 1):
            self.logger.info(f"  {i}. {validated.absolute_path} ({validated.size_mb:.2f} MB)")
