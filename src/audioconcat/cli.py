"""
Command-line interface for audioconcat.
"""

import argparse
import sys
import logging

from . import __version__
from .config import DEFAULT_SAMPLE_RATE, ConcatConfig, ProgressMode, count_is_sufficient
from .core.pipeline import ConcatPipeline
from .exceptions import AudioConcatError
from .utils.progress_tracker import format_duration

DESCRIPTION = """\
ac is a command-line tool for concatenating multiple audio files into one output file.
It re-encodes the input files to a common format (FLAC) before concatenation."""

EPILOG = """\
Examples:
  ac -output final_audio.wav file1.mp3 file2.wav
  ac -sample-rate 44100 -output final.flac file1.aac file2.ogg"""

VERBOSE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
DEFAULT_FORMAT = '%(levelname)s: %(message)s'


def setup_logging(verbose=False, log_file=None):
    """
    Sets up the logging configuration for the application.

    Args:
        verbose (bool): Show informational messages with timestamps.
        log_file (str): Optional file that receives INFO and above.
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.INFO)

    console_handler = logging.StreamHandler(sys.stderr)
    if verbose:
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter(VERBOSE_FORMAT))
    else:
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter(VERBOSE_FORMAT))
        root_logger.addHandler(file_handler)


def build_parser():
    """
    Build the argument parser.

    Options take a single dash like ``-output``; the double-dash spelling is
    accepted as well.
    """
    parser = argparse.ArgumentParser(
        prog='ac',
        usage='%(prog)s [options] <input-file-1> <input-file-2> ...',
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
    )

    parser.add_argument(
        'input_files',
        nargs='*',
        metavar='input',
        help='Audio files to concatenate, in order (at least two)'
    )

    parser.add_argument(
        '-verbose', '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    parser.add_argument(
        '-output', '--output', '-o',
        default='',
        help='Specify the output audio file (required)'
    )

    parser.add_argument(
        '-sample-rate', '--sample-rate',
        type=int,
        default=DEFAULT_SAMPLE_RATE,
        help=f'Set the sample rate for re-encoding (default: {DEFAULT_SAMPLE_RATE})'
    )

    parser.add_argument(
        '-quiet', '--quiet', '-q',
        action='store_true',
        help='Hide progress bars and the final summary'
    )

    parser.add_argument(
        '-ffmpeg', '--ffmpeg',
        default=None,
        help='FFmpeg executable to use (default: $AUDIOCONCAT_FFMPEG or ffmpeg on PATH)'
    )

    parser.add_argument(
        '-progress', '--progress',
        choices=[mode.value for mode in ProgressMode],
        default=ProgressMode.PARSED.value,
        help='Progress source: parsed (from FFmpeg output) or ticker (synthetic)'
    )

    parser.add_argument(
        '-log-file', '--log-file',
        default=None,
        help='Also write log messages to this file'
    )

    parser.add_argument(
        '-version', '--version',
        action='version',
        version=f'audioconcat {__version__}'
    )

    parser.add_argument(
        '-help', '--help', '-h',
        action='store_true',
        help='Show this help message'
    )

    return parser


def parse_arguments(argv=None):
    """
    Parses command line arguments for the application.

    Returns:
        tuple: (parser, argparse.Namespace)
    """
    parser = build_parser()
    return parser, parser.parse_intermixed_args(argv)


def main(argv=None):
    """Main entry point for the CLI application."""
    parser, args = parse_arguments(argv)

    if args.help:
        parser.print_help()
        sys.exit(0)

    try:
        setup_logging(verbose=args.verbose, log_file=args.log_file)
    except OSError as e:
        print(f"\nError: Cannot open log file {args.log_file}: {e}")
        sys.exit(1)

    if not count_is_sufficient(args.input_files) or not args.output:
        logging.error("Error: You must provide at least two input files and specify an output file.")
        parser.print_help()
        sys.exit(1)

    try:
        config = ConcatConfig.from_arguments(args)
        result = ConcatPipeline(config).run()
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        sys.exit(130)
    except AudioConcatError as e:
        print(f"\nError: {e.get_user_message()}")
        sys.exit(1)
    except Exception as e:
        print(f"\nUnexpected error: {str(e)}")
        logging.error(f'Unexpected error: {str(e)}')
        sys.exit(1)

    if not result.success:
        print(f"\nError: {result.error_message}")
        sys.exit(1)

    if not config.quiet:
        print("\nConcatenation complete!")
        print(f"   - Output: {result.output_file}")
        print(f"   - Size: {result.output_size_mb:.2f} MB")
        print(f"   - Processing time: {format_duration(result.processing_seconds)}")

    sys.exit(0)


if __name__ == '__main__':
    main()
