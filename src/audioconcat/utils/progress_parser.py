"""
Progress extraction from FFmpeg diagnostic output.
"""

import re

MAX_PROGRESS = 100

# Phase multipliers: re-encode phases scan the media twice (decode + encode)
REENCODE_MULTIPLIER = 2
CONCAT_MULTIPLIER = 1
FINAL_MULTIPLIER = 2

_PROGRESS_PATTERN = re.compile(
    r'out_time_ms=(\d+)|time=(\d+):(\d+):(\d+(?:\.\d+)?)'
)


def parse_progress_line(line: str, multiplier: float = 1) -> int:
    """
    Extract a completion percentage from one line of FFmpeg output.

    Two encodings are understood: the ``out_time_ms=<microseconds>`` key of
    ``-progress`` output, which counts in tenths of a percent per second, and
    the ``time=HH:MM:SS.ff`` field of the stats line, which counts one percent
    per second. Both are scaled by ``multiplier``.

    Args:
        line: A single line of diagnostic text
        multiplier: Phase scale factor

    Returns:
        int: Percentage in [0, 100]; 0 when the line carries no timestamp
    """
    match = _PROGRESS_PATTERN.search(line)
    if not match:
        return 0

    microseconds, hours, minutes, seconds = match.groups()

    if microseconds is not None:
        progress = int((int(microseconds) / 1000000.0) * multiplier * 10)
    else:
        total_seconds = int(hours) * 3600 + int(minutes) * 60 + float(seconds)
        progress = int(total_seconds * multiplier)

    return max(0, min(progress, MAX_PROGRESS))
