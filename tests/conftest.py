"""
Pytest configuration and fixtures for audioconcat tests.
"""

import io
import os
import sys
import shutil
import tempfile
from contextlib import contextmanager

import pytest

# Make the src layout importable without installing
SRC_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from audioconcat.exceptions import ExternalToolError
from audioconcat.utils.progress_tracker import PhaseProgress, ProgressTracker


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir)


@pytest.fixture
def sample_audio_files(temp_dir):
    """Create placeholder audio files for testing."""
    files = []
    for i in range(3):
        filepath = os.path.join(temp_dir, f"chapter_{i+1:02d}.mp3")
        with open(filepath, 'wb') as f:
            # Not decodable audio, but FFmpeg is never really run in tests
            f.write(b'ID3\x03\x00\x00\x00\x00\x00\x00' + b'\x00' * 100)
        files.append(filepath)
    return files


@pytest.fixture
def scratch_tempdir(monkeypatch):
    """
    Point the tempfile module at an empty directory so tests can check that
    nothing is left behind.
    """
    scratch = tempfile.mkdtemp(prefix="audioconcat_test_")
    monkeypatch.setattr(tempfile, 'tempdir', scratch)
    yield scratch
    shutil.rmtree(scratch, ignore_errors=True)


class FakeRunner:
    """
    Stands in for ProcessRunner: records every command and writes a small
    file at the command's output path instead of running FFmpeg.
    """

    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.commands = []
        self.descriptions = []
        self.multipliers = []
        self.manifest_contents = []
        self.dependency_checked = False

    def check_dependency(self):
        self.dependency_checked = True
        return "ffmpeg version 6.0"

    def run(self, command, description, multiplier=1):
        self.commands.append(list(command))
        self.descriptions.append(description)
        self.multipliers.append(multiplier)

        if 'concat' in command:
            manifest = command[command.index('-i') + 1]
            with open(manifest, 'r', encoding='utf-8') as f:
                self.manifest_contents.append(f.read())

        if self.fail_on and self.fail_on in description:
            raise ExternalToolError("ffmpeg failed", command, 1, "Invalid data found",
                                    operation=description)

        with open(command[-1], 'wb') as f:
            f.write(b'fake audio for ' + description.encode())


@pytest.fixture
def fake_runner():
    return FakeRunner()


class RecordingIndicator(PhaseProgress):
    """PhaseProgress that remembers its value after every update."""

    def __init__(self, description):
        super().__init__(None)
        self.description = description
        self.history = []

    def advance_to(self, percent):
        moved = super().advance_to(percent)
        self.history.append(self.current)
        return moved


class RecordingTracker(ProgressTracker):
    """Progress tracker without bars that keeps every indicator it hands out."""

    def __init__(self):
        super().__init__(use_progress_bars=False, quiet=True)
        self.indicators = []

    @contextmanager
    def phase_progress(self, description):
        indicator = RecordingIndicator(description)
        self.indicators.append(indicator)
        yield indicator


@pytest.fixture
def recording_tracker():
    return RecordingTracker()


class FakeProcess:
    """Minimal subprocess.Popen replacement with scripted stderr."""

    def __init__(self, stderr_lines, returncode=0):
        self.stderr = io.StringIO("".join(line + "\n" for line in stderr_lines))
        self.returncode = None
        self._final_returncode = returncode
        self.killed = False

    def wait(self, timeout=None):
        self.returncode = self._final_returncode
        return self.returncode

    def poll(self):
        return self.returncode

    def kill(self):
        self.killed = True
        self.returncode = -9


@pytest.fixture
def runner_factory():
    """Build FakeRunner instances with custom failure points."""
    return FakeRunner


@pytest.fixture
def fake_process_factory():
    return FakeProcess
