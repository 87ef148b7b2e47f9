"""
Tests for progress indicators and progress sources.
"""

import time
from unittest.mock import Mock

from audioconcat.config import ProgressMode
from audioconcat.utils.progress_tracker import (
    ParsedProgressSource, PhaseProgress, ProcessingTimer, ProgressTracker,
    TickerProgressSource, create_progress_source, create_progress_tracker,
    format_duration
)


class TestPhaseProgress:
    """Test cases for PhaseProgress."""

    def test_advance_is_monotonic(self):
        indicator = PhaseProgress(None)

        assert indicator.advance_to(40)
        assert not indicator.advance_to(25)
        assert indicator.current == 40

    def test_advance_clamps_to_hundred(self):
        indicator = PhaseProgress(None)
        indicator.advance_to(250)
        assert indicator.current == 100

    def test_complete_forces_hundred(self):
        indicator = PhaseProgress(None)
        indicator.advance_to(10)
        indicator.complete()
        assert indicator.current == 100

    def test_updates_bar_by_delta(self):
        pbar = Mock()
        indicator = PhaseProgress(pbar)

        indicator.advance_to(30)
        indicator.advance_to(20)
        indicator.advance_to(75)

        assert [c.args[0] for c in pbar.update.call_args_list] == [30, 45]

    def test_write_goes_through_bar(self):
        pbar = Mock()
        PhaseProgress(pbar).write("FFmpeg: hello")
        pbar.write.assert_called_once_with("FFmpeg: hello")


class TestProgressSources:
    """Test cases for parsed and synthetic progress sources."""

    def test_parsed_source_uses_multiplier(self):
        indicator = PhaseProgress(None)
        source = ParsedProgressSource(multiplier=2)
        source.start(indicator)

        source.feed("time=00:00:10.00 bitrate=1411.2kbits/s")
        assert indicator.current == 20

        source.feed("Stream mapping:")
        assert indicator.current == 20
        source.stop()

    def test_ticker_advances_and_stops_below_hundred(self):
        indicator = PhaseProgress(None)
        source = TickerProgressSource(interval=0.01, step=30)
        source.start(indicator)

        deadline = time.time() + 2.0
        while indicator.current < 99 and time.time() < deadline:
            time.sleep(0.01)
        source.stop()

        assert indicator.current == 99
        assert source._thread is None

    def test_ticker_ignores_diagnostic_lines(self):
        indicator = PhaseProgress(None)
        source = TickerProgressSource(interval=60)
        source.start(indicator)
        source.feed("time=00:01:30.00")
        source.stop()

        assert indicator.current == 0

    def test_ticker_stop_is_idempotent(self):
        source = TickerProgressSource(interval=60)
        source.start(PhaseProgress(None))
        source.stop()
        source.stop()

    def test_factory_selects_one_source(self):
        parsed = create_progress_source(ProgressMode.PARSED, 2)
        ticker = create_progress_source(ProgressMode.TICKER, 2)

        assert isinstance(parsed, ParsedProgressSource)
        assert parsed.multiplier == 2
        assert isinstance(ticker, TickerProgressSource)


class TestProgressTracker:

    def test_quiet_disables_bars(self):
        tracker = create_progress_tracker(quiet=True)
        assert not tracker.use_progress_bars

    def test_bars_shown_by_default(self):
        tracker = create_progress_tracker()
        assert tracker.use_progress_bars
        assert not tracker.quiet

    def test_phase_progress_without_bars(self):
        tracker = ProgressTracker(use_progress_bars=False)
        with tracker.phase_progress("Concatenating files") as indicator:
            indicator.advance_to(50)
        assert indicator.pbar is None
        assert indicator.current == 50

    def test_phase_progress_with_bar(self):
        tracker = ProgressTracker(use_progress_bars=True)
        with tracker.phase_progress("Re-encoding file 1/2") as indicator:
            indicator.complete()
        assert indicator.pbar.n == 100

    def test_print_step(self, capsys):
        ProgressTracker(use_progress_bars=False).print_step("Validating input files", 1, 5)
        assert "[1/5] Validating input files" in capsys.readouterr().out

    def test_print_step_quiet(self, capsys):
        ProgressTracker(quiet=True).print_step("Validating input files", 1, 5)
        assert capsys.readouterr().out == ""


class TestTimerAndFormatting:

    def test_timer_not_started(self):
        assert ProcessingTimer().get_duration() == 0.0

    def test_timer_measures(self):
        timer = ProcessingTimer()
        timer.start()
        assert timer.stop() >= 0.0

    def test_format_duration(self):
        assert format_duration(12.34) == "12.3s"
        assert format_duration(125) == "2m 5.0s"
        assert format_duration(3725) == "1h 2m 5.0s"
