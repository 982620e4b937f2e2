"""Tests for output line sinks."""

import logging

import pytest

from sox_bridge.utils.sox import LengthParser, LineSink, LoggingSink, RecordingSink

# Trimmed `sox file.wav -n stat` output.
STAT_OUTPUT = """Samples read:            529200
Length (seconds):     12.000000
Scaled by:         2147483647.0
Maximum amplitude:     0.999969
Minimum amplitude:    -1.000000
Rough   frequency:          441
Volume adjustment:        1.000"""


def feed(sink: LineSink, lines, exit_code=0):
    for line in lines:
        sink.on_line(line)
    sink.on_complete(exit_code)


class TestLengthParser:
    """Tests for parsing the stat Length line."""

    def test_parses_length_and_ignores_other_lines(self):
        """Test that the Length line is parsed and the rest ignored."""
        parser = LengthParser()
        feed(parser, ["Length : 12.34", "Samples read: 100", "Scaled by: 2.0"])

        assert parser.length == 12.34
        assert parser.exit_code == 0

    def test_parses_real_stat_output(self):
        """Test the field layout sox actually prints."""
        parser = LengthParser()
        feed(parser, STAT_OUTPUT.splitlines())

        assert parser.length == 12.0

    def test_no_space_before_value(self):
        """Test the compact Length:<seconds> form."""
        parser = LengthParser()
        feed(parser, ["Length:3.5"])

        assert parser.length == 3.5

    def test_default_is_none(self):
        """Test that no Length line leaves the duration unset."""
        parser = LengthParser()
        feed(parser, ["Samples read: 100"], exit_code=2)

        assert parser.length is None
        assert parser.exit_code == 2

    def test_malformed_value_is_ignored(self, caplog):
        """Test that a bad number is logged, not raised."""
        parser = LengthParser()
        with caplog.at_level(logging.WARNING):
            feed(parser, ["Length : abc"])

        assert parser.length is None
        assert "abc" in caplog.text

    def test_malformed_value_keeps_previous_length(self):
        """Test that a later bad value does not clobber a good one."""
        parser = LengthParser()
        feed(parser, ["Length : 4.25", "Length : oops"])

        assert parser.length == 4.25

    @pytest.mark.parametrize(
        "line",
        [
            "Length: 1:2",  # three segments
            "Length 7",  # no separator
            " Length : 9",  # does not start with the field name
            "Sample Length : 9",
        ],
    )
    def test_non_matching_lines_ignored(self, line):
        """Test lines that must not be taken as the duration."""
        parser = LengthParser()
        feed(parser, [line])

        assert parser.length is None

    def test_last_valid_value_wins(self):
        """Test that a later Length line replaces an earlier one."""
        parser = LengthParser()
        feed(parser, ["Length : 1.0", "Length : 2.0"])

        assert parser.length == 2.0


class TestLoggingSink:
    """Tests for the logging sink."""

    def test_logs_lines_and_exit_code(self, caplog):
        """Test that each line and the return value are logged."""
        sink = LoggingSink("trim")
        with caplog.at_level(logging.INFO):
            feed(sink, ["sox WARN dither: clipped"], exit_code=1)

        assert "trim: sox WARN dither: clipped" in caplog.text
        assert "trim: got return value 1" in caplog.text


class TestRecordingSink:
    """Tests for the recording sink."""

    def test_keeps_lines_in_order(self):
        """Test that lines and the exit code are recorded."""
        sink = RecordingSink()
        feed(sink, ["a", "b", "c"], exit_code=0)

        assert sink.lines == ["a", "b", "c"]
        assert sink.exit_code == 0

    def test_also_logs(self, caplog):
        """Test that recorded lines are logged under the sink name."""
        sink = RecordingSink("concatenate")
        with caplog.at_level(logging.INFO):
            feed(sink, ["sox FAIL formats: bad header"], exit_code=2)

        assert "concatenate: sox FAIL formats: bad header" in caplog.text
        assert "concatenate: got return value 2" in caplog.text
        assert sink.lines == ["sox FAIL formats: bad header"]

    def test_line_sink_is_abstract(self):
        """Test that LineSink cannot be instantiated directly."""
        with pytest.raises(TypeError):
            LineSink()
