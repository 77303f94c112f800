"""Tests for chunked line reassembly."""
import pytest
from gcodestream.api import parse_text_sync
from gcodestream.errors import ReassemblerClosedError
from gcodestream.gcode.library import sample_program
from gcodestream.stream.driver import iter_records
from gcodestream.stream.reassembler import LineReassembler, ReassemblerState


def _feed_all(chunks):
    reassembler = LineReassembler()
    lines = []
    for chunk in chunks:
        lines += reassembler.feed(chunk)
    lines += reassembler.finish()
    return lines


class TestLineReassembler:
    def setup_method(self):
        self.reassembler = LineReassembler()

    def test_initial_state(self):
        assert self.reassembler.state is ReassemblerState.IDLE
        assert self.reassembler.pending == ""

    def test_complete_lines(self):
        assert self.reassembler.feed("G0 X1\nG1 X2\n") == ["G0 X1", "G1 X2"]
        assert self.reassembler.state is ReassemblerState.IDLE

    def test_partial_line_is_carried_over(self):
        assert self.reassembler.feed("G0 X1\nG1 X") == ["G0 X1"]
        assert self.reassembler.pending == "G1 X"
        assert self.reassembler.state is ReassemblerState.BUFFERING
        assert self.reassembler.feed("2\n") == ["G1 X2"]
        assert self.reassembler.pending == ""

    def test_chunk_without_terminator(self):
        assert self.reassembler.feed("G0") == []
        assert self.reassembler.feed(" X1") == []
        assert self.reassembler.pending == "G0 X1"

    def test_finish_flushes_unterminated_line(self):
        self.reassembler.feed("G0\nM30")
        assert self.reassembler.finish() == ["M30"]
        assert self.reassembler.state is ReassemblerState.DRAINING

    def test_finish_with_nothing_pending(self):
        self.reassembler.feed("G0\n")
        assert self.reassembler.finish() == []
        assert self.reassembler.finish() == []

    def test_all_line_endings(self):
        assert self.reassembler.feed("A1\r\nB2\rC3\nD4\n") == ["A1", "B2", "C3", "D4"]

    def test_crlf_split_across_chunks(self):
        assert self.reassembler.feed("G0 X1\r") == ["G0 X1"]
        assert self.reassembler.feed("\nG1 X2\r\n") == ["G1 X2"]

    def test_crlf_split_with_lone_lf_chunk(self):
        assert self.reassembler.feed("G0\r") == ["G0"]
        assert self.reassembler.feed("\n") == []
        assert self.reassembler.feed("G1\n") == ["G1"]

    def test_blank_lines_are_dropped(self):
        assert self.reassembler.feed("\n  \n\t\nG0\n\n") == ["G0"]

    def test_lines_are_trimmed(self):
        assert self.reassembler.feed("  G0 X1 \t\n") == ["G0 X1"]

    def test_bytes_chunks(self):
        data = "(é)\nG0\n".encode("utf-8")
        split = data.index(b"\xa9")  # between the two bytes of "é"
        assert self.reassembler.feed(data[:split]) == []
        assert self.reassembler.feed(data[split:]) == ["(é)", "G0"]

    def test_line_count(self):
        self.reassembler.feed("G0\nG1\nG2")
        self.reassembler.finish()
        assert self.reassembler.line_count == 3

    def test_feed_after_finish(self):
        self.reassembler.finish()
        with pytest.raises(ReassemblerClosedError):
            self.reassembler.feed("G0\n")

    def test_abort_discards_carry_over(self):
        assert self.reassembler.feed("G0\nG1 X") == ["G0"]
        self.reassembler.abort()
        assert self.reassembler.pending == ""
        assert self.reassembler.state is ReassemblerState.DRAINING
        assert self.reassembler.finish() == []
        with pytest.raises(ReassemblerClosedError):
            self.reassembler.feed("2\n")


class TestChunkBoundaries:
    text = "G21 (mm)\r\nG90\r\n$H\r\n\r\n%wait\rN3 T0*57\nG1 X1 ; end"

    def test_every_two_way_split(self):
        expected = _feed_all([self.text])
        assert expected == [
            "G21 (mm)", "G90", "$H", "%wait", "N3 T0*57", "G1 X1 ; end",
        ]
        for i in range(len(self.text) + 1):
            chunks = [self.text[:i], self.text[i:]]
            assert _feed_all(chunks) == expected, i

    def test_every_three_way_split(self):
        expected = _feed_all([self.text])
        n = len(self.text)
        for i in range(n + 1):
            for j in range(i, n + 1):
                chunks = [self.text[:i], self.text[i:j], self.text[j:]]
                assert _feed_all(chunks) == expected, (i, j)

    def test_single_character_chunks(self):
        assert _feed_all(list(self.text)) == _feed_all([self.text])

    def test_records_match_in_memory_parse(self):
        text = sample_program().replace("\n", "\r\n")
        expected = parse_text_sync(text)
        for size in (1, 2, 3, 7, 64, 4096):
            chunks = [text[i:i + size] for i in range(0, len(text), size)]
            assert list(iter_records(chunks)) == expected, size

    def test_byte_chunks_match_text(self):
        data = sample_program().encode("utf-8")
        chunks = [data[i:i + 5] for i in range(0, len(data), 5)]
        assert list(iter_records(chunks)) == parse_text_sync(data.decode("utf-8"))
