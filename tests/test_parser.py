"""Tests for the G-code line parser."""
import pytest
from gcodestream.config import ParserConfig
from gcodestream.gcode.library import sample_program
from gcodestream.gcode.parser import GCodeLineParser, LineRecord, parse_line


class TestGCodeLineParser:
    def setup_method(self):
        self.parser = GCodeLineParser()

    def test_parse_g1_move(self):
        record = self.parser.parse_line("G1 X10.5 Y20.0 E0.5 F1200")
        assert record.line == "G1 X10.5 Y20.0 E0.5 F1200"
        assert record.words == (
            ("G", 1.0), ("X", 10.5), ("Y", 20.0), ("E", 0.5), ("F", 1200.0),
        )
        assert record.comments is None
        assert record.cmds is None

    def test_invalid_words_are_ignored(self):
        record = self.parser.parse_line("messed up")
        assert record.line == "messed up"
        assert record.words == ()

    def test_empty_line(self):
        record = self.parser.parse_line("")
        assert record == LineRecord(line="")

    def test_comment_only_line(self):
        record = self.parser.parse_line("; this is a comment")
        assert record.words == ()
        assert record.comments == ("this is a comment",)

    def test_parse_lines_skips_blank_lines(self):
        records = list(self.parser.parse_lines(["G28", "   ", "", " M104 S210 "]))
        assert [r.line for r in records] == ["G28", "M104 S210"]


class TestLineMode:
    line = "M6 (tool change;) T1 ; comment"

    def test_original(self):
        record = parse_line(self.line, line_mode="original")
        assert record.line == "M6 (tool change;) T1 ; comment"
        assert record.words == (("M", 6.0), ("T", 1.0))

    def test_stripped(self):
        record = parse_line(self.line, line_mode="stripped")
        assert record.line == "M6  T1"
        assert record.words == (("M", 6.0), ("T", 1.0))

    def test_compact(self):
        record = parse_line(self.line, line_mode="compact")
        assert record.line == "M6T1"
        assert record.words == (("M", 6.0), ("T", 1.0))

    def test_default_is_original(self):
        assert parse_line("  G0 X1  ").line == "  G0 X1  "

    def test_config_object(self):
        config = ParserConfig(line_mode="compact", flatten=True)
        record = parse_line("G0 X1 (rapid)", config)
        assert record.line == "G0X1"
        assert record.words == ("G0", "X1")

    def test_unknown_line_mode(self):
        with pytest.raises(ValueError):
            parse_line("G0", line_mode="bogus")


class TestCommands:
    def test_grbl(self):
        record = parse_line("$H $C")
        assert record.words == ()
        assert record.cmds == ("$H", "$C")

    @pytest.mark.parametrize("line", ["{sr:{spe:t,spd:t,sps:t}}", "{mt:n}"])
    def test_json(self, line):
        record = parse_line(line)
        assert record.words == ()
        assert record.cmds == (line,)

    @pytest.mark.parametrize("line", [
        "%wait",
        "%wait ; Wait for the planner queue to empty",
        "%msg Restart spindle",
        "%zsafe=10",
        "%x0=posx,y0=posy,z0=posz",
    ])
    def test_percent(self, line):
        record = parse_line(line)
        assert record.words == ()
        assert record.cmds == (line,)


class TestComments:
    def test_nested_parentheses(self):
        record = parse_line("M6 (outer (inner;)) T1 ; comment", line_mode="stripped")
        assert record.line == "M6  T1"
        assert record.comments == ("outer (inner;)", "comment")

    def test_semicolon_before_parentheses(self):
        record = parse_line("M6 ; comment (tool change) T1", line_mode="stripped")
        assert record.line == "M6"
        assert record.comments == ("comment (tool change) T1",)
        assert record.words == (("M", 6.0),)

    def test_multiple_comments(self):
        record = parse_line("M6 (first comment) T1 ; second comment", line_mode="stripped")
        assert record.line == "M6  T1"
        assert record.comments == ("first comment", "second comment")


class TestLineRecord:
    def test_records_are_immutable(self):
        record = parse_line("G0")
        with pytest.raises(AttributeError):
            record.line = "G1"

    def test_to_dict_omits_absent_fields(self):
        assert parse_line("G0 X1").to_dict() == {
            "line": "G0 X1",
            "words": [["G", 0.0], ["X", 1.0]],
        }

    def test_to_dict_full(self):
        record = parse_line("N3 T1*57 (tool)")
        assert record.to_dict() == {
            "line": "N3 T1*57 (tool)",
            "words": [["T", 1.0]],
            "comments": ["tool"],
            "line_number": 3,
            "checksum": 57,
            "checksum_failed": True,
        }

    def test_to_dict_flattened(self):
        assert parse_line("G0 $H", flatten=True).to_dict() == {
            "line": "G0 $H",
            "words": ["G0"],
            "cmds": ["$H"],
        }


class TestReparse:
    def test_compact_reparse_keeps_words(self):
        for line in sample_program().split("\n"):
            compact = parse_line(line, line_mode="compact")
            assert parse_line(compact.line).words == parse_line(line).words, line
