from gcodestream.gcode.checksum import append_checksum, compute_checksum, validate_checksum
from gcodestream.gcode.comments import extract_comments
from gcodestream.gcode.parser import GCodeLineParser, LineRecord, parse_line
from gcodestream.gcode.tokenizer import TokenizedLine, tokenize

__all__ = [
    "append_checksum",
    "compute_checksum",
    "validate_checksum",
    "extract_comments",
    "GCodeLineParser",
    "LineRecord",
    "parse_line",
    "TokenizedLine",
    "tokenize",
]
