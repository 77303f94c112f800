"""
gcodestream
===========

Line-oriented G-code parsing for files, in-memory text and chunked streams.

Each physical line becomes a LineRecord holding its words, comments,
controller commands (Grbl ``$``, CNCjs ``%``, TinyG ``{...}``), line number
and checksum.

Quick start
-----------
>>> from gcodestream import parse_line
>>> parse_line("N3 T0*57").line_number
3
"""

from gcodestream.api import (
    parse_file,
    parse_file_sync,
    parse_line,
    parse_stream,
    parse_text,
    parse_text_sync,
)
from gcodestream.config import DEFAULT_CONFIG, LINE_MODES, ParserConfig
from gcodestream.errors import GCodeSourceError, ReassemblerClosedError
from gcodestream.gcode import (
    GCodeLineParser,
    LineRecord,
    append_checksum,
    compute_checksum,
    extract_comments,
    tokenize,
)
from gcodestream.stream import (
    CallbackSink,
    LineReassembler,
    ListSink,
    QueueSink,
    RecordSink,
    StreamParser,
    iter_records,
)

__version__ = "0.1.0"
__all__ = [
    "parse_file",
    "parse_file_sync",
    "parse_line",
    "parse_stream",
    "parse_text",
    "parse_text_sync",
    "DEFAULT_CONFIG",
    "LINE_MODES",
    "ParserConfig",
    "GCodeSourceError",
    "ReassemblerClosedError",
    "GCodeLineParser",
    "LineRecord",
    "append_checksum",
    "compute_checksum",
    "extract_comments",
    "tokenize",
    "CallbackSink",
    "LineReassembler",
    "ListSink",
    "QueueSink",
    "RecordSink",
    "StreamParser",
    "iter_records",
]
