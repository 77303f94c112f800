"""G-code line parser.

Combines comment extraction, word tokenizing and checksum validation to turn
one physical line of G-code into an immutable LineRecord.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator

from gcodestream.config import (
    DEFAULT_CONFIG,
    LINE_MODE_COMPACT,
    LINE_MODE_STRIPPED,
    ParserConfig,
)
from gcodestream.gcode.checksum import compute_checksum, validate_checksum
from gcodestream.gcode.comments import extract_comments
from gcodestream.gcode.tokenizer import Word, collapse_whitespace, tokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineRecord:
    """The parsed form of a single G-code line."""

    line: str  # rendering selected by ParserConfig.line_mode
    words: tuple[Word, ...] = ()  # e.g. (("G", 1.0), ("X", 10.5))
    comments: tuple[str, ...] | None = None  # None when the line has none
    cmds: tuple[str, ...] | None = None  # "$H", "%wait", "{sr:n}", ...
    line_number: int | None = None  # first N field
    checksum: int | None = None  # first * field
    checksum_failed: bool | None = None  # True only on a mismatch

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form holding only the fields that are present."""
        data: dict[str, Any] = {
            "line": self.line,
            "words": [w if isinstance(w, str) else list(w) for w in self.words],
        }
        if self.comments is not None:
            data["comments"] = list(self.comments)
        if self.cmds is not None:
            data["cmds"] = list(self.cmds)
        if self.line_number is not None:
            data["line_number"] = self.line_number
        if self.checksum is not None:
            data["checksum"] = self.checksum
        if self.checksum_failed:
            data["checksum_failed"] = True
        return data


class GCodeLineParser:
    """Stateless parser that converts G-code lines into LineRecord objects."""

    def __init__(self, config: ParserConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def parse_line(self, line: str) -> LineRecord:
        """Parse a single line of G-code.

        Parameters
        ----------
        line:
            Raw G-code line, possibly including comments, a line number and
            a checksum.

        Returns
        -------
        LineRecord.  Lines without any recognisable word still produce a
        record (with empty ``words``); nothing here raises.
        """
        stripped, comments = extract_comments(line)
        compact = collapse_whitespace(stripped)
        tokens = tokenize(compact, source_line=line, flatten=self.config.flatten)

        checksum_failed = None
        if tokens.checksum is not None and not validate_checksum(tokens.checksum, line):
            checksum_failed = True
            logger.debug(
                "Checksum mismatch on line %s: declared %d, computed %d",
                tokens.line_number, tokens.checksum, compute_checksum(line),
            )

        if self.config.line_mode == LINE_MODE_COMPACT:
            rendered = compact
        elif self.config.line_mode == LINE_MODE_STRIPPED:
            rendered = stripped
        else:
            rendered = line

        return LineRecord(
            line=rendered,
            words=tuple(tokens.words),
            comments=tuple(comments) if comments else None,
            cmds=tuple(tokens.cmds) if tokens.cmds else None,
            line_number=tokens.line_number,
            checksum=tokens.checksum,
            checksum_failed=checksum_failed,
        )

    def parse_lines(self, lines: Iterable[str]) -> Iterator[LineRecord]:
        """Parse each non-blank line of *lines*, trimming it first."""
        for line in lines:
            line = line.strip()
            if line:
                yield self.parse_line(line)


def parse_line(
    line: str, config: ParserConfig | None = None, **options
) -> LineRecord:
    """Parse one line with *config* and/or keyword options.

    >>> parse_line("G0 X1 ; rapid").words
    (('G', 0.0), ('X', 1.0))
    """
    config = ParserConfig.from_options(config, **options)
    return GCodeLineParser(config).parse_line(line or "")
