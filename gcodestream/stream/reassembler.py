"""Chunked line reassembly.

G-code often arrives from serial ports, sockets or file reads in chunks whose
boundaries have nothing to do with line boundaries.  LineReassembler keeps
the unterminated tail of the input between chunks and hands back only
complete logical lines, never splitting a ``\\r\\n`` that straddles two
chunks into two line breaks.
"""

from __future__ import annotations

import codecs
import logging
import re
from enum import Enum

from gcodestream.errors import ReassemblerClosedError

logger = logging.getLogger(__name__)

# A terminated line, or (at the very end of the buffer) an unterminated tail
_LINE_RE = re.compile(r"[^\r\n]*(?:\r\n|\r|\n)|[^\r\n]+\Z")
_LINE_END_RE = re.compile(r"[\r\n]")


class ReassemblerState(Enum):
    IDLE = "idle"  # nothing buffered
    BUFFERING = "buffering"  # partial line held, waiting for a terminator
    DRAINING = "draining"  # end of input signalled, no more chunks accepted


class LineReassembler:
    """Turns arbitrarily-sized text or byte chunks into complete lines.

    Each returned line is trimmed; blank lines are dropped.  ``bytes``
    chunks are decoded incrementally, so a multi-byte character split
    across two chunks is decoded correctly.

    One instance serves exactly one input stream.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._buffer: str = ""
        self._last_chunk_ended_with_cr: bool = False
        self._decoder = codecs.getincrementaldecoder(encoding)()
        self._closed: bool = False
        self.line_count: int = 0

    # ------------------------------------------------------------------ #
    #  State                                                              #
    # ------------------------------------------------------------------ #

    @property
    def state(self) -> ReassemblerState:
        if self._closed:
            return ReassemblerState.DRAINING
        if self._buffer:
            return ReassemblerState.BUFFERING
        return ReassemblerState.IDLE

    @property
    def pending(self) -> str:
        """The carry-over text still waiting for a line terminator."""
        return self._buffer

    # ------------------------------------------------------------------ #
    #  Core API                                                           #
    # ------------------------------------------------------------------ #

    def feed(self, chunk: str | bytes) -> list[str]:
        """Add *chunk* to the buffer and return the lines it completed.

        Raises
        ------
        ReassemblerClosedError
            If called after :meth:`finish` or :meth:`abort`.
        """
        if self._closed:
            raise ReassemblerClosedError("Cannot feed a finished reassembler")

        if isinstance(chunk, (bytes, bytearray)):
            chunk = self._decoder.decode(chunk)

        self._buffer += chunk

        if not _LINE_END_RE.search(chunk):
            return []

        fragments = _LINE_RE.findall(self._buffer)

        # The "\n" half of a CRLF whose "\r" ended the previous chunk
        if self._last_chunk_ended_with_cr and fragments and fragments[0] == "\n":
            fragments.pop(0)

        last = self._buffer[-1]
        self._last_chunk_ended_with_cr = last == "\r"
        if last in "\r\n":
            self._buffer = ""
        else:
            self._buffer = fragments.pop() if fragments else ""

        if self._buffer:
            logger.debug("Carrying over %d characters", len(self._buffer))

        return self._collect(fragments)

    def finish(self) -> list[str]:
        """Signal end of input and return the unterminated last line, if any."""
        if self._closed:
            return []
        self._buffer += self._decoder.decode(b"", final=True)
        tail = self._buffer
        self._reset()
        return self._collect([tail])

    def abort(self) -> None:
        """Stop accepting input and discard the carry-over without emitting it."""
        if self._buffer:
            logger.debug("Discarding %d unterminated characters", len(self._buffer))
        self._reset()

    # ------------------------------------------------------------------ #
    #  Internals                                                          #
    # ------------------------------------------------------------------ #

    def _collect(self, fragments: list[str]) -> list[str]:
        lines: list[str] = []
        for fragment in fragments:
            line = fragment.strip()
            if line:
                lines.append(line)
        self.line_count += len(lines)
        return lines

    def _reset(self) -> None:
        self._buffer = ""
        self._last_chunk_ended_with_cr = False
        self._decoder.reset()
        self._closed = True
