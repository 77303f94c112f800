"""Batched, cooperative driver for streamed G-code.

StreamParser feeds chunks through a LineReassembler and parses each
completed line.  Lines are parsed ``batch_size`` at a time with an
``await asyncio.sleep(0)`` between batches, so one huge chunk does not hold
the event loop for its whole length.  Records are always emitted in input
order.
"""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterable, Iterable, Iterator

from gcodestream.config import DEFAULT_CONFIG, ParserConfig
from gcodestream.gcode.parser import GCodeLineParser, LineRecord
from gcodestream.stream.reassembler import LineReassembler
from gcodestream.stream.sinks import RecordSink

logger = logging.getLogger(__name__)


class StreamParser:
    """One streaming parse session.

    Create a new instance per input; reassembly state is never shared.
    """

    def __init__(
        self,
        config: ParserConfig = DEFAULT_CONFIG,
        sink: RecordSink | None = None,
    ) -> None:
        self.config = config
        self.sink = sink
        self.records: list[LineRecord] = []
        self.aborted: bool = False
        self._parser = GCodeLineParser(config)
        self._reassembler = LineReassembler(config.encoding)

    async def feed(self, chunk: str | bytes) -> None:
        """Parse and emit every line *chunk* completes."""
        await self._emit(self._reassembler.feed(chunk))

    async def finish(self) -> list[LineRecord]:
        """Flush the unterminated tail, close the sink, return all records."""
        await self._emit(self._reassembler.finish())
        if self.aborted:
            return self.records
        if self.sink is not None:
            self.sink.close(self.records)
        return self.records

    def abort(self) -> None:
        """Cancel the session: no further batches, carry-over discarded."""
        self.aborted = True
        self._reassembler.abort()

    async def consume(self, chunks: AsyncIterable[str | bytes]) -> list[LineRecord]:
        """Feed every chunk of *chunks*, then finish.

        Any exception from the chunk source aborts the session, is passed
        to ``sink.fail`` and re-raised; no partial line is emitted.
        """
        try:
            async for chunk in chunks:
                await self.feed(chunk)
            return await self.finish()
        except BaseException as err:
            self.abort()
            if self.sink is not None:
                self.sink.fail(err)
            raise

    async def _emit(self, lines: list[str]) -> None:
        batch_size = self.config.batch_size
        for start in range(0, len(lines), batch_size):
            if start:
                # Let other tasks run between batches
                await asyncio.sleep(0)
            for line in lines[start:start + batch_size]:
                if self.aborted:
                    return
                record = self._parser.parse_line(line)
                self.records.append(record)
                if self.sink is not None:
                    self.sink.emit(record)
            logger.debug(
                "Emitted lines %d-%d of %d", start + 1,
                min(start + batch_size, len(lines)), len(lines),
            )


def iter_records(
    chunks: Iterable[str | bytes], config: ParserConfig = DEFAULT_CONFIG
) -> Iterator[LineRecord]:
    """Synchronously reassemble and parse *chunks*, yielding records in order."""
    parser = GCodeLineParser(config)
    reassembler = LineReassembler(config.encoding)
    for chunk in chunks:
        for line in reassembler.feed(chunk):
            yield parser.parse_line(line)
    for line in reassembler.finish():
        yield parser.parse_line(line)
