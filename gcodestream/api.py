"""Parse entry points.

Synchronous helpers parse text that is already in memory line by line.  The
async variants push text, streams and files through the chunked
StreamParser so they behave the same as a live serial or network feed.

Every entry point takes an optional ``config`` plus keyword overrides
(``line_mode``, ``flatten``, ``batch_size``, ``chunk_size``, ``encoding``).
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import AsyncIterator, Callable, Optional

from gcodestream.config import ParserConfig
from gcodestream.errors import GCodeSourceError
from gcodestream.gcode.parser import GCodeLineParser, LineRecord, parse_line
from gcodestream.stream.driver import StreamParser
from gcodestream.stream.sinks import RecordSink

logger = logging.getLogger(__name__)

OnComplete = Callable[[Optional[BaseException], Optional[list[LineRecord]]], None]

# Failures of the input source, as opposed to bugs in the caller's sink
_SOURCE_ERRORS = (OSError, GCodeSourceError, UnicodeDecodeError)

__all__ = [
    "parse_line",
    "parse_text_sync",
    "parse_file_sync",
    "parse_text",
    "parse_stream",
    "parse_file",
]


# ---------------------------------------------------------------------------
# Synchronous
# ---------------------------------------------------------------------------

def parse_text_sync(
    text: str | None, config: ParserConfig | None = None, **options
) -> list[LineRecord]:
    """Parse a complete G-code program held in memory.

    Lines are split on ``\\n`` and trimmed; blank lines produce no record.
    ``None`` is treated as empty text.
    """
    config = ParserConfig.from_options(config, **options)
    if not text:
        return []
    return list(GCodeLineParser(config).parse_lines(text.split("\n")))


def parse_file_sync(
    path: str | Path | None, config: ParserConfig | None = None, **options
) -> list[LineRecord]:
    """Read the whole file at *path* and parse it with :func:`parse_text_sync`.

    Raises
    ------
    GCodeSourceError
        If no path is given.
    OSError
        If the file cannot be read (``FileNotFoundError`` when missing).
    """
    config = ParserConfig.from_options(config, **options)
    if not path:
        raise GCodeSourceError("No G-code file path given")
    text = Path(path).read_text(encoding=config.encoding)
    return parse_text_sync(text, config)


# ---------------------------------------------------------------------------
# Asynchronous
# ---------------------------------------------------------------------------

async def parse_text(
    text: str | None,
    config: ParserConfig | None = None,
    *,
    sink: RecordSink | None = None,
    on_complete: OnComplete | None = None,
    **options,
) -> list[LineRecord] | None:
    """Parse *text* through the chunked stream path.

    ``None`` is treated as empty text and completes with an empty list.
    """
    config = ParserConfig.from_options(config, **options)
    return await _run(_text_chunks(text or "", config.chunk_size), config, sink, on_complete)


async def parse_stream(
    stream,
    config: ParserConfig | None = None,
    *,
    sink: RecordSink | None = None,
    on_complete: OnComplete | None = None,
    **options,
) -> list[LineRecord] | None:
    """Parse G-code from *stream*.

    *stream* may be an async iterable of chunks, an iterable of chunks, or a
    file-like object with ``read(size)``; chunks may be ``str`` or ``bytes``.
    Blocking ``read`` calls run in a worker thread via ``asyncio.to_thread``.

    Each record is passed to ``sink.emit`` as soon as it is parsed, and
    ``sink.close`` receives the full list at the end (``sink.fail`` receives
    the error instead if the parse is aborted).  If *on_complete* is
    given, it is called once as ``on_complete(None, records)`` on success or
    ``on_complete(error, None)`` on a source error, and errors are not
    raised.  Without it, source errors propagate to the caller.
    """
    config = ParserConfig.from_options(config, **options)
    return await _run(_stream_chunks(stream, config.chunk_size), config, sink, on_complete)


async def parse_file(
    path: str | Path | None,
    config: ParserConfig | None = None,
    *,
    sink: RecordSink | None = None,
    on_complete: OnComplete | None = None,
    **options,
) -> list[LineRecord] | None:
    """Parse the file at *path* chunk by chunk.  See :func:`parse_stream`."""
    config = ParserConfig.from_options(config, **options)
    logger.info("Parsing file: %s", path)
    return await _run(_file_chunks(path, config.chunk_size), config, sink, on_complete)


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------

async def _run(
    chunks: AsyncIterator[str | bytes],
    config: ParserConfig,
    sink: RecordSink | None,
    on_complete: OnComplete | None,
) -> list[LineRecord] | None:
    session = StreamParser(config, sink)
    try:
        records = await session.consume(chunks)
    except _SOURCE_ERRORS as err:
        logger.warning("G-code parse aborted: %s", err)
        if on_complete is None:
            raise
        on_complete(err, None)
        return None

    logger.info("Parsed %d G-code lines", len(records))
    if on_complete is not None:
        on_complete(None, records)
    return records


async def _text_chunks(text: str, chunk_size: int) -> AsyncIterator[str]:
    for start in range(0, len(text), chunk_size):
        yield text[start:start + chunk_size]


async def _file_chunks(path: str | Path | None, chunk_size: int) -> AsyncIterator[bytes]:
    if not path:
        raise GCodeSourceError("No G-code file path given")
    # Blocking file calls run in a worker thread, off the event loop
    f = await asyncio.to_thread(open, path, "rb")
    try:
        while True:
            chunk = await asyncio.to_thread(f.read, chunk_size)
            if not chunk:
                break
            yield chunk
    finally:
        f.close()


async def _stream_chunks(stream, chunk_size: int) -> AsyncIterator[str | bytes]:
    if stream is None:
        raise GCodeSourceError("No G-code stream given")

    if hasattr(stream, "__aiter__"):
        async for chunk in stream:
            yield chunk
    elif hasattr(stream, "read"):
        while True:
            chunk = await asyncio.to_thread(stream.read, chunk_size)
            if not chunk:
                break
            yield chunk
    elif isinstance(stream, (str, bytes, bytearray)):
        yield stream
    else:
        try:
            chunks = iter(stream)
        except TypeError:
            raise GCodeSourceError(
                f"Cannot read G-code from {type(stream).__name__!r}"
            ) from None
        for chunk in chunks:
            yield chunk
