"""Destinations for parsed records.

The stream driver writes every LineRecord to a sink with ``emit`` and calls
``close`` once with the full ordered list when the input ends, or ``fail``
with the error when the parse is aborted.  Picking a sink picks the
delivery style: plain collection, callbacks, or an ``asyncio.Queue``
consumed by another task.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Sequence

from gcodestream.gcode.parser import LineRecord


class RecordSink:
    """Base sink.  Subclasses override ``emit`` and optionally ``close``/``fail``."""

    def emit(self, record: LineRecord) -> None:
        raise NotImplementedError

    def close(self, records: Sequence[LineRecord]) -> None:
        """Called once after the last record of a successful parse."""

    def fail(self, error: BaseException) -> None:
        """Called once, instead of ``close``, when the parse is aborted."""


class ListSink(RecordSink):
    """Collects records in order."""

    def __init__(self) -> None:
        self.records: list[LineRecord] = []
        self.closed: bool = False
        self.error: BaseException | None = None

    def emit(self, record: LineRecord) -> None:
        self.records.append(record)

    def close(self, records: Sequence[LineRecord]) -> None:
        self.closed = True

    def fail(self, error: BaseException) -> None:
        self.error = error


class CallbackSink(RecordSink):
    """Forwards each record to *on_record* and the final list to *on_end*."""

    def __init__(
        self,
        on_record: Callable[[LineRecord], None],
        on_end: Callable[[list[LineRecord]], None] | None = None,
    ) -> None:
        self.on_record = on_record
        self.on_end = on_end

    def emit(self, record: LineRecord) -> None:
        self.on_record(record)

    def close(self, records: Sequence[LineRecord]) -> None:
        if self.on_end is not None:
            self.on_end(list(records))


class QueueSink(RecordSink):
    """Puts records on an ``asyncio.Queue``; ``None`` marks the end.

    The marker is queued on success and on an aborted parse alike, so a
    consumer loop always terminates.  Check ``error`` after the marker to
    tell the two apart.
    """

    def __init__(self, queue: asyncio.Queue | None = None) -> None:
        self.queue: asyncio.Queue = queue if queue is not None else asyncio.Queue()
        self.error: BaseException | None = None

    def emit(self, record: LineRecord) -> None:
        self.queue.put_nowait(record)

    def close(self, records: Sequence[LineRecord]) -> None:
        self.queue.put_nowait(None)

    def fail(self, error: BaseException) -> None:
        self.error = error
        self.queue.put_nowait(None)
