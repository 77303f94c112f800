from gcodestream.stream.driver import StreamParser, iter_records
from gcodestream.stream.reassembler import LineReassembler, ReassemblerState
from gcodestream.stream.sinks import CallbackSink, ListSink, QueueSink, RecordSink

__all__ = [
    "StreamParser",
    "iter_records",
    "LineReassembler",
    "ReassemblerState",
    "CallbackSink",
    "ListSink",
    "QueueSink",
    "RecordSink",
]
