"""Exceptions raised by gcodestream.

Parsing problems (unknown words, checksum mismatches) are reported as data
on the records and never raise. Only failures to acquire the input do.
"""


class GCodeSourceError(Exception):
    """The G-code source could not be opened or read."""


class ReassemblerClosedError(RuntimeError):
    """A chunk was fed to a reassembler that was already finished or aborted."""
