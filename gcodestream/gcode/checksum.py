"""RepRap line checksums.

http://reprap.org/wiki/G-code#Special_fields

The checksum of a G-code string (including its line number) is the XOR of
its character codes up to, but not including, the ``*`` marker.
"""

from __future__ import annotations

import numpy as np


def compute_checksum(text: str | None) -> int:
    """XOR of the character codes of *text* before its first ``*``."""
    text = text or ""
    marker = text.find("*")
    if marker >= 0:
        text = text[:marker]
    codes = np.fromiter(map(ord, text), dtype=np.uint32, count=len(text))
    return int(np.bitwise_xor.reduce(codes))


def validate_checksum(declared: int, source_line: str) -> bool:
    """Return True when *declared* matches the checksum of *source_line*."""
    return compute_checksum(source_line) == declared


def append_checksum(line: str, line_number: int | None = None) -> str:
    """Format *line* for checksummed streaming to a RepRap/Marlin firmware.

    >>> append_checksum("T0", line_number=3)
    'N3 T0*57'
    """
    line = line.strip()
    if line_number is not None:
        line = f"N{line_number} {line}"
    return f"{line}*{compute_checksum(line)}"
