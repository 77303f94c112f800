"""G-code word tokenizer.

Turns a comment-free line into ordered ``(letter, argument)`` words plus the
controller command tokens used by common senders:

* ``$H``, ``$C``, ``$$``: Grbl system commands
* ``{sr:n}``: TinyG / g2core JSON commands
* ``%wait``: bCNC / CNCjs macro commands

and pulls out the RepRap special fields ``N`` (line number) and ``*``
(checksum).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Union

import numpy as np

Argument = Union[float, str]
Word = Union[tuple[str, Argument], str]

# Alternatives are mutually exclusive by their leading character.
_TOKEN_RE = re.compile(
    r"(%.*)"  # bCNC / CNCjs command, rest of line
    r"|(\{.*)"  # TinyG / g2core JSON, rest of line
    r"|(\$\$|\$[a-z0-9#]*)"  # Grbl $ command
    r"|([a-z][0-9+\-.]+)"  # letter word
    r"|(\*[0-9]+)",  # checksum
    re.IGNORECASE | re.ASCII,
)
_WHITESPACE_RE = re.compile(r"\s+")
_LINE_NUMBER_RE = re.compile(r"[+-]?\d+")


@dataclass
class TokenizedLine:
    """Words, commands and special fields found on one line."""

    words: list[Word] = field(default_factory=list)
    cmds: list[str] = field(default_factory=list)
    line_number: int | None = None
    checksum: int | None = None


def collapse_whitespace(text: str) -> str:
    """Remove every whitespace character from *text*."""
    return _WHITESPACE_RE.sub("", text)


def parse_argument(text: str) -> Argument:
    """Return *text* as a float when it is numeric, otherwise unchanged."""
    try:
        return float(text)
    except ValueError:
        return text


def format_argument(value: Argument) -> str:
    """Render an argument the way it is written in G-code (``6`` not ``6.0``)."""
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        # Positional, never exponent notation: 0.00001 not 1e-05
        return np.format_float_positional(value, trim="-")
    return value


def tokenize(
    stripped_line: str,
    source_line: str | None = None,
    flatten: bool = False,
) -> TokenizedLine:
    """Tokenize a comment-free G-code line.

    Parameters
    ----------
    stripped_line:
        Line text with comments already removed.  Whitespace is collapsed
        before matching, so ``X 10`` and ``X10`` are the same word.
    source_line:
        The raw line.  ``%`` and ``{`` commands are recorded as this whole
        line, trimmed, since they may contain characters the word grammar
        does not cover.  Defaults to *stripped_line*.
    flatten:
        Emit words as ``"X10.5"`` strings instead of ``("X", 10.5)`` pairs.

    Returns
    -------
    TokenizedLine
        Text that matches no token is ignored.
    """
    if source_line is None:
        source_line = stripped_line

    result = TokenizedLine()
    for match in _TOKEN_RE.finditer(collapse_whitespace(stripped_line)):
        token = match.group(0)
        letter = token[0].upper()
        argument = token[1:]

        if letter in ("%", "{"):
            result.cmds.append(source_line.strip())
            continue

        if letter == "$":
            result.cmds.append(token)
            continue

        if (
            letter == "N"
            and result.line_number is None
            and _LINE_NUMBER_RE.fullmatch(argument)
        ):
            result.line_number = int(argument)
            continue

        if letter == "*" and result.checksum is None:
            result.checksum = int(argument)
            continue

        value = parse_argument(argument)
        if flatten:
            result.words.append(letter + format_argument(value))
        else:
            result.words.append((letter, value))

    return result
