"""Comment extraction for G-code lines.

Two comment forms are recognised (LinuxCNC / RepRap conventions):

* ``( ... )``: parenthesised, may be nested; inner parentheses stay part of
  the outer comment body.
* ``; ...``: runs to the end of the line.  A semicolon inside parentheses
  is comment text, not the start of a new comment.
"""

from __future__ import annotations


def extract_comments(line: str) -> tuple[str, list[str]]:
    """Split *line* into its code text and its comment bodies.

    Parameters
    ----------
    line:
        A single physical G-code line.

    Returns
    -------
    (stripped, comments)
        ``stripped`` is the line with all comments removed and its ends
        trimmed (inner whitespace is kept).  ``comments`` holds the trimmed
        comment bodies in the order they appear.

    Notes
    -----
    An unterminated ``(`` group produces no comment; its text is dropped.
    A ``)`` outside any comment is kept as ordinary text.
    """
    comments: list[str] = []
    code: list[str] = []
    body: list[str] = []
    depth = 0

    for idx, ch in enumerate(line):
        if depth == 0:
            if ch == ";":
                comments.append(line[idx + 1:].strip())
                break
            if ch == "(":
                depth = 1
                continue
            code.append(ch)
            continue

        # Inside a parenthesised comment
        if ch == "(":
            depth += 1
            body.append(ch)
        elif ch == ")":
            depth -= 1
            if depth == 0:
                comments.append("".join(body).strip())
                body.clear()
            else:
                body.append(ch)
        else:
            body.append(ch)

    return "".join(code).strip(), comments
