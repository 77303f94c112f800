"""Ready-made G-code programs.

Small, realistic programs mixing every syntax the parser understands.
Useful for tests and quick benchmarks without external .gcode files.
"""

from __future__ import annotations

from gcodestream.gcode.checksum import append_checksum


def sample_program(passes: int = 3, depth_step: float = 0.5) -> str:
    """Generate a short milling program.

    Includes a header of parenthesised and semicolon comments, a Grbl
    homing command, a TinyG status report request, a CNCjs macro line and
    a square pocket cut in *passes* depth steps.

    Parameters
    ----------
    passes:
        Number of depth passes around the square.
    depth_step:
        Depth of each pass in mm.

    Returns
    -------
    G-code text with ``\\n`` line endings and a trailing newline.
    """
    lines = [
        "(Generated by gcodestream.library)",
        "; Operation: pocket",
        "; Cut depth: %.3f" % (passes * depth_step),
        "$H",
        "{sr:{posx:t,posy:t,posz:t}}",
        "G21 (millimeters) G90 (absolute)",
        "M3 S12000 ; spindle on",
        "%wait",
    ]
    corners = [(0.0, 0.0), (20.0, 0.0), (20.0, 20.0), (0.0, 20.0), (0.0, 0.0)]
    for i in range(1, passes + 1):
        z = -depth_step * i
        lines.append(f"(pass {i} of {passes} (z={z:.3f}))")
        lines.append("G0 X0 Y0")
        lines.append(f"G1 Z{z:.3f} F300")
        for x, y in corners[1:]:
            lines.append(f"G1 X{x:.3f} Y{y:.3f} F1200")
    lines += [
        "G0 Z5",
        "M5 ; spindle off",
        "M30",
    ]
    return "\n".join(lines) + "\n"


def number_program(lines: list[str], start: int = 1) -> list[str]:
    """Add consecutive ``N`` line numbers and ``*`` checksums to *lines*.

    Blank lines are skipped and do not consume a line number.
    """
    numbered: list[str] = []
    n = start
    for line in lines:
        if not line.strip():
            continue
        numbered.append(append_checksum(line, line_number=n))
        n += 1
    return numbered
