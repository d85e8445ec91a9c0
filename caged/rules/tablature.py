"""
Tablature Module - Text Forms of Fret Arrays

It can:
    1. Write a fret array in the compact "x32010" notation and read it back
    2. Lay out several voicings side by side as six-line ASCII tab
    3. Draw a single voicing as a small ASCII chord box

Anything with a `frets` attribute (e.g. a Voicing) can be passed wherever a
plain list of six frets is accepted.
"""

import re
from typing import List, Optional, Sequence

from caged.exceptions import InvalidFret
from caged.rules.notes import MUTED, NUM_STRINGS, check_frets, compute_base_fret, to_relative_frets


# =============================================================================
# CONSTANTS
# =============================================================================

# Low to high; the high string is lower-case in tab
TAB_STRING_NAMES = ("E", "A", "D", "G", "B", "e")

MUTED_SYMBOLS = ("x", "X")

# Rows drawn in a chord box when the voicing spans fewer frets
MIN_DIAGRAM_ROWS = 4

_SEPARATORS = re.compile(r"[\s,]+")


# =============================================================================
# FRET STRINGS
# =============================================================================

def frets_to_string(frets: List[int]) -> str:
    """
    Compact text form of a fret array.

    Frets above 9 would be ambiguous when run together, so in that case
    every value is separated by "-".

    Examples:
        frets_to_string([-1, 3, 2, 0, 1, 0])       → "x32010"
        frets_to_string([-1, -1, 10, 12, 13, 12])  → "x-x-10-12-13-12"
    """
    frets = check_frets(frets)
    symbols = ["x" if fret == MUTED else str(fret) for fret in frets]
    if any(fret > 9 for fret in frets):
        return "-".join(symbols)
    return "".join(symbols)


def _parse_token(token: str, text: str) -> int:
    if token in MUTED_SYMBOLS:
        return MUTED
    try:
        return int(token)
    except ValueError:
        raise InvalidFret(f"Invalid fret '{token}' in '{text}'") from None


def parse_fret_string(text: str) -> List[int]:
    """
    Parse a fret string back into six fret values.

    Accepts the compact form ("x32010"), the dashed form
    ("x-x-10-12-13-12") and comma or space separated values
    ("-1,3,2,0,1,0", "x 3 2 0 1 0").

    Raises:
        InvalidFret: On unknown symbols, out-of-range frets or a count other than 6
    """
    text = text.strip()
    if not text:
        raise InvalidFret("Empty fret string")

    if _SEPARATORS.search(text):
        tokens = [t for t in _SEPARATORS.split(text) if t]
    elif "-" in text:
        tokens = text.split("-")
    else:
        tokens = list(text)

    return check_frets([_parse_token(token, text) for token in tokens])


# =============================================================================
# ASCII TAB
# =============================================================================

def _frets_of(item) -> List[int]:
    return list(getattr(item, "frets", item))


def format_tab(voicings: Sequence, labels: Optional[Sequence[str]] = None) -> str:
    """
    Lay out voicings side by side as six lines of ASCII tab.

    Args:
        voicings: Voicings, fret lists, or a single fret list
        labels: Column headers; defaults to each voicing's name if it has one

    Example:
        >>> print(format_tab([[-1, 3, 2, 0, 1, 0], [3, 2, 0, 0, 0, 3]], labels=["C", "G"]))
           C  G
        e|-0--3--|
        B|-1--0--|
        G|-0--0--|
        D|-2--0--|
        A|-3--2--|
        E|-x--3--|
    """
    if voicings and isinstance(voicings[0], int):
        voicings = [voicings]

    columns = [check_frets(_frets_of(v)) for v in voicings]
    if labels is None:
        names = [getattr(v, "name", None) for v in voicings]
        labels = names if any(names) else None

    symbols = [["x" if fret == MUTED else str(fret) for fret in col] for col in columns]
    width = max([2] + [len(s) for col in symbols for s in col])
    if labels:
        width = max([width] + [len(label) for label in labels])

    lines = []
    if labels:
        header = "   " + " ".join((label or "").ljust(width) for label in labels)
        lines.append(header.rstrip())

    for string_index in reversed(range(NUM_STRINGS)):
        cells = [col[string_index].ljust(width, "-") for col in symbols]
        lines.append(f"{TAB_STRING_NAMES[string_index]}|-" + "-".join(cells) + "-|")

    return "\n".join(lines)


# =============================================================================
# CHORD BOX
# =============================================================================

def format_chord_diagram(voicing, base_fret: Optional[int] = None, title: Optional[str] = None) -> str:
    """
    Draw one voicing as a small ASCII chord box, low E on the left.

    Example (Am):
        Am (A shape)
        x o       o
        ===========
        | | | | * |
        | | * * | |
        | | | | | |
        | | | | | |
    """
    frets = check_frets(_frets_of(voicing))
    if base_fret is None:
        base_fret = getattr(voicing, "base_fret", None) or compute_base_fret(frets)
    relative = to_relative_frets(frets, base_fret)

    lines = []
    name = title or getattr(voicing, "name", None)
    if name:
        shape = getattr(voicing, "shape", None)
        lines.append(f"{name} ({shape} shape)" if shape else name)

    markers = ["x" if fret == MUTED else "o" if fret == 0 else " " for fret in relative]
    lines.append(" ".join(markers).rstrip())

    # Nut when the box starts at the first fret
    lines.append(("=" if base_fret <= 1 else "-") * (NUM_STRINGS * 2 - 1))

    rows = max([MIN_DIAGRAM_ROWS] + relative)
    for row in range(1, rows + 1):
        cells = " ".join("*" if fret == row else "|" for fret in relative)
        if row == 1 and base_fret > 1:
            cells += f"  {base_fret}fr"
        lines.append(cells)

    return "\n".join(lines)
