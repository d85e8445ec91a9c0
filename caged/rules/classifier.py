"""
Classifier Module - Which CAGED Shape Does a Fret Pattern Look Like?

Classification is purely structural: it looks at which strings are played,
which is the lowest, and whether any string rings open. It never looks at
the notes themselves.

The rules are applied in order and the first match wins:
    1. Low E and A muted, D played                 → D
    2. Lowest string is low E with 4+ strings:
       all 6 played, an open string and high E fretted → G, else E
    3. Lowest string is A:
       an open string and D fretted below A     → C, else A
    4. 5+ strings spanning low E to high E      → G
    5. Low E muted, A played                     → C if any open string, else A
    6. Fallback on the lowest string             → E, A or D

Some patterns are genuinely ambiguous between C/A and E/G; the rules above
pick one label and keep it that way.
"""

from typing import Dict, List, Optional

from caged.rules.notes import MUTED, check_frets, to_absolute_frets

# Fallback label by lowest played string
_LOWEST_STRING_SHAPES = {0: "E", 1: "A", 2: "D"}


def describe_shape(frets: List[int], base_fret: int = 1) -> Dict:
    """
    Collect the structural features the classifier looks at.

    Args:
        frets: Six frets, relative to base_fret when base_fret > 1
        base_fret: Diagram position of the pattern

    Returns:
        Dictionary with absolute frets, played strings, lowest/highest
        played string and whether any string rings open

    Example:
        >>> describe_shape([-1, 3, 2, 0, 1, 0])["lowest"]
        1
    """
    absolute = to_absolute_frets(check_frets(frets), base_fret)
    played = [i for i, fret in enumerate(absolute) if fret != MUTED]

    return {
        "frets": absolute,
        "played": played,
        "num_played": len(played),
        "lowest": played[0] if played else None,
        "highest": played[-1] if played else None,
        "has_open": any(fret == 0 for fret in absolute),
    }


def classify_shape(frets: List[int], base_fret: int = 1) -> str:
    """
    Label a fret pattern with the CAGED shape it structurally represents.

    Examples:
        >>> classify_shape([-1, 3, 2, 0, 1, 0])      # open C
        'C'
        >>> classify_shape([-1, 0, 2, 2, 2, 0])      # open A
        'A'
        >>> classify_shape([3, 2, 0, 0, 0, 3])       # open G
        'G'
        >>> classify_shape([1, 3, 3, 2, 1, 1], 5)    # A major, barre at 5
        'E'
    """
    features = describe_shape(frets, base_fret)
    absolute = features["frets"]
    lowest: Optional[int] = features["lowest"]
    num_played = features["num_played"]
    has_open = features["has_open"]

    # Rule 1: D shape lives on the top four strings
    if absolute[0] == MUTED and absolute[1] == MUTED and absolute[2] != MUTED:
        return "D"

    # Rule 2: rooted on the low E string
    if lowest == 0 and num_played >= 4:
        if num_played == 6 and has_open and absolute[5] > 0:
            return "G"
        return "E"

    # Rule 3: rooted on the A string
    if lowest == 1:
        if absolute[0] == MUTED and has_open and absolute[2] < absolute[1]:
            return "C"
        return "A"

    # Rule 4: wide patterns spanning every string
    if num_played >= 5 and lowest == 0 and features["highest"] == 5:
        return "G"

    # Rule 5
    if absolute[0] == MUTED and absolute[1] != MUTED:
        return "C" if has_open else "A"

    # Rule 6: fallback
    return _LOWEST_STRING_SHAPES.get(lowest, "E")
