"""
Shapes Module - The Five CAGED Shape Templates

Each template is the open-position form of one CAGED letter shape, written
as absolute frets [low E, A, D, G, B, high E]. A template knows which string
carries its root and at which fret that root sits in the open form, which is
all the transposer needs to move it up the neck.

    Shape   Root string   Root fret (open form)
    -----   -----------   ---------------------
    E       low E (0)     0
    A       A (1)         0
    D       D (2)         0
    G       low E (0)     3
    C       A (1)         3
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


# =============================================================================
# CONSTANTS
# =============================================================================

# Standard CAGED order (also the order shapes are tried by the assembler)
SHAPE_ORDER: Tuple[str, ...] = ("C", "A", "G", "E", "D")

# Minor chords are usually taught starting from the A shape
SHAPE_ORDER_MINOR: Tuple[str, ...] = ("A", "G", "E", "D", "C")


@dataclass(frozen=True)
class ShapeTemplate:
    """
    The un-transposed fret pattern of one CAGED shape.

    Attributes:
        shape: Letter of the shape ("C", "A", "G", "E" or "D")
        quality: "major" or "minor"
        frets: Six frets in the open form, -1 = muted
        root_string: Index of the string that carries the shape's root
        root_fret: Fret of that root in the open form
        fingers: Optional fingering, 0 = no finger (open or muted)
    """

    shape: str
    quality: str
    frets: Tuple[int, ...]
    root_string: int
    root_fret: int
    fingers: Optional[Tuple[int, ...]] = None


def _template(shape, quality, frets, root_string, root_fret, fingers=None) -> ShapeTemplate:
    return ShapeTemplate(
        shape=shape,
        quality=quality,
        frets=tuple(frets),
        root_string=root_string,
        root_fret=root_fret,
        fingers=tuple(fingers) if fingers is not None else None,
    )


# =============================================================================
# TEMPLATE TABLE
# =============================================================================

_TEMPLATES = {
    "E": {
        "major": _template("E", "major", [0, 2, 2, 1, 0, 0], 0, 0, [0, 2, 3, 1, 0, 0]),
        "minor": _template("E", "minor", [0, 2, 2, 0, 0, 0], 0, 0, [0, 2, 3, 0, 0, 0]),
    },
    "A": {
        "major": _template("A", "major", [-1, 0, 2, 2, 2, 0], 1, 0, [0, 0, 2, 3, 4, 0]),
        "minor": _template("A", "minor", [-1, 0, 2, 2, 1, 0], 1, 0, [0, 0, 2, 3, 1, 0]),
    },
    "D": {
        "major": _template("D", "major", [-1, -1, 0, 2, 3, 2], 2, 0, [0, 0, 0, 1, 3, 2]),
        "minor": _template("D", "minor", [-1, -1, 0, 2, 3, 1], 2, 0, [0, 0, 0, 2, 3, 1]),
    },
    "G": {
        "major": _template("G", "major", [3, 2, 0, 0, 0, 3], 0, 3, [3, 2, 0, 0, 0, 4]),
        "minor": _template("G", "minor", [3, 1, 0, 0, 3, 3], 0, 3, [3, 1, 0, 0, 4, 4]),
    },
    "C": {
        "major": _template("C", "major", [-1, 3, 2, 0, 1, 0], 1, 3, [0, 3, 2, 0, 1, 0]),
        "minor": _template("C", "minor", [-1, 3, 1, 0, 1, 3], 1, 3, [0, 4, 2, 0, 1, 3]),
    },
}

# Read-only view: templates are never modified at runtime
CAGED_SHAPES: Mapping[str, Mapping[str, ShapeTemplate]] = MappingProxyType(
    {shape: MappingProxyType(by_quality) for shape, by_quality in _TEMPLATES.items()}
)


# =============================================================================
# LOOKUP
# =============================================================================

def normalize_shape(shape: str) -> str:
    """Upper-case and check a shape letter."""
    letter = shape.strip().upper() if isinstance(shape, str) else shape
    if letter not in CAGED_SHAPES:
        raise ValueError(f"Shape must be one of {list(SHAPE_ORDER)}. Got: '{shape}'")
    return letter


def get_template(shape: str, quality: str) -> ShapeTemplate:
    """
    Get the template for a (shape, quality) pair.

    Args:
        shape: CAGED letter, case-insensitive
        quality: "major" or "minor"

    Raises:
        ValueError: If the shape or quality has no template
    """
    letter = normalize_shape(shape)
    if quality not in CAGED_SHAPES[letter]:
        raise ValueError(f"Quality must be 'major' or 'minor'. Got: '{quality}'")
    return CAGED_SHAPES[letter][quality]


def shape_order(quality: str = "major") -> Tuple[str, ...]:
    """CAGED order for a quality (major starts at C, minor at A)."""
    return SHAPE_ORDER_MINOR if quality == "minor" else SHAPE_ORDER
