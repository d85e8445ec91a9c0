"""
CAGED Voicings - Source Package

Generate and validate guitar chord voicings with the CAGED system: the five
movable shapes C, A, G, E and D, transposed to any root and checked against
the chord's notes.

Subpackages:
    - caged.rules: Note arithmetic, chord tones, shape templates,
      transposition, classification and tablature
    - caged.data: Pydantic schemas, YAML loading, curated voicings
    - caged.app: Voicing assembler, fallback library and CLI

Example usage:
    from caged import get_voicings, classify_shape, transpose

    transpose("C", "A", "major")            # [-1, 3, 5, 5, 5, 3]
    classify_shape([-1, -1, 0, 2, 3, 2])    # 'D'
    [v.shape for v in get_voicings("A", "minor")]   # ['A', 'E', 'D']
"""

__version__ = "0.1.0"

from caged.app.generate import (
    VoicingAssembler,
    best_voicing,
    get_common_voicing,
    get_voicings,
    get_voicings_by_shape,
    validate_custom_voicing,
)
from caged.data.schema import FretCorrection, RawVoicing, TranspositionResult, Voicing, VoicingOptions
from caged.exceptions import CagedError, InvalidFret, InvalidNote, UnknownChord, UntransposableShape
from caged.rules.classifier import classify_shape
from caged.rules.transposer import transpose, transpose_shape
