"""
Transposer Module - Moving CAGED Shapes Up the Neck

A CAGED template is written for one root (C for the C shape, A for the A
shape, ...). To play the same shape for another root, every fretted string
moves by the distance between the template's root fret and the fret where
the new root sits on the same string.

It can:
    1. Transpose any of the five templates to any root
    2. Reject transpositions that would need negative frets
    3. Mute strings that sound notes foreign to the chord
"""

import logging
from typing import FrozenSet, Iterable, List, Optional, Tuple

from caged.data.schema import FretCorrection, TranspositionResult
from caged.exceptions import UnknownChord, UntransposableShape
from caged.rules.chord_tones import DEFAULT_ORACLE, base_quality, normalize_quality
from caged.rules.notes import (
    MAX_FRET,
    MUTED,
    check_frets,
    find_fret_for_pitch_class,
    fret_pitch_class,
    note_name,
    normalize_note,
    pitch_class_of,
)
from caged.rules.shapes import get_template, normalize_shape

logger = logging.getLogger(__name__)


# =============================================================================
# VALIDATION
# =============================================================================

def validate_frets(
    frets: List[int],
    chord_tones: Iterable[int],
) -> Tuple[List[int], List[FretCorrection]]:
    """
    Mute every string that sounds a pitch class outside the chord.

    Args:
        frets: Six absolute frets
        chord_tones: Pitch classes of the chord

    Returns:
        (frets with foreign strings muted, one FretCorrection per muted string)

    Example:
        >>> validate_frets([-1, 3, 5, 5, 5, 3], {0, 5, 7})    # C sus4
        ([-1, 3, 5, 5, -1, 3], [FretCorrection(string_index=4, ...)])
    """
    tones = frozenset(chord_tones)
    corrected = check_frets(frets)
    corrections = []

    for string_index, fret in enumerate(corrected):
        pitch_class = fret_pitch_class(string_index, fret)
        if pitch_class is None or pitch_class in tones:
            continue

        logger.warning(
            "ForeignNoteMuted: string %d at fret %d sounds %s, which is not a chord tone",
            string_index, fret, note_name(pitch_class),
        )
        corrections.append(FretCorrection(
            string_index=string_index,
            original_fret=fret,
            reason="foreign_note",
            pitch_class=pitch_class,
        ))
        corrected[string_index] = MUTED

    return corrected, corrections


# =============================================================================
# TRANSPOSITION
# =============================================================================

def _shift_template(root: str, shape: str, quality: str) -> List[int]:
    template = get_template(shape, quality)
    target = find_fret_for_pitch_class(pitch_class_of(root), template.root_string)
    offset = target - template.root_fret

    shifted = [fret if fret == MUTED else fret + offset for fret in template.frets]
    # A played string shifted to -1 is out of range, not muted
    if any(fret != MUTED and not 0 <= fret + offset <= MAX_FRET for fret in template.frets):
        raise UntransposableShape(shape, root, quality, shifted)
    return shifted


def transpose_shape(
    root: str,
    shape: str,
    quality: str = "major",
    validate: bool = True,
    chord_quality: Optional[str] = None,
    oracle=None,
) -> TranspositionResult:
    """
    Transpose a CAGED template to a new root.

    Args:
        root: Root note ("C", "F#", "Bb", ...)
        shape: CAGED letter of the template to move
        quality: Template quality, "major" or "minor" (aliases like "m" work)
        validate: Mute strings that sound foreign notes
        chord_quality: Quality to validate against, when it differs from the
            template (e.g. "sus4" over the major template)
        oracle: Chord-tone oracle; defaults to the built-in formulas

    Returns:
        TranspositionResult with the final frets and any corrections

    Raises:
        InvalidNote: If the root is not a note name
        ValueError: If the shape or template quality is unknown
        UntransposableShape: If a played string would land below the nut
        UnknownChord: If chord_quality has no known chord tones

    Examples:
        >>> transpose_shape("C", "A", "major").frets
        [-1, 3, 5, 5, 5, 3]
        >>> transpose_shape("C", "G", "major").frets
        [8, 7, 5, 5, 5, 8]
    """
    root = normalize_note(root)
    shape = normalize_shape(shape)
    template_quality = base_quality(quality)
    if template_quality is None:
        raise ValueError(f"Quality must be 'major' or 'minor'. Got: '{quality}'")

    target_quality = normalize_quality(chord_quality) if chord_quality else template_quality
    if target_quality is None:
        raise UnknownChord(f"Unknown chord quality '{chord_quality}'")

    frets = _shift_template(root, shape, template_quality)
    corrections = []

    if validate:
        oracle = oracle or DEFAULT_ORACLE
        tones: FrozenSet[int] = frozenset(oracle.chord_tones(root, target_quality))
        if not tones:
            raise UnknownChord(f"No chord tones known for {root} {target_quality!r}")
        frets, corrections = validate_frets(frets, tones)

    return TranspositionResult(
        root=root,
        shape=shape,
        quality=template_quality,
        chord_quality=target_quality,
        frets=frets,
        corrections=corrections,
    )


def transpose(root: str, shape: str, quality: str = "major", validate: bool = True) -> List[int]:
    """
    Transpose a CAGED template and return just the frets.

    Example:
        >>> transpose("G", "E")
        [3, 5, 5, 4, 3, 3]
    """
    return transpose_shape(root, shape, quality, validate=validate).frets


def try_transpose(root: str, shape: str, quality: str = "major", **kwargs) -> Optional[TranspositionResult]:
    """Like transpose_shape() but returns None when the shape cannot reach the root."""
    try:
        return transpose_shape(root, shape, quality, **kwargs)
    except UntransposableShape as e:
        logger.debug("Skipping shape: %s", e)
        return None
