"""
Notes Module - Pitch Classes and Fretboard Arithmetic

This module is the lowest layer of the voicing engine. It can:
    1. Turn note names (sharps or flats) into pitch classes 0-11
    2. Tell which pitch class a string sounds at a given fret
    3. Find the fret where a string produces a given pitch class
    4. Convert between absolute and baseFret-relative fret arrays

Fret values follow one convention everywhere in the package:
    -1 = muted string, 0 = open string, n > 0 = fretted at position n
"""

from typing import List, Optional

from caged.exceptions import InvalidFret, InvalidNote


# =============================================================================
# CONSTANTS: The Building Blocks
# =============================================================================

# The 12 notes in Western music, using sharps as the canonical spelling
CHROMATIC_SCALE = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Mapping of flat notes to their sharp equivalents (enharmonic equivalents)
FLAT_TO_SHARP = {
    "Db": "C#",
    "Eb": "D#",
    "Gb": "F#",
    "Ab": "G#",
    "Bb": "A#",
}

# Natural letters and their pitch classes (used for Cb, Fb, E#, B#)
NATURAL_PITCH_CLASSES = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}

ACCIDENTAL_OFFSETS = {"": 0, "#": 1, "b": -1}

# Standard guitar tuning, low E (index 0) to high E (index 5)
STANDARD_TUNING = ["E", "A", "D", "G", "B", "E"]
TUNING_PITCH_CLASSES = (4, 9, 2, 7, 11, 4)

NUM_STRINGS = 6
MUTED = -1
MAX_FRET = 24


# =============================================================================
# NOTE NAMES
# =============================================================================

def _split_note(note: str):
    """Split a note name into (letter, accidental) or raise InvalidNote."""
    if not isinstance(note, str):
        raise InvalidNote(f"Invalid note format: {note!r}")

    note = note.strip()
    if len(note) == 1:
        letter, accidental = note.upper(), ""
    elif len(note) == 2:
        letter, accidental = note[0].upper(), note[1]
        # "B" is ambiguous only in the accidental slot: "Bb", "bb" both mean B-flat
        if accidental == "B":
            accidental = "b"
    else:
        raise InvalidNote(f"Invalid note format: '{note}'")

    if letter not in NATURAL_PITCH_CLASSES or accidental not in ACCIDENTAL_OFFSETS:
        raise InvalidNote(f"Unknown note: '{note}'. Valid notes are: {CHROMATIC_SCALE}")

    return letter, accidental


def pitch_class_of(note: str) -> int:
    """
    Get the pitch class (0-11) of a note name.

    Flats are normalized to sharps first, so "Bb" and "A#" both give 10.

    Examples:
        >>> pitch_class_of("C")
        0
        >>> pitch_class_of("Bb")
        10
        >>> pitch_class_of("Cb")
        11

    Raises:
        InvalidNote: If the name is not a letter A-G with an optional # or b
    """
    letter, accidental = _split_note(note)
    spelled = letter + accidental

    if spelled in FLAT_TO_SHARP:
        return CHROMATIC_SCALE.index(FLAT_TO_SHARP[spelled])
    if spelled in CHROMATIC_SCALE:
        return CHROMATIC_SCALE.index(spelled)

    return (NATURAL_PITCH_CLASSES[letter] + ACCIDENTAL_OFFSETS[accidental]) % 12


def normalize_note(note: str) -> str:
    """Convert a note name to its standard sharp form ("Db" -> "C#")."""
    return CHROMATIC_SCALE[pitch_class_of(note)]


def note_name(pitch_class: int) -> str:
    """Get the sharp spelling of a pitch class."""
    return CHROMATIC_SCALE[pitch_class % 12]


def is_valid_note(note: str) -> bool:
    """Check if a note name can be resolved to a pitch class."""
    try:
        pitch_class_of(note)
    except InvalidNote:
        return False
    return True


def transpose_note(note: str, semitones: int) -> str:
    """
    Move a note by a number of semitones (sharp spelling).

    Examples:
        >>> transpose_note("C", 7)
        'G'
        >>> transpose_note("F#", -1)
        'F'
    """
    return note_name(pitch_class_of(note) + semitones)


def interval_semitones(lower: str, upper: str) -> int:
    """Semitones from one note up to the next occurrence of another (0-11)."""
    return (pitch_class_of(upper) - pitch_class_of(lower)) % 12


# =============================================================================
# FRETBOARD LOOKUPS
# =============================================================================

def _check_string(string_index: int) -> None:
    if not 0 <= string_index < NUM_STRINGS:
        raise InvalidFret(
            f"String index must be 0-{NUM_STRINGS - 1}. Got: {string_index}"
        )


def _check_fret(fret: int) -> None:
    if fret < MUTED or fret > MAX_FRET:
        raise InvalidFret(f"Fret must be between {MUTED} and {MAX_FRET}. Got: {fret}")


def fret_pitch_class(string_index: int, fret: int) -> Optional[int]:
    """
    Get the pitch class a string sounds when played at a fret.

    A muted string (-1) sounds nothing, so None is returned for it.

    Examples:
        >>> fret_pitch_class(1, 3)   # A string, 3rd fret
        0
        >>> fret_pitch_class(0, 0)   # open low E
        4
    """
    _check_string(string_index)
    _check_fret(fret)
    if fret == MUTED:
        return None
    return (TUNING_PITCH_CLASSES[string_index] + fret) % 12


def find_fret_for_pitch_class(target_pitch_class: int, string_index: int) -> int:
    """
    Find the first-octave fret (0-11) where a string sounds a pitch class.

    Example:
        >>> find_fret_for_pitch_class(pitch_class_of("C"), 1)   # C on the A string
        3
    """
    _check_string(string_index)
    return (target_pitch_class - TUNING_PITCH_CLASSES[string_index] + 12) % 12


def find_fret_for_note(note: str, string_index: int) -> int:
    """Same as find_fret_for_pitch_class() but takes a note name."""
    return find_fret_for_pitch_class(pitch_class_of(note), string_index)


# =============================================================================
# FRET ARRAYS
# =============================================================================

def check_frets(frets: List[int]) -> List[int]:
    """Ensure a fret array has 6 values, each in [-1, 24]."""
    frets = list(frets)
    if len(frets) != NUM_STRINGS:
        raise InvalidFret(f"Expected {NUM_STRINGS} fret values, got {len(frets)}: {frets}")
    for fret in frets:
        _check_fret(fret)
    return frets


def frets_to_pitch_classes(frets: List[int]) -> List[Optional[int]]:
    """Pitch class per string (None for muted strings)."""
    return [fret_pitch_class(i, fret) for i, fret in enumerate(check_frets(frets))]


def frets_to_notes(frets: List[int]) -> List[str]:
    """
    Sounding note names of a fret array, low string to high, muted skipped.

    Example:
        >>> frets_to_notes([-1, 3, 2, 0, 1, 0])
        ['C', 'E', 'G', 'C', 'E']
    """
    return [note_name(pc) for pc in frets_to_pitch_classes(frets) if pc is not None]


def to_absolute_frets(frets: List[int], base_fret: int = 1) -> List[int]:
    """
    Convert baseFret-relative frets to absolute fret positions.

    When base_fret is 1 the values are already absolute. Otherwise fretted
    values map to base_fret + fret - 1; muted and open strings pass through.

    Example:
        >>> to_absolute_frets([1, 3, 3, 1, 1, 1], base_fret=5)
        [5, 7, 7, 5, 5, 5]
    """
    if base_fret <= 1:
        return list(frets)
    return [fret if fret <= 0 else base_fret + fret - 1 for fret in frets]


def to_relative_frets(frets: List[int], base_fret: int) -> List[int]:
    """Inverse of to_absolute_frets()."""
    if base_fret <= 1:
        return list(frets)
    return [fret if fret <= 0 else fret - base_fret + 1 for fret in frets]


def compute_base_fret(frets: List[int]) -> int:
    """
    Get the diagram position of an absolute fret array.

    Open-string voicings sit at the nut (1). Otherwise the lowest fretted
    position is used; a fully muted pattern also reports 1.
    """
    if any(fret == 0 for fret in frets):
        return 1
    fretted = [fret for fret in frets if fret > 0]
    return min(fretted) if fretted else 1
