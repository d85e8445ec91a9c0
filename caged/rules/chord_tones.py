"""
Chord Tones Module - Which Pitch Classes Belong to a Chord

This is the default "chord-tone oracle" used by the voicing engine. Given a
root note and a quality label it returns the set of pitch classes that make
up the chord. The assembler only needs something with the same call
signature, so a different theory backend can be plugged in.

It can:
    1. Map quality labels and their aliases to a canonical quality
    2. Build the pitch-class set of a chord from its interval formula
    3. Spell the chord's theoretical notes (sharps)
    4. Split chord symbols like "F#m7" into root and quality
"""

from functools import lru_cache
from typing import Dict, FrozenSet, List, Optional, Tuple

from caged.exceptions import InvalidNote, UnknownChord
from caged.rules.notes import CHROMATIC_SCALE, note_name, pitch_class_of


# =============================================================================
# CONSTANTS: Chord Formulas
# =============================================================================

# Chord formulas as semitone intervals from the root
CHORD_FORMULAS: Dict[str, Tuple[int, ...]] = {
    "major": (0, 4, 7),
    "minor": (0, 3, 7),
    "7": (0, 4, 7, 10),
    "maj7": (0, 4, 7, 11),
    "m7": (0, 3, 7, 10),
    "sus2": (0, 2, 7),
    "sus4": (0, 5, 7),
    "dim": (0, 3, 6),
    "aug": (0, 4, 8),
    "add9": (0, 4, 7, 2),
    "6": (0, 4, 7, 9),
    "m6": (0, 3, 7, 9),
    "9": (0, 4, 7, 10, 2),
    "dim7": (0, 3, 6, 9),
    "m7b5": (0, 3, 6, 10),
}

# Alternative spellings of quality labels
QUALITY_ALIASES: Dict[str, str] = {
    "": "major",
    "maj": "major",
    "M": "major",
    "m": "minor",
    "min": "minor",
    "M7": "maj7",
    "min7": "m7",
    "dom7": "7",
    "sus": "sus4",
    "+": "aug",
    "o": "dim",
    "o7": "dim7",
}

# The two qualities that have CAGED shape templates
BASE_QUALITIES = ("major", "minor")


# =============================================================================
# QUALITY LABELS
# =============================================================================

def normalize_quality(quality: Optional[str]) -> Optional[str]:
    """
    Map a quality label or alias to its canonical name.

    Examples:
        >>> normalize_quality("m")
        'minor'
        >>> normalize_quality("dom7")
        '7'
        >>> normalize_quality("weird") is None
        True
    """
    if quality is None:
        quality = ""
    quality = quality.strip()

    if quality in CHORD_FORMULAS:
        return quality
    if quality in QUALITY_ALIASES:
        return QUALITY_ALIASES[quality]

    lowered = quality.lower()
    if lowered in CHORD_FORMULAS:
        return lowered
    return QUALITY_ALIASES.get(lowered)


def base_quality(quality: Optional[str]) -> Optional[str]:
    """Return "major" or "minor" if the quality has CAGED templates, else None."""
    canonical = normalize_quality(quality)
    return canonical if canonical in BASE_QUALITIES else None


# =============================================================================
# CHORD TONES
# =============================================================================

@lru_cache(maxsize=None)
def _tones_for(root_pc: int, quality: str) -> FrozenSet[int]:
    return frozenset((root_pc + interval) % 12 for interval in CHORD_FORMULAS[quality])


def chord_tones(root: str, quality: str = "major") -> FrozenSet[int]:
    """
    Get the pitch-class set of a chord.

    An unknown quality gives an empty set, which callers treat as
    "unknown chord". A bad root raises InvalidNote.

    Example:
        >>> sorted(chord_tones("A", "minor"))
        [0, 4, 9]
    """
    root_pc = pitch_class_of(root)
    canonical = normalize_quality(quality)
    if canonical is None:
        return frozenset()
    return _tones_for(root_pc, canonical)


def chord_note_names(root: str, quality: str = "major") -> List[str]:
    """
    Theoretical notes of a chord in formula order, spelled with sharps.

    Example:
        >>> chord_note_names("C", "7")
        ['C', 'E', 'G', 'A#']
    """
    root_pc = pitch_class_of(root)
    canonical = normalize_quality(quality)
    if canonical is None:
        return []
    return [note_name(root_pc + interval) for interval in CHORD_FORMULAS[canonical]]


class ChordToneOracle:
    """
    Default chord-tone oracle built on CHORD_FORMULAS.

    Usage:
        oracle = ChordToneOracle()
        oracle.chord_tones("C", "major")     # frozenset({0, 4, 7})
        oracle.resolve("C", "weird")         # raises UnknownChord
    """

    def chord_tones(self, root: str, quality: str) -> FrozenSet[int]:
        return chord_tones(root, quality)

    def note_names(self, root: str, quality: str) -> List[str]:
        return chord_note_names(root, quality)

    def resolve(self, root: str, quality: str) -> FrozenSet[int]:
        """Like chord_tones() but raises UnknownChord instead of returning an empty set."""
        tones = self.chord_tones(root, quality)
        if not tones:
            raise UnknownChord(f"No chord tones known for {root} {quality!r}")
        return tones


DEFAULT_ORACLE = ChordToneOracle()


# =============================================================================
# CHORD SYMBOLS
# =============================================================================

def parse_chord_symbol(symbol: str) -> Tuple[str, str]:
    """
    Split a chord symbol into (root, canonical quality).

    Examples:
        >>> parse_chord_symbol("F#m7")
        ('F#', 'm7')
        >>> parse_chord_symbol("Bb")
        ('A#', 'major')
        >>> parse_chord_symbol("Am")
        ('A', 'minor')

    Raises:
        InvalidNote: If the symbol does not start with a valid root
        UnknownChord: If the suffix is not a known quality
    """
    symbol = symbol.strip()
    if not symbol:
        raise InvalidNote("Empty chord symbol")

    # Two-character roots first ("C#", "Bb"), then one-character roots
    for root_len in (2, 1):
        root = symbol[:root_len]
        if root_len == 2 and root[-1:] not in ("#", "b"):
            continue
        try:
            root_pc = pitch_class_of(root)
        except InvalidNote:
            continue

        suffix = symbol[root_len:]
        quality = normalize_quality(suffix)
        if quality is None:
            raise UnknownChord(f"Unknown chord quality '{suffix}' in '{symbol}'")
        return CHROMATIC_SCALE[root_pc], quality

    raise InvalidNote(f"Invalid chord root in '{symbol}'")


def chord_symbol(root: str, quality: str = "major") -> str:
    """
    Build a display symbol from a root and quality.

    Examples:
        >>> chord_symbol("A", "minor")
        'Am'
        >>> chord_symbol("Bb", "7")
        'A#7'
    """
    canonical = normalize_quality(quality) or quality
    suffix = {"major": "", "minor": "m"}.get(canonical, canonical)
    return CHROMATIC_SCALE[pitch_class_of(root)] + suffix


def is_valid_chord_symbol(symbol: str) -> bool:
    """
    Check if a chord symbol is valid.

    Examples:
        is_valid_chord_symbol("C")     → True
        is_valid_chord_symbol("G7")    → True
        is_valid_chord_symbol("Xyz")   → False
    """
    try:
        parse_chord_symbol(symbol)
    except (InvalidNote, UnknownChord):
        return False
    return True
