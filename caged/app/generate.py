"""
Voicing Generator - CAGED Voicings for Any Chord
=================================================

This is the MAIN entry point for getting playable voicings for a chord.

The Approach:
    1. Ask the chord-tone oracle which pitch classes make up the chord
    2. Collect curated voicings from the fallback library
    3. For major/minor chords, transpose the CAGED shapes the library lacks
    4. Check every candidate against the chord tones
    5. Keep one voicing per shape, lowest positions first

Both collaborators can be swapped out: the oracle only needs a
`chord_tones(root, quality)` method and the library only needs
`lookup(root, quality)`.

Usage:
    from caged.app.generate import get_voicings

    for voicing in get_voicings("A", "minor"):
        print(voicing.shape, voicing.fret_string, voicing.difficulty)
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple

from caged.app.library import DEFAULT_LIBRARY
from caged.data.schema import RawVoicing, TranspositionResult, Voicing, VoicingOptions
from caged.exceptions import InvalidFret
from caged.rules.chord_tones import DEFAULT_ORACLE, base_quality, chord_symbol, normalize_quality
from caged.rules.classifier import classify_shape
from caged.rules.notes import (
    MUTED,
    check_frets,
    compute_base_fret,
    frets_to_notes,
    frets_to_pitch_classes,
    normalize_note,
    note_name,
    pitch_class_of,
)
from caged.rules.shapes import SHAPE_ORDER, get_template, shape_order
from caged.rules.tablature import TAB_STRING_NAMES
from caged.rules.transposer import try_transpose

logger = logging.getLogger(__name__)


# =============================================================================
# PART 1: SCORING CONSTANTS
# =============================================================================

# Used by best_voicing() to rank voicings
SCORE_VALIDATED = 1000
SCORE_OPEN_STRINGS = 100
SCORE_LOW_POSITION = 50
SCORE_PER_BARRE = -20

# Above this base fret a voicing counts as advanced
ADVANCED_BASE_FRET = 12

DEFAULT_FRET_RANGE = (0, 15)


# =============================================================================
# PART 2: VALIDATION RESULT DATA CLASS
# =============================================================================

@dataclass
class ValidationResult:
    """
    Result of checking a user-supplied fret pattern against a chord.

    Attributes:
        is_valid: True if every sounded note is a chord tone and every
            chord tone is sounded
        errors: Why the voicing is invalid
        warnings: Non-critical remarks (voicing still usable)
        theoretical_notes: Notes the chord should contain
        actual_notes: Notes the frets actually produce
        suggested_frets: A correct voicing to use instead, if one exists

    Example:
        result = validate_custom_voicing([-1, 3, 2, 0, 1, 1], "C", "major")
        if not result.is_valid:
            print(result.errors, result.suggested_frets)
    """
    is_valid: bool
    errors: List[str]
    warnings: List[str]
    theoretical_notes: List[str] = field(default_factory=list)
    actual_notes: List[str] = field(default_factory=list)
    suggested_frets: Optional[List[int]] = None

    def __str__(self) -> str:
        lines = ["✅ VALID" if self.is_valid else "❌ INVALID"]

        if self.errors:
            lines.append("  Errors:")
            for err in self.errors:
                lines.append(f"    - {err}")

        if self.warnings:
            lines.append("  Warnings:")
            for warn in self.warnings:
                lines.append(f"    - {warn}")

        if self.suggested_frets is not None:
            lines.append(f"  Suggested: {self.suggested_frets}")

        return "\n".join(lines)


# =============================================================================
# PART 3: VOICING ANALYSIS
# =============================================================================

def detect_barres(frets: List[int]) -> List[int]:
    """
    Find fret positions shared by two or more fretted strings.

    Example:
        >>> detect_barres([-1, 3, 5, 5, 5, 3])
        [3, 5]
    """
    counts = Counter(fret for fret in frets if fret > 0)
    return sorted(fret for fret, count in counts.items() if count >= 2)


def classify_difficulty(frets: List[int], base_fret: int, barres: List[int]) -> str:
    """
    Rate how hard a voicing is to play.

    - advanced: base fret above 12, or more than one barre
    - beginner: at least one open string and no barre
    - intermediate: everything else
    """
    if base_fret > ADVANCED_BASE_FRET or len(barres) > 1:
        return "advanced"
    if any(fret == 0 for fret in frets) and not barres:
        return "beginner"
    return "intermediate"


def sounded_pitch_classes(frets: List[int]) -> List[int]:
    return [pc for pc in frets_to_pitch_classes(frets) if pc is not None]


def is_valid_voicing(frets: List[int], chord_tones: FrozenSet[int]) -> bool:
    """
    Check that the frets sound only chord tones, and all of them.

    Example:
        >>> is_valid_voicing([-1, 0, 2, 2, 1, 0], frozenset({9, 0, 4}))   # Am
        True
        >>> is_valid_voicing([-1, 3, 2, 0, 0, 0], frozenset({0, 4, 7}))   # B is foreign
        False
    """
    sounded = set(sounded_pitch_classes(frets))
    return bool(sounded) and sounded <= chord_tones and chord_tones <= sounded


def score_voicing(voicing: Voicing) -> float:
    """
    Playability score used to pick the single best voicing.

    validated +1000, open strings +100, low position up to +50,
    and -20 for every barre.
    """
    score = 0.0
    if voicing.validated:
        score += SCORE_VALIDATED
    if voicing.has_open_strings:
        score += SCORE_OPEN_STRINGS

    fretted = [fret for fret in voicing.frets if fret > 0]
    average = sum(fretted) / len(fretted) if fretted else 0.0
    score += max(0.0, SCORE_LOW_POSITION - average * 2)

    score += SCORE_PER_BARRE * len(voicing.barres)
    return score


def best_voicing(voicings: List[Voicing]) -> Optional[Voicing]:
    """Highest-scoring voicing, or None for an empty list."""
    if not voicings:
        return None
    return max(voicings, key=score_voicing)


def sort_by_difficulty(voicings: List[Voicing]) -> List[Voicing]:
    """Open voicings first, then fewer barres, then lower position."""
    return sorted(
        voicings,
        key=lambda v: (not v.has_open_strings, len(v.barres), v.base_fret),
    )


def filter_by_barres(voicings: List[Voicing], max_barres: int = 1) -> List[Voicing]:
    return [v for v in voicings if len(v.barres) <= max_barres]


def open_voicings(voicings: List[Voicing]) -> List[Voicing]:
    return [v for v in voicings if v.has_open_strings]


def barre_voicings(voicings: List[Voicing]) -> List[Voicing]:
    return [v for v in voicings if v.barres]


# =============================================================================
# PART 4: THE ASSEMBLER
# =============================================================================

def _preference(voicing: Voicing) -> Tuple[int, int]:
    # Lower position wins; on a tie the curated voicing wins
    return (voicing.base_fret, 0 if voicing.source == "library" else 1)


def _in_range(voicing: Voicing, fret_range: Tuple[int, int]) -> bool:
    low, high = fret_range
    return low <= voicing.base_fret <= high


class VoicingAssembler:
    """
    Builds the list of CAGED voicings for a chord.

    Args:
        oracle: Chord-tone oracle (anything with chord_tones(root, quality))
        library: Fallback voicing library (anything with lookup(root, quality))
        options: Default VoicingOptions for get_voicings()

    Usage:
        assembler = VoicingAssembler()
        assembler.get_voicings("C", "major")
        assembler.get_voicings("F#", "m", VoicingOptions(max_count=3))
    """

    def __init__(self, oracle=None, library=None, options: Optional[VoicingOptions] = None):
        self.oracle = oracle if oracle is not None else DEFAULT_ORACLE
        self.library = library if library is not None else DEFAULT_LIBRARY
        self.options = options if options is not None else VoicingOptions()

    # ─────────────────────────────────────────────────────────────────────────
    # Chord information
    # ─────────────────────────────────────────────────────────────────────────

    def chord_tones(self, root: str, quality: str) -> FrozenSet[int]:
        return frozenset(self.oracle.chord_tones(root, quality))

    def theoretical_notes(self, root: str, quality: str, tones: FrozenSet[int]) -> List[str]:
        """Chord spelling from the oracle, or the tone set ordered up from the root."""
        note_names = getattr(self.oracle, "note_names", None)
        if note_names is not None:
            return list(note_names(root, quality))
        root_pc = pitch_class_of(root)
        return [note_name(pc) for pc in sorted(tones, key=lambda pc: (pc - root_pc) % 12)]

    # ─────────────────────────────────────────────────────────────────────────
    # Candidate construction
    # ─────────────────────────────────────────────────────────────────────────

    def _build(
        self,
        root: str,
        quality: str,
        frets: List[int],
        tones: FrozenSet[int],
        notes: List[str],
        source: str,
        barres: Optional[List[int]] = None,
        fingers: Optional[List[int]] = None,
        template_shape: Optional[str] = None,
        corrections=None,
    ) -> Voicing:
        base_fret = compute_base_fret(frets)
        if barres is None:
            barres = detect_barres(frets)

        return Voicing(
            name=chord_symbol(root, quality),
            root=root,
            quality=quality,
            shape=classify_shape(frets),
            template_shape=template_shape,
            source=source,
            frets=frets,
            base_fret=base_fret,
            barres=barres,
            fingers=fingers,
            difficulty=classify_difficulty(frets, base_fret, barres),
            validated=is_valid_voicing(frets, tones),
            theoretical_notes=notes,
            actual_notes=frets_to_notes(frets),
            corrections=list(corrections or []),
        )

    def _from_library(self, raw: RawVoicing, root, quality, tones, notes) -> Voicing:
        return self._build(
            root, quality, raw.absolute_frets(), tones, notes,
            source="library",
            barres=list(raw.barres),
            fingers=list(raw.fingers) if raw.fingers is not None else None,
        )

    def _from_template(self, result: TranspositionResult, root, quality, tones, notes) -> Voicing:
        template = get_template(result.shape, result.quality)
        fingers = None
        if template.fingers is not None:
            fingers = [0 if fret == MUTED else finger for fret, finger in zip(result.frets, template.fingers)]

        return self._build(
            root, quality, list(result.frets), tones, notes,
            source="template",
            fingers=fingers,
            template_shape=result.shape,
            corrections=result.corrections,
        )

    def candidates(
        self,
        root: str,
        quality: str = "major",
        fret_range: Tuple[int, int] = DEFAULT_FRET_RANGE,
    ) -> List[Voicing]:
        """
        Every voicing considered for a chord, before filtering and dedupe.

        Library voicings come first; for major and minor chords the CAGED
        shapes not covered by the library are transposed from templates.

        Raises:
            InvalidNote: If the root is not a note name
        """
        root = normalize_note(root)
        label = normalize_quality(quality) or quality

        tones = self.chord_tones(root, label)
        if not tones:
            logger.warning("Unknown chord %s %r: no chord tones, no voicings returned", root, quality)
            return []
        notes = self.theoretical_notes(root, label, tones)

        # Step 1: curated voicings
        found = [
            self._from_library(raw, root, label, tones, notes)
            for raw in self.library.lookup(root, label)
        ]
        found = [v for v in found if _in_range(v, fret_range)]

        # Step 2: fill in the missing CAGED shapes
        template_quality = base_quality(label)
        if template_quality is None:
            logger.debug("%s %s has no CAGED templates, using library voicings only", root, label)
            return found

        # Shapes already covered by a correct curated voicing
        present = {v.shape for v in found if v.validated}
        for shape in SHAPE_ORDER:
            if shape in present:
                continue
            result = try_transpose(root, shape, template_quality, chord_quality=label, oracle=self.oracle)
            if result is None:
                continue
            voicing = self._from_template(result, root, label, tones, notes)
            if _in_range(voicing, fret_range):
                found.append(voicing)
            else:
                logger.debug("%s-shape %s at fret %d is outside %s", shape, voicing.name, voicing.base_fret, fret_range)

        return found

    # ─────────────────────────────────────────────────────────────────────────
    # Main entry point
    # ─────────────────────────────────────────────────────────────────────────

    def get_voicings(
        self,
        root: str,
        quality: str = "major",
        options: Optional[VoicingOptions] = None,
    ) -> List[Voicing]:
        """
        Ranked voicings for a chord, at most one per CAGED shape.

        Args:
            root: Root note ("C", "F#", "Bb", ...)
            quality: Chord quality ("major", "m", "7", "sus4", ...)
            options: Overrides the assembler's default options

        Returns:
            Voicings sorted by base fret; [] for an unknown chord

        Example:
            >>> [v.shape for v in VoicingAssembler().get_voicings("A", "minor")]
            ['A', 'E', 'D']
        """
        options = options if options is not None else self.options
        found = self.candidates(root, quality, options.fret_range)

        if options.only_validated:
            found = [v for v in found if v.validated]

        best: Dict[str, Voicing] = {}
        for voicing in found:
            current = best.get(voicing.shape)
            if current is None or _preference(voicing) < _preference(current):
                best[voicing.shape] = voicing

        ranked = sorted(
            best.values(),
            key=lambda v: _preference(v) + (SHAPE_ORDER.index(v.shape),),
        )
        return ranked[:options.max_count]

    def get_voicings_by_shape(
        self,
        root: str,
        quality: str = "major",
        options: Optional[VoicingOptions] = None,
    ) -> Dict[str, List[Voicing]]:
        """
        All candidates grouped by CAGED label, each group sorted by position.

        Groups follow the CAGED order for the quality (A first for minor).
        """
        options = options if options is not None else self.options
        order = shape_order(base_quality(quality) or "major")
        grouped: Dict[str, List[Voicing]] = {shape: [] for shape in order}

        for voicing in self.candidates(root, quality, options.fret_range):
            if options.only_validated and not voicing.validated:
                continue
            grouped[voicing.shape].append(voicing)

        for shape in grouped:
            grouped[shape].sort(key=_preference)
        return grouped


# =============================================================================
# PART 5: CONVENIENCE FUNCTIONS
# =============================================================================

def get_voicings(
    root: str,
    quality: str = "major",
    max_count: int = 5,
    fret_range: Tuple[int, int] = DEFAULT_FRET_RANGE,
    only_validated: bool = True,
    oracle=None,
    library=None,
) -> List[Voicing]:
    """
    Get up to max_count CAGED voicings for a chord.

    THIS IS THE MAIN FUNCTION YOU'LL USE!

    Args:
        root: Root note, sharps or flats
        quality: Chord quality or alias
        max_count: Maximum number of voicings
        fret_range: (min, max) allowed base fret
        only_validated: Drop voicings that fail chord-tone validation
        oracle: Custom chord-tone oracle
        library: Custom fallback voicing library

    Returns:
        List of Voicing, lowest position first. Unknown chords give [].

    Raises:
        InvalidNote: If the root is not a note name
        ValidationError: If the options are inconsistent

    Example:
        >>> voicings = get_voicings("C", "major")
        >>> [(v.shape, v.fret_string) for v in voicings]
        [('C', 'x32010'), ('A', 'x35553'), ('E', '875558'), ('D', 'x-x-10-12-13-12')]
    """
    options = VoicingOptions(
        max_count=max_count,
        min_fret=fret_range[0],
        max_fret=fret_range[1],
        only_validated=only_validated,
    )
    return VoicingAssembler(oracle, library).get_voicings(root, quality, options)


def get_voicings_by_shape(root: str, quality: str = "major", **kwargs) -> Dict[str, List[Voicing]]:
    """
    Voicings grouped by CAGED shape ("C", "A", "G", "E", "D"; minor starts at "A").

    Shapes with nothing playable map to an empty list.
    """
    return VoicingAssembler(**kwargs).get_voicings_by_shape(root, quality)


def get_common_voicing(root: str, quality: str = "major", **kwargs) -> Optional[Voicing]:
    """
    The easiest validated voicing for a chord, or None.

    Example:
        >>> get_common_voicing("G").fret_string
        '320003'
    """
    return best_voicing(VoicingAssembler(**kwargs).get_voicings(root, quality))


def validate_custom_voicing(
    frets: List[int],
    root: str,
    quality: str = "major",
    oracle=None,
    library=None,
) -> ValidationResult:
    """
    Check a hand-entered fret pattern against a chord.

    Args:
        frets: Six absolute frets
        root: Root note of the intended chord
        quality: Quality of the intended chord

    Returns:
        ValidationResult. When invalid, suggested_frets holds the best
        known voicing for the chord (if any).

    Raises:
        InvalidNote: If the root is not a note name

    Example:
        >>> validate_custom_voicing([-1, 3, 2, 0, 1, 0], "C").is_valid
        True
    """
    assembler = VoicingAssembler(oracle, library)
    root = normalize_note(root)
    label = normalize_quality(quality) or quality
    name = chord_symbol(root, label)

    try:
        frets = check_frets(frets)
    except InvalidFret as e:
        return ValidationResult(is_valid=False, errors=[str(e)], warnings=[])

    tones = assembler.chord_tones(root, label)
    if not tones:
        return ValidationResult(
            is_valid=False,
            errors=[f"Unknown chord: {root}{quality}"],
            warnings=[],
        )

    errors = []
    warnings = []
    pitch_classes = frets_to_pitch_classes(frets)

    for string_index, pc in enumerate(pitch_classes):
        if pc is not None and pc not in tones:
            errors.append(
                f"{TAB_STRING_NAMES[string_index]} string at fret "
                f"{frets[string_index]} sounds {note_name(pc)}, which is not in {name}"
            )

    sounded = [pc for pc in pitch_classes if pc is not None]
    if not sounded:
        errors.append("No strings are played")
    else:
        missing = [note_name(pc) for pc in sorted(tones - set(sounded))]
        if missing:
            errors.append(f"Missing chord tone(s): {', '.join(missing)}")
        if sounded[0] != pitch_class_of(root):
            warnings.append(f"Lowest note is {note_name(sounded[0])}, not the root {root} (inversion)")

    result = ValidationResult(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
        theoretical_notes=assembler.theoretical_notes(root, label, tones),
        actual_notes=frets_to_notes(frets),
    )

    if not result.is_valid:
        suggestion = best_voicing(assembler.get_voicings(root, label))
        if suggestion is not None:
            result.suggested_frets = list(suggestion.frets)

    return result
