"""
Schema definitions for CAGED voicings.

This module defines the Pydantic models that validate and structure the
data flowing through the voicing engine. Every library entry, every
generated voicing and every set of options must conform to these schemas.

Fret values follow one convention everywhere:
    -1 = muted string, 0 = open string, n > 0 = fretted at position n
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from caged.rules.notes import (
    MAX_FRET,
    MUTED,
    NUM_STRINGS,
    to_absolute_frets,
    to_relative_frets,
)
from caged.rules.tablature import frets_to_string


# =============================================================================
# VALID OPTIONS
# =============================================================================

VALID_SOURCES = ["library", "template"]

VALID_DIFFICULTIES = ["beginner", "intermediate", "advanced"]

VALID_SHAPES = ["C", "A", "G", "E", "D"]

VALID_CORRECTION_REASONS = ["foreign_note"]


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _validate_six_frets(v: List[int]) -> List[int]:
    """Shared check: exactly 6 values, each in [-1, 24]."""
    if len(v) != NUM_STRINGS:
        raise ValueError(f"Expected {NUM_STRINGS} fret values. Got {len(v)}: {v}")
    bad = [fret for fret in v if fret < MUTED or fret > MAX_FRET]
    if bad:
        raise ValueError(f"Fret values must be between {MUTED} and {MAX_FRET}. Got: {bad}")
    return list(v)


# =============================================================================
# LIBRARY ENTRY
# =============================================================================

class RawVoicing(BaseModel):
    """
    One curated voicing as stored in the fallback library.

    Attributes:
        frets: Six frets, relative to base_fret when base_fret > 1
        base_fret: Position of the diagram (1 = nut)
        barres: Absolute fret numbers held by a barre
        fingers: Optional fingering, 0 = no finger

    Example:
        >>> bm = RawVoicing(frets=[-1, 1, 3, 3, 2, 1], base_fret=2, barres=[2])
        >>> bm.absolute_frets()
        [-1, 2, 4, 4, 3, 2]
    """

    model_config = ConfigDict(frozen=True)

    frets: List[int] = Field(
        ...,
        description="Six fret values, relative to base_fret when base_fret > 1",
        examples=[[-1, 3, 2, 0, 1, 0], [-1, 1, 3, 3, 2, 1]]
    )

    base_fret: int = Field(
        default=1,
        ge=1,
        le=MAX_FRET,
        description="Diagram position (1 = nut)"
    )

    barres: List[int] = Field(
        default_factory=list,
        description="Absolute fret numbers held by a barre"
    )

    fingers: Optional[List[int]] = Field(
        default=None,
        description="Finger per string (0 = none, 1-4 = index to pinky)"
    )

    @field_validator('frets')
    @classmethod
    def validate_frets(cls, v: List[int]) -> List[int]:
        """Ensure there are 6 frets in range"""
        return _validate_six_frets(v)

    @field_validator('barres')
    @classmethod
    def validate_barres(cls, v: List[int]) -> List[int]:
        """Ensure barres are real fret positions, sorted"""
        bad = [fret for fret in v if fret < 1 or fret > MAX_FRET]
        if bad:
            raise ValueError(f"Barre frets must be between 1 and {MAX_FRET}. Got: {bad}")
        return sorted(v)

    @field_validator('fingers')
    @classmethod
    def validate_fingers(cls, v: Optional[List[int]]) -> Optional[List[int]]:
        """Ensure 6 finger numbers in 0-4"""
        if v is None:
            return v
        if len(v) != NUM_STRINGS or any(f < 0 or f > 4 for f in v):
            raise ValueError(f"Fingers must be 6 values between 0 and 4. Got: {v}")
        return list(v)

    def absolute_frets(self) -> List[int]:
        return to_absolute_frets(self.frets, self.base_fret)


# =============================================================================
# RESULT MODELS
# =============================================================================

class FretCorrection(BaseModel):
    """
    Record of a string that was muted because it sounded a foreign note.

    Attributes:
        string_index: 0 (low E) to 5 (high E)
        original_fret: Fret the string was played at before muting
        reason: Why it was muted (always "foreign_note" for now)
        pitch_class: The pitch class the string would have sounded
    """

    model_config = ConfigDict(frozen=True)

    string_index: int = Field(..., ge=0, le=NUM_STRINGS - 1)
    original_fret: int = Field(..., ge=0, le=MAX_FRET)
    reason: str = Field(default="foreign_note")
    pitch_class: int = Field(..., ge=0, le=11)

    @field_validator('reason')
    @classmethod
    def validate_reason(cls, v: str) -> str:
        if v not in VALID_CORRECTION_REASONS:
            raise ValueError(f"Reason must be one of {VALID_CORRECTION_REASONS}. Got: '{v}'")
        return v


class TranspositionResult(BaseModel):
    """
    Output of moving one CAGED template to a new root.

    Example:
        >>> result = transpose_shape("C", "A", "major")
        >>> result.frets
        [-1, 3, 5, 5, 5, 3]
        >>> result.was_corrected
        False
    """

    model_config = ConfigDict(frozen=True)

    root: str
    shape: str
    quality: str = Field(..., description="Template quality (major or minor)")
    chord_quality: str = Field(..., description="Quality the frets were validated against")
    frets: List[int]
    corrections: List[FretCorrection] = Field(default_factory=list)

    @field_validator('frets')
    @classmethod
    def validate_frets(cls, v: List[int]) -> List[int]:
        return _validate_six_frets(v)

    @property
    def was_corrected(self) -> bool:
        return bool(self.corrections)


class Voicing(BaseModel):
    """
    A complete, validated chord voicing returned by the assembler.

    Frets are stored as absolute positions. Use relative_frets for the
    diagram form and fret_string for the compact "x32010" notation.

    Attributes:
        name: Display name ("C", "Am", "G7")
        root: Root note, sharp spelling
        quality: Canonical quality label
        shape: CAGED label assigned by the classifier
        template_shape: Template that produced it (None for library voicings)
        source: "library" or "template"
        frets: Six absolute frets
        base_fret: Diagram position (1 when any string is open)
        barres: Absolute fret numbers held by a barre
        difficulty: beginner, intermediate or advanced
        validated: True when every sounded note is a chord tone and every
            chord tone is sounded
        theoretical_notes: Notes the chord should contain
        actual_notes: Notes the frets actually produce, low to high
        corrections: Strings muted during transposition
        fingers: Optional fingering
    """

    model_config = ConfigDict(frozen=True)

    # ---------------------------
    # Identity
    # ---------------------------

    name: str = Field(..., min_length=1, examples=["C", "Am", "G7"])
    root: str = Field(..., examples=["C", "F#"])
    quality: str = Field(..., examples=["major", "minor", "7"])
    shape: str = Field(..., description="CAGED label from the classifier")
    template_shape: Optional[str] = Field(default=None)
    source: str = Field(default="template")

    # ---------------------------
    # Fingering
    # ---------------------------

    frets: List[int] = Field(..., description="Six absolute fret values")
    base_fret: int = Field(default=1, ge=1, le=MAX_FRET)
    barres: List[int] = Field(default_factory=list)
    fingers: Optional[List[int]] = Field(default=None)

    # ---------------------------
    # Validation Metadata
    # ---------------------------

    difficulty: str = Field(default="intermediate")
    validated: bool = Field(default=False)
    theoretical_notes: List[str] = Field(default_factory=list)
    actual_notes: List[str] = Field(default_factory=list)
    corrections: List[FretCorrection] = Field(default_factory=list)

    @field_validator('frets')
    @classmethod
    def validate_frets(cls, v: List[int]) -> List[int]:
        """Ensure there are 6 frets in range"""
        return _validate_six_frets(v)

    @field_validator('shape')
    @classmethod
    def validate_shape(cls, v: str) -> str:
        if v not in VALID_SHAPES:
            raise ValueError(f"Shape must be one of {VALID_SHAPES}. Got: '{v}'")
        return v

    @field_validator('source')
    @classmethod
    def validate_source(cls, v: str) -> str:
        if v not in VALID_SOURCES:
            raise ValueError(f"Source must be one of {VALID_SOURCES}. Got: '{v}'")
        return v

    @field_validator('difficulty')
    @classmethod
    def validate_difficulty(cls, v: str) -> str:
        """Ensure difficulty is from our valid list (case-insensitive)"""
        v_lower = v.lower()
        if v_lower not in VALID_DIFFICULTIES:
            raise ValueError(f"Difficulty must be one of {VALID_DIFFICULTIES}. Got: '{v}'")
        return v_lower

    @property
    def relative_frets(self) -> List[int]:
        """Frets relative to base_fret, as drawn in a chord diagram."""
        return to_relative_frets(self.frets, self.base_fret)

    @property
    def fret_string(self) -> str:
        return frets_to_string(self.frets)

    @property
    def has_open_strings(self) -> bool:
        return any(fret == 0 for fret in self.frets)


# =============================================================================
# OPTIONS
# =============================================================================

class VoicingOptions(BaseModel):
    """
    Options controlling which voicings the assembler returns.

    These can come from keyword arguments, a YAML file (see
    caged.data.loader.load_options) or CLI flags.

    Example:
        >>> VoicingOptions(max_count=3, max_fret=12)
        VoicingOptions(max_count=3, min_fret=0, max_fret=12, only_validated=True)
    """

    max_count: int = Field(
        default=5,
        ge=1,
        description="Maximum number of voicings to return"
    )

    min_fret: int = Field(
        default=0,
        ge=0,
        le=MAX_FRET,
        description="Lowest allowed base fret"
    )

    max_fret: int = Field(
        default=15,
        ge=0,
        le=MAX_FRET,
        description="Highest allowed base fret"
    )

    only_validated: bool = Field(
        default=True,
        description="Drop voicings that fail chord-tone validation"
    )

    @model_validator(mode='after')
    def validate_fret_range(self) -> 'VoicingOptions':
        """Ensure min_fret <= max_fret"""
        if self.min_fret > self.max_fret:
            raise ValueError(
                f"min_fret ({self.min_fret}) must not exceed max_fret ({self.max_fret})"
            )
        return self

    @property
    def fret_range(self):
        return (self.min_fret, self.max_fret)
