"""
Exceptions raised by the CAGED voicing engine.

Only InvalidNote and InvalidFret reach the caller directly. UnknownChord and
UntransposableShape are raised internally and turned into empty or partial
results by the voicing assembler.
"""


class CagedError(Exception):
    """Base class for all errors raised by this package."""


class InvalidNote(CagedError, ValueError):
    """A note name could not be resolved to a pitch class."""


class InvalidFret(CagedError, ValueError):
    """A fret value or string index is outside the instrument's range."""


class UnknownChord(CagedError, LookupError):
    """No chord-tone set is known for a (root, quality) pair."""


class UntransposableShape(CagedError):
    """
    A shape template cannot be moved to the requested root.

    Raised when shifting the template would push a played string below
    the nut or past the last fret.
    """

    def __init__(self, shape: str, root: str, quality: str, frets):
        self.shape = shape
        self.root = root
        self.quality = quality
        self.frets = list(frets)
        super().__init__(
            f"{shape}-shape cannot be transposed to {root} {quality}: "
            f"frets would be {self.frets}"
        )
