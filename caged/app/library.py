"""
Voicing Library - Curated Fallback Voicings

The assembler asks a library for hand-picked voicings before it falls back
to transposing CAGED templates. Anything with a matching `lookup` method can
be used; this module ships two implementations:

    - InMemoryVoicingLibrary: wraps an already-parsed dictionary
    - YamlVoicingLibrary: reads caged/data/voicings.yml (or another file)
      the first time it is asked for something

Usage:
    library = YamlVoicingLibrary()
    library.lookup("Bb", "m7")    # same as lookup("A#", "m7")
"""

from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

from caged.data.loader import load_voicing_library, parse_library
from caged.data.schema import RawVoicing
from caged.rules.chord_tones import normalize_quality
from caged.rules.notes import is_valid_note, normalize_note


class VoicingLibrary(Protocol):
    """Anything that can return curated voicings for a chord."""

    def lookup(self, root: str, quality: str) -> List[RawVoicing]:
        ...


class InMemoryVoicingLibrary:
    """
    Voicing library backed by a dictionary of quality -> root -> voicings.

    Example:
        >>> library = InMemoryVoicingLibrary({"minor": {"A": [{"frets": [-1, 0, 2, 2, 1, 0]}]}})
        >>> library.voicing_count("A", "m")
        1
    """

    def __init__(self, data: Optional[Dict] = None):
        self._voicings: Optional[Dict[str, Dict[str, List[RawVoicing]]]] = (
            parse_library(data) if data is not None else None
        )

    def _load(self) -> Dict[str, Dict[str, List[RawVoicing]]]:
        return self._voicings or {}

    def lookup(self, root: str, quality: str) -> List[RawVoicing]:
        """Curated voicings for a chord; [] when nothing is known."""
        canonical = normalize_quality(quality)
        if canonical is None or not is_valid_note(root):
            return []
        return list(self._load().get(canonical, {}).get(normalize_note(root), []))

    def has_chord(self, root: str, quality: str) -> bool:
        return bool(self.lookup(root, quality))

    def voicing_count(self, root: str, quality: str) -> int:
        return len(self.lookup(root, quality))

    def available_qualities(self) -> List[str]:
        return sorted(self._load())

    def available_roots(self, quality: str) -> List[str]:
        canonical = normalize_quality(quality)
        return sorted(self._load().get(canonical, {})) if canonical else []


class YamlVoicingLibrary(InMemoryVoicingLibrary):
    """
    Voicing library read lazily from a YAML file.

    With no path, the packaged voicings.yml is used and shared through the
    loader's cache.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        super().__init__()
        self.path = path

    def _load(self) -> Dict[str, Dict[str, List[RawVoicing]]]:
        if self._voicings is None:
            self._voicings = load_voicing_library(self.path)
        return self._voicings


DEFAULT_LIBRARY = YamlVoicingLibrary()
