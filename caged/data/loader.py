"""
Loader Module - Reading YAML Files

It can:
    1. Load the curated voicing library shipped with the package
       (or any file with the same layout)
    2. Load VoicingOptions from a small YAML config file

Library layout:

    major:
      C:
        - {frets: [-1, 3, 2, 0, 1, 0]}
      ...
    minor:
      ...
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml

from caged.data.schema import RawVoicing, VoicingOptions
from caged.exceptions import CagedError
from caged.rules.chord_tones import normalize_quality
from caged.rules.notes import normalize_note

PathLike = Union[str, Path]

# Parsed default library, filled on first use
_LIBRARY_CACHE: Optional[Dict[str, Dict[str, List[RawVoicing]]]] = None


def default_library_path() -> Path:
    # caged/data/loader.py -> caged/data/voicings.yml
    return Path(__file__).resolve().parent / "voicings.yml"


def _read_yaml(path: PathLike) -> Dict:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise CagedError(f"Expected a mapping at the top of {path}, got {type(data).__name__}")
    return data


# =============================================================================
# VOICING LIBRARY
# =============================================================================

def parse_library(data: Dict) -> Dict[str, Dict[str, List[RawVoicing]]]:
    """
    Validate raw library data into RawVoicing models.

    Quality labels and roots are normalized, so "m"/"Bb" keys end up under
    "minor"/"A#".

    Raises:
        CagedError: On an unknown quality label
        InvalidNote: On an unknown root
        ValidationError: On a malformed voicing entry
    """
    library: Dict[str, Dict[str, List[RawVoicing]]] = {}

    for quality_key, by_root in data.items():
        quality = normalize_quality(str(quality_key))
        if quality is None:
            raise CagedError(f"Unknown chord quality in voicing library: '{quality_key}'")

        for root_key, entries in (by_root or {}).items():
            root = normalize_note(str(root_key))
            voicings = [RawVoicing(**entry) for entry in (entries or [])]
            library.setdefault(quality, {}).setdefault(root, []).extend(voicings)

    return library


def load_voicing_library(path: Optional[PathLike] = None) -> Dict[str, Dict[str, List[RawVoicing]]]:
    """
    Load a voicing library from YAML.

    With no path the packaged voicings.yml is loaded once and cached.

    Example:
        >>> library = load_voicing_library()
        >>> library["minor"]["A"][0].frets
        [-1, 0, 2, 2, 1, 0]
    """
    global _LIBRARY_CACHE
    if path is not None:
        return parse_library(_read_yaml(path))

    if _LIBRARY_CACHE is None:
        _LIBRARY_CACHE = parse_library(_read_yaml(default_library_path()))
    return _LIBRARY_CACHE


# =============================================================================
# OPTIONS
# =============================================================================

def load_options(path: Optional[PathLike] = None, **overrides) -> VoicingOptions:
    """
    Build VoicingOptions from a YAML file plus keyword overrides.

    Overrides set to None are ignored, so CLI flags that were not given
    leave the file's values alone.

    Example config:
        max_count: 3
        min_fret: 0
        max_fret: 12
        only_validated: true

    Raises:
        FileNotFoundError: If the path does not exist
        ValidationError: If the resulting options are invalid
    """
    values = _read_yaml(path) if path is not None else {}
    values.update({key: value for key, value in overrides.items() if value is not None})
    return VoicingOptions(**values)
