"""
Command Line Interface for CAGED Voicings
==========================================

Look up CAGED voicings for a chord from the terminal.

Usage Examples:
    # All CAGED voicings for a chord
    caged C
    caged A minor
    caged F#m7

    # Limit the count and the neck range
    caged G --max 3 --max-fret 10

    # Include voicings that fail chord-tone validation
    caged Bb 7 --all

    # Other output formats
    caged Am --compact
    caged Am --tab
    caged Am --json

    # Which shape is this fingering?
    caged --classify x32010

    # Is this fingering right for the chord?
    caged C --validate x32011
"""

import argparse
import json
import logging
import sys
from typing import List, Optional, Tuple

from pydantic import ValidationError

from caged import __version__
from caged.app.generate import VoicingAssembler, validate_custom_voicing
from caged.data.loader import load_options
from caged.data.schema import Voicing
from caged.exceptions import CagedError, UnknownChord
from caged.rules.chord_tones import chord_symbol, normalize_quality, parse_chord_symbol
from caged.rules.classifier import classify_shape, describe_shape
from caged.rules.notes import normalize_note
from caged.rules.tablature import TAB_STRING_NAMES, format_chord_diagram, format_tab, parse_fret_string

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


# =============================================================================
# PART 1: ARGUMENT PARSER SETUP
# =============================================================================

def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Returns:
        Configured ArgumentParser object
    """
    parser = argparse.ArgumentParser(
        prog="caged",
        description="""
CAGED chord voicings - fret positions for the C, A, G, E and D shapes
of any chord, checked against the chord's notes.

Examples:
  caged C
  caged A minor --max 3
  caged F#m7 --tab
  caged --classify x32010
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # ─────────────────────────────────────────────────────────────────────────
    # Positional arguments: the chord
    # ─────────────────────────────────────────────────────────────────────────
    parser.add_argument(
        "chord",
        nargs="?",
        help="Chord symbol (C, Am, F#m7) or root note when QUALITY is given"
    )

    parser.add_argument(
        "quality",
        nargs="?",
        help="Chord quality (major, minor, 7, maj7, m7, sus2, sus4, ...)"
    )

    # ─────────────────────────────────────────────────────────────────────────
    # Selection options
    # ─────────────────────────────────────────────────────────────────────────
    parser.add_argument(
        "--max",
        type=int,
        dest="max_count",
        help="Maximum number of voicings (default: 5)"
    )

    parser.add_argument(
        "--min-fret",
        type=int,
        help="Lowest base fret to include (default: 0)"
    )

    parser.add_argument(
        "--max-fret",
        type=int,
        help="Highest base fret to include (default: 15)"
    )

    parser.add_argument(
        "--all",
        action="store_true",
        help="Include voicings that fail chord-tone validation"
    )

    parser.add_argument(
        "--config",
        help="YAML file with default options (max_count, min_fret, max_fret, only_validated)"
    )

    # ─────────────────────────────────────────────────────────────────────────
    # Output format options
    # ─────────────────────────────────────────────────────────────────────────
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--json",
        action="store_true",
        help="Output voicings as JSON (useful for scripting)"
    )
    output.add_argument(
        "--compact",
        action="store_true",
        help="One line per voicing"
    )
    output.add_argument(
        "--tab",
        action="store_true",
        help="Show voicings side by side as ASCII tab"
    )

    # ─────────────────────────────────────────────────────────────────────────
    # Other modes
    # ─────────────────────────────────────────────────────────────────────────
    parser.add_argument(
        "--classify",
        metavar="FRETS",
        help="Classify a fret pattern (e.g. x32010) by CAGED shape and exit"
    )

    parser.add_argument(
        "--validate",
        metavar="FRETS",
        help="Check a fret pattern (e.g. x32010) against CHORD"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging (skipped shapes, muted strings)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


# =============================================================================
# PART 2: OUTPUT FORMATTING FUNCTIONS
# =============================================================================

def format_result_pretty(name: str, voicings: List[Voicing]) -> str:
    """
    Format voicings as chord boxes with their details.

    Args:
        name: Chord symbol shown in the header
        voicings: Voicings from the assembler

    Returns:
        Formatted string for terminal display
    """
    lines = []
    lines.append("┌" + "─" * 43 + "┐")
    lines.append("│" + f" {name} - {len(voicings)} CAGED voicing(s) ".center(43) + "│")
    lines.append("└" + "─" * 43 + "┘")

    if voicings:
        lines.append(f"Notes: {' '.join(voicings[0].theoretical_notes)}")

    for voicing in voicings:
        lines.append("")
        lines.append(format_chord_diagram(voicing))

        status = "✅ validated" if voicing.validated else "❌ not validated"
        lines.append(f"  {voicing.fret_string}  |  fret {voicing.base_fret}  |  {voicing.difficulty}  |  {status}")

        if voicing.barres:
            lines.append(f"  Barre at fret(s): {', '.join(str(b) for b in voicing.barres)}")
        if voicing.template_shape and voicing.template_shape != voicing.shape:
            lines.append(f"  From the {voicing.template_shape}-shape template")
        if voicing.corrections:
            muted = ", ".join(TAB_STRING_NAMES[c.string_index] for c in voicing.corrections)
            lines.append(f"  Muted string(s): {muted}")

    return "\n".join(lines)


def format_result_compact(voicings: List[Voicing]) -> str:
    """
    One line per voicing: shape, frets, base fret, difficulty.

    Example:
        C  x32010            fret 1   beginner
    """
    lines = []
    for voicing in voicings:
        mark = "" if voicing.validated else "  (not validated)"
        lines.append(
            f"{voicing.shape}  {voicing.fret_string:<18} fret {voicing.base_fret:<3} {voicing.difficulty}{mark}"
        )
    return "\n".join(lines)


def format_result_json(name: str, voicings: List[Voicing]) -> str:
    """
    Format voicings as JSON.

    Derived fields (fret_string, relative_frets) are included so
    consumers don't need to recompute them.
    """
    output = {
        "chord": name,
        "voicings": [
            {
                **voicing.model_dump(mode="json"),
                "fret_string": voicing.fret_string,
                "relative_frets": voicing.relative_frets,
            }
            for voicing in voicings
        ],
    }
    return json.dumps(output, indent=2)


def format_classification(frets: List[int]) -> str:
    features = describe_shape(frets)
    return "\n".join([
        f"Shape: {classify_shape(frets)}",
        f"Played strings: {' '.join(TAB_STRING_NAMES[i] for i in features['played'])}",
        f"Open strings: {'yes' if features['has_open'] else 'no'}",
    ])


# =============================================================================
# PART 3: ARGUMENT HANDLING
# =============================================================================

def resolve_chord(chord: str, quality: Optional[str]) -> Tuple[str, str]:
    """
    Turn the positional arguments into (root, quality).

    "Am" alone is parsed as a chord symbol; "A minor" uses the second
    argument as the quality.
    """
    if quality is None:
        return parse_chord_symbol(chord)
    return normalize_note(chord), normalize_quality(quality) or quality


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


# =============================================================================
# PART 4: MAIN ENTRY POINT
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Returns:
        Exit code: 0 on success, 1 when nothing was found or input was bad
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    # ─────────────────────────────────────────────────────────────────────────
    # Classify mode
    # ─────────────────────────────────────────────────────────────────────────
    if args.classify:
        try:
            frets = parse_fret_string(args.classify)
        except CagedError as e:
            print(f"❌ {e}", file=sys.stderr)
            return 1
        print(format_classification(frets))
        return 0

    if not args.chord:
        parser.print_help()
        print("\n⚠️  Please provide a chord (e.g. C, Am, F#m7) or use --classify")
        return 1

    try:
        root, quality = resolve_chord(args.chord, args.quality)
        options = load_options(
            args.config,
            max_count=args.max_count,
            min_fret=args.min_fret,
            max_fret=args.max_fret,
            only_validated=False if args.all else None,
        )
    except UnknownChord:
        print(f"No voicings found for {args.chord} {args.quality or ''}".rstrip())
        return 1
    except (CagedError, ValidationError, FileNotFoundError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    name = chord_symbol(root, quality)

    # ─────────────────────────────────────────────────────────────────────────
    # Validate mode
    # ─────────────────────────────────────────────────────────────────────────
    if args.validate:
        try:
            frets = parse_fret_string(args.validate)
        except CagedError as e:
            print(f"❌ {e}", file=sys.stderr)
            return 1
        result = validate_custom_voicing(frets, root, quality)
        print(f"{name}: {' '.join(result.theoretical_notes)}")
        print(result)
        return 0 if result.is_valid else 1

    # ─────────────────────────────────────────────────────────────────────────
    # Voicing lookup
    # ─────────────────────────────────────────────────────────────────────────
    logger.debug("Looking up %s with %s", name, options)
    voicings = VoicingAssembler(options=options).get_voicings(root, quality)

    if not voicings:
        print(f"No voicings found for {name}")
        return 1

    if args.json:
        print(format_result_json(name, voicings))
    elif args.compact:
        print(format_result_compact(voicings))
    elif args.tab:
        print(format_tab(voicings, labels=[v.shape for v in voicings]))
    else:
        print(format_result_pretty(name, voicings))

    return 0


if __name__ == "__main__":
    sys.exit(main())
