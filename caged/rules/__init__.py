"""
Rules Subpackage

This package contains the music-theory and fretboard rules:
    - notes.py: Pitch classes and fretboard arithmetic
    - chord_tones.py: Chord formulas and the default chord-tone oracle
    - shapes.py: The five CAGED shape templates
    - transposer.py: Moving templates to a new root, muting foreign notes
    - classifier.py: Labelling a fret pattern with its CAGED shape
    - tablature.py: Fret strings, ASCII tab and chord boxes
"""
