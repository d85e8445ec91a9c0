"""
App Subpackage

This package contains the user-facing layer:
    - generate.py: The voicing assembler (library + CAGED templates + validation)
    - library.py: Curated fallback voicings behind a small lookup interface
    - cli.py: The `caged` command-line tool

Usage options:
    - Python: from caged.app.generate import get_voicings
    - CLI: caged Am --tab
"""
