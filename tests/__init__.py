"""
Test Package

Contains unit tests for all modules.
Run with: pytest tests/ -v

Test files follow the pattern:
    test_<module_name>.py

Example:
    tests/test_notes.py       - Tests for caged/rules/notes.py
    tests/test_transposer.py  - Tests for caged/rules/transposer.py and shapes.py
    tests/test_generate.py    - Tests for caged/app/generate.py and library.py
"""
