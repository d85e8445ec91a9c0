"""
Data Subpackage

This package handles everything related to data:
    - schema.py: Pydantic models for voicings, corrections and options
    - loader.py: YAML loading for the curated library and option files
    - voicings.yml: Curated fallback voicings shipped with the package
"""
