"""
Setup configuration for the CAGED Voicings package.

This allows you to install the project with:
    pip install -e .

After installation, you can import modules like:
    from caged.app.generate import get_voicings
    from caged.rules.transposer import transpose

and run the command-line tool:
    caged Am --tab
"""

from setuptools import setup, find_packages

# Read the README for long description
with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    # -------------------------
    # Basic Package Information
    # -------------------------
    name="caged-voicings",
    version="0.1.0",
    description="CAGED guitar chord voicing generation and validation",
    long_description=long_description,
    long_description_content_type="text/markdown",

    # -------------------------
    # Package Discovery
    # -------------------------
    packages=find_packages(where=".", exclude=["tests", "tests.*"]),
    package_dir={"": "."},

    # The curated voicing library ships inside the package
    package_data={"caged.data": ["voicings.yml"]},
    include_package_data=True,

    # -------------------------
    # Python Version Requirement
    # -------------------------
    python_requires=">=3.9",

    # -------------------------
    # Dependencies
    # -------------------------
    # Core dependencies (installed automatically)
    install_requires=[
        "pydantic>=2.0.0",
        "pyyaml>=6.0",
    ],

    # Optional dependencies (install with pip install -e ".[dev]")
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "flake8>=6.1.0",
            "black>=23.7.0",
            "mypy>=1.5.0",
            "ipdb>=0.13.0",
        ],
    },

    # -------------------------
    # Entry Points (CLI commands)
    # -------------------------
    entry_points={
        "console_scripts": [
            # This creates a command-line tool: caged Am
            "caged=caged.app.cli:main",
        ],
    },

    # -------------------------
    # Metadata
    # -------------------------
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Education",
        "Topic :: Multimedia :: Sound/Audio",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    keywords="guitar, chords, CAGED, voicings, fretboard, music theory",
)
