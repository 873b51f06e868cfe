"""Packaging for gentag.

Dependencies come from requirements.txt when it is present next to this
file, with a built-in fallback list for source distributions without it.

Example:
    Install with the test extra:
        $ pip install -e ".[test]"

Attributes:
    requirements_file (Path): Path to requirements.txt
    requirements (list): Runtime dependencies of the package
"""

from pathlib import Path
from setuptools import setup, find_packages

requirements_file = Path(__file__).parent / "requirements.txt"
if requirements_file.exists():
    with open(requirements_file, encoding="utf-8") as f:
        requirements = [line for line in f.read().splitlines() if line.strip()]
else:
    requirements = [
        "PyYAML>=6.0",
        "GitPython>=3.1.0",
        "dpath>=2.1.0",
        "typer>=0.9.0",
        "python-dotenv>=1.0.0",
    ]

setup(
    name="gentag",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "gentag=gentag.cli:app",
        ],
    },
    python_requires=">=3.11",
    description="Create, list and delete git tags that follow naming patterns",
)
