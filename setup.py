#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
ScaffoldWeaver: Hi-C Contig Scaffolding Engine

Orders and orients assembled contigs into chromosome-scale scaffolds from
Hi-C contact evidence: contact aggregation, active contig selection,
contig-end linkage graphs, path extraction and tour pruning.

Version: 0.1
License: Dual Academic/Commercial (see LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md)
"""

from setuptools import setup, find_packages
import os
import sys

# Ensure we can import version
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "scaffoldweaver"))

from version import __version__


def read_text(filename):
    """Read a text file next to setup.py, empty when absent."""
    filepath = os.path.join(os.path.dirname(__file__), filename)
    if not os.path.exists(filepath):
        return ""
    with open(filepath, "r", encoding="utf-8") as f:
        return f.read()


# Read requirements from requirements.txt
def read_requirements(filename):
    """Read requirements from file."""
    return [
        line.strip()
        for line in read_text(filename).splitlines()
        if line.strip() and not line.startswith("#")
    ]


# Basic requirements (always installed)
install_requires = read_requirements("requirements.txt")

# Optional dependencies
extras_require = {
    "dev": read_requirements("requirements-dev.txt"),
}

setup(
    name="scaffoldweaver",
    version=__version__,
    author="ScaffoldWeaver Development Team",
    description="Hi-C contig scaffolding: linkage graphs, path extraction and tour pruning",
    long_description=read_text("README.md"),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "License :: Other/Proprietary License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=install_requires,
    extras_require=extras_require,
    zip_safe=False,
    keywords="genome assembly scaffolding hi-c bioinformatics",
)
