"""
Setup script for residue_rns.

To install:
    pip install .

To install in development mode:
    pip install -e .[dev]

To build wheel:
    pip wheel . --no-deps
"""

import os

from setuptools import setup, find_packages

setup(
    name="residue-rns",
    version="0.1.0",
    description="Residue Number System: carry-free modular arithmetic with exact CRT reconstruction",
    long_description=open("README.md").read() if os.path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(include=["residue_rns", "residue_rns.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.20",
        "PyYAML>=5.4",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Mathematics",
    ],
    keywords="rns residue-number-system modular-arithmetic crt",
)
