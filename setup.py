#!/usr/bin/env python3
"""
Setup script for pyPAMatch
"""

from setuptools import setup, find_packages

setup(
    name="pypamatch",
    version="0.1.0",
    description="Anchored-alignment post-processing and genome presence/absence summaries",
    author="pyPAMatch Team",
    author_email="example@example.org",
    packages=find_packages(include=["pamatch", "pamatch.*"]),
    install_requires=[
        "pyyaml>=6.0",
        "biopython>=1.80",
        "numpy>=1.22.0",
        "pandas>=1.4.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'pamatch=pamatch.cli.main:main',
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
    python_requires=">=3.8",
)
