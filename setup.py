#!/usr/bin/env python3
"""
Package setup for ddfloppy.

Install with ``pip install -e .`` (add ``[test]`` for the test suite).
"""

from setuptools import setup, find_packages

setup(
    name="ddfloppy",
    version="0.1.0",
    description="Floppy disk view of GNU ddrescue mapfiles",
    license="MIT",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.6.0",
        "rich>=13.7.0",
    ],
    extras_require={
        "test": ["pytest>=7.4.0"],
    },
    entry_points={
        "console_scripts": [
            "ddfloppy=ddfloppy.main:main",
        ],
    },
)
