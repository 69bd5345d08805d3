#!/usr/bin/env python3
"""Pomo: a focus timer that silences distracting apps during focus sessions."""

from __future__ import annotations

from setuptools import find_packages, setup

__version__ = "1.0.0"

setup(
    name="pomo-focus",
    version=__version__,
    description="Focus/break timer that terminates and relaunches distracting apps",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src", include=["pomo", "pomo.*"]),
    install_requires=[
        "psutil>=5.9",
        "rich>=13.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "pomo=pomo.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Environment :: Console",
        "Operating System :: Microsoft :: Windows",
        "Operating System :: MacOS",
        "Operating System :: POSIX :: Linux",
    ],
)
