#!/usr/bin/env python3
"""Setup script for the passplay package."""

from setuptools import setup, find_packages

setup(
    name="passplay",
    version="0.1.0",
    description="Session engine for shared-device pass-and-play social-deduction games",
    packages=find_packages(where=".", include=["passplay*", "scripts*"]),
    package_dir={"": "."},
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "pandas",
        "scipy",
        "pyyaml",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "passplay=scripts.passplay_cli:main",
        ],
    },
)
