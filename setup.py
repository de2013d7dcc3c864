#!/usr/bin/env python3
"""
Setup script for kvform package.
"""

from setuptools import setup, find_packages

setup(
    name="kvform",
    version="0.1.0",
    description="Schema-driven mapping between form data and a flat key-value settings store",
    author="kvform Team",
    package_dir={"": "src"},
    packages=find_packages(where="src", include=["kvform", "kvform.*"]),
    python_requires=">=3.10",
    install_requires=[
        "typer>=0.9",
        "rich>=13.0",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "kvform=kvform.cli.main:app",
        ],
    },
)
