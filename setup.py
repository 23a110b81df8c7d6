#!/usr/bin/env python3
"""
Setup script for Gesture Tree Control
"""

from pathlib import Path

from setuptools import setup, find_packages


def read_requirements():
    """Read runtime requirements from requirements.txt"""
    path = Path(__file__).parent / "requirements.txt"
    lines = path.read_text().splitlines()
    return [line.strip() for line in lines if line.strip() and not line.startswith("#")]


setup(
    name="gesture-tree",
    version="0.1.0",
    description="Hand gesture control pipeline for an interactive 3D tree",
    python_requires=">=3.9",
    packages=find_packages(include=["tree_gesture", "tree_gesture.*"]),
    package_data={"tree_gesture": ["config.default.yaml"]},
    install_requires=read_requirements(),
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "gesture-tree=tree_gesture.main:cli",
        ],
    },
)
