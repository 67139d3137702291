"""
Build script for matchscore.

The numba kernels are compiled on first use, so the package is pure
Python at install time: `pip install -e .` (or `pip install -e .[test]`).
"""
from setuptools import setup, find_packages

setup(
    name="matchscore",
    version="0.1.0",
    description=(
        "Bipartite matching and classification scoring for point detections"
    ),
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "numba",
    ],
    extras_require={
        "dataframe": ["pandas"],
        "test": ["pytest", "pandas"],
    },
)
