#!/usr/bin/env python3

"""Setup script for the conformation superposition package."""

from setuptools import setup, find_packages

setup(
    name="conformalign",
    version="0.1.0",
    description="Best-fit rigid superposition and RMSD of molecular conformations",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "numpy>=1.20.0",
        "networkx>=2.6.0",
        "rdkit>=2022.3.1",
        "tqdm>=4.62.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "biopython>=1.79",
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Chemistry",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
)
