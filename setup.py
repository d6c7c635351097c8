"""
Setup configuration for the Edge Similarity Engine.
"""

from setuptools import setup, find_packages
from pathlib import Path

README = Path(__file__).parent / "README.md"
long_description = README.read_text() if README.exists() else ""

setup(
    name="edge-similarity-engine",
    version="1.0.0",
    description="Per-edge similarity scores from node feature vectors",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Edge Similarity Engine",
    python_requires=">=3.9",
    packages=find_packages(include=["edgesim", "edgesim.*"]),
    install_requires=[
        "numpy>=1.24.0",
        "networkx>=3.0.0",
        "click>=8.1.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "edgesim=edgesim.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering :: Information Analysis",
    ],
)
