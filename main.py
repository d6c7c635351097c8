#!/usr/bin/env python3
"""
Edge Similarity Engine - Main Entry Point

Annotates graph edges with the similarity of the feature vectors
carried by their endpoints.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from edgesim.cli import main

if __name__ == "__main__":
    main()
