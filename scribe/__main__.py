#!/usr/bin/env python3
"""
Main entry point for the scribe package.
Allows running the package with: python -m scribe
"""

import sys

from scribe.cli import main

if __name__ == "__main__":
    sys.exit(main())
