#!/usr/bin/env python3
"""Main entry point for gsquash when run as python -m gsquash."""

import sys
from .cli import main

if __name__ == "__main__":
    sys.exit(main())
