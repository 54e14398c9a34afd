#!/usr/bin/env python3
"""
Entry point when run as a module.

Usage:
    python -m punch.cli [options] [command]
"""
from . import main

if __name__ == "__main__":
    main()
