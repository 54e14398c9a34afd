#!/usr/bin/env python3
"""
Punch
-----
A command-line time ledger: record work intervals against projects and
tags in a local SQLite store and report them by day or in aggregate.
"""

__version__ = "0.3.0"
