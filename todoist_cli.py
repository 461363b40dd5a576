#!/usr/bin/env python3
"""Thin loader delegating CLI logic to the interface layer."""

import sys

from interface.app import build_parser, main

__all__ = ["build_parser", "main"]

if __name__ == "__main__":
    sys.exit(main())
