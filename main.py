#!/usr/bin/env python3
"""
Elktracer - a stochastic sphere ray tracer

Main entry point for rendering scene files.
"""

import sys

from elktracer.cli import main


if __name__ == '__main__':
    sys.exit(main())
