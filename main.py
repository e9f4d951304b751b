#!/usr/bin/env python3
"""Countdown — entry point.

Run with:
    python main.py 25
    python -m countdown 25
"""

import sys

from countdown.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
