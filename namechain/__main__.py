#!/usr/bin/env python3
"""Allow ``python -m namechain``."""

import sys

from namechain.cli import main

if __name__ == '__main__':
    sys.exit(main())
