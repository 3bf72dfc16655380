#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Allow ``python -m markupdiff``."""

import sys

from markupdiff.cli import main

if __name__ == "__main__":
    sys.exit(main())
