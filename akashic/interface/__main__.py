"""
Run the lore matcher CLI.

Usage:
    python -m akashic.interface search "who was enki"
"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
