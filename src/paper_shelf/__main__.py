"""Entry point for ``python -m paper_shelf``."""

import sys

from paper_shelf.cli import main

if __name__ == "__main__":
    sys.exit(main())
