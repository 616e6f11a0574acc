"""Allow running GitAI with ``python -m gitai``."""

import sys

from gitai.cli import main

if __name__ == "__main__":
	sys.exit(main())
