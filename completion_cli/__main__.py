"""Allow running as ``python -m completion_cli``."""

import sys

from completion_cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
