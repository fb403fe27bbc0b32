"""Allow `python -m enem_toolkit`."""

import sys

from enem_toolkit.cli import main

if __name__ == "__main__":
    sys.exit(main())
