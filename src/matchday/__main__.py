"""Allow ``python -m matchday``."""

import sys

from matchday.cli import main

if __name__ == "__main__":
    sys.exit(main())
