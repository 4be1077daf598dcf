"""Allow ``python -m zephyr_submit``."""

import sys

from zephyr_submit.cli import main

if __name__ == "__main__":
    sys.exit(main())
