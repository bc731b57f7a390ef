"""Allow ``python -m loomer`` to run the command line."""

import sys

from loomer.cli import main


if __name__ == "__main__":  # pragma: no cover - module level CLI hook
    sys.exit(main())
