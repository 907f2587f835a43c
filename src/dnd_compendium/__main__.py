"""Allow ``python -m dnd_compendium``."""

from __future__ import annotations

import sys

from dnd_compendium.cli import main


if __name__ == "__main__":
    sys.exit(main())
