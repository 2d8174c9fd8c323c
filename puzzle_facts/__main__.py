"""Allow ``python -m puzzle_facts``."""

import sys

from .cli import main

sys.exit(main())
