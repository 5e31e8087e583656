"""Allow ``python -m modgen``."""

import sys

from .cli import main

sys.exit(main())
