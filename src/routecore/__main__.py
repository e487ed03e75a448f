"""Allow ``python -m routecore``."""

import sys

from routecore.cli import main

sys.exit(main())
