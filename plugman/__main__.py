"""Allow ``python -m plugman``."""

import sys

from plugman.plugman import main

sys.exit(main())
