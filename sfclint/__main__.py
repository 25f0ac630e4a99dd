"""Allow ``python -m sfclint``."""

import sys

from sfclint.main import main

sys.exit(main())
