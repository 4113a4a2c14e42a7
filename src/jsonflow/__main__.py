"""Allow ``python -m jsonflow``."""

import sys

from jsonflow.cli import main

sys.exit(main())
