"""Allow running as ``python -m ebp_reader``."""

import sys

from .main import main

sys.exit(main())
