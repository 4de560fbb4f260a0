"""Allow running arbgen as python -m arbgen."""

import sys

from arbgen.cli import main

sys.exit(main())
