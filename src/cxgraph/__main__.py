"""Allow running as `python -m cxgraph`."""

import sys

from cxgraph.cli import main

sys.exit(main())
