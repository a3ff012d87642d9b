"""Allow ``python -m stroke_segmenter``."""

import sys

from .cli import main

sys.exit(main())
