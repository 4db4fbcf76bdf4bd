"""Global configuration and constants for chart rendering."""

from __future__ import annotations

import os
from typing import Final

CANVAS_PADDING: Final = 8.0  # inner padding of the drawing rectangle
SMOOTH_TENSION: Final = 0.3

SCRUB_ACTIVATION_MS: Final = 150  # long-press before scrubbing arms
SCRUB_JITTER_TOLERANCE: Final = 10.0  # max drift while arming

SPARKLINE_REVEAL_MS: Final = 800
SPARKLINE_REVEAL_DELAY_MS: Final = 200
INTERACTIVE_REVEAL_MS: Final = 600
REVEAL_FPS: Final = int(os.environ.get("BALANCECHART_REVEAL_FPS", "60"))

# Interactive chart keeps the curve away from the top/bottom edges
BOUNDS_PADDING_FRACTION: Final = 0.1
BOUNDS_MIN_RANGE_FRACTION: Final = 0.02
