"""Balance / performance chart engine.

Pure geometry core (bounds, curves, progressive reveal, gap overlays and
scrubbing) plus thin PyQt6 and matplotlib consumers.
"""

__version__ = "0.1.0"
