"""Theme resolution, multi-tier caching and live decorative animation reconciliation"""

__version__ = "0.1.0"
