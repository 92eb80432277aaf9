"""Raw-to-normalized real-estate listing extraction engine."""

__version__ = "0.1.0"
