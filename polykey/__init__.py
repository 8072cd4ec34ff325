"""Virtual multilingual keyboard with incremental Hangul composition."""

__version__ = "0.1.0"
