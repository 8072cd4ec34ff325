"""
Domain package exports.

Pure, UI-free logic: jamo tables, Hangul composition and keyboard layouts.
"""

from .hangul_compose import CompositionResult, compose_korean  # noqa: F401

__all__ = [
    "CompositionResult",
    "compose_korean",
]
