"""
Controller package exports.

This file exists to provide a stable import surface.
"""

from .keyboard_controller import KeyboardController, TextBuffer  # noqa: F401

__all__ = [
    "KeyboardController",
    "TextBuffer",
]
