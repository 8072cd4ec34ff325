from __future__ import annotations

from enum import Enum
from typing import Final


class SpecialKey(str, Enum):
    """Keys that act on the buffer instead of producing a character."""
    SHIFT = "shift"
    ENTER = "enter"
    BACKSPACE = "backspace"
    SPACE = "space"


class LanguageCode(str, Enum):
    """Languages with a built-in layout."""
    EN = "EN"
    KR = "KR"


# Placeholder for layout positions that produce nothing
NOOP: Final[str] = "noop"

# Suffix appended to a language code to name its shifted layout
SHIFT_SUFFIX: Final[str] = "_"
