from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from polykey.domain.enums import LanguageCode, SpecialKey
from polykey.domain.hangul_compose import compose_korean
from polykey.domain.layouts import (
    DEFAULT_LANGUAGE,
    Layout,
    available_languages,
    layout_key,
    load_layouts,
    mapped_char,
    shifted_original_key,
)

logger = logging.getLogger(__name__)


@dataclass
class TextBuffer:
    """Text plus a selection; the caret is where start == end."""

    value: str = ""
    selection_start: int = 0
    selection_end: int = 0

    def set_caret(self, pos: int) -> None:
        pos = max(0, min(int(pos), len(self.value)))
        self.selection_start = pos
        self.selection_end = pos

    @property
    def before_caret(self) -> str:
        return self.value[: self.selection_start]

    @property
    def after_caret(self) -> str:
        return self.value[self.selection_end:]


@dataclass
class KeyboardController:
    """Owns the text buffer and turns original-key presses into text.

    Responsibilities:
    - map physical keys through the current (shifted) layout
    - splice inserted characters at the selection
    - route Korean input through `compose_korean`

    This class does not implement composition or rendering itself.
    """

    language: str = DEFAULT_LANGUAGE
    layouts: Optional[Mapping[str, Layout]] = None
    buffer: TextBuffer = field(default_factory=TextBuffer)
    shifted: bool = False

    def __post_init__(self) -> None:
        if self.layouts is None:
            self.layouts = load_layouts()
        self.language = self._checked_language(self.language)

    # ------------------------------------------------------------------
    # Layout state
    # ------------------------------------------------------------------

    def _checked_language(self, code: str) -> str:
        code = str(code).upper()
        if code not in self.languages():
            raise ValueError(
                "Unknown language %r (available: %s)" % (code, ", ".join(self.languages()))
            )
        return code

    def languages(self) -> list[str]:
        return available_languages(self.layouts or {})

    def current_layout(self) -> Layout:
        key = layout_key(self.language, self.shifted)
        layouts = self.layouts or {}
        # A language without a shifted layout keeps its base layout.
        return layouts.get(key) or layouts[layout_key(self.language)]

    def set_language(self, code: str) -> None:
        self.language = self._checked_language(code)
        self.shifted = False
        logger.debug("Language -> %s", self.language)

    def toggle_shift(self) -> None:
        self.shifted = not self.shifted
        logger.debug("Shift -> %s", "on" if self.shifted else "off")

    # ------------------------------------------------------------------
    # Buffer editing
    # ------------------------------------------------------------------

    def insert(self, character: str) -> None:
        """Insert `character` at the selection, composing Hangul for KR."""
        if not character:
            return

        before = self.buffer.before_caret
        after = self.buffer.after_caret

        if self.language == LanguageCode.KR.value:
            result = compose_korean(before, character)
            self.buffer.value = result.text + after
            self.buffer.set_caret(result.cursor_pos)
        else:
            self.buffer.value = before + character + after
            self.buffer.set_caret(len(before) + len(character))

    def backspace(self) -> None:
        """Delete the selection, or the character before the caret."""
        start = self.buffer.selection_start
        end = self.buffer.selection_end
        value = self.buffer.value

        if start != end:
            self.buffer.value = value[:start] + value[end:]
            self.buffer.set_caret(start)
        elif start > 0:
            self.buffer.value = value[: start - 1] + value[start:]
            self.buffer.set_caret(start - 1)

    def reset(self) -> None:
        self.buffer = TextBuffer()

    @property
    def text(self) -> str:
        return self.buffer.value

    # ------------------------------------------------------------------
    # Key dispatch
    # ------------------------------------------------------------------

    def press(self, original_key: str) -> bool:
        """Handle one physical key press. Returns False if the key is unknown."""
        key = str(original_key).lower()

        if key == SpecialKey.SHIFT.value:
            self.toggle_shift()
            return True
        if key == SpecialKey.BACKSPACE.value:
            self.backspace()
            return True
        if key in (SpecialKey.ENTER.value, "\n"):
            self.insert("\n")
            return True
        if key in (SpecialKey.SPACE.value, " "):
            self.insert(" ")
            return True

        ch = mapped_char(self.current_layout(), key)
        if not ch:
            logger.debug("Ignoring unmapped key %r", original_key)
            return False
        self.insert(ch)
        return True

    def type_keys(self, keys: Iterable[str]) -> list[str]:
        """Press each key in order; returns the buffer text after every press.

        A character only reachable with shift ("Q", "!") is typed as a
        one-shot shifted press of its physical key.
        """
        steps: list[str] = []
        for key in keys:
            base = shifted_original_key(key)
            if base and not self.shifted:
                self.toggle_shift()
                try:
                    self.press(base)
                finally:
                    self.toggle_shift()
            else:
                self.press(base or key)
            steps.append(self.buffer.value)
        return steps
