from __future__ import annotations

"""Keyboard layouts (domain layer).

A layout is a grid of rows with exactly the shape of ORIGINAL_LAYOUT. The key
at (row, col) of a layout is what the physical key at the same position of
ORIGINAL_LAYOUT produces.

Built-in layouts live here. An optional `data/layouts.yaml` may add or
override layouts; failures there are non-fatal and the defaults are used.

Expected YAML shape:
- A mapping of layout keys ("KR", "KR_", ...) to a list of rows (lists of strings)
"""

import logging
from pathlib import Path
from typing import Any, Final, Mapping, Sequence

import yaml

from polykey.domain.enums import NOOP, SHIFT_SUFFIX, LanguageCode, SpecialKey

logger = logging.getLogger(__name__)

Layout = list[list[str]]

_SHIFT: Final[str] = SpecialKey.SHIFT.value
_ENTER: Final[str] = SpecialKey.ENTER.value
_BACKSPACE: Final[str] = SpecialKey.BACKSPACE.value
_SPACE: Final[str] = SpecialKey.SPACE.value

SPECIAL_KEYS: Final[tuple[str, ...]] = (_SHIFT, _ENTER, _BACKSPACE, _SPACE)

DEFAULT_LANGUAGE: Final[str] = LanguageCode.KR.value


# -----------------------------------------------------------------------------
# Physical key grid
# -----------------------------------------------------------------------------

ORIGINAL_LAYOUT: Final[Layout] = [
    # Row 1: numbers
    ["1", "2", "3", "4", "5", "6", "7", "8", "9", "0", "-", "=", _BACKSPACE],
    # Row 2: QWERTY top row
    ["q", "w", "e", "r", "t", "y", "u", "i", "o", "p", "[", "]", "\\"],
    # Row 3: ASDF row
    ["a", "s", "d", "f", "g", "h", "j", "k", "l", ";", "'", _ENTER],
    # Row 4: ZXCV row, with the ISO extra key after shift
    [_SHIFT, "\\", "z", "x", "c", "v", "b", "n", "m", ",", ".", "/", _SPACE],
]


# -----------------------------------------------------------------------------
# Built-in layouts
# -----------------------------------------------------------------------------

_DEFAULT_LAYOUTS: Final[dict[str, Layout]] = {
    "EN": [list(row) for row in ORIGINAL_LAYOUT],
    "EN_": [
        ["!", "@", "#", "$", "%", "^", "&", "*", "(", ")", "_", "+", _BACKSPACE],
        ["Q", "W", "E", "R", "T", "Y", "U", "I", "O", "P", "{", "}", "|"],
        ["A", "S", "D", "F", "G", "H", "J", "K", "L", ":", '"', _ENTER],
        [_SHIFT, "|", "Z", "X", "C", "V", "B", "N", "M", "<", ">", "?", _SPACE],
    ],
    # Korean standard two-set (dubeolsik)
    "KR": [
        ["1", "2", "3", "4", "5", "6", "7", "8", "9", "0", "-", "=", _BACKSPACE],
        ["ㅂ", "ㅈ", "ㄷ", "ㄱ", "ㅅ", "ㅛ", "ㅕ", "ㅑ", "ㅐ", "ㅔ", "[", "]", "\\"],
        ["ㅁ", "ㄴ", "ㅇ", "ㄹ", "ㅎ", "ㅗ", "ㅓ", "ㅏ", "ㅣ", ";", "'", _ENTER],
        [_SHIFT, "\\", "ㅋ", "ㅌ", "ㅊ", "ㅍ", "ㅠ", "ㅜ", "ㅡ", ",", ".", "/", _SPACE],
    ],
    "KR_": [
        ["!", "@", "#", "$", "%", "^", "&", "*", "(", ")", "_", "+", _BACKSPACE],
        ["ㅃ", "ㅉ", "ㄸ", "ㄲ", "ㅆ", "ㅛ", "ㅕ", "ㅑ", "ㅒ", "ㅖ", "{", "}", "|"],
        ["ㅁ", "ㄴ", "ㅇ", "ㄹ", "ㅎ", "ㅗ", "ㅓ", "ㅏ", "ㅣ", ":", '"', _ENTER],
        [_SHIFT, "|", "ㅋ", "ㅌ", "ㅊ", "ㅍ", "ㅠ", "ㅜ", "ㅡ", "<", ">", "?", _SPACE],
    ],
}


def layout_key(language: str, shifted: bool = False) -> str:
    """Return the registry key for a language's (shifted) layout."""
    return f"{language}{SHIFT_SUFFIX}" if shifted else str(language)


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------

def validate_layout(layout: Sequence[Sequence[str]]) -> list[str]:
    """Return a list of structural problems (empty if the layout is usable)."""
    problems: list[str] = []

    expected = [len(row) for row in ORIGINAL_LAYOUT]
    actual = [len(row) for row in layout]
    if actual != expected:
        return [f"row lengths {actual} != {expected}"]

    for r, row in enumerate(layout):
        for c, key in enumerate(row):
            if not isinstance(key, str) or not key:
                problems.append(f"empty key at row {r + 1} col {c + 1}")

    if layout[0][-1] != _BACKSPACE:
        problems.append("backspace must end row 1")
    if layout[2][-1] != _ENTER:
        problems.append("enter must end row 3")
    if layout[3][0] != _SHIFT:
        problems.append("shift must start row 4")
    if layout[3][-1] != _SPACE:
        problems.append("space must end row 4")

    flat = [key for row in layout for key in row]
    for special in SPECIAL_KEYS:
        count = flat.count(special)
        if count != 1:
            problems.append(f"{special!r} appears {count} times")

    # ANSI/ISO: the extra key next to shift mirrors the key above enter
    if layout[1][12] != layout[3][1]:
        problems.append(f"ANSI/ISO keys differ: {layout[1][12]!r} != {layout[3][1]!r}")

    return problems


# -----------------------------------------------------------------------------
# YAML loading
# -----------------------------------------------------------------------------

_YAML_CACHE: dict[str, Any] | None = None
_YAML_CACHE_PATH: Path | None = None
_YAML_CACHE_MTIME_NS: int | None = None


def _project_root() -> Path:
    # polykey/domain/layouts.py -> polykey/domain -> polykey -> <project_root>
    return Path(__file__).resolve().parents[2]


def _layouts_yaml_path() -> Path:
    return _project_root() / "data" / "layouts.yaml"


def _load_yaml(path: Path | None = None) -> dict[str, Any]:
    """Load the layouts YAML if present.

    Failure is non-fatal; an empty mapping is returned.
    """
    global _YAML_CACHE, _YAML_CACHE_PATH, _YAML_CACHE_MTIME_NS

    path = path or _layouts_yaml_path()
    try:
        if not path.exists():
            _YAML_CACHE = {}
            _YAML_CACHE_PATH = path
            _YAML_CACHE_MTIME_NS = None
            return {}

        mtime_ns = path.stat().st_mtime_ns
        if _YAML_CACHE is not None and _YAML_CACHE_PATH == path and _YAML_CACHE_MTIME_NS == mtime_ns:
            return dict(_YAML_CACHE)

        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
            parsed = data if isinstance(data, dict) else {}

        _YAML_CACHE = dict(parsed)
        _YAML_CACHE_PATH = path
        _YAML_CACHE_MTIME_NS = mtime_ns
        return dict(_YAML_CACHE)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load layouts from %s: %s", path, e)
        return {}


def _coerce_layout(raw: Any) -> Layout | None:
    if not isinstance(raw, list) or not all(isinstance(row, list) for row in raw):
        return None
    return [[str(key) for key in row] for row in raw]


# -----------------------------------------------------------------------------
# Public API (domain-level)
# -----------------------------------------------------------------------------

def load_layouts(path: Path | None = None) -> dict[str, Layout]:
    """Return built-in layouts overlaid with valid entries from layouts.yaml."""
    layouts = {key: [list(row) for row in rows] for key, rows in _DEFAULT_LAYOUTS.items()}

    for key, raw in _load_yaml(path).items():
        layout = _coerce_layout(raw)
        if layout is None:
            logger.warning("Ignoring layout %r: expected a list of rows", key)
            continue
        problems = validate_layout(layout)
        if problems:
            logger.warning("Ignoring layout %r: %s", key, "; ".join(problems))
            continue
        layouts[str(key)] = layout

    return layouts


def available_languages(layouts: Mapping[str, Layout]) -> list[str]:
    """Language codes that have an unshifted layout."""
    return sorted(key for key in layouts if not key.endswith(SHIFT_SUFFIX))


def mapped_char(layout: Sequence[Sequence[str]], original_key: str) -> str:
    """Return what `original_key` produces on `layout`, or "" if nothing."""
    for i, row in enumerate(ORIGINAL_LAYOUT):
        if original_key in row:
            j = row.index(original_key)
            if i < len(layout) and j < len(layout[i]):
                ch = layout[i][j]
                return "" if ch == NOOP else ch
            return ""
    return ""


def shifted_original_key(ch: str) -> str:
    """Return the physical key that types `ch` with shift held, or "" if none.

    Uses the shifted US grid, so "!" -> "1" and "Q" -> "q".
    """
    if ch in SPECIAL_KEYS:
        return ""
    for i, row in enumerate(_DEFAULT_LAYOUTS[layout_key(LanguageCode.EN.value, shifted=True)]):
        if ch in row:
            return ORIGINAL_LAYOUT[i][row.index(ch)]
    return ""
