"""
Keyboard layout structure tests.

Every layout must have the exact shape of ORIGINAL_LAYOUT so that a key's
(row, column) position can be looked up across layouts.
"""

from pathlib import Path

import pytest
import yaml

from polykey.domain.enums import NOOP, SpecialKey
from polykey.domain.layouts import (
    ORIGINAL_LAYOUT,
    available_languages,
    layout_key,
    load_layouts,
    mapped_char,
    shifted_original_key,
    validate_layout,
)

BUILTIN = load_layouts(Path("/nonexistent/layouts.yaml"))


def test_original_layout_row_structure():
    assert [len(row) for row in ORIGINAL_LAYOUT] == [13, 13, 12, 13]


def test_original_layout_is_valid():
    assert validate_layout(ORIGINAL_LAYOUT) == []


@pytest.mark.parametrize("key", sorted(BUILTIN))
def test_builtin_layout_is_valid(key):
    assert validate_layout(BUILTIN[key]) == []


@pytest.mark.parametrize("key", sorted(BUILTIN))
def test_builtin_layout_special_key_positions(key):
    layout = BUILTIN[key]
    assert layout[0][-1] == SpecialKey.BACKSPACE.value
    assert layout[2][-1] == SpecialKey.ENTER.value
    assert layout[3][0] == SpecialKey.SHIFT.value
    assert layout[3][-1] == SpecialKey.SPACE.value
    assert layout[1][12] == layout[3][1]


def test_every_language_has_a_shifted_layout():
    for code in available_languages(BUILTIN):
        assert layout_key(code, shifted=True) in BUILTIN


def test_available_languages():
    assert available_languages(BUILTIN) == ["EN", "KR"]


def test_layout_key():
    assert layout_key("KR") == "KR"
    assert layout_key("KR", shifted=True) == "KR_"


def test_validate_reports_wrong_shape():
    problems = validate_layout([["a"]])
    assert problems and "row lengths" in problems[0]


def test_validate_reports_duplicate_special_key():
    layout = [list(row) for row in ORIGINAL_LAYOUT]
    layout[1][0] = SpecialKey.SPACE.value
    problems = validate_layout(layout)
    assert any("'space' appears 2 times" in p for p in problems)


def test_validate_reports_ansi_iso_mismatch():
    layout = [list(row) for row in ORIGINAL_LAYOUT]
    layout[3][1] = "#"
    assert any("ANSI/ISO" in p for p in validate_layout(layout))


def test_validate_reports_empty_key():
    layout = [list(row) for row in ORIGINAL_LAYOUT]
    layout[2][0] = ""
    assert any("empty key" in p for p in validate_layout(layout))


@pytest.mark.parametrize("original,expected", [
    ("q", "ㅂ"), ("r", "ㄱ"), ("k", "ㅏ"), ("h", "ㅗ"), ("m", "ㅡ"), ("o", "ㅐ"), ("1", "1"), ("/", "/"),
])
def test_mapped_char_korean(original, expected):
    assert mapped_char(BUILTIN["KR"], original) == expected


@pytest.mark.parametrize("original,expected", [
    ("q", "ㅃ"), ("w", "ㅉ"), ("e", "ㄸ"), ("r", "ㄲ"), ("t", "ㅆ"), ("o", "ㅒ"), ("p", "ㅖ"), ("k", "ㅏ"),
])
def test_mapped_char_korean_shifted(original, expected):
    assert mapped_char(BUILTIN["KR_"], original) == expected


def test_mapped_char_unknown_key():
    assert mapped_char(BUILTIN["KR"], "ü") == ""


def test_mapped_char_noop():
    layout = [list(row) for row in BUILTIN["KR"]]
    layout[1][0] = NOOP
    assert mapped_char(layout, "q") == ""


def _write_yaml(path: Path, data) -> Path:
    path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")
    return path


def test_yaml_overlay_adds_layout(tmp_path: Path):
    custom = [list(row) for row in ORIGINAL_LAYOUT]
    custom[1][0] = "ㅋ"
    path = _write_yaml(tmp_path / "layouts.yaml", {"XX": custom})

    layouts = load_layouts(path)

    assert "XX" in layouts
    assert mapped_char(layouts["XX"], "q") == "ㅋ"
    assert "KR" in layouts


def test_yaml_overlay_ignores_invalid_layout(tmp_path: Path, caplog):
    path = _write_yaml(tmp_path / "layouts.yaml", {"KR": [["a", "b"]], "YY": "nope"})

    with caplog.at_level("WARNING"):
        layouts = load_layouts(path)

    assert layouts["KR"] == BUILTIN["KR"]
    assert "YY" not in layouts
    assert "Ignoring layout" in caplog.text


def test_yaml_malformed_file_falls_back_to_defaults(tmp_path: Path):
    path = tmp_path / "layouts.yaml"
    path.write_text("KR: [unclosed\n", encoding="utf-8")
    assert load_layouts(path) == BUILTIN


def test_yaml_non_mapping_is_ignored(tmp_path: Path):
    path = tmp_path / "layouts.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    assert load_layouts(path) == BUILTIN


@pytest.mark.parametrize("ch,expected", [
    ("!", "1"), ("+", "="), ("Q", "q"), ("|", "\\"), (":", ";"), ('"', "'"), ("?", "/"),
])
def test_shifted_original_key(ch, expected):
    assert shifted_original_key(ch) == expected


@pytest.mark.parametrize("ch", ["q", "1", "ㅂ", "shift", "space", ""])
def test_shifted_original_key_unshifted_or_unknown(ch):
    assert shifted_original_key(ch) == ""
