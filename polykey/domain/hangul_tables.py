from __future__ import annotations

"""Hangul jamo tables (domain layer).

This module contains *no* UI dependencies and no logic beyond lookups.

It centralises:
- Compatibility jamo -> index tables for initial / medial / final slots
- Reverse tables (index -> compatibility jamo), derived from the forward ones
- Compound tables used when vowels or final consonants fuse or split
- Classification predicates

Indices are fixed by the Unicode Hangul Syllables algorithm and must not be
reordered.
"""

from types import MappingProxyType
from typing import Final, Mapping


# -----------------------------------------------------------------------------
# Unicode Hangul syllable constants
# -----------------------------------------------------------------------------

HANGUL_BASE: Final[int] = 0xAC00
INITIAL_COUNT: Final[int] = 19
MEDIAL_COUNT: Final[int] = 21
FINAL_COUNT: Final[int] = 28
SYLLABLE_COUNT: Final[int] = INITIAL_COUNT * MEDIAL_COUNT * FINAL_COUNT
HANGUL_LAST: Final[int] = HANGUL_BASE + SYLLABLE_COUNT - 1


# -----------------------------------------------------------------------------
# Jamo ordering (compatibility jamo)
# -----------------------------------------------------------------------------

# Leading consonants (Choseong) in standard Unicode Hangul order
CHOSEONG: Final[tuple[str, ...]] = (
    "ㄱ", "ㄲ", "ㄴ", "ㄷ", "ㄸ", "ㄹ", "ㅁ", "ㅂ", "ㅃ",
    "ㅅ", "ㅆ", "ㅇ", "ㅈ", "ㅉ", "ㅊ", "ㅋ", "ㅌ", "ㅍ", "ㅎ",
)

# Vowels (Jungseong) in standard Unicode Hangul order
JUNGSEONG: Final[tuple[str, ...]] = (
    "ㅏ", "ㅐ", "ㅑ", "ㅒ", "ㅓ", "ㅔ", "ㅕ", "ㅖ",
    "ㅗ", "ㅘ", "ㅙ", "ㅚ", "ㅛ",
    "ㅜ", "ㅝ", "ㅞ", "ㅟ", "ㅠ",
    "ㅡ", "ㅢ", "ㅣ",
)

# Trailing consonants (Jongseong) in standard Unicode Hangul order
# Index 0 is "no final"
JONGSEONG: Final[tuple[str, ...]] = (
    "",
    "ㄱ", "ㄲ", "ㄳ",
    "ㄴ", "ㄵ", "ㄶ",
    "ㄷ",
    "ㄹ", "ㄺ", "ㄻ", "ㄼ", "ㄽ", "ㄾ", "ㄿ", "ㅀ",
    "ㅁ",
    "ㅂ", "ㅄ",
    "ㅅ", "ㅆ",
    "ㅇ",
    "ㅈ", "ㅊ",
    "ㅋ",
    "ㅌ",
    "ㅍ",
    "ㅎ",
)


# -----------------------------------------------------------------------------
# Forward and reverse lookup maps
# -----------------------------------------------------------------------------

COMPAT_TO_INITIAL: Final[Mapping[str, int]] = MappingProxyType(
    {j: i for i, j in enumerate(CHOSEONG)}
)
COMPAT_TO_MEDIAL: Final[Mapping[str, int]] = MappingProxyType(
    {j: i for i, j in enumerate(JUNGSEONG)}
)
# The empty "no final" slot is not a typeable jamo, so it is left out.
COMPAT_TO_FINAL: Final[Mapping[str, int]] = MappingProxyType(
    {j: i for i, j in enumerate(JONGSEONG) if j}
)

INITIAL_TO_COMPAT: Final[Mapping[int, str]] = MappingProxyType(
    {i: j for j, i in COMPAT_TO_INITIAL.items()}
)
MEDIAL_TO_COMPAT: Final[Mapping[int, str]] = MappingProxyType(
    {i: j for j, i in COMPAT_TO_MEDIAL.items()}
)
FINAL_TO_COMPAT: Final[Mapping[int, str]] = MappingProxyType(
    {i: j for j, i in COMPAT_TO_FINAL.items()}
)


# -----------------------------------------------------------------------------
# Compound tables
# -----------------------------------------------------------------------------

# Compound medial vowels: (first vowel, second vowel) -> compound medial index
MEDIAL_COMBINATIONS: Final[Mapping[tuple[str, str], int]] = MappingProxyType({
    ("ㅗ", "ㅏ"): COMPAT_TO_MEDIAL["ㅘ"],
    ("ㅗ", "ㅐ"): COMPAT_TO_MEDIAL["ㅙ"],
    ("ㅗ", "ㅣ"): COMPAT_TO_MEDIAL["ㅚ"],
    ("ㅜ", "ㅓ"): COMPAT_TO_MEDIAL["ㅝ"],
    ("ㅜ", "ㅔ"): COMPAT_TO_MEDIAL["ㅞ"],
    ("ㅜ", "ㅣ"): COMPAT_TO_MEDIAL["ㅟ"],
    ("ㅡ", "ㅣ"): COMPAT_TO_MEDIAL["ㅢ"],
})

# Compound finals: (first consonant, second consonant) -> compound final index
FINAL_COMBINATIONS: Final[Mapping[tuple[str, str], int]] = MappingProxyType({
    ("ㄱ", "ㅅ"): COMPAT_TO_FINAL["ㄳ"],
    ("ㄴ", "ㅈ"): COMPAT_TO_FINAL["ㄵ"],
    ("ㄴ", "ㅎ"): COMPAT_TO_FINAL["ㄶ"],
    ("ㄹ", "ㄱ"): COMPAT_TO_FINAL["ㄺ"],
    ("ㄹ", "ㅁ"): COMPAT_TO_FINAL["ㄻ"],
    ("ㄹ", "ㅂ"): COMPAT_TO_FINAL["ㄼ"],
    ("ㄹ", "ㅅ"): COMPAT_TO_FINAL["ㄽ"],
    ("ㄹ", "ㅌ"): COMPAT_TO_FINAL["ㄾ"],
    ("ㄹ", "ㅍ"): COMPAT_TO_FINAL["ㄿ"],
    ("ㄹ", "ㅎ"): COMPAT_TO_FINAL["ㅀ"],
    ("ㅂ", "ㅅ"): COMPAT_TO_FINAL["ㅄ"],
})

# Compound final index -> final index left behind when the compound splits
COMPOUND_FINAL_SPLIT: Final[Mapping[int, int]] = MappingProxyType({
    compound: COMPAT_TO_FINAL[first]
    for (first, _second), compound in FINAL_COMBINATIONS.items()
})


def _final_to_initial() -> dict[int, int]:
    # A compound final hands its second member to the next syllable.
    table: dict[int, int] = {}
    for (_first, second), compound in FINAL_COMBINATIONS.items():
        table[compound] = COMPAT_TO_INITIAL[second]
    for jamo, index in COMPAT_TO_FINAL.items():
        if jamo in COMPAT_TO_INITIAL:
            table[index] = COMPAT_TO_INITIAL[jamo]
    return table


# Final index -> initial index of the consonant that migrates to a new syllable
FINAL_TO_INITIAL: Final[Mapping[int, int]] = MappingProxyType(_final_to_initial())


# -----------------------------------------------------------------------------
# Classification
# -----------------------------------------------------------------------------

def is_initial(ch: str) -> bool:
    return ch in COMPAT_TO_INITIAL


def is_medial(ch: str) -> bool:
    return ch in COMPAT_TO_MEDIAL


def is_final(ch: str) -> bool:
    return ch in COMPAT_TO_FINAL


def is_jamo(ch: str) -> bool:
    """Return True if `ch` can take part in composition in any slot."""
    return is_initial(ch) or is_medial(ch) or is_final(ch)


def is_syllable(ch: str) -> bool:
    """Return True if `ch` is a single precomposed Hangul syllable."""
    if len(ch) != 1:
        return False
    return HANGUL_BASE <= ord(ch) <= HANGUL_LAST
