from __future__ import annotations

"""Hangul composition (domain layer).

This module contains *no* UI dependencies and keeps no state between calls.

It provides:
- `compose_syllable()` / `decompose_syllable()`: the Unicode Hangul Syllables
  arithmetic, SBase + (LIndex * VCount + VIndex) * TCount + TIndex
- `compose_korean()`: the incremental composer called once per keystroke

Primary API:
- compose_korean(existing_text, new_jamo)
"""

from dataclasses import dataclass

from polykey.domain.hangul_tables import (
    COMPAT_TO_FINAL,
    COMPAT_TO_INITIAL,
    COMPAT_TO_MEDIAL,
    COMPOUND_FINAL_SPLIT,
    FINAL_COMBINATIONS,
    FINAL_COUNT,
    FINAL_TO_COMPAT,
    FINAL_TO_INITIAL,
    HANGUL_BASE,
    INITIAL_COUNT,
    MEDIAL_COMBINATIONS,
    MEDIAL_COUNT,
    MEDIAL_TO_COMPAT,
    is_final,
    is_initial,
    is_jamo,
    is_medial,
    is_syllable,
)


@dataclass(frozen=True)
class CompositionResult:
    """Rewritten text before the caret, and the caret offset within it."""

    text: str
    cursor_pos: int


# -----------------------------------------------------------------------------
# Syllable arithmetic
# -----------------------------------------------------------------------------

def compose_syllable(initial: int, medial: int, final: int = 0) -> str:
    """Compose a Hangul syllable from (initial, medial, final) indices.

    Raises:
        ValueError: if any index is outside its slot's range.
    """
    if not (0 <= initial < INITIAL_COUNT and 0 <= medial < MEDIAL_COUNT and 0 <= final < FINAL_COUNT):
        raise ValueError(
            "Invalid jamo indices: initial=%r medial=%r final=%r" % (initial, medial, final)
        )
    return chr(HANGUL_BASE + (initial * MEDIAL_COUNT + medial) * FINAL_COUNT + final)


def decompose_syllable(syllable: str) -> tuple[int, int, int]:
    """Split a precomposed syllable into its (initial, medial, final) indices.

    Raises:
        ValueError: if `syllable` is not a single Hangul syllable.
    """
    if not is_syllable(syllable):
        raise ValueError("Not a Hangul syllable: %r" % (syllable,))
    code = ord(syllable) - HANGUL_BASE
    initial, rest = divmod(code, MEDIAL_COUNT * FINAL_COUNT)
    medial, final = divmod(rest, FINAL_COUNT)
    return initial, medial, final


# -----------------------------------------------------------------------------
# Incremental composer
# -----------------------------------------------------------------------------

def _append(existing_text: str, new_jamo: str) -> CompositionResult:
    text = existing_text + new_jamo
    return CompositionResult(text, len(text))


def _compose_onto_syllable(head: str, syllable: str, new_jamo: str) -> CompositionResult | None:
    """Continue or split the trailing syllable. Returns None to fall through."""
    initial, medial, final = decompose_syllable(syllable)

    if final and is_medial(new_jamo):
        # The final (or the second half of a compound final) starts a new syllable.
        next_initial = FINAL_TO_INITIAL.get(final)
        if next_initial is not None:
            remaining = COMPOUND_FINAL_SPLIT.get(final, 0)
            text = (
                head
                + compose_syllable(initial, medial, remaining)
                + compose_syllable(next_initial, COMPAT_TO_MEDIAL[new_jamo], 0)
            )
            return CompositionResult(text, len(head) + 2)

    if final and is_final(new_jamo):
        fused = FINAL_COMBINATIONS.get((FINAL_TO_COMPAT.get(final, ""), new_jamo))
        if fused is not None:
            return CompositionResult(head + compose_syllable(initial, medial, fused), len(head) + 1)

    if not final and is_medial(new_jamo):
        fused = MEDIAL_COMBINATIONS.get((MEDIAL_TO_COMPAT.get(medial, ""), new_jamo))
        if fused is not None:
            return CompositionResult(head + compose_syllable(initial, fused, 0), len(head) + 1)

    # Final-capable wins over initial-only so the current syllable keeps growing.
    if not final and is_final(new_jamo):
        return CompositionResult(
            head + compose_syllable(initial, medial, COMPAT_TO_FINAL[new_jamo]), len(head) + 1
        )

    if not final and is_initial(new_jamo):
        return _append(head + syllable, new_jamo)

    return None


def compose_korean(existing_text: str, new_jamo: str) -> CompositionResult:
    """Fold one typed character into the text before the caret.

    Only the last character of `existing_text` is ever rewritten. Composition
    progress is recovered from that character on every call, so the function
    is pure and safe to call from anywhere.

    Args:
        existing_text: text strictly before the caret (may be empty)
        new_jamo: the single character just typed (jamo or anything else)

    Returns:
        CompositionResult whose `cursor_pos` points right after the newly
        placed content. Never raises for any input.
    """
    if not existing_text or not is_jamo(new_jamo):
        return _append(existing_text, new_jamo)

    head, last = existing_text[:-1], existing_text[-1]

    if is_initial(last) and is_medial(new_jamo):
        syllable = compose_syllable(COMPAT_TO_INITIAL[last], COMPAT_TO_MEDIAL[new_jamo], 0)
        return CompositionResult(head + syllable, len(head) + 1)

    if is_syllable(last):
        result = _compose_onto_syllable(head, last, new_jamo)
        if result is not None:
            return result

    return _append(existing_text, new_jamo)
