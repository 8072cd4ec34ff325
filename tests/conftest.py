# tests/conftest.py
from typing import Iterable

import pytest

from polykey.controllers.keyboard_controller import KeyboardController
from polykey.domain.hangul_compose import compose_korean
from polykey.domain.layouts import load_layouts


@pytest.fixture
def layouts(tmp_path):
    # Built-in layouts only; never read the project's data/layouts.yaml
    return load_layouts(tmp_path / "layouts.yaml")


@pytest.fixture
def controller(layouts):
    return KeyboardController(language="KR", layouts=layouts)


@pytest.fixture
def feed():
    """Compose a jamo sequence starting from `start`; returns every intermediate text."""
    def _feed(jamos: Iterable[str], start: str = "") -> list[str]:
        text = start
        steps = []
        for j in jamos:
            text = compose_korean(text, j).text
            steps.append(text)
        return steps
    return _feed
