import io
from pathlib import Path

import pytest

import main


@pytest.fixture
def settings_path(tmp_path: Path) -> str:
    return str(tmp_path / "settings.yaml")


def _run(*argv: str) -> tuple[int, str]:
    out = io.StringIO()
    code = main.run(list(argv), out=out)
    return code, out.getvalue()


def test_types_korean(settings_path):
    code, output = _run("--settings", settings_path, "--language", "KR", "dkssudgktpdy")
    assert code == 0
    assert output == "안녕하세요\n"


def test_separate_arguments_are_space_separated(settings_path):
    _, output = _run("--settings", settings_path, "--language", "kr", "gksrmf", "dkssud")
    assert output == "한글 안녕\n"


def test_show_steps(settings_path):
    _, output = _run("--settings", settings_path, "--language", "KR", "--show-steps", "rks")
    assert output.splitlines() == ["ㄱ", "가", "간"]


def test_language_is_persisted(settings_path):
    _run("--settings", settings_path, "--language", "EN", "abc")
    _, output = _run("--settings", settings_path, "rk")
    assert output == "rk\n"


def test_unknown_language_fails(settings_path, capsys):
    code, output = _run("--settings", settings_path, "--language", "TH", "abc")
    assert code == 2
    assert output == ""
    assert "Unknown language" in capsys.readouterr().err


def test_shifted_symbols_survive(settings_path):
    _, output = _run("--settings", settings_path, "--language", "EN", "hi!")
    assert output == "hi!\n"
