from __future__ import annotations

import json

import pytest

import searchcobb.migemo as migemo_module
from searchcobb.cli import build_parser, format_segments, main


@pytest.fixture()
def notes(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("first line\nZ\u00fcrich und Wien\n", encoding="utf-8")
    return path


def test_pattern_command(capsys) -> None:
    assert main(["pattern", "-m", "literal", "a+b"]) == 0
    assert capsys.readouterr().out.strip() == "a\\+b"


def test_pattern_command_error(capsys) -> None:
    assert main(["pattern", "abc\\"]) == 1
    assert "backslash" in capsys.readouterr().err


def test_unify_command(capsys) -> None:
    assert main(["unify", "Caf\u00e9"]) == 0
    assert capsys.readouterr().out.strip() == "Cafe"


def test_unify_command_json(capsys) -> None:
    assert main(["unify", "--json", "\u570b"]) == 0
    assert json.loads(capsys.readouterr().out) == {"source": "\u570b", "unified": "\u56fd"}


def test_segments_command_json(capsys) -> None:
    assert main(["segments", "--json", "ae\u0301"]) == 0
    assert json.loads(capsys.readouterr().out) == [
        {"segment": "a", "index": 0},
        {"segment": "e\u0301", "index": 1},
    ]


def test_format_segments_text() -> None:
    output = format_segments("a")
    assert "U+0061" in output
    assert "LATIN SMALL LETTER A" in output


def test_match_command(capsys, notes) -> None:
    assert main(["match", "-m", "literal", "zurich", str(notes)]) == 0
    assert capsys.readouterr().out.strip() == "2:1: Z\u00fcrich"


def test_match_command_json(capsys, notes) -> None:
    assert main(["match", "--json", "W.en", str(notes)]) == 0
    assert json.loads(capsys.readouterr().out) == [
        {"line": 2, "column": 12, "text": "Wien", "matched": "Wien"},
    ]


def test_match_command_no_match(capsys, notes) -> None:
    assert main(["match", "nothing here", str(notes)]) == 1
    assert capsys.readouterr().out == ""


def test_match_command_missing_file(capsys, tmp_path) -> None:
    assert main(["match", "x", str(tmp_path / "missing.txt")]) == 1
    assert "File not found" in capsys.readouterr().err


def test_migemo_command(capsys, migemo, monkeypatch) -> None:
    monkeypatch.setattr(migemo_module, "_MIGEMO", migemo)
    assert main(["migemo", "kensaku"]) == 0
    out = capsys.readouterr().out
    assert "\u691c\u7d22" in out
    assert "\u3051\u3093\u3055\u304f" in out


def test_parser_requires_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
