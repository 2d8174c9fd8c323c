"""Tests for the command line generator."""

import json
from pathlib import Path

import pytest

from puzzle_facts.cli import main


def _run(tmp_path: Path, *extra: str) -> int:
    return main(
        ["--width", "1200", "--height", "900", "--rows", "3", "--cols", "4", "--output-dir", str(tmp_path), *extra]
    )


def test_writes_all_outputs(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    """Front, back and layout files are written."""
    facts = tmp_path / "facts.txt"
    facts.write_text("Cats sleep a lot\n\nOwls cannot move their eyes\n", encoding="utf-8")

    assert _run(tmp_path, "--seed", "42", "--facts", str(facts)) == 0

    assert (tmp_path / "front.svg").read_text(encoding="utf-8").count("<path ") == 32
    assert "<text" in (tmp_path / "back.svg").read_text(encoding="utf-8")

    layout = json.loads((tmp_path / "layout.json").read_text(encoding="utf-8"))
    assert layout["spec"]["seed"] == 42
    assert len(layout["paths"]) == 32
    assert len(layout["front"]) == 12
    assert layout["front"][0]["text"] == "Cats sleep a lot"
    assert layout["front"][1]["text"] == "Owls cannot move their eyes"
    assert layout["front"][2] is None
    assert layout["back"][3]["index"] == 0

    assert "Wrote puzzle with seed 42" in capsys.readouterr().out


def test_same_seed_same_front(tmp_path: Path) -> None:
    """A seed reproduces the cut-lines."""
    first, second = tmp_path / "a", tmp_path / "b"
    _run(first, "--seed", "7")
    _run(second, "--seed", "7")
    assert (first / "front.svg").read_text(encoding="utf-8") == (second / "front.svg").read_text(encoding="utf-8")


def test_random_seed_is_recorded(tmp_path: Path) -> None:
    """Without a seed the drawn one is written to the layout."""
    _run(tmp_path)
    layout = json.loads((tmp_path / "layout.json").read_text(encoding="utf-8"))
    assert 0 <= layout["spec"]["seed"] <= 0xFFFFFFFF


def test_reports_shortened_facts(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    """Shortened facts are printed."""
    facts = tmp_path / "facts.txt"
    facts.write_text("Short fact. " + " ".join(["word"] * 80), encoding="utf-8")
    _run(tmp_path, "--seed", "1", "--facts", str(facts))
    assert "Fact 1 shortened" in capsys.readouterr().out


def test_reports_empty_facts(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    """Lines without printable text are skipped and printed."""
    facts = tmp_path / "facts.txt"
    facts.write_text("🎉🎉\nOwls cannot move their eyes\n", encoding="utf-8")
    _run(tmp_path, "--seed", "1", "--facts", str(facts))

    assert "Skipped fact without printable text: '🎉🎉'" in capsys.readouterr().out
    layout = json.loads((tmp_path / "layout.json").read_text(encoding="utf-8"))
    assert layout["front"][0]["text"] == "Owls cannot move their eyes"


def test_missing_required_argument() -> None:
    """The grid size is required."""
    with pytest.raises(SystemExit):
        main(["--width", "100", "--height", "100"])
