"""Tests for font loading and the command-line entry point.

The Tk window itself is never opened: run_app is replaced with a recorder.
"""

import logging

import pytest

import flashcards
from flashcards import DeckSession, load_font_family, main, parse_args


class _FakeFont:
    def __init__(self, family):
        self._family = family

    def getname(self):
        return self._family, "Regular"


@pytest.fixture
def launched(monkeypatch):
    """Replace run_app and collect the calls made to it."""
    calls = []
    monkeypatch.setattr(
        flashcards, "run_app",
        lambda session, font_path: calls.append((session, font_path)),
    )
    return calls


# ── Font loading ──────────────────────────────────────────────────────────────

def test_missing_font_falls_back_silently(tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger="flashcards"):
        assert load_font_family(str(tmp_path / "font.ttf")) is None
    assert caplog.records == []


def test_invalid_font_falls_back_with_warning(tmp_path, caplog):
    path = tmp_path / "font.ttf"
    path.write_bytes(b"this is not a font")
    with caplog.at_level(logging.WARNING, logger="flashcards"):
        assert load_font_family(str(path)) is None
    assert "Ignoring font file" in caplog.text


def test_valid_font_returns_family(tmp_path, monkeypatch):
    path = tmp_path / "font.ttf"
    path.write_bytes(b"stub")
    registered = []
    monkeypatch.setattr(flashcards.ImageFont, "truetype", lambda p, size: _FakeFont("Fancy Sans"))
    monkeypatch.setattr(flashcards.ctk.FontManager, "load_font", lambda p: registered.append(p) or True)
    assert load_font_family(str(path)) == "Fancy Sans"
    assert registered == [str(path)]


def test_unregistered_font_falls_back_with_warning(tmp_path, monkeypatch, caplog):
    path = tmp_path / "font.ttf"
    path.write_bytes(b"stub")
    monkeypatch.setattr(flashcards.ImageFont, "truetype", lambda p, size: _FakeFont("Fancy Sans"))
    monkeypatch.setattr(flashcards.ctk.FontManager, "load_font", lambda p: False)
    with caplog.at_level(logging.WARNING, logger="flashcards"):
        assert load_font_family(str(path)) is None
    assert "Could not register font" in caplog.text


# ── Command line ──────────────────────────────────────────────────────────────

def test_parse_args_defaults():
    args = parse_args([])
    assert args.cards == flashcards.CARDS_PATH
    assert args.font == flashcards.FONT_PATH
    assert args.verbose is False


def test_main_runs_viewer_and_exits_zero(write_csv, tmp_path, launched):
    path = write_csv("Q1, A1\nQ2, A2\n")
    font = str(tmp_path / "font.ttf")
    assert main(["--cards", str(path), "--font", font]) == 0

    assert len(launched) == 1
    session, font_path = launched[0]
    assert isinstance(session, DeckSession)
    assert session.current_index == 0
    assert session.is_flipped is False
    assert len(session.cards) == 2
    assert font_path == font


def test_main_missing_file_exits_nonzero(tmp_path, launched, caplog):
    path = tmp_path / "missing.csv"
    with caplog.at_level(logging.ERROR, logger="flashcards"):
        assert main(["--cards", str(path)]) == 1
    assert launched == []
    assert "missing.csv" in caplog.text


def test_main_empty_deck_exits_nonzero(write_csv, launched, caplog):
    path = write_csv("no answer here\n\n")
    with caplog.at_level(logging.ERROR, logger="flashcards"):
        assert main(["--cards", str(path)]) == 1
    assert launched == []
    assert "no valid flashcards found" in caplog.text


def test_main_rejects_unknown_option(launched):
    with pytest.raises(SystemExit) as exc_info:
        main(["--bogus"])
    assert exc_info.value.code == 2
