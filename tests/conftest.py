"""Shared test fixtures."""

import pytest


@pytest.fixture
def write_csv(tmp_path):
    """Return a helper that writes text to a CSV file in tmp_path."""
    def _write(text, name="cards.csv", encoding="utf-8"):
        path = tmp_path / name
        path.write_bytes(text.encode(encoding))
        return path
    return _write


@pytest.fixture
def sample_cards():
    from flashcards import Card
    return [
        Card("Which planet is closest to the Sun?", "Mercury"),
        Card("What is the largest ocean on Earth?", "Pacific Ocean"),
        Card("What is the square root of 64?", "8"),
    ]
