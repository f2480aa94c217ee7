"""flashcards.py: Single-file Tkinter flashcard viewer for a CSV deck.

Architecture, three layers, each with one responsibility:

    ┌──────────────────────────────────────────────────────────┐
    │  TkView  (View layer)                                    │
    │  • Builds and updates Tkinter widgets                    │
    │  • Translates key presses into session calls             │
    │  • Contains ZERO navigation rules                        │
    └──────────────────────────────┬───────────────────────────┘
                                   │ calls
    ┌──────────────────────────────▼───────────────────────────┐
    │  DeckSession  (Controller layer)                         │
    │  • Owns the deck and the view state (index, flip)        │
    │  • Clamps navigation at both ends of the deck            │
    │  • Returns plain Python values, never tkinter objects    │
    │  • Never imports tkinter                                 │
    └──────────────────────────────┬───────────────────────────┘
                                   │ built from
    ┌──────────────────────────────▼───────────────────────────┐
    │  CsvDeckLoader  (Storage layer)                          │
    │  • Reads cards.csv and tokenizes quoted CSV fields       │
    │  • Drops unusable rows, fails on an empty deck           │
    │  • No GUI knowledge                                      │
    └──────────────────────────────────────────────────────────┘

The session is handed to the view explicitly, so the navigation logic can be
exercised in tests without a display.

Usage:
    python flashcards.py                     # cards.csv / font.ttf beside this file
    python flashcards.py --cards deck.csv    # another deck
    python flashcards.py --font my.ttf -v    # custom font, debug logging

Keys: SPACE or UP flips, RIGHT / LEFT navigate, ESC quits.
"""

import argparse
import logging
import os
import sys
import tkinter as tk
from collections import namedtuple

import customtkinter as ctk
from PIL import ImageFont


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


# ── Directory layout ──────────────────────────────────────────────────────────
# Both input files live next to this script so the project folder can be moved
# or copied as a whole.

BASE_DIR   = os.path.dirname(os.path.abspath(__file__))
CARDS_PATH = os.path.join(BASE_DIR, "cards.csv")
FONT_PATH  = os.path.join(BASE_DIR, "font.ttf")


# ── Window look ───────────────────────────────────────────────────────────────

WINDOW_TITLE   = "Flashcard Game"
WINDOW_SIZE    = "800x600"
DEFAULT_FAMILY = "Helvetica"   # Tk maps this to a sans-serif on every platform

FONT_SIZE       = 28
FONT_SIZE_SMALL = 14

BG_COLOR         = "#2C3E50"
CARD_FRONT_COLOR = "#ECF0F1"
CARD_BACK_COLOR  = "#3498DB"
CARD_BORDER      = "#34495E"
TEXT_FRONT_COLOR = "#2C3E50"
TEXT_BACK_COLOR  = "#FFFFFF"
STATUS_COLOR     = "#95A5A6"
HELP_COLOR       = "#7F8C8D"

HELP_TEXT = "SPACE/UP: Flip  |  LEFT/RIGHT: Navigate  |  ESC: Quit"


# ══════════════════════════════════════════════════════════════════════════════
# ERRORS
# ══════════════════════════════════════════════════════════════════════════════

class DeckLoadError(Exception):
    """Base class for failures that stop a deck from loading."""


class FileUnreadable(DeckLoadError):
    """The cards file is missing, unreadable, or not valid UTF-8.

    The underlying OSError / UnicodeDecodeError is kept in ``cause``.
    """

    def __init__(self, path, cause):
        self.path  = path
        self.cause = cause
        super().__init__(f"cannot read {path}: {cause}")


class EmptyDeck(DeckLoadError):
    """The cards file was read but no row produced a usable card."""

    def __init__(self, message="no valid flashcards found"):
        super().__init__(message)


# ══════════════════════════════════════════════════════════════════════════════
# STORAGE LAYER
# ══════════════════════════════════════════════════════════════════════════════

Card = namedtuple("Card", ["question", "answer"])

# Tokenizer states.
_UNQUOTED    = "unquoted"
_QUOTED      = "quoted"
_AFTER_QUOTE = "after_quote"


def split_fields(line):
    """Split one CSV line into trimmed fields.

    A field whose first non-blank character is a double quote runs until the
    matching closing quote; inside it a comma is literal and ``""`` stands for
    one ``"``.  The delimiting quotes themselves are dropped.  Any other field
    ends at the next comma, and a quote in its middle is an ordinary character.
    Text between a closing quote and the next comma is kept as-is, quotes
    included.

    Returns the list of fields, or None if a quoted field is never closed.
    """
    fields = []
    buf    = []
    state  = _UNQUOTED
    closed = False   # the current field already had its quoted part

    for ch in line:
        if state == _UNQUOTED:
            if ch == ",":
                fields.append("".join(buf))
                buf    = []
                closed = False
            elif ch == '"' and not closed and not "".join(buf).strip():
                # Opening quote: blanks before it are not part of the field.
                buf   = []
                state = _QUOTED
            else:
                buf.append(ch)

        elif state == _QUOTED:
            if ch == '"':
                state  = _AFTER_QUOTE
                closed = True
            else:
                buf.append(ch)

        else:  # _AFTER_QUOTE
            if ch == '"':
                # Second quote of a "" pair: a literal quote, field still open.
                buf.append('"')
                state = _QUOTED
            elif ch == ",":
                fields.append("".join(buf))
                buf    = []
                state  = _UNQUOTED
                closed = False
            else:
                # Trailing text: the rest of the field reads as unquoted, so
                # a later quote is literal.
                buf.append(ch)
                state = _UNQUOTED

    if state == _QUOTED:
        return None

    fields.append("".join(buf))
    return [f.strip() for f in fields]


def parse_row(line):
    """Turn one CSV line into a Card, or None if the row is unusable.

    Unusable means: malformed quoting, fewer than two fields, or an empty
    question or answer.  Fields past the second are ignored.
    """
    fields = split_fields(line)
    if fields is None or len(fields) < 2:
        return None
    question, answer = fields[0], fields[1]
    if not question or not answer:
        return None
    return Card(question, answer)


def parse_cards(text):
    """Parse a whole CSV document into a tuple of Cards, in file order.

    Rows end at "\\n" only (a trailing "\\r" is dropped); other Unicode line
    separators are ordinary text.  Blank lines are skipped.  Unusable rows
    are dropped silently; only their count is logged.  Raises EmptyDeck if
    nothing survives.
    """
    cards   = []
    skipped = 0
    for line in text.split("\n"):
        if line.endswith("\r"):
            line = line[:-1]
        if not line.strip():
            continue
        card = parse_row(line)
        if card is None:
            skipped += 1
            continue
        cards.append(card)

    logger.debug("Parsed %d card(s), skipped %d row(s)", len(cards), skipped)
    if not cards:
        raise EmptyDeck()
    return tuple(cards)


class CsvDeckLoader:
    """Reads a deck from a ``question, answer`` CSV file.

    The path defaults to cards.csv beside this script; tests pass a file in a
    temporary directory instead.
    """

    def __init__(self, path=CARDS_PATH):
        self.path = path

    def read_text(self):
        """Return the file contents, raising FileUnreadable on any I/O error."""
        try:
            # utf-8-sig so a byte-order mark written by spreadsheet exports
            # doesn't end up glued to the first question.
            with open(self.path, "r", encoding="utf-8-sig") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FileUnreadable(self.path, e) from e

    def load(self):
        """Read and parse the deck.

        Returns:
            Tuple of Card, never empty.

        Raises:
            FileUnreadable: the file could not be opened, read or decoded.
            EmptyDeck:      no row yielded a card.
        """
        cards = parse_cards(self.read_text())
        logger.info("Loaded %d card(s) from %s", len(cards), self.path)
        return cards


# ══════════════════════════════════════════════════════════════════════════════
# CONTROLLER LAYER
# ══════════════════════════════════════════════════════════════════════════════

class DeckSession:
    """Navigation state for one study session over a fixed deck.

    Holds the deck (read-only), the index of the card on screen and whether
    that card is showing its answer.  Every transition is total: moving past
    either end of the deck is a no-op, there is no wraparound.

    The view never reads the private fields; it renders the dict returned by
    get_state(), which every transition also returns.
    """

    def __init__(self, cards):
        self._cards = tuple(cards)
        if not self._cards:
            # A session always has a card to show.
            raise EmptyDeck()
        self._index   = 0
        self._flipped = False

    @property
    def cards(self):
        return self._cards

    @property
    def current_index(self):
        return self._index

    @property
    def is_flipped(self):
        return self._flipped

    def current_card(self):
        return self._cards[self._index]

    def current_text(self):
        """The answer when flipped, otherwise the question."""
        card = self.current_card()
        return card.answer if self._flipped else card.question

    def get_state(self):
        """Return a snapshot of the session for the view to render.

        Returns:
            {
                "card":       Card(question, answer),
                "text":       "Mercury",     # side currently shown
                "side":       "ANSWER",      # or "QUESTION"
                "index":      0,             # 0-based
                "total":      8,
                "is_flipped": True,
                "at_first":   True,
                "at_last":    False,
            }
        """
        return {
            "card":       self.current_card(),
            "text":       self.current_text(),
            "side":       "ANSWER" if self._flipped else "QUESTION",
            "index":      self._index,
            "total":      len(self._cards),
            "is_flipped": self._flipped,
            "at_first":   self._index == 0,
            "at_last":    self._index == len(self._cards) - 1,
        }

    def flip(self):
        """Toggle between question and answer.  Returns the updated state."""
        self._flipped = not self._flipped
        return self.get_state()

    def next_card(self):
        """Advance one card unless already on the last one.

        Moving resets the new card to its question side.
        Returns the updated state.
        """
        if self._index < len(self._cards) - 1:
            self._index  += 1
            self._flipped = False
        return self.get_state()

    def previous_card(self):
        """Go back one card unless already on the first one.

        Moving resets the new card to its question side.
        Returns the updated state.
        """
        if self._index > 0:
            self._index  -= 1
            self._flipped = False
        return self.get_state()


# ══════════════════════════════════════════════════════════════════════════════
# VIEW LAYER  (Tkinter GUI)
# ══════════════════════════════════════════════════════════════════════════════

def load_font_family(path=FONT_PATH):
    """Register a TrueType font file and return its family name.

    Returns None, so the caller falls back to the default family, when the
    file is absent, unreadable, not a font, or the platform refuses to
    register it.  None of these are fatal.

    Must run before tk.Tk() is created: on Linux the font is installed into
    the user's font directory, which Tk only scans at startup.  That copy in
    ~/.fonts is permanent; it stays after the app exits.
    """
    if not os.path.isfile(path):
        logger.debug("No font file at %s, using the default font", path)
        return None

    try:
        family, _style = ImageFont.truetype(path, size=FONT_SIZE).getname()
    except OSError as e:
        logger.warning("Ignoring font file %s: %s", path, e)
        return None
    if not family:
        logger.warning("Font file %s has no family name, using the default font", path)
        return None

    if not ctk.FontManager.load_font(path):
        logger.warning("Could not register font %s, using the default font", path)
        return None

    logger.info("Using font family %r from %s", family, path)
    return family


class TkView:
    """Tkinter view layer.

    Draws the current card and maps keys to DeckSession calls.  Each key
    handler calls exactly one session method and renders the state it returns.
    """

    def __init__(self, root, session, font_family=None):
        self.root    = root
        self.session = session
        family       = font_family or DEFAULT_FAMILY
        self._font       = (family, FONT_SIZE)
        self._font_small = (family, FONT_SIZE_SMALL)

        self.root.title(WINDOW_TITLE)
        self.root.geometry(WINDOW_SIZE)
        self.root.configure(bg=BG_COLOR)

        self._build()
        self._bind_keys()
        self.render(self.session.get_state())

    def _build(self):
        # Card face.  Its colour tells the user which side is showing.
        self._card_frame = tk.Frame(
            self.root,
            bg=CARD_FRONT_COLOR,
            highlightthickness=2,
            highlightbackground=CARD_BORDER,
        )
        self._card_frame.pack(fill=tk.BOTH, expand=True, padx=100, pady=(100, 20))

        self._card_label = tk.Label(
            self._card_frame,
            text="",
            font=self._font,
            bg=CARD_FRONT_COLOR,
            wraplength=550,
            justify=tk.CENTER,
        )
        self._card_label.pack(expand=True, padx=25, pady=25)

        # "QUESTION" / "ANSWER" indicator.
        self._side_label = tk.Label(
            self.root, text="", font=self._font_small, bg=BG_COLOR, fg=STATUS_COLOR
        )
        self._side_label.pack()

        # "Card 3 / 10".
        self._counter_label = tk.Label(
            self.root, text="", font=self._font_small, bg=BG_COLOR, fg=STATUS_COLOR
        )
        self._counter_label.pack(pady=(4, 0))

        tk.Label(
            self.root, text=HELP_TEXT, font=self._font_small, bg=BG_COLOR, fg=HELP_COLOR
        ).pack(pady=(12, 20))

    def _bind_keys(self):
        self.root.bind("<space>",  lambda e: self._on_flip())
        self.root.bind("<Up>",     lambda e: self._on_flip())
        self.root.bind("<Right>",  lambda e: self._on_next())
        self.root.bind("<Left>",   lambda e: self._on_prev())
        self.root.bind("<Escape>", lambda e: self.on_close())

    # ── Key handlers ──────────────────────────────────────────────────────────

    def _on_flip(self):
        self.render(self.session.flip())

    def _on_next(self):
        self.render(self.session.next_card())

    def _on_prev(self):
        self.render(self.session.previous_card())

    # ── Rendering ─────────────────────────────────────────────────────────────

    def render(self, state):
        """Update every widget from a DeckSession state snapshot."""
        logger.debug(
            "Showing card %d/%d (%s)", state["index"] + 1, state["total"], state["side"]
        )
        if state["is_flipped"]:
            card_bg, text_fg = CARD_BACK_COLOR, TEXT_BACK_COLOR
        else:
            card_bg, text_fg = CARD_FRONT_COLOR, TEXT_FRONT_COLOR

        self._card_frame.config(bg=card_bg)
        self._card_label.config(text=state["text"], bg=card_bg, fg=text_fg)
        self._side_label.config(text=state["side"])
        self._counter_label.config(text=f"Card {state['index'] + 1} / {state['total']}")

    def on_close(self):
        self.root.destroy()


def run_app(session, font_path=FONT_PATH):
    """Open the window for session and block until it is closed."""
    font_family = load_font_family(font_path)
    root = tk.Tk()
    app  = TkView(root, session, font_family=font_family)
    root.protocol("WM_DELETE_WINDOW", app.on_close)
    logger.info("Opening window with %d card(s)", len(session.cards))
    root.mainloop()


# ══════════════════════════════════════════════════════════════════════════════
# ENTRY POINT
# ══════════════════════════════════════════════════════════════════════════════

def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="flashcards",
        description="Study a deck of question/answer flashcards from a CSV file.",
    )
    parser.add_argument(
        "--cards",
        default=CARDS_PATH,
        help="CSV file with one 'question, answer' pair per line (default: cards.csv beside this script)",
    )
    parser.add_argument(
        "--font",
        default=FONT_PATH,
        help="TrueType font to render with; falls back to the default font (default: font.ttf beside this script)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug messages"
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Load the deck and run the viewer.

    Returns the process exit code: 0 after the window is closed, 1 if the
    deck could not be loaded.
    """
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO, format=LOG_FORMAT
    )

    try:
        cards = CsvDeckLoader(args.cards).load()
    except DeckLoadError as e:
        logger.error("Error loading %s: %s", args.cards, e)
        return 1

    run_app(DeckSession(cards), font_path=args.font)
    return 0


def entry():
    sys.exit(main())


if __name__ == "__main__":
    entry()
