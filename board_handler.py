"""
Board Handler - Reveal State Machine
====================================

Holds the board data model, builds the render object the page paints,
and advances clues through Hidden -> Question -> Answer on click.
Games live in a process-wide registry keyed by signed game tokens.
"""

import hashlib
import hmac
import secrets
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import server_settings
from board_constants import (
    NUM_QUESTIONS_PER_CAT,
    PLACEHOLDER,
    LOADING_MESSAGE,
    BUTTON_START,
    BUTTON_LOADING,
    BUTTON_RESTART,
)
from board_errors import BoardNotReadyError, GameNotFoundError, InvalidGameTokenError

# Game token signing secret — from env var or generated at startup (dev only)
_SESSION_SECRET = server_settings.SESSION_SECRET.encode("utf-8")
if not _SESSION_SECRET:
    _SESSION_SECRET = secrets.token_bytes(32)
    print("[WARNING] No SESSION_SECRET env var — using random key (game tokens won't survive restarts)")


# --- Data model ---


class RevealState(Enum):
    HIDDEN = "hidden"
    QUESTION = "question"
    ANSWER = "answer"

    def next(self):
        """Successor state. ANSWER is terminal and maps to itself."""
        if self is RevealState.HIDDEN:
            return RevealState.QUESTION
        return RevealState.ANSWER


@dataclass
class Clue:
    question: str
    answer: str
    showing: RevealState = RevealState.HIDDEN


@dataclass
class Category:
    id: object
    title: str
    clues: List[Clue] = field(default_factory=list)


@dataclass
class Board:
    categories: List[Category] = field(default_factory=list)


@dataclass
class GameSession:
    game_id: str
    board: Optional[Board] = None
    loading: bool = False
    error: Optional[str] = None
    last_touched: float = 0.0


# --- Rendering ---


def _cell_text(clue):
    if clue.showing is RevealState.QUESTION:
        return clue.question
    if clue.showing is RevealState.ANSWER:
        return clue.answer
    return PLACEHOLDER


def _build_cell(board, category_index, clue_index, show_text=False):
    """
    Cell dict for one grid slot.

    Board renders always paint the placeholder; only the cell returned by
    reveal carries question/answer text. 'showing' always reflects the clue.
    """
    clues = board.categories[category_index].clues
    cell = {
        "categoryIndex": category_index,
        "clueIndex": clue_index,
    }
    # Short categories keep their row slots as disabled cells
    if clue_index >= len(clues):
        cell.update({"text": "", "showing": None, "disabled": True})
        return cell
    clue = clues[clue_index]
    text = _cell_text(clue) if show_text else PLACEHOLDER
    cell.update({"text": text, "showing": clue.showing.value, "disabled": False})
    return cell


def _button_label(board, loading):
    if loading:
        return BUTTON_LOADING
    if board is None:
        return BUTTON_START
    return BUTTON_RESTART


def render(board, loading=False, error=None, game_id=None):
    """
    Build the complete render object for a board.

    Returns:
        {
          'headers': [category titles in board order],
          'rows': NUM_QUESTIONS_PER_CAT rows of one cell per category,
          'buttonLabel', 'loading', 'message', 'error', 'gameToken'
        }

    Every cell shows the placeholder, whatever its clue's reveal state:
    rendering repaints the grid, it does not replay earlier reveals.
    In loading mode the grid is replaced by the loading placeholder.
    """
    result = {
        "headers": [],
        "rows": [],
        "buttonLabel": _button_label(board, loading),
        "loading": loading,
        "message": LOADING_MESSAGE if loading else None,
        "error": error,
    }
    if game_id is not None:
        result["gameToken"] = sign_game_id(game_id)

    if loading or board is None:
        return result

    result["headers"] = [category.title for category in board.categories]
    result["rows"] = [
        [_build_cell(board, c, i) for c in range(len(board.categories))]
        for i in range(NUM_QUESTIONS_PER_CAT)
    ]
    return result


def render_game(game):
    """Render a game session in its current presentation state."""
    return render(game.board, loading=game.loading, error=game.error, game_id=game.game_id)


# --- Reveal transition ---


def reveal(board, category_index, clue_index):
    """
    Advance one clue's reveal state and return its updated cell.

    Hidden -> Question (show question), Question -> Answer (show answer),
    Answer -> ignored. Disabled cells (no clue in that slot) are ignored.
    Raises IndexError for coordinates outside the board.
    """
    if not 0 <= category_index < len(board.categories):
        raise IndexError(f"categoryIndex {category_index} out of range")
    if not 0 <= clue_index < NUM_QUESTIONS_PER_CAT:
        raise IndexError(f"clueIndex {clue_index} out of range")

    clues = board.categories[category_index].clues
    if clue_index < len(clues):
        clue = clues[clue_index]
        clue.showing = clue.showing.next()

    return _build_cell(board, category_index, clue_index, show_text=True)


# --- Loading view ---


def show_loading_view(game):
    """Enter loading mode: grid replaced by placeholder, button relabelled."""
    game.loading = True
    game.error = None


def hide_loading_view(game):
    """Leave loading mode. Callers do this explicitly, on success and failure."""
    game.loading = False


# --- Game registry ---

# Least recently touched first; bounded by MAX_GAMES and GAME_TTL_SECONDS
_games = OrderedDict()
_games_lock = threading.Lock()

MAX_GAMES = server_settings.MAX_GAMES
GAME_TTL_SECONDS = server_settings.GAME_TTL_SECONDS

_now = time.monotonic


def sign_game_id(game_id):
    """Sign a game id with HMAC. Returns "<id>.<sig>"."""
    sig = hmac.new(_SESSION_SECRET, game_id.encode("utf-8"), hashlib.sha256).hexdigest()
    return f"{game_id}.{sig}"


def verify_game_token(token):
    """Verify a game token and return its game id. Raises InvalidGameTokenError on tamper."""
    if not isinstance(token, str) or "." not in token:
        raise InvalidGameTokenError("Invalid game token format")
    game_id, sig = token.rsplit(".", 1)
    expected_sig = hmac.new(_SESSION_SECRET, game_id.encode("utf-8"), hashlib.sha256).hexdigest()
    if not hmac.compare_digest(sig.encode("utf-8"), expected_sig.encode("utf-8")):
        raise InvalidGameTokenError("Game token signature invalid — possible tampering")
    return game_id


def _prune_games(now):
    """Drop idle games past their TTL, then the oldest beyond the cap. Caller holds _games_lock."""
    expired = 0
    while _games:
        oldest = next(iter(_games.values()))
        if now - oldest.last_touched < GAME_TTL_SECONDS:
            break
        _games.popitem(last=False)
        expired += 1

    evicted = 0
    # Leave room for the game about to be added
    while _games and len(_games) >= MAX_GAMES:
        _games.popitem(last=False)
        evicted += 1

    if expired or evicted:
        print(f"[Game] Pruned {expired} expired, {evicted} over cap ({len(_games)} active)")


def new_game():
    """Create and register an empty game session."""
    game = GameSession(game_id=secrets.token_urlsafe(16))
    with _games_lock:
        now = _now()
        _prune_games(now)
        game.last_touched = now
        _games[game.game_id] = game
        active = len(_games)
    print(f"[Game] Created {game.game_id} ({active} active)")
    return game


def get_game(token):
    """Look up a game by its signed token and mark it recently used."""
    game_id = verify_game_token(token)
    with _games_lock:
        game = _games.get(game_id)
        if game is not None:
            now = _now()
            if now - game.last_touched >= GAME_TTL_SECONDS:
                del _games[game_id]
                game = None
            else:
                game.last_touched = now
                _games.move_to_end(game_id)
    if game is None:
        raise GameNotFoundError(f"No game with id {game_id}")
    return game


def try_begin_loading(game):
    """
    Enter loading mode unless a fetch is already in flight for this game.

    Returns False when the game is already loading (the start request
    should be ignored), True after entering loading mode.
    """
    with _games_lock:
        if game.loading:
            return False
        show_loading_view(game)
        return True


def fail_loading(game, message):
    """Leave loading mode after a failed fetch, keeping the prior board and recording the error."""
    with _games_lock:
        hide_loading_view(game)
        game.error = message


def finish_loading(game, board):
    """Leave loading mode and swap in a freshly fetched board."""
    with _games_lock:
        hide_loading_view(game)
        game.board = board
        game.error = None


def reveal_in_game(game, category_index, clue_index):
    """Reveal a cell on a game's current board. Returns (cell, render)."""
    with _games_lock:
        if game.board is None or game.loading:
            raise BoardNotReadyError("No board to reveal on — start a game first")
        cell = reveal(game.board, category_index, clue_index)
        return cell, render_game(game)


def game_count():
    """Number of games currently held in the registry."""
    with _games_lock:
        return len(_games)


def clear_games():
    """Drop every registered game."""
    with _games_lock:
        _games.clear()
