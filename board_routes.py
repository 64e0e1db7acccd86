"""
Board Routes - Flask Blueprint
==============================

Routes:
    /board/start    - Start or restart a game (fetches a fresh board)
    /board/reveal   - Advance one cell: ? -> question -> answer
    /board          - Current render for a game
"""

import traceback

from flask import Blueprint, request, jsonify

import board_handler
import category_fetcher
from board_errors import (
    NetworkError,
    DecodeError,
    GameNotFoundError,
    InvalidGameTokenError,
    BoardNotReadyError,
)

board_bp = Blueprint('board', __name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _lookup_game(token):
    """Resolve a game token. Returns (game, None) or (None, error_response)."""
    try:
        return board_handler.get_game(token), None
    except InvalidGameTokenError as e:
        return None, (jsonify({'error': str(e)}), 400)
    except GameNotFoundError as e:
        return None, (jsonify({'error': str(e)}), 404)


def _parse_index(data, key):
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{key}' must be an integer")
    return value


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@board_bp.route('/start', methods=['POST'])
async def board_start():
    """Start (or restart) a game: enter loading view, fetch, render."""
    data = request.get_json(silent=True) or {}
    token = data.get('gameToken')

    if token:
        game, error_response = _lookup_game(token)
        if error_response:
            return error_response
    else:
        game = board_handler.new_game()

    # A fetch already in flight for this game wins; this press is ignored
    if not board_handler.try_begin_loading(game):
        return jsonify(board_handler.render_game(game)), 409

    try:
        board = await category_fetcher.fetch_board()
    except (NetworkError, DecodeError) as e:
        print(f"[Fetch] Board fetch failed for game {game.game_id}: {e}")
        board_handler.fail_loading(game, f"Could not load a new board: {e}")
        return jsonify(board_handler.render_game(game)), 502
    except Exception as e:
        traceback.print_exc()
        board_handler.fail_loading(game, str(e))
        return jsonify({'error': str(e)}), 500

    board_handler.finish_loading(game, board)
    print(f"[Game] {game.game_id} started with {[c.title for c in board.categories]}")
    return jsonify(board_handler.render_game(game))


@board_bp.route('/reveal', methods=['POST'])
def board_reveal():
    """Advance the clicked cell's reveal state."""
    data = request.get_json(silent=True)
    if not data:
        return jsonify({'error': 'No data provided'}), 400

    token = data.get('gameToken')
    if not token:
        return jsonify({'error': 'Missing gameToken'}), 400

    try:
        category_index = _parse_index(data, 'categoryIndex')
        clue_index = _parse_index(data, 'clueIndex')
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    game, error_response = _lookup_game(token)
    if error_response:
        return error_response

    try:
        cell, render = board_handler.reveal_in_game(game, category_index, clue_index)
    except BoardNotReadyError as e:
        return jsonify({'error': str(e)}), 409
    except IndexError as e:
        return jsonify({'error': str(e)}), 400

    return jsonify({'cell': cell, 'render': render})


@board_bp.route('', methods=['GET'])
def board_current():
    """Return the current render for a game."""
    token = request.args.get('gameToken')
    if not token:
        return jsonify({'error': 'Missing gameToken'}), 400

    game, error_response = _lookup_game(token)
    if error_response:
        return error_response

    return jsonify(board_handler.render_game(game))
