"""
Board Constants — Shared Definitions
====================================

Single source of truth for board dimensions and display strings
used across category_fetcher.py, board_handler.py and the tests.
"""

NUM_CATEGORIES = 6
NUM_QUESTIONS_PER_CAT = 5

# Size of the random pool requested from /categories before sampling
CATEGORY_POOL_SIZE = 100

PLACEHOLDER = "?"
LOADING_MESSAGE = "Loading..."

BUTTON_START = "Start"
BUTTON_LOADING = "Loading..."
BUTTON_RESTART = "Restart Game"
