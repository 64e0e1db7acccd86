"""
Category Fetcher Tests
======================

Runs fetch_board against an in-memory API (fake_api.FakeSession):
board shape, distinct categories, truncation, normalisation, and
all-or-nothing failure.

Usage:
    python3 -m pytest Testcase/test_category_fetcher.py
"""

import asyncio
import os
import random
import sys

import aiohttp
import pytest

# Add parent directory to path so we can import the server modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from board_constants import NUM_CATEGORIES, NUM_QUESTIONS_PER_CAT
from board_handler import RevealState
from category_fetcher import fetch_board, fetch_category, fetch_category_ids
from board_errors import NetworkError, DecodeError, NotEnoughCategoriesError
from fake_api import FakeSession, make_category, make_routes

BASE = "http://api.test/api"


def _fetch(routes, rng=None):
    session = FakeSession(routes)
    board = asyncio.run(fetch_board(BASE, session=session, rng=rng or random.Random(1)))
    return board, session


def test_board_has_six_distinct_categories():
    board, _ = _fetch(make_routes(num_pool=100))

    assert len(board.categories) == NUM_CATEGORIES
    ids = [c.id for c in board.categories]
    assert len(set(ids)) == NUM_CATEGORIES


def test_every_clue_starts_hidden_and_is_truncated():
    board, _ = _fetch(make_routes(num_clues=12))

    for category in board.categories:
        assert len(category.clues) == NUM_QUESTIONS_PER_CAT
        assert all(clue.showing is RevealState.HIDDEN for clue in category.clues)
        # first five, in API order
        assert [c.question for c in category.clues] == [
            f"{category.title} question {i}" for i in range(NUM_QUESTIONS_PER_CAT)]


def test_short_category_is_not_padded():
    routes = make_routes()
    for i in range(1, 11):
        routes[("/category", i)] = (200, make_category(f"cat{i}", num_clues=3))

    board, _ = _fetch(routes)

    assert all(len(c.clues) == 3 for c in board.categories)


def test_board_order_follows_selected_ids():
    rng = random.Random(42)
    expected_ids = random.Random(42).sample(list(range(1, 11)), NUM_CATEGORIES)

    board, session = _fetch(make_routes(), rng=rng)

    assert [c.id for c in board.categories] == expected_ids
    assert [c.title for c in board.categories] == [f"cat{i}" for i in expected_ids]
    assert session.requests[0] == ("/categories", 100)


def test_extra_clue_fields_are_dropped():
    session = FakeSession(make_routes())
    category = asyncio.run(fetch_category(session, BASE, 1))

    clue = category.clues[0]
    assert vars(clue) == {
        "question": "cat1 question 0",
        "answer": "cat1 answer 0",
        "showing": RevealState.HIDDEN,
    }


def test_small_pool_is_fatal():
    with pytest.raises(NotEnoughCategoriesError):
        asyncio.run(fetch_category_ids(FakeSession(make_routes(num_pool=4)), BASE))


def test_duplicate_ids_in_pool_do_not_count_twice():
    routes = make_routes()
    routes[("/categories", 100)] = (200, [{"id": i % 3} for i in range(20)])

    with pytest.raises(NotEnoughCategoriesError):
        asyncio.run(fetch_category_ids(FakeSession(routes), BASE))


def test_int_and_string_ids_are_the_same_category():
    routes = make_routes()
    routes[("/categories", 100)] = (200, [{"id": 1}, {"id": "1"}, {"id": 2}, {"id": 3}, {"id": 4}, {"id": 5}])

    # six entries, five categories
    with pytest.raises(NotEnoughCategoriesError):
        asyncio.run(fetch_category_ids(FakeSession(routes), BASE))


def test_one_failed_category_fails_the_whole_board():
    routes = make_routes(num_pool=6)
    routes[("/category", 4)] = (500, {"error": "boom"})

    with pytest.raises(NetworkError):
        _fetch(routes)


def test_connection_error_is_network_error():
    routes = make_routes(num_pool=6)
    routes[("/category", 2)] = aiohttp.ClientConnectionError("refused")

    with pytest.raises(NetworkError):
        _fetch(routes)


def test_timeout_is_network_error():
    routes = make_routes(num_pool=6)
    routes[("/categories", 100)] = asyncio.TimeoutError()

    with pytest.raises(NetworkError):
        _fetch(routes)


def test_non_json_body_is_decode_error():
    routes = make_routes(num_pool=6)
    routes[("/category", 3)] = (200, "<html>Service Unavailable</html>")

    with pytest.raises(DecodeError):
        _fetch(routes)


def test_malformed_clue_is_decode_error():
    routes = make_routes(num_pool=6)
    routes[("/category", 5)] = (200, {"title": "cat5", "clues": [{"question": "no answer"}]})

    with pytest.raises(DecodeError):
        _fetch(routes)


def test_missing_clues_list_is_decode_error():
    routes = make_routes(num_pool=6)
    routes[("/category", 1)] = (200, {"title": "cat1"})

    with pytest.raises(DecodeError):
        _fetch(routes)
