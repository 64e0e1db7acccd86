"""
Category Fetcher
================

Async client for the jService-style clue API. Picks NUM_CATEGORIES random
categories from a pool, then fetches every category's clues concurrently
and assembles a fresh Board.

API:
    GET {base}/categories?count=N  -> [{id, title, ...}, ...]
    GET {base}/category?id=ID      -> {title, clues: [{question, answer, ...}]}
"""

import asyncio
import json
import random

import aiohttp

import server_settings
from board_constants import NUM_CATEGORIES, NUM_QUESTIONS_PER_CAT, CATEGORY_POOL_SIZE
from board_handler import Board, Category, Clue, RevealState
from board_errors import NetworkError, DecodeError, NotEnoughCategoriesError
from validate_payload import category_key, validate_category_list, validate_category_detail


async def _get_json(session, url, params, timeout=None):
    """GET a URL and parse its JSON body. Raises NetworkError / DecodeError."""
    if timeout is None:
        timeout = server_settings.REQUEST_TIMEOUT
    try:
        async with session.get(url, params=params,
                               timeout=aiohttp.ClientTimeout(total=timeout)) as response:
            if not 200 <= response.status < 300:
                raise NetworkError(f"HTTP {response.status} from {url}")
            body = await response.text()
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise NetworkError(f"Request to {url} failed: {e}") from e

    try:
        return json.loads(body)
    except ValueError as e:
        raise DecodeError(f"Invalid JSON from {url}: {e}") from e


def _raise_on_errors(errors, warnings, label):
    for warn in warnings:
        print(f"  ⚠ {label}: {warn}")
    if errors:
        raise DecodeError(f"{label}: " + "; ".join(errors))


async def fetch_category_ids(session, base_url, rng=None):
    """
    Get NUM_CATEGORIES random category ids from the API.

    Requests a pool of CATEGORY_POOL_SIZE categories and samples without
    replacement. Raises NotEnoughCategoriesError if the pool is too small.
    """
    rng = rng or random
    data = await _get_json(session, f"{base_url}/categories", {"count": CATEGORY_POOL_SIZE})

    errors, warnings = validate_category_list(data)
    _raise_on_errors(errors, warnings, "categories")

    # Collapse duplicate ids, keeping first occurrence order
    seen = set()
    pool = []
    for entry in data:
        key = category_key(entry["id"])
        if key not in seen:
            seen.add(key)
            pool.append(entry["id"])

    if len(pool) < NUM_CATEGORIES:
        raise NotEnoughCategoriesError(
            f"Category pool has {len(pool)} distinct ids, need {NUM_CATEGORIES}")

    return rng.sample(pool, NUM_CATEGORIES)


async def fetch_category(session, base_url, category_id):
    """
    Return a Category with at most NUM_QUESTIONS_PER_CAT clues, all Hidden.

    Clues keep the API's order and are truncated, never padded.
    """
    data = await _get_json(session, f"{base_url}/category", {"id": category_id})

    errors, warnings = validate_category_detail(data, NUM_QUESTIONS_PER_CAT)
    _raise_on_errors(errors, warnings, f"category {category_id}")

    clues = [
        Clue(question=clue["question"], answer=clue["answer"], showing=RevealState.HIDDEN)
        for clue in data["clues"][:NUM_QUESTIONS_PER_CAT]
    ]
    return Category(id=category_id, title=data["title"], clues=clues)


async def _fetch_board_with(session, base_url, rng):
    category_ids = await fetch_category_ids(session, base_url, rng)
    print(f"[Fetch] Selected categories {category_ids}")

    # Fan out; any single failure fails the whole board
    categories = await asyncio.gather(
        *(fetch_category(session, base_url, cid) for cid in category_ids))
    return Board(categories=list(categories))


async def fetch_board(base_url=None, session=None, rng=None):
    """
    Fetch a complete, fresh Board.

    Args:
        base_url: API base address (defaults to server_settings.API_BASE_URL)
        session: optional aiohttp.ClientSession to reuse; one is opened
                 and closed here when omitted
        rng: optional random.Random for category sampling

    Raises:
        NetworkError: service unreachable or non-success response
        DecodeError: response body not in the expected shape
    """
    base_url = (base_url or server_settings.API_BASE_URL).rstrip("/")

    if session is not None:
        return await _fetch_board_with(session, base_url, rng)

    async with aiohttp.ClientSession() as own_session:
        return await _fetch_board_with(own_session, base_url, rng)
