"""
In-memory stand-in for an aiohttp.ClientSession talking to the clue API.

Routes are keyed by (path suffix, param value):
    ('/categories', 100)  -> /categories?count=100
    ('/category', 7)      -> /category?id=7
Values are (status, body) where body is JSON-serialisable or a raw str,
or an exception instance to raise on request.
"""

import json


class FakeResponse:
    def __init__(self, status, body):
        self.status = status
        self._body = body

    async def text(self):
        if isinstance(self._body, str):
            return self._body
        return json.dumps(self._body)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    def __init__(self, routes):
        self.routes = routes
        self.requests = []

    def get(self, url, params=None, timeout=None):
        params = params or {}
        key_value = params.get("count", params.get("id"))
        path = "/" + url.rsplit("/", 1)[1]
        self.requests.append((path, key_value))

        result = self.routes.get((path, key_value))
        if result is None:
            return FakeResponse(404, {"error": "not found"})
        if isinstance(result, Exception):
            raise result
        status, body = result
        return FakeResponse(status, body)


def make_category(title, num_clues=5):
    """Build a /category response body with extra fields the board ignores."""
    return {
        "title": title,
        "clues_count": num_clues,
        "clues": [
            {
                "id": i,
                "question": f"{title} question {i}",
                "answer": f"{title} answer {i}",
                "value": 200 * (i + 1),
                "airdate": "2010-01-01T00:00:00.000Z",
            }
            for i in range(num_clues)
        ],
    }


def make_routes(num_pool=10, num_clues=5):
    """Routes for a pool of category ids 1..num_pool, each with num_clues clues."""
    routes = {
        ("/categories", 100): (200, [{"id": i, "title": f"cat{i}", "clues_count": num_clues}
                                     for i in range(1, num_pool + 1)]),
    }
    for i in range(1, num_pool + 1):
        routes[("/category", i)] = (200, make_category(f"cat{i}", num_clues))
    return routes
