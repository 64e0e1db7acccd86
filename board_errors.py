class JeopardyError(Exception):
    """Base exception for the jeopardy board server."""
    pass


class NetworkError(JeopardyError):
    """Raised when the clue API is unreachable or answers with a non-success status."""
    pass


class DecodeError(JeopardyError):
    """Raised when a clue API response body is not in the expected shape."""
    pass


class NotEnoughCategoriesError(DecodeError):
    """Raised when the category pool is too small to fill a board."""
    pass


class GameNotFoundError(JeopardyError):
    """Raised when a game token refers to no known game."""
    pass


class InvalidGameTokenError(JeopardyError):
    """Raised when a game token is malformed or its signature does not match."""
    pass


class BoardNotReadyError(JeopardyError):
    """Raised when a game has no board to act on (not started yet, or loading)."""
    pass
