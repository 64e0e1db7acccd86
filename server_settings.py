"""
Server Settings
===============

Reads configuration from the environment, loading a .env file from the
project directory first when one exists.

Variables:
    JSERVICE_API_URL  - base address of the clue API
    REQUEST_TIMEOUT   - per-request timeout in seconds
    SESSION_SECRET    - key used to sign game tokens
    PORT              - port for the development server
"""

import os

from dotenv import load_dotenv

_script_dir = os.path.dirname(os.path.abspath(__file__))


def _find_dotenv():
    """Find .env file: project dir, then current working dir."""
    for candidate in (os.path.join(_script_dir, '.env'), os.path.join(os.getcwd(), '.env')):
        if os.path.isfile(candidate):
            return candidate
    return None


_env_path = _find_dotenv()
if _env_path:
    load_dotenv(_env_path)
    print(f"Loaded .env from {_env_path}")

DEFAULT_API_BASE_URL = "https://jservice.io/api"

API_BASE_URL = os.environ.get("JSERVICE_API_URL", DEFAULT_API_BASE_URL).rstrip("/")
REQUEST_TIMEOUT = float(os.environ.get("REQUEST_TIMEOUT", "10"))
SESSION_SECRET = os.environ.get("SESSION_SECRET", "")
PORT = int(os.environ.get("PORT", "8080"))

# In-memory game registry bounds
MAX_GAMES = int(os.environ.get("MAX_GAMES", "1000"))
GAME_TTL_SECONDS = float(os.environ.get("GAME_TTL_SECONDS", "3600"))
