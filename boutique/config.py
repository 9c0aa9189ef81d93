import os
from pathlib import Path

from .constants import DATA_DIR, DB_FILE_NAME

BASE_DIR = Path(__file__).resolve().parent
DATA_PATH = Path(os.environ.get("BOUTIQUE_DATA_DIR") or (BASE_DIR.parent / DATA_DIR))
DB_PATH = DATA_PATH / os.environ.get("BOUTIQUE_DB_FILE", DB_FILE_NAME)


def gemini_api_key() -> str:
    """Key for the insight service; empty string when not configured."""
    return os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY") or ""
