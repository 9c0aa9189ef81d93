# database/__init__.py
from __future__ import annotations

from pathlib import Path

from ..config import DB_PATH
from .seeders.default_data import seed as seed_default_data
from .storage import CollectionStore, open_store


def get_store(db_path: Path | str | None = None, *, seed: bool = True) -> CollectionStore:
    """
    Returns a CollectionStore on `db_path` (default: config.DB_PATH) with:
      - schema applied (idempotent)
      - demo data seeded once, unless seed=False
    """
    store = open_store(db_path if db_path is not None else DB_PATH)
    if seed:
        seed_default_data(store)
    return store


__all__ = [
    "CollectionStore",
    "get_store",
    "open_store",
    "seed_default_data",
]
