# utils/helpers.py
import logging
import uuid
from datetime import date, datetime
from typing import Union, Optional

NumberLike = Union[float, int, str]

_log = logging.getLogger(__name__)


def today_str() -> str:
    """Return today's date as ISO string (YYYY-MM-DD)."""
    return date.today().isoformat()


def now_str() -> str:
    """Return the current local timestamp as ISO string (seconds precision)."""
    return datetime.now().isoformat(timespec="seconds")


def new_id() -> str:
    """Opaque, non-sequential identifier for a new record."""
    return uuid.uuid4().hex


def parse_when(value: str) -> datetime:
    """
    Parse a stored date/timestamp string.

    Accepts 'YYYY-MM-DD' as well as full ISO timestamps (a trailing 'Z'
    is tolerated for records written by other tools).
    """
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1]
    return datetime.fromisoformat(text)


def fmt_money(
    v: NumberLike,
    places: int = 2,
    *,
    strict: bool = False,
    sentinel: Optional[str] = None,
) -> str:
    """
    Format a number as money with thousands separators and a fixed number of decimals.

    Behavior on parse failure:
      - By default (strict=False, sentinel=None), returns str(v).
      - If `sentinel` is provided (e.g., "N/A"), returns that sentinel instead.
      - If `strict=True`, raises ValueError on parse failures.
    """
    try:
        x = float(v)
    except (TypeError, ValueError) as e:
        _log.debug("fmt_money: failed to parse %r as float: %s", v, e)
        if strict:
            raise ValueError(f"Could not parse {v!r} as a number.") from e
        return str(sentinel) if sentinel is not None else str(v)
    return f"{x:,.{places}f}"
