# utils/validators.py
import math


def non_empty(text: str) -> bool:
    """
    True if `text` is not None/empty after stripping whitespace.
    """
    return bool(text and str(text).strip())


# ---- Numeric parsing & validators ----

def try_parse_float(x):
    """
    Best-effort parse to float.

    Returns:
        (ok: bool, value: float|None)

    ok == False means parsing failed (or gave inf/nan) and value is None.
    """
    if isinstance(x, bool):
        return False, None
    try:
        val = float(x)
    except (TypeError, ValueError):
        return False, None
    if not math.isfinite(val):
        return False, None
    return True, val


def parse_float(x) -> float:
    """
    Strict parse to float; raises ValueError with a clear message on failure.
    """
    ok, val = try_parse_float(x)
    if not ok:
        raise ValueError(f"Could not parse '{x}' as a number.")
    return val  # type: ignore[return-value]


def is_non_negative_number(x) -> bool:
    """
    True iff x parses to a float and value >= 0.
    """
    ok, val = try_parse_float(x)
    return bool(ok and val is not None and val >= 0)


def is_strictly_positive_number(x) -> bool:
    """
    True iff x parses to a float and value > 0.
    """
    ok, val = try_parse_float(x)
    return bool(ok and val is not None and val > 0)


def is_positive_int(x) -> bool:
    """True iff x is a whole number > 0 (3 and 3.0 pass, 2.5 and True do not)."""
    ok, val = try_parse_float(x)
    return bool(ok and val is not None and val > 0 and float(val).is_integer())


def is_non_negative_int(x) -> bool:
    """True iff x is a whole number >= 0."""
    ok, val = try_parse_float(x)
    return bool(ok and val is not None and val >= 0 and float(val).is_integer())
