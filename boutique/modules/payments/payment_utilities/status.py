from __future__ import annotations
from typing import Iterable, Optional

# ---------- Canonical set & order ----------
PENDING = "pending"
PARTIAL = "partial"
PAID = "paid"

VALID_STATES: tuple[str, ...] = (PENDING, PARTIAL, PAID)
STATE_ORDER: dict[str, int] = {s: i for i, s in enumerate(VALID_STATES)}  # pending=0,...,paid=2

# ---------- Human labels ----------
LABELS = {
    PENDING: "Pending",
    PARTIAL: "Partially Paid",
    PAID:    "Fully Paid",
}

# ---------- Descriptions (UI copy / tooltips) ----------
DESCRIPTIONS = {
    PENDING: "Nothing received yet.",
    PARTIAL: "Some installments received; a balance is still owed.",
    PAID:    "Received in full (or more).",
}

# Style tokens the UI can map to colors/icons
STYLES = {
    PENDING: {"badge": "danger",  "fg": "#991B1B", "bg": "#FEE2E2"},
    PARTIAL: {"badge": "warning", "fg": "#92400E", "bg": "#FEF3C7"},
    PAID:    {"badge": "success", "fg": "#065F46", "bg": "#D1FAE5"},
}

# ---------- API ----------

def status_from_paid(total: float, paid: float) -> str:
    """
    Order status as a pure function of (paid, total):
      - 'paid'    if paid >= total
      - 'partial' if 0 < paid < total
      - 'pending' if paid == 0

    No rounding is performed. A zero-total order counts as paid.
    """
    if paid >= total:
        return PAID
    if paid > 0:
        return PARTIAL
    return PENDING


def normalize(state: Optional[str]) -> Optional[str]:
    """Lowercase & strip; accepts the human labels too. None if empty."""
    if state is None:
        return None
    s = str(state).strip().lower()
    for key, text in LABELS.items():
        if s == text.lower():
            return key
    return s or None


def is_valid(state: Optional[str]) -> bool:
    """Return True iff state is one of the canonical values."""
    s = normalize(state)
    return s in VALID_STATES if s is not None else False


def ensure_valid(state: str) -> str:
    """
    Return the normalized state if valid; raise ValueError if not.
    """
    s = normalize(state)
    if s not in VALID_STATES:
        raise ValueError("status must be one of: pending, partial, paid")
    return s  # type: ignore[return-value]


def label(state: str) -> str:
    """Human label ('Partially Paid'). If unknown, returns the original string title-cased."""
    s = normalize(state)
    if s in LABELS:
        return LABELS[s]  # type: ignore[index]
    return (state or "").strip().title()


def description(state: str) -> str:
    """Short human description for tooltips; empty string if unknown."""
    s = normalize(state)
    return DESCRIPTIONS.get(s, "")


def style_tokens(state: str) -> dict:
    """
    Return a small style dict: e.g., {'badge': 'success', 'fg': '#065F46', 'bg': '#D1FAE5'}.
    Unknown states fall back to the pending style.
    """
    s = normalize(state)
    return STYLES.get(s, STYLES[PENDING])


def sort_key(state: str) -> int:
    """Stable sort key using STATE_ORDER; unknown states sort after known ones."""
    s = normalize(state)
    return STATE_ORDER.get(s, 999)


def sort_states(states: Iterable[str]) -> list[str]:
    """Return a new list sorted by canonical order."""
    return sorted(states, key=sort_key)
