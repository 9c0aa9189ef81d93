"""
payment_utilities/calculations.py

Pure money helpers shared by the order ledger, the debt reconciler and the
reports.

Do not import repos or open storage here.
Only compute numbers; formatting belongs in the UI.
"""
from __future__ import annotations

from typing import Iterable, Tuple

from .status import status_from_paid

__all__ = [
    "clamp_non_negative",
    "order_total",
    "sum_installments",
    "remaining_balance",
    "project_after_payment",
    "customer_debt",
]


# -----------------------------
# Core utilities
# -----------------------------

def clamp_non_negative(x: float) -> float:
    """Return x if x > 0, else 0.0."""
    return x if x > 0.0 else 0.0


# -----------------------------
# Order helpers
# -----------------------------

def order_total(lines: Iterable[Tuple[int, float]]) -> float:
    """Sum of quantity x unit price over (quantity, unit_price) pairs."""
    return sum(qty * price for qty, price in lines)


def sum_installments(amounts: Iterable[float]) -> float:
    """paid_amount is always exactly this sum."""
    return sum(amounts)


def remaining_balance(total_amount: float, paid_amount: float) -> float:
    """
    total - paid, NOT clamped: an overpaid order yields a negative balance.
    Callers that want "amount still due" should wrap it in clamp_non_negative.
    """
    return total_amount - paid_amount


def project_after_payment(
    *,
    total_amount: float,
    current_paid_amount: float,
    new_payment_amount: float,
) -> Tuple[float, str]:
    """
    Returns (projected_paid_amount, projected_status) for a payment preview.
    Overpayment is not capped.
    """
    projected_paid = current_paid_amount + new_payment_amount
    return projected_paid, status_from_paid(total_amount, projected_paid)


# -----------------------------
# Customer helpers
# -----------------------------

def customer_debt(balances: Iterable[Tuple[float, float]]) -> float:
    """
    Sum of (total - paid) over (total_amount, paid_amount) pairs.

    Each order's balance is added as-is, so an overpaid order reduces the
    debt carried by the customer's other orders.
    """
    return sum(remaining_balance(total, paid) for total, paid in balances)
