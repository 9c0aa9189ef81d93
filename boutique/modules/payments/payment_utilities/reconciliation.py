"""
payment_utilities/reconciliation.py

Keeps Customer.current_debt in step with the customer's orders.

DebtReconciler is the only writer of current_debt after a customer is
created. The order ledger calls `recalc_debt` after every checkout and
every installment, inside the same storage transaction as the order write.
"""
from __future__ import annotations

import logging

from ....database.repositories.customers_repo import CustomersRepo
from ....database.repositories.orders_repo import OrdersRepo
from ....database.storage import CollectionStore
from .calculations import customer_debt

__all__ = ["DebtReconciler"]

_log = logging.getLogger(__name__)


class DebtReconciler:
    def __init__(self, store: CollectionStore):
        self.store = store
        self.customers = CustomersRepo(store)
        self.orders = OrdersRepo(store)

    def compute_debt(self, customer_id: str) -> float:
        """Debt implied by the stored orders; writes nothing."""
        return customer_debt(
            (o.total_amount, o.paid_amount)
            for o in self.orders.list_by_customer(customer_id)
        )

    def recalc_debt(self, customer_id: str) -> float:
        """
        Recompute and store current_debt for one customer; returns the new value.

        Per-order balances are summed without clamping, so an overpaid order
        offsets debt on the customer's other orders.
        Raises NotFoundError for an unknown customer (nothing written).
        """
        with self.store.transaction():
            self.customers.require(customer_id)
            debt = self.compute_debt(customer_id)
            self.customers.set_current_debt(customer_id, debt)
        _log.debug("customer %s debt reconciled to %s", customer_id, debt)
        return debt

    def recalc_all(self) -> dict[str, float]:
        """Reconcile every customer in one transaction; returns {customer_id: debt}."""
        result: dict[str, float] = {}
        with self.store.transaction():
            for c in self.customers.list_customers():
                result[c.id] = self.recalc_debt(c.id)
        return result

    def drift(self) -> dict[str, tuple[float, float]]:
        """
        Customers whose stored debt disagrees with their orders:
        {customer_id: (stored, expected)}. Read-only.
        """
        out: dict[str, tuple[float, float]] = {}
        for c in self.customers.list_customers():
            expected = self.compute_debt(c.id)
            if c.current_debt != expected:
                out[c.id] = (c.current_debt, expected)
        return out
