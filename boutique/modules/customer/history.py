from __future__ import annotations

from typing import Any, Dict, List

from ...database.repositories.customers_repo import CustomersRepo
from ...database.repositories.orders_repo import OrdersRepo
from ...database.storage import CollectionStore
from ...utils.helpers import parse_when
from ..payments.payment_utilities.calculations import clamp_non_negative, remaining_balance


class CustomerHistoryService:
    """
    Presenter/service for assembling a customer's order history for the UI.

    Returns structured dictionaries to keep the UI layer simple.
    """

    def __init__(self, store: CollectionStore):
        self.customers = CustomersRepo(store)
        self.orders = OrdersRepo(store)

    # --------------------------------------------------------------------- #
    # Public API
    # --------------------------------------------------------------------- #

    def orders_for(self, customer_id: str) -> List[Dict[str, Any]]:
        """
        The customer's orders, newest first, each with its line items,
        installments and remaining_due (total - paid, clamped at >= 0).
        """
        self.customers.require(customer_id)
        orders = sorted(
            self.orders.list_by_customer(customer_id),
            key=lambda o: parse_when(o.date),
            reverse=True,
        )
        out: List[Dict[str, Any]] = []
        for o in orders:
            row = o.to_record()
            row["remaining_due"] = clamp_non_negative(
                remaining_balance(o.total_amount, o.paid_amount)
            )
            out.append(row)
        return out

    def overview(self, customer_id: str) -> Dict[str, Any]:
        """
        Header figures for the history panel:
          customer, order_count, total_orders_value, total_paid, current_debt, orders
        """
        customer = self.customers.require(customer_id)
        orders = self.orders_for(customer_id)
        return {
            "customer": customer.to_record(),
            "order_count": len(orders),
            "total_orders_value": sum(o["total_amount"] for o in orders),
            "total_paid": sum(o["paid_amount"] for o in orders),
            "current_debt": customer.current_debt,
            "orders": orders,
        }
