"""
modules/sales/ledger.py

Checkout and installment recording.

Each public mutation runs in one storage transaction:
  create_order        -> stock decrement + order insert + debt reconcile
  record_installment  -> installment append + paid/status update + debt reconcile
A failure at any step (validation, missing record, shortage, storage)
leaves every collection exactly as it was.
"""
from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Iterable, Optional, Sequence, Tuple

from ...constants import (
    NOTE_FINAL_SETTLEMENT,
    NOTE_INITIAL_PAYMENT,
    NOTE_INSTALLMENT,
    PAYMENT_KIND_FULL,
    PAYMENT_KIND_INSTALLMENT,
)
from ...database.repositories.customers_repo import CustomersRepo
from ...database.repositories.orders_repo import Installment, Order, OrderItem, OrdersRepo
from ...database.repositories.products_repo import ProductsRepo
from ...database.storage import CollectionStore
from ...errors import InsufficientStockError, ValidationError
from ...utils.helpers import new_id, now_str, parse_when
from ...utils.validators import (
    is_non_negative_number,
    is_positive_int,
    is_strictly_positive_number,
)
from ..payments.payment_utilities import status as order_status
from ..payments.payment_utilities.calculations import (
    order_total,
    remaining_balance,
    sum_installments,
)
from ..payments.payment_utilities.reconciliation import DebtReconciler

__all__ = ["OrderLedger", "CartLine"]

_log = logging.getLogger(__name__)

# (product_id, quantity)
CartLine = Tuple[str, int]

_NOTE_BY_KIND = {
    PAYMENT_KIND_INSTALLMENT: NOTE_INSTALLMENT,
    PAYMENT_KIND_FULL: NOTE_FINAL_SETTLEMENT,
}


class OrderLedger:
    """
    Orders are created once at checkout and afterwards only grow
    installments. Items and total_amount never change after creation.
    """

    def __init__(self, store: CollectionStore, reconciler: DebtReconciler | None = None):
        self.store = store
        self.products = ProductsRepo(store)
        self.customers = CustomersRepo(store)
        self.orders = OrdersRepo(store)
        self.reconciler = reconciler or DebtReconciler(store)

    # ------------------------------------------------------------------ #
    # Validation helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _collapse_cart(items: Iterable[CartLine]) -> "OrderedDict[str, int]":
        """
        Validate cart lines and merge repeated products, keeping first-seen order.
        """
        merged: "OrderedDict[str, int]" = OrderedDict()
        for line in items:
            try:
                product_id, quantity = line
            except (TypeError, ValueError) as e:
                raise ValidationError("Each cart line must be (product_id, quantity).") from e
            if isinstance(quantity, str) or not is_positive_int(quantity):
                raise ValidationError(
                    f"Quantity for product '{product_id}' must be a whole number above zero."
                )
            merged[str(product_id)] = merged.get(str(product_id), 0) + int(quantity)
        if not merged:
            raise ValidationError("Cart is empty.")
        return merged

    @staticmethod
    def _check_date(date: Optional[str]) -> str:
        if date is None:
            return now_str()
        try:
            parse_when(date)
        except ValueError as e:
            raise ValidationError(f"Invalid date '{date}'.") from e
        return date

    # ------------------------------------------------------------------ #
    # Checkout
    # ------------------------------------------------------------------ #

    def create_order(
        self,
        customer_id: str,
        items: Sequence[CartLine],
        initial_payment: float = 0,
        *,
        date: Optional[str] = None,
    ) -> Order:
        """
        Price the cart at current sell prices, take the stock, store the order
        and reconcile the customer's debt.

        Raises:
            ValidationError: empty cart, bad quantity, negative payment, bad date.
            NotFoundError: unknown customer or product.
            InsufficientStockError: a product has fewer units than requested.
        """
        cart = self._collapse_cart(items)
        if initial_payment is None:
            initial_payment = 0
        if not is_non_negative_number(initial_payment):
            raise ValidationError("Initial payment cannot be negative.")
        initial_payment = float(initial_payment)
        when = self._check_date(date)

        with self.store.transaction():
            customer = self.customers.require(customer_id)

            lines: list[OrderItem] = []
            for product_id, qty in cart.items():
                product = self.products.require(product_id)
                if qty > product.stock:
                    raise InsufficientStockError(product.id, product.name, qty, product.stock)
                lines.append(
                    OrderItem(
                        product_id=product.id,
                        product_name=product.name,
                        quantity=qty,
                        price_at_sale=product.sell_price,
                    )
                )

            total = order_total((i.quantity, i.price_at_sale) for i in lines)
            installments: tuple[Installment, ...] = ()
            if initial_payment > 0:
                installments = (
                    Installment(
                        id=new_id(),
                        amount=initial_payment,
                        date=when,
                        note=NOTE_INITIAL_PAYMENT,
                    ),
                )
            paid = sum_installments(i.amount for i in installments)

            order = Order(
                id=new_id(),
                customer_id=customer.id,
                customer_name=customer.name,
                date=when,
                items=tuple(lines),
                total_amount=total,
                paid_amount=paid,
                status=order_status.status_from_paid(total, paid),
                installments=installments,
            )

            self.products.decrement_stock(dict(cart))
            self.orders.add(order)
            self.reconciler.recalc_debt(customer.id)

        _log.info(
            "order %s created for %s: total=%s paid=%s status=%s",
            order.id, customer.id, order.total_amount, order.paid_amount, order.status,
        )
        return order

    # ------------------------------------------------------------------ #
    # Payments
    # ------------------------------------------------------------------ #

    def record_installment(
        self,
        order_id: str,
        amount: Optional[float] = None,
        kind: str = PAYMENT_KIND_INSTALLMENT,
        *,
        date: Optional[str] = None,
    ) -> Order:
        """
        Append one payment to an order and reconcile the customer's debt.

        kind='installment' needs an explicit amount. kind='full' settles the
        remaining balance when `amount` is omitted; a supplied amount is
        applied as given. Overpayment is not capped.

        Raises:
            ValidationError: unknown kind, amount <= 0, nothing left to settle.
            NotFoundError: unknown order.
        """
        if kind not in _NOTE_BY_KIND:
            raise ValidationError(
                f"Payment kind must be one of: {', '.join(_NOTE_BY_KIND)}"
            )
        if amount is None and kind != PAYMENT_KIND_FULL:
            raise ValidationError("Amount is required.")
        if amount is not None and not is_strictly_positive_number(amount):
            raise ValidationError("Payment amount must be greater than zero.")
        when = self._check_date(date)

        with self.store.transaction():
            order = self.orders.require(order_id)
            if amount is None:
                amount = remaining_balance(order.total_amount, order.paid_amount)
                if amount <= 0:
                    raise ValidationError("Order has no remaining balance to settle.")

            installment = Installment(
                id=new_id(),
                amount=float(amount),
                date=when,
                note=_NOTE_BY_KIND[kind],
            )
            installments = order.installments + (installment,)
            paid = sum_installments(i.amount for i in installments)
            updated = Order(
                id=order.id,
                customer_id=order.customer_id,
                customer_name=order.customer_name,
                date=order.date,
                items=order.items,
                total_amount=order.total_amount,
                paid_amount=paid,
                status=order_status.status_from_paid(order.total_amount, paid),
                installments=installments,
            )
            self.orders.replace(updated)
            self.reconciler.recalc_debt(order.customer_id)

        _log.info(
            "installment %s on order %s: amount=%s paid=%s status=%s",
            installment.id, updated.id, installment.amount, updated.paid_amount, updated.status,
        )
        return updated

    def settle(self, order_id: str, *, date: Optional[str] = None) -> Order:
        """Pay off whatever is left on the order."""
        return self.record_installment(order_id, None, PAYMENT_KIND_FULL, date=date)

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def get_order(self, order_id: str) -> Order:
        return self.orders.require(order_id)

    def remaining_balance(self, order_id: str) -> float:
        o = self.orders.require(order_id)
        return remaining_balance(o.total_amount, o.paid_amount)

    def list_orders(
        self,
        status: Optional[str] = None,
        *,
        newest_first: bool = True,
    ) -> list[Order]:
        """
        Orders filtered by status (None/'all' for every order), sorted by date.
        Status accepts the canonical key or its label ('Partially Paid').
        """
        rows = self.orders.list_orders()
        if status is not None and str(status).strip().lower() != "all":
            try:
                wanted = order_status.ensure_valid(status)
            except ValueError as e:
                raise ValidationError(str(e)) from e
            rows = [o for o in rows if o.status == wanted]
        return sorted(rows, key=lambda o: parse_when(o.date), reverse=newest_first)

    def customer_history(self, customer_id: str) -> Tuple[list[Order], float]:
        """(orders newest first, total value of those orders) for one customer."""
        self.customers.require(customer_id)
        rows = sorted(
            self.orders.list_by_customer(customer_id),
            key=lambda o: parse_when(o.date),
            reverse=True,
        )
        return rows, sum(o.total_amount for o in rows)
