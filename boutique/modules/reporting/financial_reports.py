# boutique/modules/reporting/financial_reports.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

from ...constants import LOW_STOCK_THRESHOLD
from ...database.repositories.customers_repo import Customer, CustomersRepo
from ...database.repositories.expenses_repo import Expense, ExpensesRepo
from ...database.repositories.orders_repo import Order, OrdersRepo
from ...database.repositories.products_repo import Product, ProductsRepo
from ...database.storage import CollectionStore


# ------------------------------ Pure figures --------------------------------
# Every function below only reads its arguments; nothing is cached.


def total_sales(orders: Iterable[Order]) -> float:
    return sum(o.total_amount for o in orders)


def total_received(orders: Iterable[Order]) -> float:
    return sum(o.paid_amount for o in orders)


def total_pending(orders: Sequence[Order]) -> float:
    return total_sales(orders) - total_received(orders)


def cost_of_goods(order: Order, products_by_id: Dict[str, Product]) -> float:
    """
    Cost of an order at each product's CURRENT buy price.
    Lines whose product has since been deleted cost nothing.
    """
    cost = 0.0
    for item in order.items:
        p = products_by_id.get(item.product_id)
        cost += (p.buy_price if p is not None else 0.0) * item.quantity
    return cost


def gross_profit(orders: Iterable[Order], products: Iterable[Product]) -> float:
    by_id = {p.id: p for p in products}
    return sum(o.total_amount - cost_of_goods(o, by_id) for o in orders)


def total_expenses(expenses: Iterable[Expense]) -> float:
    return sum(e.amount for e in expenses)


def net_profit(
    orders: Sequence[Order],
    products: Sequence[Product],
    expenses: Sequence[Expense],
) -> float:
    return gross_profit(orders, products) - total_expenses(expenses)


def low_stock(products: Iterable[Product], threshold: int = LOW_STOCK_THRESHOLD) -> List[Product]:
    return [p for p in products if p.stock <= threshold]


def category_distribution(products: Iterable[Product]) -> Dict[str, int]:
    """Product count per category, categories in first-seen order."""
    counts: Dict[str, int] = {}
    for p in products:
        counts[p.category] = counts.get(p.category, 0) + 1
    return counts


def customers_with_debt(customers: Iterable[Customer]) -> List[Customer]:
    """Customers owing money, largest debt first."""
    owing = [c for c in customers if c.current_debt > 0]
    return sorted(owing, key=lambda c: c.current_debt, reverse=True)


def total_outstanding_debt(customers: Iterable[Customer]) -> float:
    return sum(c.current_debt for c in customers)


# ------------------------------ Snapshot ------------------------------------


@dataclass(frozen=True)
class FinancialSummary:
    total_sales: float
    total_received: float
    total_pending: float
    gross_profit: float
    total_expenses: float
    net_profit: float
    low_stock: List[Product] = field(default_factory=list)
    category_distribution: Dict[str, int] = field(default_factory=dict)
    customers_owing: int = 0

    @property
    def low_stock_count(self) -> int:
        return len(self.low_stock)


def summarize(
    orders: Sequence[Order],
    products: Sequence[Product],
    customers: Sequence[Customer],
    expenses: Sequence[Expense],
) -> FinancialSummary:
    gp = gross_profit(orders, products)
    spent = total_expenses(expenses)
    return FinancialSummary(
        total_sales=total_sales(orders),
        total_received=total_received(orders),
        total_pending=total_pending(orders),
        gross_profit=gp,
        total_expenses=spent,
        net_profit=gp - spent,
        low_stock=low_stock(products),
        category_distribution=category_distribution(products),
        customers_owing=len(customers_with_debt(customers)),
    )


# ------------------------------ Store-backed --------------------------------


class FinancialReports:
    """
    Dashboard figures read straight from the store.

    - sales / received / pending
    - gross and net profit
    - low stock and category mix
    """

    def __init__(self, store: CollectionStore) -> None:
        self.store = store
        self.products = ProductsRepo(store)
        self.customers = CustomersRepo(store)
        self.orders = OrdersRepo(store)
        self.expenses = ExpensesRepo(store)

    def summary(self) -> FinancialSummary:
        return summarize(
            self.orders.list_orders(),
            self.products.list_products(),
            self.customers.list_customers(),
            self.expenses.list_expenses(),
        )

    def expense_totals_by_category(self) -> Dict[str, float]:
        return self.expenses.totals_by_category()

    def customers_with_debt(self) -> List[Customer]:
        return customers_with_debt(self.customers.list_customers())

    def total_outstanding_debt(self) -> float:
        return total_outstanding_debt(self.customers.list_customers())
