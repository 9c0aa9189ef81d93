# database/repositories/__init__.py
"""
Repository layer public API.

Usage:
    from boutique.database.repositories import (
        # Catalog
        ProductsRepo, Product,
        # Customers
        CustomersRepo, Customer,
        # Orders
        OrdersRepo, Order, OrderItem, Installment,
        # Expenses
        ExpensesRepo, Expense,
    )
"""

# ---------------- Catalog ------------------
from .products_repo import (
    ProductsRepo,
    Product,
)

# ---------------- Customers ----------------
from .customers_repo import (
    CustomersRepo,
    Customer,
)

# ---------------- Orders -------------------
from .orders_repo import (
    OrdersRepo,
    Order,
    OrderItem,
    Installment,
)

# ---------------- Expenses -----------------
from .expenses_repo import (
    ExpensesRepo,
    Expense,
)

__all__ = [
    "ProductsRepo", "Product",
    "CustomersRepo", "Customer",
    "OrdersRepo", "Order", "OrderItem", "Installment",
    "ExpensesRepo", "Expense",
]
