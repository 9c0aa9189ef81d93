# boutique/modules/product/__init__.py

"""
Product module package exports.

- ProductsTableModel: catalogue rows, flags low stock through LOW_STOCK_ROLE.
- ProductFilterProxy: text search over id, name, category and description.
"""

from .model import ProductFilterProxy, ProductsTableModel

__all__ = [
    "ProductsTableModel",
    "ProductFilterProxy",
]
