# boutique/modules/expense/__init__.py

from .model import ExpensesTableModel

__all__ = [
    "ExpensesTableModel",
]
