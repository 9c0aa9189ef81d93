# boutique/modules/sales/__init__.py

"""
Sales module package exports.

Always available:
- OrderLedger

The Qt models (OrdersTableModel, OrderItemsModel, InstallmentsModel) are
imported from `.model` directly by the widgets and tests that need them.
"""

from .ledger import OrderLedger

__all__ = [
    "OrderLedger",
]
