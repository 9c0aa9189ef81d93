"""
Boutique ledger: inventory, customers, orders with installment payments,
expenses and the derived money figures for a single shop.
"""

__version__ = "0.1.0"
