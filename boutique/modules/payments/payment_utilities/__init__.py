# boutique/modules/payments/payment_utilities/__init__.py

"""
Payment helpers shared by the ledger and the reports: status rules,
balance arithmetic and customer debt reconciliation.
"""

from .reconciliation import DebtReconciler

__all__ = ["DebtReconciler"]
