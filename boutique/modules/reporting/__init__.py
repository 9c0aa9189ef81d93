# boutique/modules/reporting/__init__.py

from .financial_reports import FinancialReports, FinancialSummary
from .installment_reports import InstallmentReports, PaymentEvent

__all__ = [
    "FinancialReports",
    "FinancialSummary",
    "InstallmentReports",
    "PaymentEvent",
]
