"""
Application session: the one object that owns the open store and hands out
the services built on it. Nothing in the package reaches for storage
through module-level globals; callers open a session and pass it around.

    with AppSession.open("data/boutique.db") as app:
        order = app.ledger.create_order(customer_id, [(product_id, 1)])
        print(app.reports.summary().total_pending)
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from .database import get_store
from .database.repositories import CustomersRepo, ExpensesRepo, OrdersRepo, ProductsRepo
from .database.storage import CollectionStore
from .modules.customer.history import CustomerHistoryService
from .modules.dashboard.insights import InsightClient
from .modules.payments.payment_utilities.reconciliation import DebtReconciler
from .modules.reporting.financial_reports import FinancialReports
from .modules.reporting.installment_reports import InstallmentReports
from .modules.sales.ledger import OrderLedger
from .utils.loggers import get_logger

_log = get_logger()


class AppSession:
    def __init__(self, store: CollectionStore, insights: Optional[InsightClient] = None):
        self.store = store
        self.products = ProductsRepo(store)
        self.customers = CustomersRepo(store)
        self.orders = OrdersRepo(store)
        self.expenses = ExpensesRepo(store)
        self.reconciler = DebtReconciler(store)
        self.ledger = OrderLedger(store, self.reconciler)
        self.reports = FinancialReports(store)
        self.installments = InstallmentReports(store)
        self.history = CustomerHistoryService(store)
        self._insights = insights
        self._closed = False

    @classmethod
    def open(cls, db_path: Path | str | None = None, *, seed: bool = True, **kwargs) -> "AppSession":
        store = get_store(db_path, seed=seed)
        _log.info("session opened on %s", db_path if db_path is not None else "default store")
        return cls(store, **kwargs)

    @property
    def insights(self) -> InsightClient:
        if self._insights is None:
            self._insights = InsightClient()
        return self._insights

    def business_insights(self) -> str:
        """Never raises; see InsightClient."""
        return self.insights.analyze_business(
            self.orders.list_orders(),
            self.products.list_products(),
            self.customers.list_customers(),
        )

    def close(self) -> None:
        if not self._closed:
            self.store.close()
            self._closed = True
            _log.info("session closed")

    def __enter__(self) -> "AppSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
