from __future__ import annotations

from boutique.constants import INSIGHT_MISSING_KEY
from boutique.modules.dashboard.insights import InsightClient
from boutique.session import AppSession


def test_session_lifecycle(tmp_path):
    path = tmp_path / "life.db"
    with AppSession.open(path, seed=False) as app:
        c = app.customers.create("Grace Kelly", "077 000")
        p = app.products.create("Silk Scarf", "Accessories", 10000, 30000, 4)
        app.ledger.create_order(c.id, [(p.id, 1)], 10000)

    with AppSession.open(path) as app:
        # an already-used store is not re-seeded
        assert [x.name for x in app.products.list_products()] == ["Silk Scarf"]
        assert app.customers.list_customers()[0].current_debt == 20000


def test_close_is_idempotent(tmp_path):
    app = AppSession.open(tmp_path / "twice.db", seed=False)
    app.close()
    app.close()


def test_business_insights_without_key(app):
    app._insights = InsightClient(api_key="")
    assert app.business_insights() == INSIGHT_MISSING_KEY
