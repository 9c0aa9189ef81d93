from __future__ import annotations

from datetime import date

from boutique.modules.reporting import financial_reports as fr


def _trade(app, dress, heels, sophia, audrey):
    # dress: buy 85000 sell 200000; heels: buy 65000 sell 150000
    o1 = app.ledger.create_order(sophia.id, [(dress.id, 1)], 115000, date="2024-05-02T09:00:00")
    o2 = app.ledger.create_order(audrey.id, [(heels.id, 2)], date="2024-05-10T15:30:00")
    app.ledger.record_installment(o2.id, 100000, date="2024-05-20T11:00:00")
    app.expenses.create("Rent", 150000, "2024-05-01")
    app.expenses.create("Utilities", 25000, "2024-05-03")
    return o1, o2


def test_financial_summary(app, dress, heels, sophia, audrey):
    _trade(app, dress, heels, sophia, audrey)
    s = app.reports.summary()

    assert s.total_sales == 500000
    assert s.total_received == 215000
    assert s.total_pending == 285000
    assert s.gross_profit == (200000 - 85000) + (300000 - 130000)
    assert s.total_expenses == 175000
    assert s.net_profit == 285000 - 175000
    assert [p.id for p in s.low_stock] == [heels.id]
    assert s.low_stock_count == 1
    assert s.category_distribution == {"Clothes": 1, "Shoes": 1}
    assert s.customers_owing == 2


def test_cost_uses_current_buy_price_and_skips_deleted(app, dress, heels, sophia, audrey):
    _trade(app, dress, heels, sophia, audrey)
    app.products.update(dress.id, dress.name, dress.category, 100000, 200000, 4)
    app.products.delete(heels.id)
    # dress cost now 100000; heels lines cost nothing
    assert app.reports.summary().gross_profit == (200000 - 100000) + 300000


def test_reports_are_read_only(app, dress, heels, sophia, audrey):
    _trade(app, dress, heels, sophia, audrey)
    before = app.store.get("orders"), app.store.get("customers"), app.store.get("products")
    app.reports.summary()
    app.reports.customers_with_debt()
    app.installments.recent_payments()
    assert (app.store.get("orders"), app.store.get("customers"), app.store.get("products")) == before


def test_debt_listing(app, dress, heels, sophia, audrey):
    _trade(app, dress, heels, sophia, audrey)
    owing = app.reports.customers_with_debt()
    assert [(c.id, c.current_debt) for c in owing] == [(audrey.id, 200000), (sophia.id, 85000)]
    assert app.reports.total_outstanding_debt() == 285000
    assert app.reports.expense_totals_by_category()["Rent"] == 150000


def test_pure_functions_on_empty_data():
    assert fr.total_sales([]) == 0
    assert fr.total_pending([]) == 0
    assert fr.gross_profit([], []) == 0
    assert fr.net_profit([], [], []) == 0
    assert fr.category_distribution([]) == {}
    s = fr.summarize([], [], [], [])
    assert s.net_profit == 0 and s.low_stock == []


def test_installment_calendar(app, dress, heels, sophia, audrey):
    o1, o2 = _trade(app, dress, heels, sophia, audrey)
    events = app.installments.events()
    assert len(events) == 2

    may = app.installments.installments_in_month(2024, 5)
    assert sorted(may) == [2, 20]
    assert may[2][0].customer_name == "Sophia Loren"
    assert may[20][0].order_id == o2.id
    assert app.installments.installments_in_month(2024, 6) == {}

    assert [e.amount for e in app.installments.installments_on(date(2024, 5, 20))] == [100000]
    assert [e.amount for e in app.installments.recent_payments()] == [100000, 115000]
    assert len(app.installments.recent_payments(limit=1)) == 1
    assert app.installments.collected_between(date(2024, 5, 1), date(2024, 5, 10)) == 115000


def test_customer_history(app, dress, heels, sophia, audrey):
    o1, _ = _trade(app, dress, heels, sophia, audrey)
    later = app.ledger.create_order(sophia.id, [(dress.id, 1)], 300000, date="2024-06-01")

    view = app.history.overview(sophia.id)
    assert view["order_count"] == 2
    assert [o["id"] for o in view["orders"]] == [later.id, o1.id]
    assert view["total_orders_value"] == 400000
    assert view["total_paid"] == 415000
    # overpaid order shows nothing due, debt keeps the unclamped sum
    assert view["orders"][0]["remaining_due"] == 0
    assert view["orders"][1]["remaining_due"] == 85000
    assert view["current_debt"] == -15000
