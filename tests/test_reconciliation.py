from __future__ import annotations

import pytest

from boutique.errors import NotFoundError
from boutique.modules.payments.payment_utilities.calculations import (
    clamp_non_negative,
    customer_debt,
    project_after_payment,
)


def _expected_debt(app, customer_id):
    return sum(o.total_amount - o.paid_amount for o in app.orders.list_by_customer(customer_id))


def test_debt_tracks_orders_after_every_trigger(app, dress, heels, sophia, audrey):
    o1 = app.ledger.create_order(sophia.id, [(dress.id, 1)], 20000)
    assert app.customers.get(sophia.id).current_debt == _expected_debt(app, sophia.id)

    o2 = app.ledger.create_order(sophia.id, [(heels.id, 1)])
    assert app.customers.get(sophia.id).current_debt == 330000

    app.ledger.record_installment(o2.id, 50000)
    app.ledger.record_installment(o1.id, 180000, "full")
    assert app.customers.get(sophia.id).current_debt == 100000
    assert app.customers.get(sophia.id).current_debt == _expected_debt(app, sophia.id)

    # untouched customer
    assert app.customers.get(audrey.id).current_debt == 0


def test_recalc_is_idempotent(app, dress, sophia):
    app.ledger.create_order(sophia.id, [(dress.id, 2)], 1000)
    first = app.reconciler.recalc_debt(sophia.id)
    second = app.reconciler.recalc_debt(sophia.id)
    assert first == second == 399000
    assert app.customers.get(sophia.id).current_debt == 399000


def test_overpaid_order_offsets_other_debt(app, dress, heels, sophia):
    paid_over = app.ledger.create_order(sophia.id, [(heels.id, 1)])
    app.ledger.create_order(sophia.id, [(dress.id, 1)])
    app.ledger.record_installment(paid_over.id, 200000)

    # 150000 - 200000 + 200000 - 0: balances are summed unclamped
    assert app.customers.get(sophia.id).current_debt == 150000


def test_profile_edit_keeps_reconciled_debt(app, dress, sophia):
    app.ledger.create_order(sophia.id, [(dress.id, 1)])
    app.customers.update(sophia.id, "Sophia L.", "000", None)
    c = app.customers.get(sophia.id)
    assert c.name == "Sophia L."
    assert c.current_debt == 200000


def test_recalc_all_repairs_drift(app, dress, sophia, audrey):
    app.ledger.create_order(sophia.id, [(dress.id, 1)])
    app.customers.set_current_debt(sophia.id, 5)
    app.customers.set_current_debt(audrey.id, 7)
    assert app.reconciler.drift() == {
        sophia.id: (5, 200000),
        audrey.id: (7, 0),
    }

    assert app.reconciler.recalc_all() == {sophia.id: 200000, audrey.id: 0}
    assert app.reconciler.drift() == {}


def test_unknown_customer(app):
    with pytest.raises(NotFoundError):
        app.reconciler.recalc_debt("nobody")


def test_calculation_helpers():
    assert customer_debt([(100, 40), (50, 80)]) == 30
    assert customer_debt([]) == 0
    assert clamp_non_negative(-3) == 0.0
    assert project_after_payment(
        total_amount=200000, current_paid_amount=115000, new_payment_amount=85000
    ) == (200000, "paid")
    assert project_after_payment(
        total_amount=200000, current_paid_amount=0, new_payment_amount=1
    ) == (1, "partial")
