"""
Checkout and installment recording: status derivation, paid-amount
bookkeeping, stock conservation and all-or-nothing failure behaviour.
"""

from __future__ import annotations

import pytest

from boutique.constants import NOTE_FINAL_SETTLEMENT, NOTE_INITIAL_PAYMENT, NOTE_INSTALLMENT
from boutique.errors import InsufficientStockError, NotFoundError, ValidationError
from boutique.modules.payments.payment_utilities import status


def _snapshot(app):
    return (
        [p.to_record() for p in app.products.list_products()],
        [c.to_record() for c in app.customers.list_customers()],
        [o.to_record() for o in app.orders.list_orders()],
    )


def _assert_order_invariants(order):
    assert order.paid_amount == sum(i.amount for i in order.installments)
    assert order.status == status.status_from_paid(order.total_amount, order.paid_amount)
    assert order.total_amount == sum(i.quantity * i.price_at_sale for i in order.items)


# ---------------------------------------------------------------------
# Suite A – checkout
# ---------------------------------------------------------------------

def test_a1_unpaid_checkout_is_pending_and_takes_stock(app, dress, sophia):
    order = app.ledger.create_order(sophia.id, [(dress.id, 1)])

    assert order.status == status.PENDING
    assert order.total_amount == 200000
    assert order.paid_amount == 0
    assert order.installments == ()
    assert order.customer_name == "Sophia Loren"
    assert app.products.get(dress.id).stock == 4
    assert app.customers.get(sophia.id).current_debt == 200000
    _assert_order_invariants(order)


def test_a2_initial_payment_becomes_first_installment(app, dress, sophia):
    order = app.ledger.create_order(sophia.id, [(dress.id, 2)], initial_payment=150000)

    assert order.total_amount == 400000
    assert order.paid_amount == 150000
    assert order.status == status.PARTIAL
    assert len(order.installments) == 1
    assert order.installments[0].note == NOTE_INITIAL_PAYMENT
    assert order.installments[0].amount == 150000
    assert app.customers.get(sophia.id).current_debt == 250000
    _assert_order_invariants(order)


def test_a3_full_payment_at_checkout_is_paid(app, dress, heels, sophia):
    order = app.ledger.create_order(
        sophia.id, [(dress.id, 1), (heels.id, 1)], initial_payment=350000
    )
    assert order.status == status.PAID
    assert app.customers.get(sophia.id).current_debt == 0


def test_a4_price_is_frozen_at_sale(app, dress, sophia):
    order = app.ledger.create_order(sophia.id, [(dress.id, 1)])
    app.products.update(dress.id, dress.name, dress.category, 90000, 999999, 4)

    stored = app.orders.get(order.id)
    assert stored.items[0].price_at_sale == 200000
    assert stored.total_amount == 200000


def test_a5_repeated_product_lines_are_merged(app, heels, sophia):
    order = app.ledger.create_order(sophia.id, [(heels.id, 1), (heels.id, 1)])
    assert len(order.items) == 1
    assert order.items[0].quantity == 2
    assert app.products.get(heels.id).stock == 0


def test_a6_customer_name_is_a_snapshot(app, dress, sophia):
    order = app.ledger.create_order(sophia.id, [(dress.id, 1)])
    app.customers.update(sophia.id, "Sophia Scicolone", sophia.phone, sophia.address)
    assert app.orders.get(order.id).customer_name == "Sophia Loren"


# ---------------------------------------------------------------------
# Suite B – checkout rejections (nothing written)
# ---------------------------------------------------------------------

def test_b1_over_quantity_rejected_without_mutation(app, dress, heels, sophia):
    before = _snapshot(app)
    with pytest.raises(InsufficientStockError) as exc:
        app.ledger.create_order(sophia.id, [(dress.id, 1), (heels.id, 3)])
    assert exc.value.available == 2 and exc.value.requested == 3
    assert _snapshot(app) == before


def test_b2_merged_lines_over_stock_rejected(app, heels, sophia):
    with pytest.raises(InsufficientStockError):
        app.ledger.create_order(sophia.id, [(heels.id, 2), (heels.id, 1)])
    assert app.products.get(heels.id).stock == 2


@pytest.mark.parametrize(
    "items",
    [[], [("x", 0)], [("x", -1)], [("x", 1.5)], [("x", "1.0")], [("x", "2")]],
)
def test_b3_malformed_cart_rejected(app, sophia, items):
    with pytest.raises(ValidationError):
        app.ledger.create_order(sophia.id, items)
    assert app.orders.list_orders() == []


def test_b4_negative_initial_payment_rejected(app, dress, sophia):
    with pytest.raises(ValidationError):
        app.ledger.create_order(sophia.id, [(dress.id, 1)], initial_payment=-5)
    assert app.products.get(dress.id).stock == 5


@pytest.mark.parametrize("payment", [float("inf"), float("nan"), "Infinity"])
def test_b4b_non_finite_initial_payment_rejected(app, dress, sophia, payment):
    before = _snapshot(app)
    with pytest.raises(ValidationError):
        app.ledger.create_order(sophia.id, [(dress.id, 1)], initial_payment=payment)
    assert _snapshot(app) == before


def test_b5_unknown_references(app, dress, sophia):
    before = _snapshot(app)
    with pytest.raises(NotFoundError):
        app.ledger.create_order("nobody", [(dress.id, 1)])
    with pytest.raises(NotFoundError):
        app.ledger.create_order(sophia.id, [(dress.id, 1), ("ghost", 1)])
    assert _snapshot(app) == before


# ---------------------------------------------------------------------
# Suite C – installments
# ---------------------------------------------------------------------

def test_c1_installment_then_final_settlement(app, dress, sophia):
    order = app.ledger.create_order(sophia.id, [(dress.id, 1)])

    order = app.ledger.record_installment(order.id, 115000, "installment")
    assert app.ledger.remaining_balance(order.id) == 85000
    assert app.ledger.get_order(order.id).installments == order.installments
    assert order.paid_amount == 115000
    assert order.status == status.PARTIAL
    assert order.installments[-1].note == NOTE_INSTALLMENT
    assert app.customers.get(sophia.id).current_debt == 85000

    order = app.ledger.record_installment(order.id, 85000, "full")
    assert order.paid_amount == 200000
    assert order.status == status.PAID
    assert order.installments[-1].note == NOTE_FINAL_SETTLEMENT
    assert app.customers.get(sophia.id).current_debt == 0
    _assert_order_invariants(app.orders.get(order.id))


@pytest.mark.parametrize("amount", [0, -1, -115000, float("inf"), float("nan"), "inf"])
def test_c2_invalid_amount_rejected(app, dress, sophia, amount):
    order = app.ledger.create_order(sophia.id, [(dress.id, 1)])
    before = _snapshot(app)
    with pytest.raises(ValidationError):
        app.ledger.record_installment(order.id, amount, "installment")
    assert _snapshot(app) == before
    assert app.orders.get(order.id).status == status.PENDING


def test_c3_unknown_order(app):
    with pytest.raises(NotFoundError):
        app.ledger.record_installment("missing", 100, "installment")


def test_c4_unknown_kind_rejected(app, dress, sophia):
    order = app.ledger.create_order(sophia.id, [(dress.id, 1)])
    with pytest.raises(ValidationError):
        app.ledger.record_installment(order.id, 100, "barter")


def test_c5_full_without_amount_settles_balance(app, dress, sophia):
    order = app.ledger.create_order(sophia.id, [(dress.id, 1)], initial_payment=50000)
    order = app.ledger.settle(order.id)
    assert order.installments[-1].amount == 150000
    assert order.status == status.PAID
    with pytest.raises(ValidationError):
        app.ledger.settle(order.id)


def test_c6_overpayment_accumulates(app, dress, sophia):
    order = app.ledger.create_order(sophia.id, [(dress.id, 1)])
    order = app.ledger.record_installment(order.id, 250000, "installment")
    assert order.paid_amount == 250000
    assert order.status == status.PAID
    assert app.ledger.remaining_balance(order.id) == -50000
    assert app.customers.get(sophia.id).current_debt == -50000


def test_c7_explicit_dates_are_kept(app, dress, sophia):
    order = app.ledger.create_order(sophia.id, [(dress.id, 1)], date="2024-03-01T10:00:00")
    order = app.ledger.record_installment(order.id, 1000, date="2024-03-05")
    assert order.date == "2024-03-01T10:00:00"
    assert order.installments[-1].date == "2024-03-05"
    with pytest.raises(ValidationError):
        app.ledger.record_installment(order.id, 1000, date="not a date")


# ---------------------------------------------------------------------
# Suite D – listing
# ---------------------------------------------------------------------

def test_d1_filter_and_sort(app, dress, sophia, audrey):
    a = app.ledger.create_order(sophia.id, [(dress.id, 1)], date="2024-01-01")
    b = app.ledger.create_order(audrey.id, [(dress.id, 1)], 1000, date="2024-02-01")
    c = app.ledger.create_order(audrey.id, [(dress.id, 1)], 200000, date="2024-03-01")

    assert [o.id for o in app.ledger.list_orders()] == [c.id, b.id, a.id]
    assert [o.id for o in app.ledger.list_orders(newest_first=False)] == [a.id, b.id, c.id]
    assert [o.id for o in app.ledger.list_orders("Partially Paid")] == [b.id]
    assert [o.id for o in app.ledger.list_orders(status.PAID)] == [c.id]
    assert len(app.ledger.list_orders("all")) == 3
    with pytest.raises(ValidationError):
        app.ledger.list_orders("refunded")


def test_d2_customer_history(app, dress, heels, sophia, audrey):
    a = app.ledger.create_order(sophia.id, [(dress.id, 1)], date="2024-01-01")
    b = app.ledger.create_order(sophia.id, [(heels.id, 1)], 50000, date="2024-02-01")
    app.ledger.create_order(audrey.id, [(dress.id, 1)], date="2024-03-01")

    orders, value = app.ledger.customer_history(sophia.id)
    assert [o.id for o in orders] == [b.id, a.id]
    assert value == 350000

    assert app.ledger.customer_history(audrey.id)[1] == 200000
    with pytest.raises(NotFoundError):
        app.ledger.customer_history("nobody")
