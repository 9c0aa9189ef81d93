from __future__ import annotations

import logging

from ...constants import (
    COLLECTION_CUSTOMERS,
    COLLECTION_EXPENSES,
    COLLECTION_INITIALIZED,
    COLLECTION_ORDERS,
    COLLECTION_PRODUCTS,
)
from ...utils.helpers import now_str
from ..storage import CollectionStore

_log = logging.getLogger(__name__)

_DATA_COLLECTIONS = (
    COLLECTION_PRODUCTS,
    COLLECTION_CUSTOMERS,
    COLLECTION_ORDERS,
    COLLECTION_EXPENSES,
)


def _products() -> list[dict]:
    rows = [
        ("1", "Gold Silk Dress", "Clothes", 85000, 200000, 5),
        ("2", "Velvet Black Heels", "Shoes", 65000, 150000, 2),
        ("3", "Shein Batch #402", "Shein Custom Order", 350000, 600000, 1),
        ("4", "Pearl Necklace", "Accessories", 25000, 75000, 10),
    ]
    return [
        {
            "id": pid, "name": name, "category": cat,
            "buy_price": float(buy), "sell_price": float(sell), "stock": stock,
            "image": f"https://picsum.photos/200/200?random={pid}", "description": None,
        }
        for pid, name, cat, buy, sell, stock in rows
    ]


def _customers() -> list[dict]:
    return [
        {"id": "1", "name": "Sophia Loren", "phone": "088 555 0101",
         "address": "123 Luxury Ln, Blantyre", "total_spent": 0.0, "current_debt": 85000.0},
        {"id": "2", "name": "Audrey Hepburn", "phone": "099 555 0102",
         "address": "456 Classic Blvd, Lilongwe", "total_spent": 0.0, "current_debt": 0.0},
    ]


def _orders(ts: str) -> list[dict]:
    return [
        {
            "id": "101",
            "customer_id": "1",
            "customer_name": "Sophia Loren",
            "date": ts,
            "items": [{"product_id": "1", "product_name": "Gold Silk Dress",
                       "quantity": 1, "price_at_sale": 200000.0}],
            "total_amount": 200000.0,
            "paid_amount": 115000.0,
            "status": "partial",
            "installments": [{"id": "inst_1", "amount": 115000.0, "date": ts,
                              "note": "Initial deposit"}],
        }
    ]


def _expenses(ts: str) -> list[dict]:
    return [
        {"id": "1", "category": "Rent", "amount": 150000.0, "date": ts, "note": "Shop monthly rent"},
        {"id": "2", "category": "Utilities", "amount": 25000.0, "date": ts, "note": "Electricity units"},
    ]


def seed(store: CollectionStore) -> bool:
    """
    Write the demo catalog/customers/order/expenses once.

    Guarded by the `initialized` collection: returns False (and writes no
    demo records) when the store was initialized before or already holds
    products, customers, orders or expenses.
    """
    if store.get(COLLECTION_INITIALIZED):
        return False
    ts = now_str()
    if any(store.has(name) for name in _DATA_COLLECTIONS):
        # Data written before the flag existed: adopt it, never overwrite it.
        store.put(COLLECTION_INITIALIZED, [{"initialized": True, "at": ts}])
        return False
    with store.transaction():
        store.put(COLLECTION_PRODUCTS, _products())
        store.put(COLLECTION_CUSTOMERS, _customers())
        store.put(COLLECTION_ORDERS, _orders(ts))
        store.put(COLLECTION_EXPENSES, _expenses(ts))
        store.put(COLLECTION_INITIALIZED, [{"initialized": True, "at": ts}])
    _log.info("seeded demo data")
    return True
