# tests/conftest.py
# ---------------------------------------------------------------------
# Ground rules:
# - Every test gets its own SQLite file under tmp_path (no shared DB)
# - Stores start EMPTY (seed=False) unless a test asks for demo data
# - pytest-qt owns QApplication (qapp fixture); run Qt offscreen
# ---------------------------------------------------------------------

from __future__ import annotations

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from boutique.database import get_store
from boutique.session import AppSession


@pytest.fixture()
def store(tmp_path):
    s = get_store(tmp_path / "boutique.db", seed=False)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture()
def app(store):
    return AppSession(store)


@pytest.fixture()
def seeded_app(tmp_path):
    session = AppSession.open(tmp_path / "seeded.db")
    try:
        yield session
    finally:
        session.close()


# ---------- Handy records ----------
@pytest.fixture()
def dress(app):
    """stock=5, sell=200000, buy=85000"""
    return app.products.create("Gold Silk Dress", "Clothes", 85000, 200000, 5)


@pytest.fixture()
def heels(app):
    """stock=2, sell=150000, buy=65000"""
    return app.products.create("Velvet Black Heels", "Shoes", 65000, 150000, 2)


@pytest.fixture()
def sophia(app):
    return app.customers.create("Sophia Loren", "088 555 0101", "123 Luxury Ln, Blantyre")


@pytest.fixture()
def audrey(app):
    return app.customers.create("Audrey Hepburn", "099 555 0102", "456 Classic Blvd, Lilongwe")
