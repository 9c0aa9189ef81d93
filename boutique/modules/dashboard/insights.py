"""
modules/dashboard/insights.py

Text generation for the dashboard: business insights and product blurbs.

Calls the Gemini `generateContent` REST endpoint. Any failure (no key,
network error, timeout, HTTP error, unexpected payload) is logged and turned
into a fixed fallback string; nothing here raises into the ledger.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

import requests

from ...config import gemini_api_key
from ...constants import (
    APP_NAME,
    CURRENCY,
    DESCRIPTION_FALLBACK,
    GEMINI_ENDPOINT,
    GEMINI_MODEL,
    INSIGHT_FALLBACK,
    INSIGHT_MISSING_KEY,
    INSIGHT_ORDER_SAMPLE,
    INSIGHT_STOCK_BELOW,
    INSIGHT_TIMEOUT_SECONDS,
)
from ...database.repositories.customers_repo import Customer
from ...database.repositories.orders_repo import Order
from ...database.repositories.products_repo import Product

__all__ = ["InsightClient", "InsightError", "build_business_prompt"]

_log = logging.getLogger(__name__)


class InsightError(Exception):
    """Raised inside the client when the service cannot give usable text."""


def _order_summaries(orders: Sequence[Order]) -> List[Dict[str, Any]]:
    return [
        {
            "date": o.date.split("T")[0],
            "total": o.total_amount,
            "paid": o.paid_amount,
            "items": ", ".join(i.product_name for i in o.items),
        }
        for o in list(orders)[:INSIGHT_ORDER_SAMPLE]
    ]


def build_business_prompt(
    orders: Sequence[Order],
    products: Sequence[Product],
    customers: Sequence[Customer],
) -> str:
    stock = [
        {"name": p.name, "stock": p.stock}
        for p in products
        if p.stock < INSIGHT_STOCK_BELOW
    ]
    debt = sum(c.current_debt for c in customers)
    return (
        f'You are an expert business consultant for "{APP_NAME}", a high-end fashion retailer.\n'
        "Analyze the following business data and provide 3 key insights and 1 actionable "
        "recommendation in a professional, encouraging tone.\n\n"
        "Context:\n"
        f"- Currency: {CURRENCY}\n"
        f"- Recent Orders (Sample): {json.dumps(_order_summaries(orders))}\n"
        f"- Low Stock Items: {json.dumps(stock)}\n"
        f"- Total Debt Outstanding: {debt:g}\n\n"
        "Format the output as HTML (using <b> for bold, <br> for breaks, <ul><li> for lists) "
        "but do not wrap it in markdown code blocks. Keep it concise."
    )


class InsightClient:
    """
    Thin client around one model endpoint.

    `session` defaults to a fresh requests.Session; tests pass a stand-in.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        model: str = GEMINI_MODEL,
        timeout: float = INSIGHT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = gemini_api_key() if api_key is None else api_key
        self.model = model
        self.timeout = timeout
        self.session = session or requests.Session()

    # ---- transport --------------------------------------------------------

    def _generate(self, prompt: str) -> str:
        url = GEMINI_ENDPOINT.format(model=self.model)
        try:
            response = self.session.post(
                url,
                headers={"x-goog-api-key": self.api_key, "Content-Type": "application/json"},
                json={"contents": [{"parts": [{"text": prompt}]}]},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise InsightError(f"request failed: {e}") from e
        except ValueError as e:
            raise InsightError("response was not JSON") from e

        try:
            parts = data["candidates"][0]["content"]["parts"]
            text = "".join(p.get("text", "") for p in parts)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise InsightError("unexpected response shape") from e
        if not text.strip():
            raise InsightError("empty response")
        return text

    # ---- public API -------------------------------------------------------

    def analyze_business(
        self,
        orders: Sequence[Order],
        products: Sequence[Product],
        customers: Sequence[Customer],
    ) -> str:
        if not self.api_key:
            return INSIGHT_MISSING_KEY
        try:
            return self._generate(build_business_prompt(orders, products, customers))
        except InsightError as e:
            _log.warning("business insight unavailable: %s", e)
            return INSIGHT_FALLBACK

    def product_description(self, product_name: str, category: str) -> str:
        if not self.api_key:
            return DESCRIPTION_FALLBACK
        prompt = (
            "Write a short, luxurious, and catchy product description (max 2 sentences) "
            f'for a fashion item named "{product_name}" in the category "{category}".'
        )
        try:
            return self._generate(prompt).strip()
        except InsightError as e:
            _log.warning("product description unavailable: %s", e)
            return DESCRIPTION_FALLBACK
