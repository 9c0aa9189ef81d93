# boutique/modules/reporting/installment_reports.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date as Date
from typing import Dict, Iterable, List, Optional

from ...database.repositories.orders_repo import Order, OrdersRepo
from ...database.storage import CollectionStore
from ...utils.helpers import parse_when


@dataclass(frozen=True)
class PaymentEvent:
    """One installment, flattened with the order it belongs to."""
    id: str
    order_id: str
    customer_id: str
    customer_name: str
    amount: float
    date: str
    note: str | None

    @property
    def day(self) -> Date:
        return parse_when(self.date).date()


def all_installments(orders: Iterable[Order]) -> List[PaymentEvent]:
    return [
        PaymentEvent(
            id=inst.id,
            order_id=o.id,
            customer_id=o.customer_id,
            customer_name=o.customer_name,
            amount=inst.amount,
            date=inst.date,
            note=inst.note,
        )
        for o in orders
        for inst in o.installments
    ]


class InstallmentReports:
    """
    Calendar and feed views over every recorded installment.
    """

    def __init__(self, store: CollectionStore) -> None:
        self.orders = OrdersRepo(store)

    def events(self) -> List[PaymentEvent]:
        return all_installments(self.orders.list_orders())

    def installments_on(self, day: Date) -> List[PaymentEvent]:
        return [e for e in self.events() if e.day == day]

    def installments_in_month(self, year: int, month: int) -> Dict[int, List[PaymentEvent]]:
        """
        {day_of_month: [events]} for one calendar month; days without
        payments are left out.
        """
        out: Dict[int, List[PaymentEvent]] = {}
        for e in self.events():
            d = e.day
            if d.year == year and d.month == month:
                out.setdefault(d.day, []).append(e)
        return out

    def collected_between(self, date_from: Date, date_to: Date) -> float:
        """Total received on calendar days date_from..date_to inclusive."""
        return sum(e.amount for e in self.events() if date_from <= e.day <= date_to)

    def recent_payments(self, limit: Optional[int] = None) -> List[PaymentEvent]:
        """Newest first."""
        rows = sorted(self.events(), key=lambda e: parse_when(e.date), reverse=True)
        return rows if limit is None else rows[:limit]
