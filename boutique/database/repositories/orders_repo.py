from __future__ import annotations

from dataclasses import asdict, dataclass, field

from ...constants import COLLECTION_ORDERS
from ...errors import NotFoundError
from ..storage import CollectionStore


@dataclass(frozen=True)
class OrderItem:
    product_id: str
    product_name: str
    quantity: int
    price_at_sale: float

    @property
    def line_total(self) -> float:
        return self.quantity * self.price_at_sale


@dataclass(frozen=True)
class Installment:
    id: str
    amount: float
    date: str
    note: str | None = None


@dataclass
class Order:
    """
    Order header + frozen line items + append-only installment history.

    `customer_name` is a snapshot taken at checkout; it does not follow later
    renames of the customer.
    """
    id: str
    customer_id: str
    customer_name: str
    date: str
    items: tuple[OrderItem, ...]
    total_amount: float
    paid_amount: float
    status: str
    installments: tuple[Installment, ...] = field(default_factory=tuple)

    @property
    def remaining_balance(self) -> float:
        """May be negative for an overpaid order."""
        return self.total_amount - self.paid_amount

    def to_record(self) -> dict:
        r = asdict(self)
        r["items"] = [asdict(i) for i in self.items]
        r["installments"] = [asdict(i) for i in self.installments]
        return r

    @classmethod
    def from_record(cls, r: dict) -> "Order":
        items = tuple(
            OrderItem(
                product_id=str(i["product_id"]),
                product_name=i.get("product_name", ""),
                quantity=int(i["quantity"]),
                price_at_sale=float(i["price_at_sale"]),
            )
            for i in r.get("items", [])
        )
        installments = tuple(
            Installment(
                id=str(i["id"]),
                amount=float(i["amount"]),
                date=i["date"],
                note=i.get("note"),
            )
            for i in r.get("installments", [])
        )
        return cls(
            id=str(r["id"]),
            customer_id=str(r["customer_id"]),
            customer_name=r.get("customer_name", ""),
            date=r["date"],
            items=items,
            total_amount=float(r.get("total_amount", 0) or 0),
            paid_amount=float(r.get("paid_amount", 0) or 0),
            status=r.get("status", ""),
            installments=installments,
        )


class OrdersRepo:
    """
    Order ledger persistence.

    Plain storage only: pricing, status derivation and debt roll-up live in
    OrderLedger / DebtReconciler, which call `add` and `replace` inside
    their own transactions.
    """

    def __init__(self, store: CollectionStore):
        self.store = store

    def _load(self) -> list[Order]:
        return [Order.from_record(r) for r in self.store.get(COLLECTION_ORDERS)]

    def _save(self, rows: list[Order]) -> None:
        self.store.put(COLLECTION_ORDERS, [o.to_record() for o in rows])

    # ---- Queries ----------------------------------------------------------

    def list_orders(self) -> list[Order]:
        """Stored order: newest checkout first."""
        return self._load()

    def list_by_customer(self, customer_id: str) -> list[Order]:
        return [o for o in self._load() if o.customer_id == customer_id]

    def get(self, order_id: str) -> Order | None:
        for o in self._load():
            if o.id == order_id:
                return o
        return None

    def require(self, order_id: str) -> Order:
        o = self.get(order_id)
        if o is None:
            raise NotFoundError("Order", order_id)
        return o

    # ---- Mutations --------------------------------------------------------

    def add(self, order: Order) -> None:
        with self.store.transaction():
            rows = self._load()
            rows.insert(0, order)
            self._save(rows)

    def replace(self, order: Order) -> None:
        with self.store.transaction():
            rows = self._load()
            for i, o in enumerate(rows):
                if o.id == order.id:
                    rows[i] = order
                    self._save(rows)
                    return
        raise NotFoundError("Order", order.id)
