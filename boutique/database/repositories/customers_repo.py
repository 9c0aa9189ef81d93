from __future__ import annotations

from dataclasses import asdict, dataclass

from ...constants import COLLECTION_CUSTOMERS
from ...errors import NotFoundError, ValidationError
from ...utils.helpers import new_id
from ..storage import CollectionStore


@dataclass
class Customer:
    id: str
    name: str
    phone: str
    address: str | None
    total_spent: float = 0.0
    # Derived from the customer's orders; only DebtReconciler writes it.
    current_debt: float = 0.0

    def to_record(self) -> dict:
        return asdict(self)

    @classmethod
    def from_record(cls, r: dict) -> "Customer":
        return cls(
            id=str(r["id"]),
            name=r.get("name", ""),
            phone=r.get("phone", ""),
            address=r.get("address"),
            total_spent=float(r.get("total_spent", 0) or 0),
            current_debt=float(r.get("current_debt", 0) or 0),
        )


class CustomersRepo:
    def __init__(self, store: CollectionStore):
        self.store = store

    # ---- Internal helpers -------------------------------------------------

    @staticmethod
    def _normalize_text(s: str | None) -> str | None:
        if s is None:
            return None
        return s.strip()

    @staticmethod
    def _ensure_non_empty(value: str | None, field_label: str) -> None:
        if value is None or value.strip() == "":
            raise ValidationError(f"{field_label} cannot be empty.")

    def _load(self) -> list[Customer]:
        return [Customer.from_record(r) for r in self.store.get(COLLECTION_CUSTOMERS)]

    def _save(self, rows: list[Customer]) -> None:
        self.store.put(COLLECTION_CUSTOMERS, [c.to_record() for c in rows])

    # ---- Queries ----------------------------------------------------------

    def list_customers(self) -> list[Customer]:
        return self._load()

    def search(self, term: str) -> list[Customer]:
        """
        Case-insensitive substring match over id/name/phone/address.
        """
        needle = term.strip().lower()
        if not needle:
            return self._load()
        return [
            c for c in self._load()
            if any(needle in (v or "").lower() for v in (c.id, c.name, c.phone, c.address))
        ]

    def get(self, customer_id: str) -> Customer | None:
        for c in self._load():
            if c.id == customer_id:
                return c
        return None

    def require(self, customer_id: str) -> Customer:
        c = self.get(customer_id)
        if c is None:
            raise NotFoundError("Customer", customer_id)
        return c

    # ---- Mutations --------------------------------------------------------

    def create(self, name: str, phone: str, address: str | None = None) -> Customer:
        """
        Insert a new customer with no spend and no debt.
        """
        self._ensure_non_empty(name, "Name")
        self._ensure_non_empty(phone, "Phone")

        customer = Customer(
            id=new_id(),
            name=self._normalize_text(name),
            phone=self._normalize_text(phone),
            address=self._normalize_text(address),
        )
        with self.store.transaction():
            rows = self._load()
            rows.append(customer)
            self._save(rows)
        return customer

    def update(self, customer_id: str, name: str, phone: str, address: str | None) -> Customer:
        """
        Update profile fields. `current_debt` and `total_spent` are carried
        over untouched so an edit never wipes the reconciled balance.
        """
        self._ensure_non_empty(name, "Name")
        self._ensure_non_empty(phone, "Phone")

        with self.store.transaction():
            rows = self._load()
            for c in rows:
                if c.id == customer_id:
                    c.name = self._normalize_text(name)
                    c.phone = self._normalize_text(phone)
                    c.address = self._normalize_text(address)
                    self._save(rows)
                    return c
        raise NotFoundError("Customer", customer_id)

    def set_current_debt(self, customer_id: str, debt: float) -> Customer:
        """Reserved for DebtReconciler."""
        with self.store.transaction():
            rows = self._load()
            for c in rows:
                if c.id == customer_id:
                    c.current_debt = float(debt)
                    self._save(rows)
                    return c
        raise NotFoundError("Customer", customer_id)
