from __future__ import annotations

"""
Repository for shop expenses.

Expenses are a flat journal: append and delete only, no edits and no
derived fields. Categories come from a fixed list (EXPENSE_CATEGORIES);
anything else is rejected. Amounts are stored as float.

Record shape (one JSON object per expense in the `expenses` collection):

    {"id": "...", "category": "Rent", "amount": 150000.0,
     "date": "2024-05-01", "note": "Shop monthly rent"}
"""

from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

from ...constants import COLLECTION_EXPENSES, EXPENSE_CATEGORIES
from ...errors import NotFoundError, ValidationError
from ...utils.helpers import new_id, parse_when, today_str
from ...utils.validators import is_strictly_positive_number, non_empty
from ..storage import CollectionStore


@dataclass(frozen=True)
class Expense:
    id: str
    category: str
    amount: float
    date: str
    note: str = ""

    def to_record(self) -> dict:
        return asdict(self)

    @classmethod
    def from_record(cls, r: dict) -> "Expense":
        return cls(
            id=str(r["id"]),
            category=r.get("category", ""),
            amount=float(r.get("amount", 0) or 0),
            date=r.get("date", ""),
            note=r.get("note") or "",
        )


class ExpensesRepo:
    """
    Journal of operational costs.

    Independent of products, customers and orders; the reporting layer
    reads it to turn gross profit into net profit.
    """

    def __init__(self, store: CollectionStore):
        self.store = store

    def _load(self) -> List[Expense]:
        return [Expense.from_record(r) for r in self.store.get(COLLECTION_EXPENSES)]

    def _save(self, rows: List[Expense]) -> None:
        self.store.put(COLLECTION_EXPENSES, [e.to_record() for e in rows])

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_expenses(self, category: Optional[str] = None) -> List[Expense]:
        """
        List expenses, optionally for one category, newest date first.
        Ties keep insertion order.
        """
        rows = self._load()
        if category is not None:
            rows = [e for e in rows if e.category == category]
        return sorted(rows, key=lambda e: parse_when(e.date), reverse=True)

    def total(self) -> float:
        return sum(e.amount for e in self._load())

    def totals_by_category(self) -> Dict[str, float]:
        """
        Sum per known category (zero when unused), then any stray categories
        found in stored data.
        """
        totals: Dict[str, float] = {c: 0.0 for c in EXPENSE_CATEGORIES}
        for e in self._load():
            totals[e.category] = totals.get(e.category, 0.0) + e.amount
        return totals

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(
        self,
        category: str,
        amount: float,
        date: Optional[str] = None,
        note: str = "",
    ) -> Expense:
        """
        Append an expense. Raises ValidationError for an unknown or blank
        category or an amount that is not > 0.
        """
        if not non_empty(category):
            raise ValidationError("Category cannot be empty.")
        category = category.strip()
        if category not in EXPENSE_CATEGORIES:
            raise ValidationError(
                f"Unknown expense category '{category}'. "
                f"Allowed: {', '.join(EXPENSE_CATEGORIES)}"
            )
        if not is_strictly_positive_number(amount):
            raise ValidationError("Amount must be greater than zero.")
        if date is not None:
            try:
                parse_when(date)
            except ValueError as e:
                raise ValidationError(f"Invalid date '{date}'.") from e

        expense = Expense(
            id=new_id(),
            category=category,
            amount=float(amount),
            date=date or today_str(),
            note=(note or "").strip(),
        )
        with self.store.transaction():
            rows = self._load()
            rows.append(expense)
            self._save(rows)
        return expense

    def delete(self, expense_id: str) -> None:
        with self.store.transaction():
            rows = self._load()
            kept = [e for e in rows if e.id != expense_id]
            if len(kept) == len(rows):
                raise NotFoundError("Expense", expense_id)
            self._save(kept)
