"""
Table model for the expense journal.

Fed with `Expense` records from ``ExpensesRepo.list_expenses``; amounts
are formatted with `fmt_money` from ``boutique.utils.helpers``. The model
does not change data on its own; the repository does.
"""

from __future__ import annotations

from typing import Any, List

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt

from ...database.repositories.expenses_repo import Expense
from ...utils.helpers import fmt_money


class ExpensesTableModel(QAbstractTableModel):
    """Table model for listing individual expenses."""

    #: Column headers for the expenses table.
    HEADERS: List[str] = ["ID", "Date", "Category", "Note", "Amount"]

    def __init__(self, rows: List[Expense]):
        super().__init__()
        self._rows = rows or []

    # Required overrides ---------------------------------------------------

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:  # type: ignore[override]
        return len(self._rows)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:  # type: ignore[override]
        return len(self.HEADERS)

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole) -> Any:  # type: ignore[override]
        if not index.isValid():
            return None
        row = self._rows[index.row()]
        if role in (Qt.DisplayRole, Qt.EditRole):
            col = index.column()
            if col == 0:
                return row.id
            if col == 1:
                return row.date.split("T")[0]
            if col == 2:
                return row.category
            if col == 3:
                return row.note
            if col == 4:
                return fmt_money(row.amount)
        return None

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.DisplayRole) -> Any:  # type: ignore[override]
        if orientation == Qt.Horizontal and role == Qt.DisplayRole:
            return self.HEADERS[section]
        return super().headerData(section, orientation, role)

    def at(self, row: int) -> Expense:
        return self._rows[row]

    def replace(self, rows: List[Expense]) -> None:
        self.beginResetModel()
        self._rows = rows or []
        self.endResetModel()
