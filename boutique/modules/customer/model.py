from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from ...database.repositories.customers_repo import Customer
from ...utils.helpers import fmt_money


class CustomersTableModel(QAbstractTableModel):
    """
    Table model for customers with the reconciled debt as the last column.

    Exposes a custom role (DEBT_ROLE) carrying the raw debt float so views
    can highlight customers who owe money without re-parsing display text.
    """

    HEADERS = ["ID", "Name", "Phone", "Address", "Debt"]

    DEBT_ROLE = Qt.UserRole + 1

    def __init__(self, rows: list[Customer]):
        super().__init__()
        self._rows = rows

    # --- Qt model basics ----------------------------------------------------

    def rowCount(self, parent=QModelIndex()):
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()):
        return len(self.HEADERS)

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None

        r = self._rows[index.row()]
        c = index.column()

        if role in (Qt.DisplayRole, Qt.EditRole):
            values = [
                r.id,
                r.name,
                r.phone,
                (r.address or ""),
                fmt_money(r.current_debt),
            ]
            return values[c]

        if role == self.DEBT_ROLE:
            return r.current_debt

        return None

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if orientation == Qt.Horizontal and role == Qt.DisplayRole:
            return self.HEADERS[section]
        return super().headerData(section, orientation, role)

    # --- helpers ------------------------------------------------------------

    def at(self, row: int) -> Customer:
        return self._rows[row]

    def replace(self, rows: list[Customer]):
        self.beginResetModel()
        self._rows = rows
        self.endResetModel()
