from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from ...database.repositories.orders_repo import Order
from ...utils.helpers import fmt_money
from ..payments.payment_utilities import status as order_status


class OrdersTableModel(QAbstractTableModel):
    HEADERS = ["ID", "Date", "Customer", "Total", "Paid", "Balance", "Status"]

    # Canonical status key ('pending'/'partial'/'paid') for badges and filters
    STATUS_ROLE = Qt.UserRole + 1

    def __init__(self, rows: list[Order]):
        super().__init__()
        self._rows = rows

    def rowCount(self, parent=QModelIndex()):
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()):
        return len(self.HEADERS)

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        o = self._rows[index.row()]
        if role in (Qt.DisplayRole, Qt.EditRole):
            mapping = [
                o.id,
                o.date.split("T")[0],
                o.customer_name,
                fmt_money(o.total_amount),
                fmt_money(o.paid_amount),
                fmt_money(o.remaining_balance),
                order_status.label(o.status),
            ]
            return mapping[index.column()]
        if role == self.STATUS_ROLE:
            return o.status
        if role == Qt.ToolTipRole and index.column() == 6:
            return order_status.description(o.status)
        return None

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if orientation == Qt.Horizontal and role == Qt.DisplayRole:
            return self.HEADERS[section] if section < len(self.HEADERS) else None
        return super().headerData(section, orientation, role)

    def at(self, row: int) -> Order:
        return self._rows[row]

    def replace(self, rows: list[Order]):
        self.beginResetModel()
        self._rows = rows
        self.endResetModel()


class OrderItemsModel(QAbstractTableModel):
    HEADERS = ["#", "Product", "Qty", "Unit Price", "Line Total"]

    def __init__(self, order: Order | None = None):
        super().__init__()
        self._rows = list(order.items) if order else []

    def rowCount(self, parent=QModelIndex()):
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()):
        return len(self.HEADERS)

    def data(self, idx, role=Qt.DisplayRole):
        if not idx.isValid():
            return None
        r = self._rows[idx.row()]
        if role in (Qt.DisplayRole, Qt.EditRole):
            m = [idx.row() + 1, r.product_name, r.quantity,
                 fmt_money(r.price_at_sale), fmt_money(r.line_total)]
            return m[idx.column()]
        return None

    def headerData(self, s, o, role=Qt.DisplayRole):
        return self.HEADERS[s] if o == Qt.Horizontal and role == Qt.DisplayRole else super().headerData(s, o, role)

    def set_order(self, order: Order | None):
        self.beginResetModel()
        self._rows = list(order.items) if order else []
        self.endResetModel()


class InstallmentsModel(QAbstractTableModel):
    HEADERS = ["Date", "Amount", "Note"]

    def __init__(self, order: Order | None = None):
        super().__init__()
        self._rows = list(order.installments) if order else []

    def rowCount(self, parent=QModelIndex()):
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()):
        return len(self.HEADERS)

    def data(self, idx, role=Qt.DisplayRole):
        if not idx.isValid():
            return None
        r = self._rows[idx.row()]
        if role in (Qt.DisplayRole, Qt.EditRole):
            m = [r.date.split("T")[0], fmt_money(r.amount), r.note or "Payment"]
            return m[idx.column()]
        return None

    def headerData(self, s, o, role=Qt.DisplayRole):
        return self.HEADERS[s] if o == Qt.Horizontal and role == Qt.DisplayRole else super().headerData(s, o, role)

    def set_order(self, order: Order | None):
        self.beginResetModel()
        self._rows = list(order.installments) if order else []
        self.endResetModel()
