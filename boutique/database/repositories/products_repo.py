# boutique/database/repositories/products_repo.py
from __future__ import annotations

from dataclasses import asdict, dataclass
import logging

from ...constants import COLLECTION_PRODUCTS, LOW_STOCK_THRESHOLD
from ...errors import InsufficientStockError, NotFoundError, ValidationError
from ...utils.helpers import new_id
from ...utils.validators import is_non_negative_int, is_non_negative_number, non_empty
from ..storage import CollectionStore

_log = logging.getLogger(__name__)


@dataclass
class Product:
    id: str
    name: str
    category: str
    buy_price: float
    sell_price: float
    stock: int
    image: str | None = None
    description: str | None = None

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= LOW_STOCK_THRESHOLD

    def to_record(self) -> dict:
        return asdict(self)

    @classmethod
    def from_record(cls, r: dict) -> "Product":
        return cls(
            id=str(r["id"]),
            name=r.get("name", ""),
            category=r.get("category", ""),
            buy_price=float(r.get("buy_price", 0) or 0),
            sell_price=float(r.get("sell_price", 0) or 0),
            stock=int(r.get("stock", 0) or 0),
            image=r.get("image"),
            description=r.get("description"),
        )


class ProductsRepo:
    """
    Catalog store. Owns product records and is the only writer of `stock`;
    stock goes down only through `decrement_stock`, which the order ledger
    calls while creating an order.
    """

    def __init__(self, store: CollectionStore):
        self.store = store

    # ---- Internal helpers -------------------------------------------------

    def _load(self) -> list[Product]:
        return [Product.from_record(r) for r in self.store.get(COLLECTION_PRODUCTS)]

    def _save(self, rows: list[Product]) -> None:
        self.store.put(COLLECTION_PRODUCTS, [p.to_record() for p in rows])

    @staticmethod
    def _validate(name: str, category: str, buy_price, sell_price, stock) -> None:
        if not non_empty(name):
            raise ValidationError("Name cannot be empty.")
        if not non_empty(category):
            raise ValidationError("Category cannot be empty.")
        if not is_non_negative_number(buy_price):
            raise ValidationError("Buy price must be a non-negative number.")
        if not is_non_negative_number(sell_price):
            raise ValidationError("Sell price must be a non-negative number.")
        if not is_non_negative_int(stock):
            raise ValidationError("Stock must be a whole number of 0 or more.")

    # ---- Queries ----------------------------------------------------------

    def list_products(self) -> list[Product]:
        return self._load()

    def get(self, product_id: str) -> Product | None:
        for p in self._load():
            if p.id == product_id:
                return p
        return None

    def require(self, product_id: str) -> Product:
        p = self.get(product_id)
        if p is None:
            raise NotFoundError("Product", product_id)
        return p

    def low_stock(self) -> list[Product]:
        return [p for p in self._load() if p.is_low_stock]

    # ---- Mutations --------------------------------------------------------

    def create(
        self,
        name: str,
        category: str,
        buy_price: float,
        sell_price: float,
        stock: int,
        *,
        image: str | None = None,
        description: str | None = None,
    ) -> Product:
        self._validate(name, category, buy_price, sell_price, stock)
        product = Product(
            id=new_id(),
            name=name.strip(),
            category=category.strip(),
            buy_price=float(buy_price),
            sell_price=float(sell_price),
            stock=int(stock),
            image=image,
            description=description,
        )
        with self.store.transaction():
            rows = self._load()
            rows.append(product)
            self._save(rows)
        return product

    def update(
        self,
        product_id: str,
        name: str,
        category: str,
        buy_price: float,
        sell_price: float,
        stock: int,
        *,
        image: str | None = None,
        description: str | None = None,
    ) -> Product:
        """
        Replace the editable fields of a product. Past orders keep the price
        they were sold at (OrderItem.price_at_sale).
        """
        self._validate(name, category, buy_price, sell_price, stock)
        with self.store.transaction():
            rows = self._load()
            for i, p in enumerate(rows):
                if p.id == product_id:
                    rows[i] = Product(
                        id=p.id,
                        name=name.strip(),
                        category=category.strip(),
                        buy_price=float(buy_price),
                        sell_price=float(sell_price),
                        stock=int(stock),
                        image=image if image is not None else p.image,
                        description=description if description is not None else p.description,
                    )
                    self._save(rows)
                    return rows[i]
        raise NotFoundError("Product", product_id)

    def delete(self, product_id: str) -> None:
        with self.store.transaction():
            rows = self._load()
            kept = [p for p in rows if p.id != product_id]
            if len(kept) == len(rows):
                raise NotFoundError("Product", product_id)
            self._save(kept)

    def decrement_stock(self, quantities: dict[str, int]) -> list[Product]:
        """
        Take `quantities[product_id]` units off each product in one write.

        Every product is checked before anything is written, so a shortage on
        any line leaves the whole catalog untouched.
        """
        with self.store.transaction():
            rows = self._load()
            by_id = {p.id: p for p in rows}
            for pid, qty in quantities.items():
                p = by_id.get(pid)
                if p is None:
                    raise NotFoundError("Product", pid)
                if qty > p.stock:
                    raise InsufficientStockError(pid, p.name, qty, p.stock)
            for pid, qty in quantities.items():
                by_id[pid].stock -= qty
            self._save(rows)
        _log.debug("stock decremented: %s", quantities)
        return [by_id[pid] for pid in quantities]
