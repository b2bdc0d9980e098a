import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Callable, Optional

from storekeeper.config import DATA_FILE, DEFAULT_ADMIN_PASS, DEFAULT_ADMIN_USER
from storekeeper.errors import InsufficientStockError, InvalidInputError, NotFoundError
from storekeeper.models import Manager, Product, Purchase, Sale, StoreSnapshot
from storekeeper.persistence import load_snapshot, save_snapshot
from storekeeper.security import hash_password, verify_password

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")

# price x quantity must stay inside decimal's default 28-digit precision
MAX_PRICE = Decimal("1e12")
MAX_QUANTITY = 10**9


def _to_decimal(value, field: str) -> Decimal:
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            raise InvalidInputError(f"{field} must be a number, got {value!r}")
    if not amount.is_finite():
        raise InvalidInputError(f"{field} must be a finite number")
    if amount < 0:
        raise InvalidInputError(f"{field} must not be negative")
    if amount >= MAX_PRICE:
        raise InvalidInputError(f"{field} must be below {MAX_PRICE:,.0f}")
    return amount


def _check_stock_level(quantity: int) -> None:
    if quantity < 0:
        raise InvalidInputError("Quantity must not be negative")
    if quantity > MAX_QUANTITY:
        raise InvalidInputError(f"Quantity must not exceed {MAX_QUANTITY:,}")


def _check_quantity(quantity: int) -> None:
    if quantity <= 0:
        raise InvalidInputError("Quantity must be positive")
    if quantity > MAX_QUANTITY:
        raise InvalidInputError(f"Quantity must not exceed {MAX_QUANTITY:,}")


class Store:
    """Products, purchase and sale ledgers, managers and id counters.

    Every mutation goes through a method on this class. Methods hand out
    copies of product records, so the only way to change stock is
    ``edit_product``, ``record_purchase`` or ``record_sale``.
    """

    def __init__(
        self,
        snapshot: Optional[StoreSnapshot] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        if snapshot is None:
            snapshot = StoreSnapshot()
        self.products: list[Product] = [p.model_copy() for p in snapshot.products]
        self.sales: list[Sale] = list(snapshot.sales)
        self.purchases: list[Purchase] = list(snapshot.purchases)
        self.managers: list[Manager] = list(snapshot.managers)
        self.next_product_id = snapshot.next_product_id
        self.next_sale_id = snapshot.next_sale_id
        self.next_purchase_id = snapshot.next_purchase_id
        self.clock = clock

        if not self.managers:
            self.managers.append(Manager(
                username=DEFAULT_ADMIN_USER,
                password_hash=hash_password(DEFAULT_ADMIN_PASS),
            ))

    # ── products ──────────────────────────────────────────────────────────────

    def add_product(self, name: str, description: str, price, quantity: int) -> Product:
        price = _to_decimal(price, "Price")
        _check_stock_level(quantity)

        product = Product(
            id=self.next_product_id,
            name=name,
            description=description,
            price=price,
            quantity=quantity,
        )
        self.next_product_id += 1
        self.products.append(product)
        logger.info("product added", extra={"extra": {"product_id": product.id}})
        return product.model_copy()

    def edit_product(
        self,
        product_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        price=None,
        quantity: Optional[int] = None,
    ) -> Product:
        """Update the supplied fields of a product; omitted fields are kept."""
        product = self._get_product(product_id)
        # validate everything before touching the record
        if price is not None:
            price = _to_decimal(price, "Price")
        if quantity is not None:
            _check_stock_level(quantity)

        if name is not None:
            product.name = name
        if description is not None:
            product.description = description
        if price is not None:
            product.price = price
        if quantity is not None:
            product.quantity = quantity
        logger.info("product edited", extra={"extra": {"product_id": product_id}})
        return product.model_copy()

    def delete_product(self, product_id: int) -> None:
        product = self._get_product(product_id)
        self.products.remove(product)
        logger.info("product deleted", extra={"extra": {"product_id": product_id}})

    def find_product(self, product_id: int) -> Optional[Product]:
        for product in self.products:
            if product.id == product_id:
                return product.model_copy()
        return None

    def list_products(self) -> list[Product]:
        return [p.model_copy() for p in self.products]

    # ── ledgers ───────────────────────────────────────────────────────────────

    def record_purchase(self, product_id: int, quantity: int, unit_price) -> Purchase:
        _check_quantity(quantity)
        unit_price = _to_decimal(unit_price, "Purchase price")
        product = self._get_product(product_id)

        product.quantity += quantity
        purchase = Purchase(
            id=self.next_purchase_id,
            product_id=product_id,
            quantity=quantity,
            purchase_price=unit_price,
            time=self.clock(),
        )
        self.next_purchase_id += 1
        self.purchases.append(purchase)
        logger.info(
            "purchase recorded",
            extra={"extra": {
                "purchase_id": purchase.id,
                "product_id": product_id,
                "quantity": quantity,
            }},
        )
        return purchase

    def record_sale(self, product_id: int, quantity: int, unit_price) -> Sale:
        _check_quantity(quantity)
        unit_price = _to_decimal(unit_price, "Sale price")
        product = self._get_product(product_id)
        if product.quantity < quantity:
            logger.info(
                "sale rejected",
                extra={"extra": {
                    "product_id": product_id,
                    "requested": quantity,
                    "on_hand": product.quantity,
                }},
            )
            raise InsufficientStockError(
                f"{product.name} has only {product.quantity} in stock"
            )

        product.quantity -= quantity
        sale = Sale(
            id=self.next_sale_id,
            product_id=product_id,
            quantity=quantity,
            sale_price=unit_price,
            time=self.clock(),
        )
        self.next_sale_id += 1
        self.sales.append(sale)
        logger.info(
            "sale recorded",
            extra={"extra": {
                "sale_id": sale.id,
                "product_id": product_id,
                "quantity": quantity,
            }},
        )
        return sale

    def list_sales(self) -> list[Sale]:
        return list(self.sales)

    def list_purchases(self) -> list[Purchase]:
        return list(self.purchases)

    # ── aggregates ────────────────────────────────────────────────────────────

    def total_sales(self) -> Decimal:
        return sum((s.sale_price * s.quantity for s in self.sales), _ZERO)

    def total_purchases_cost(self) -> Decimal:
        return sum((p.purchase_price * p.quantity for p in self.purchases), _ZERO)

    def profit(self) -> Decimal:
        return self.total_sales() - self.total_purchases_cost()

    # ── managers ──────────────────────────────────────────────────────────────

    def add_manager(self, username: str, password: str) -> Manager:
        # duplicate usernames are allowed; authenticate() accepts any match
        manager = Manager(username=username, password_hash=hash_password(password))
        self.managers.append(manager)
        logger.info("manager added", extra={"extra": {"username": username}})
        return manager

    def authenticate(self, username: str, password: str) -> bool:
        ok = any(
            m.username == username and verify_password(password, m.password_hash)
            for m in self.managers
        )
        if not ok:
            logger.warning("authentication failed", extra={"extra": {"username": username}})
        return ok

    # ── persistence ───────────────────────────────────────────────────────────

    def to_snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            products=[p.model_copy() for p in self.products],
            sales=list(self.sales),
            purchases=list(self.purchases),
            managers=list(self.managers),
            next_product_id=self.next_product_id,
            next_sale_id=self.next_sale_id,
            next_purchase_id=self.next_purchase_id,
        )

    @classmethod
    def from_snapshot(cls, snapshot: StoreSnapshot, **kwargs) -> "Store":
        return cls(snapshot, **kwargs)

    def save_to_file(self, path: Path = DATA_FILE) -> None:
        save_snapshot(self.to_snapshot(), path)

    @classmethod
    def load_from_file(cls, path: Path = DATA_FILE, **kwargs) -> "Store":
        """Load the store saved at ``path``; a missing file gives a fresh store."""
        return cls(load_snapshot(path), **kwargs)

    # ── internals ─────────────────────────────────────────────────────────────

    def _get_product(self, product_id: int) -> Product:
        for product in self.products:
            if product.id == product_id:
                return product
        raise NotFoundError(f"Product {product_id} not found")
