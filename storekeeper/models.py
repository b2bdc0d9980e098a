from pydantic import BaseModel, ConfigDict, Field, model_validator
from datetime import datetime
from decimal import Decimal
from typing import Optional


class Product(BaseModel):
    id: int
    name: str
    description: str
    price: Decimal = Field(ge=0)
    quantity: int


class Purchase(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    product_id: int
    quantity: int = Field(gt=0)
    purchase_price: Decimal  # per unit
    time: datetime

    @property
    def total(self) -> Decimal:
        return self.purchase_price * self.quantity


class Sale(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    product_id: int
    quantity: int = Field(gt=0)
    sale_price: Decimal  # per unit
    time: datetime

    @property
    def total(self) -> Decimal:
        return self.sale_price * self.quantity


class Manager(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    password_hash: str  # hex sha-256


class StoreSnapshot(BaseModel):
    products: list[Product] = []
    sales: list[Sale] = []
    purchases: list[Purchase] = []
    managers: list[Manager] = []
    next_product_id: int = Field(default=1, ge=1)
    next_sale_id: int = Field(default=1, ge=1)
    next_purchase_id: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def check_ids(self) -> "StoreSnapshot":
        for name, records, counter in (
            ("product", self.products, self.next_product_id),
            ("sale", self.sales, self.next_sale_id),
            ("purchase", self.purchases, self.next_purchase_id),
        ):
            ids = [r.id for r in records]
            if any(a >= b for a, b in zip(ids, ids[1:])):
                raise ValueError(f"{name} ids must be unique and increasing")
            if ids and counter <= ids[-1]:
                raise ValueError(
                    f"next_{name}_id {counter} must be greater than {name} id {ids[-1]}"
                )
        return self


# ── Report models ────────────────────────────────────────────────────────────

class InventoryLine(BaseModel):
    product_id: int
    name: str
    description: str
    price: Decimal
    quantity: int
    stock_value: Decimal


class LedgerLine(BaseModel):
    entry_id: int
    product_id: int
    # None when the product has since been deleted
    product_name: Optional[str] = None
    quantity: int
    unit_price: Decimal
    line_total: Decimal
    time: datetime


class ProfitSummary(BaseModel):
    total_sales: Decimal
    total_purchases_cost: Decimal
    profit: Decimal
    sale_count: int
    purchase_count: int
    units_sold: int
    units_purchased: int


class FullReport(BaseModel):
    inventory: list[InventoryLine]
    sales: list[LedgerLine]
    purchases: list[LedgerLine]
    summary: ProfitSummary
