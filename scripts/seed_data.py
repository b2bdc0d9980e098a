"""
Deterministic demo-data generator.

Produces:
  - 6 products with opening stock
  - ~60 purchases spread over Jan 2026 (restocking at 50-70 % of list price)
  - ~120 sales spread over Jan 2026 (at list price, occasionally discounted)
  - sales never exceed stock on hand; oversized sales are skipped

Run ``python -m scripts.seed_data`` to write the result to the data file.
"""

import random
from datetime import datetime, timedelta
from decimal import Decimal

from storekeeper.config import DATA_FILE
from storekeeper.errors import InsufficientStockError
from storekeeper.store import Store

SEED = 42
START = datetime(2026, 1, 1, 9, 0, 0)
END   = datetime(2026, 1, 31, 18, 0, 0)

PRODUCTS = [
    ("Widget",        "Standard steel widget",         Decimal("5.00"),  40),
    ("Gadget",        "Battery-powered gadget",        Decimal("24.99"), 15),
    ("Sprocket",      "12-tooth sprocket",             Decimal("3.25"),  80),
    ("Gizmo",         "Pocket gizmo, assorted colors", Decimal("12.50"), 25),
    ("Thingamajig",   "Spare part kit",                Decimal("49.00"), 6),
    ("Doohickey",     "Replacement knob",              Decimal("1.75"),  120),
]

N_PURCHASES = 60
N_SALES = 120


class _Clock:
    """Hands out non-decreasing timestamps between START and END."""

    def __init__(self, rng: random.Random, steps: int) -> None:
        self._now = START
        self._step = (END - START) / steps
        self._rng = rng

    def __call__(self) -> datetime:
        jitter = timedelta(seconds=self._rng.randint(1, int(self._step.total_seconds())))
        self._now = min(self._now + jitter, END)
        return self._now


def seed(store: Store) -> None:
    rng = random.Random(SEED)
    # the store stamps ledger entries with this clock
    store.clock = _Clock(rng, N_PURCHASES + N_SALES)

    # ── products ─────────────────────────────────────────────────────────────
    products = [
        store.add_product(name, description, price, quantity)
        for name, description, price, quantity in PRODUCTS
    ]

    # ── interleaved purchases and sales ──────────────────────────────────────
    events = ["purchase"] * N_PURCHASES + ["sale"] * N_SALES
    rng.shuffle(events)

    for kind in events:
        product = rng.choice(products)
        if kind == "purchase":
            cost = (product.price * Decimal(str(rng.uniform(0.5, 0.7)))).quantize(Decimal("0.01"))
            store.record_purchase(product.id, rng.randint(5, 30), cost)
        else:
            price = product.price
            if rng.random() < 0.15:
                price = (price * Decimal("0.9")).quantize(Decimal("0.01"))
            try:
                store.record_sale(product.id, rng.randint(1, 8), price)
            except InsufficientStockError:
                continue


if __name__ == "__main__":
    s = Store()
    seed(s)
    s.save_to_file(DATA_FILE)
    print(f"Seeded {len(s.products)} products, {len(s.purchases)} purchases, "
          f"{len(s.sales)} sales into {DATA_FILE}")
