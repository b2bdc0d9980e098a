from decimal import Decimal, localcontext
from typing import Union

from storekeeper.models import (
    FullReport,
    InventoryLine,
    LedgerLine,
    ProfitSummary,
    Purchase,
    Sale,
)
from storekeeper.store import Store

_TWO_DP = Decimal("0.01")


def _round(amount: Decimal) -> Decimal:
    # totals over long ledgers can outgrow the default precision
    with localcontext() as ctx:
        ctx.prec = 60
        return amount.quantize(_TWO_DP)


def _ledger_lines(
    entries: list[Union[Sale, Purchase]],
    store: Store,
    skip_unresolved: bool,
) -> list[LedgerLine]:
    names = {p.id: p.name for p in store.list_products()}
    lines = []
    for entry in entries:
        name = names.get(entry.product_id)
        # entries pointing at a deleted product
        if name is None and skip_unresolved:
            continue
        unit_price = entry.sale_price if isinstance(entry, Sale) else entry.purchase_price
        lines.append(LedgerLine(
            entry_id=entry.id,
            product_id=entry.product_id,
            product_name=name,
            quantity=entry.quantity,
            unit_price=unit_price,
            line_total=_round(entry.total),
            time=entry.time,
        ))
    return lines


def inventory_report(store: Store) -> list[InventoryLine]:
    return [
        InventoryLine(
            product_id=p.id,
            name=p.name,
            description=p.description,
            price=p.price,
            quantity=p.quantity,
            stock_value=_round(p.price * p.quantity),
        )
        for p in store.list_products()
    ]


def sales_history(store: Store, skip_unresolved: bool = True) -> list[LedgerLine]:
    return _ledger_lines(store.list_sales(), store, skip_unresolved)


def purchase_history(store: Store, skip_unresolved: bool = True) -> list[LedgerLine]:
    return _ledger_lines(store.list_purchases(), store, skip_unresolved)


def profit_summary(store: Store) -> ProfitSummary:
    """Totals over the whole ledgers, rounded to 2 dp for display."""
    sales = store.list_sales()
    purchases = store.list_purchases()
    return ProfitSummary(
        total_sales=_round(store.total_sales()),
        total_purchases_cost=_round(store.total_purchases_cost()),
        profit=_round(store.profit()),
        sale_count=len(sales),
        purchase_count=len(purchases),
        units_sold=sum(s.quantity for s in sales),
        units_purchased=sum(p.quantity for p in purchases),
    )


def full_report(store: Store) -> FullReport:
    """Everything at once. Ledger lines for deleted products are kept here."""
    return FullReport(
        inventory=inventory_report(store),
        sales=sales_history(store, skip_unresolved=False),
        purchases=purchase_history(store, skip_unresolved=False),
        summary=profit_summary(store),
    )
