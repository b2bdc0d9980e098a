"""
Tests for report building and the demo seed data.
"""

from decimal import Decimal
from datetime import datetime

from storekeeper import reports
from storekeeper.store import Store
from scripts.seed_data import seed


JAN5 = datetime(2026, 1, 5, 12, 0)


def make_store() -> Store:
    s = Store(clock=lambda: JAN5)
    s.add_product("Widget", "desc", Decimal("5.00"), 10)
    s.add_product("Gadget", "thing", Decimal("2.50"), 4)
    s.record_purchase(1, 10, Decimal("3.00"))
    s.record_purchase(2, 2, Decimal("1.00"))
    s.record_sale(1, 4, Decimal("7.00"))
    s.record_sale(2, 3, Decimal("2.50"))
    return s


class TestInventoryReport:
    def test_lines_and_stock_value(self):
        lines = reports.inventory_report(make_store())
        assert [l.product_id for l in lines] == [1, 2]
        assert lines[0].quantity == 16
        assert lines[0].stock_value == Decimal("80.00")
        assert lines[1].quantity == 3
        assert lines[1].stock_value == Decimal("7.50")


class TestHistory:
    def test_sales_history(self):
        lines = reports.sales_history(make_store())
        assert [l.entry_id for l in lines] == [1, 2]
        assert lines[0].product_name == "Widget"
        assert lines[0].line_total == Decimal("28.00")
        assert lines[0].unit_price == Decimal("7.00")
        assert lines[0].time == JAN5

    def test_purchase_history(self):
        lines = reports.purchase_history(make_store())
        assert [l.line_total for l in lines] == [Decimal("30.00"), Decimal("2.00")]

    def test_deleted_product_skipped(self):
        store = make_store()
        store.delete_product(2)
        assert [l.product_id for l in reports.sales_history(store)] == [1]
        assert [l.product_id for l in reports.purchase_history(store)] == [1]
        # the totals still include the orphaned entries
        assert store.total_sales() == Decimal("35.50")


class TestLargeAmounts:
    def test_reports_at_upper_bounds(self):
        store = Store(clock=lambda: JAN5)
        price = Decimal("999999999999.999999")
        store.add_product("Yacht", "big", price, 10**9)
        for _ in range(3):
            store.record_purchase(1, 10**9, price)

        [line] = reports.inventory_report(store)
        assert line.stock_value == (price * 4 * 10**9).quantize(Decimal("0.01"))
        summary = reports.full_report(store).summary
        assert summary.total_purchases_cost == Decimal("2999999999999999997000.00")
        assert summary.units_purchased == 3 * 10**9


class TestSummary:
    def test_profit_summary(self):
        summary = reports.profit_summary(make_store())
        assert summary.total_sales == Decimal("35.50")
        assert summary.total_purchases_cost == Decimal("32.00")
        assert summary.profit == Decimal("3.50")
        assert summary.sale_count == 2
        assert summary.purchase_count == 2
        assert summary.units_sold == 7
        assert summary.units_purchased == 12

    def test_empty_store(self):
        summary = reports.profit_summary(Store())
        assert summary.total_sales == Decimal("0.00")
        assert summary.profit == Decimal("0.00")
        assert summary.sale_count == 0

    def test_full_report_keeps_orphans(self):
        store = make_store()
        store.delete_product(2)
        report = reports.full_report(store)
        assert len(report.inventory) == 1
        assert len(report.sales) == 2
        assert report.sales[1].product_name is None
        assert report.summary.total_sales == Decimal("35.50")


class TestSeedData:
    def test_seed_is_deterministic(self):
        a, b = Store(), Store()
        seed(a)
        seed(b)
        assert a.to_snapshot() == b.to_snapshot()

    def test_seed_respects_stock(self):
        store = Store()
        seed(store)
        assert len(store.products) == 6
        assert store.purchases
        assert store.sales
        assert all(p.quantity >= 0 for p in store.products)
        # stock on hand equals opening stock + purchases - sales
        for p in store.products:
            bought = sum(x.quantity for x in store.purchases if x.product_id == p.id)
            sold = sum(x.quantity for x in store.sales if x.product_id == p.id)
            opening = p.quantity - bought + sold
            assert opening >= 0

    def test_seed_timestamps_within_january(self):
        store = Store()
        seed(store)
        times = [e.time for e in store.purchases + store.sales]
        assert all(t.year == 2026 and t.month == 1 for t in times)
