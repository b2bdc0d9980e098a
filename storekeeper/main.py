"""
Interactive console front end for the store.

Loads the snapshot, asks for manager credentials once, then runs the menu
loop. Each action parses its own input and calls exactly one Store
operation; everything that can go wrong is reported as a message and the
loop carries on.
"""

import getpass
import logging
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Callable

from storekeeper import reports
from storekeeper.config import DATA_FILE
from storekeeper.errors import InvalidInputError, StorageError, StoreError
from storekeeper.logging_config import configure_logging
from storekeeper.models import LedgerLine, Product
from storekeeper.store import Store

logger = logging.getLogger(__name__)


# ── input helpers ─────────────────────────────────────────────────────────────

def _ask(message: str) -> str:
    return input(message).strip()


def _parse_int(text: str, field: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise InvalidInputError(f"Invalid {field}: {text!r}")


def _parse_decimal(text: str, field: str) -> Decimal:
    try:
        return Decimal(text)
    except InvalidOperation:
        raise InvalidInputError(f"Invalid {field}: {text!r}")


def _optional(text: str, parse: Callable[[str, str], object], field: str):
    """Empty answer means "leave unchanged"."""
    return None if text == "" else parse(text, field)


# ── formatting ────────────────────────────────────────────────────────────────

def _format_product(p: Product) -> str:
    return f"[{p.id}] {p.name} - {p.description} | ${p.price:.2f} | qty: {p.quantity}"


def _format_line(line: LedgerLine) -> str:
    name = line.product_name if line.product_name is not None else f"product {line.product_id}"
    return (
        f"[{line.entry_id}] {name} x{line.quantity} @ ${line.unit_price:.2f} each"
        f" = ${line.line_total:.2f} at {line.time:%Y-%m-%d %H:%M:%S}"
    )


def _print_summary(store: Store) -> None:
    summary = reports.profit_summary(store)
    print(f"Total Sales: ${summary.total_sales:.2f}")
    print(f"Total Purchases Cost: ${summary.total_purchases_cost:.2f}")
    print(f"Profit: ${summary.profit:.2f}")


# ── inventory ─────────────────────────────────────────────────────────────────

def list_products(store: Store) -> None:
    products = store.list_products()
    if not products:
        print("No products.")
        return
    print("\nInventory:")
    for p in products:
        print(_format_product(p))


def add_product(store: Store) -> None:
    name = _ask("Name: ")
    description = _ask("Description: ")
    price = _parse_decimal(_ask("Price: "), "price")
    quantity = _parse_int(_ask("Quantity: "), "quantity")
    product = store.add_product(name, description, price, quantity)
    print(f"Product added: {_format_product(product)}")


def edit_product(store: Store) -> None:
    product_id = _parse_int(_ask("Product id to edit: "), "id")
    name = _ask("New name (or empty to skip): ") or None
    description = _ask("New description (or empty to skip): ") or None
    price = _optional(_ask("New price (or empty to skip): "), _parse_decimal, "price")
    quantity = _optional(_ask("New quantity (or empty to skip): "), _parse_int, "quantity")
    product = store.edit_product(product_id, name, description, price, quantity)
    print(f"Updated: {_format_product(product)}")


def delete_product(store: Store) -> None:
    product_id = _parse_int(_ask("Product id to delete: "), "id")
    store.delete_product(product_id)
    print(f"Deleted product {product_id}")


# ── sales & purchases ─────────────────────────────────────────────────────────

def record_sale(store: Store) -> None:
    product_id = _parse_int(_ask("Product id: "), "product id")
    quantity = _parse_int(_ask("Quantity: "), "quantity")
    price = _parse_decimal(_ask("Sale price per unit: "), "price")
    sale = store.record_sale(product_id, quantity, price)
    print(f"Recorded sale {sale.id}")
    print(f"Total sale amount: ${sale.total:.2f}")


def list_sales(store: Store) -> None:
    print("\nSales history:")
    for line in reports.sales_history(store):
        print(_format_line(line))
    print(f"Total sales: ${store.total_sales():.2f}")


def record_purchase(store: Store) -> None:
    product_id = _parse_int(_ask("Product id: "), "product id")
    quantity = _parse_int(_ask("Quantity: "), "quantity")
    price = _parse_decimal(_ask("Purchase price per unit: "), "price")
    purchase = store.record_purchase(product_id, quantity, price)
    print(f"Recorded purchase {purchase.id}")
    print(f"Total cost: ${purchase.total:.2f}")


def list_purchases(store: Store) -> None:
    print("\nPurchase history:")
    for line in reports.purchase_history(store):
        print(_format_line(line))
    print(f"Total purchases cost: ${store.total_purchases_cost():.2f}")


# ── reports ───────────────────────────────────────────────────────────────────

def inventory_report(store: Store) -> None:
    print("\nInventory Report:")
    print(f"{'ID':<5} {'Name':<20} {'Price':<8} {'Qty':<6} Description")
    for line in reports.inventory_report(store):
        print(
            f"{line.product_id:<5} {line.name:<20} ${line.price:<7.2f} "
            f"{line.quantity:<6} {line.description}"
        )


def summary_report(store: Store) -> None:
    print("\nSales Summary:")
    _print_summary(store)


def full_report(store: Store) -> None:
    report = reports.full_report(store)
    print("\n--- FULL REPORT ---")
    print("Inventory:")
    for line in report.inventory:
        print(f"[{line.product_id}] {line.name} | ${line.price:.2f} | qty {line.quantity}")
    print("\nSales:")
    for line in report.sales:
        print(_format_line(line))
    print("\nPurchases:")
    for line in report.purchases:
        print(_format_line(line))
    print("\nSummary:")
    _print_summary(store)


# ── managers ──────────────────────────────────────────────────────────────────

def add_manager(store: Store) -> None:
    username = _ask("New manager username: ")
    if not username:
        raise InvalidInputError("Username must not be empty")
    password = getpass.getpass("New manager password: ")
    if not password:
        raise InvalidInputError("Password must not be empty")
    store.add_manager(username, password)
    print(f"Manager {username} added.")


# ── menu loop ─────────────────────────────────────────────────────────────────

INVENTORY_MENU = [
    ("List products", list_products),
    ("Add product", add_product),
    ("Edit product", edit_product),
    ("Delete product", delete_product),
]
SALES_MENU = [
    ("Record sale", record_sale),
    ("List sales", list_sales),
]
PURCHASES_MENU = [
    ("Record purchase", record_purchase),
    ("List purchases", list_purchases),
]
REPORTS_MENU = [
    ("Inventory report", inventory_report),
    ("Sales & Profit summary", summary_report),
    ("Purchase history", list_purchases),
    ("Full report (all)", full_report),
]


def _perform(action: Callable[[Store], None], store: Store) -> None:
    try:
        action(store)
    except StoreError as exc:
        print(f"Error: {exc}")


def submenu(title: str, actions: list, store: Store) -> None:
    back = str(len(actions) + 1)
    by_choice = {str(number): action for number, (_, action) in enumerate(actions, start=1)}
    while True:
        print(f"\n--- {title} ---")
        for number, (label, _) in enumerate(actions, start=1):
            print(f"{number}. {label}")
        print(f"{back}. Back")
        choice = _ask("Select option: ")
        if choice == back:
            return
        if choice in by_choice:
            _perform(by_choice[choice], store)
        else:
            print("Invalid selection.")


def run(store: Store, path: Path = DATA_FILE) -> None:
    while True:
        print("\n--- Main Menu ---")
        print("1. Inventory Management")
        print("2. Sales Management")
        print("3. Purchase Management")
        print("4. Reports")
        print("5. Add manager")
        print("6. Save & Exit")
        choice = _ask("Select option: ")
        if choice == "1":
            submenu("Inventory Menu", INVENTORY_MENU, store)
        elif choice == "2":
            submenu("Sales Menu", SALES_MENU, store)
        elif choice == "3":
            submenu("Purchases Menu", PURCHASES_MENU, store)
        elif choice == "4":
            submenu("Reports Menu", REPORTS_MENU, store)
        elif choice == "5":
            _perform(add_manager, store)
        elif choice == "6":
            try:
                store.save_to_file(path)
                print(f"Data saved to {path}")
            except StorageError as exc:
                logger.warning("save failed", extra={"extra": {"path": str(path)}})
                print(f"Error saving: {exc}")
            print("Goodbye!")
            return
        else:
            print("Invalid selection.")


def load_store(path: Path = DATA_FILE) -> Store:
    """Load the saved store, falling back to a fresh one if the file is unreadable."""
    try:
        return Store.load_from_file(path)
    except StorageError as exc:
        logger.warning("snapshot load failed", extra={"extra": {"path": str(path)}})
        print(f"Failed to load data: {exc}. Starting with empty store.")
        return Store()


def login(store: Store) -> bool:
    print("Please login as manager to continue.")
    username = _ask("Username: ")
    password = getpass.getpass("Password: ")
    if store.authenticate(username, password):
        print(f"Login success. Welcome, {username}!")
        return True
    print("Login failed.")
    return False


def main() -> None:
    configure_logging()
    print("Welcome to the Storekeeper inventory management system")
    print("Loading data...")
    try:
        store = load_store(DATA_FILE)
        if not login(store):
            print("Exiting due to authentication failure.")
            sys.exit(1)
        run(store, DATA_FILE)
    except (KeyboardInterrupt, EOFError):
        print("\nInterrupted by user. Exiting without saving.")
        sys.exit(0)


if __name__ == "__main__":
    main()
