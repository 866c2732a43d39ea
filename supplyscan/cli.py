"""CLI entry point."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from . import catalogue as catalogue_ops
from .config import AppConfig, load_config
from .errors import DuplicateCodeError, InvalidQuantityError, SupplyScanError
from .models import Product, canonical_code
from .session import ScanSession
from .storage import StorageBackend, create_storage
from .stores import CatalogueStore, OrderHistoryStore
from .tracking import aggregate, default_range, parse_timestamp

logger = logging.getLogger(__name__)

_SCAN_HELP = """\
Scan or type a product code, then enter a quantity.
  <Enter> at the quantity prompt accepts the default, 'c' cancels.
Commands:
  /find TEXT   search the catalogue
  /pick CODE   add a catalogue product by code
  /edit CODE   change the quantity of a cart line
  /rm CODE     remove a cart line
  /list        show the cart
  /clear       empty the cart
  /done        save the order and write the order file
  /quit        leave without saving
  /help        show this help"""


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="supplyscan",
        description="Pathology supplies: scan orders, track history, manage the catalogue",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="path to the configuration file (TOML)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="show informational logs"
    )

    sub = parser.add_subparsers(dest="command")

    # catalogue
    cat_parser = sub.add_parser("catalogue", help="manage the product catalogue")
    cat_sub = cat_parser.add_subparsers(dest="action")

    cat_list = cat_sub.add_parser("list", help="list all products")
    cat_list.add_argument("--json", action="store_true", help="output JSON")

    cat_import = cat_sub.add_parser(
        "import", help="replace the catalogue from a text file"
    )
    cat_import.add_argument("file", type=str, help="alternating description/code lines")

    cat_add = cat_sub.add_parser("add", help="add a product")
    cat_add.add_argument("code", type=str)
    cat_add.add_argument("description", type=str)
    cat_add.add_argument(
        "--yes", "-y", action="store_true", help="overwrite an existing code without asking"
    )

    cat_edit = cat_sub.add_parser("edit", help="change a product's code or description")
    cat_edit.add_argument("old_code", type=str)
    cat_edit.add_argument("--code", type=str, default=None, help="new product code")
    cat_edit.add_argument("--description", type=str, default=None, help="new description")

    cat_delete = cat_sub.add_parser("delete", help="delete a product")
    cat_delete.add_argument("code", type=str)
    cat_delete.add_argument(
        "--yes", "-y", action="store_true", help="delete without asking"
    )

    cat_search = cat_sub.add_parser("search", help="search by code or description")
    cat_search.add_argument("query", type=str)

    # scan
    scan_parser = sub.add_parser("scan", help="scan items and build an order")
    scan_parser.add_argument(
        "--output-dir", type=str, default=None, help="where to write the order file"
    )

    # history
    hist_parser = sub.add_parser("history", help="aggregated order history")
    hist_parser.add_argument("--start", type=str, default=None, metavar="YYYY-MM-DD")
    hist_parser.add_argument("--end", type=str, default=None, metavar="YYYY-MM-DD")
    hist_parser.add_argument(
        "--all", action="store_true", dest="all_dates", help="ignore the date range"
    )
    hist_parser.add_argument("--filter", type=str, default="", help="code or description text")
    hist_parser.add_argument("--json", action="store_true", help="output JSON")
    hist_parser.add_argument("--pdf", type=str, default=None, metavar="FILE", help="write a PDF report")

    # last-order
    last_parser = sub.add_parser("last-order", help="show the most recent order")
    last_parser.add_argument("--json", action="store_true", help="output JSON")
    last_parser.add_argument("--pdf", type=str, default=None, metavar="FILE", help="write a PDF")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    backend = create_storage(config)

    try:
        match args.command:
            case "catalogue":
                if args.action is None:
                    cat_parser.print_help()
                    sys.exit(1)
                _cmd_catalogue(backend, args)
            case "scan":
                _cmd_scan(config, backend, args)
            case "history":
                _cmd_history(config, backend, args)
            case "last-order":
                _cmd_last_order(backend, args)
    except SupplyScanError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        backend.close()


def _confirm(prompt: str) -> bool:
    try:
        answer = input(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def _print_products(products: list[Product]) -> None:
    for p in products:
        print(f"  {p.code:<14} {p.description}")


def _cmd_catalogue(backend: StorageBackend, args) -> None:
    store = CatalogueStore(backend)
    products = store.load()

    match args.action:
        case "list":
            if args.json:
                print(json.dumps([p.to_dict() for p in products], ensure_ascii=False, indent=2))
                return
            if not products:
                print("The catalogue is empty.")
                return
            print(f"Catalogue: {len(products)} products")
            _print_products(products)

        case "import":
            imported = catalogue_ops.read_import_file(args.file)
            store.save(imported)
            logger.info("Replaced %d products with %d from %s", len(products), len(imported), args.file)
            print(f"Successfully imported {len(imported)} items from text file.")

        case "add":
            exists = catalogue_ops.find(products, args.code) is not None
            try:
                updated = catalogue_ops.add_product(
                    products, args.code, args.description, overwrite=args.yes
                )
            except DuplicateCodeError as e:
                if not _confirm(f'Product code "{e.code}" already exists. Overwrite it?'):
                    print("Nothing changed.")
                    return
                updated = catalogue_ops.add_product(
                    products, args.code, args.description, overwrite=True
                )
            store.save(updated)
            print("Product updated." if exists else "Product added.")

        case "edit":
            current = catalogue_ops.find(products, args.old_code)
            if current is None:
                print(f"Product code {args.old_code!r} not found.", file=sys.stderr)
                sys.exit(1)
            new_product = Product(
                code=args.code if args.code is not None else current.code,
                description=(
                    args.description.strip()
                    if args.description is not None
                    else current.description
                ),
                category=current.category,
            )
            updated = catalogue_ops.rename_key(products, current.code, new_product)
            store.save(updated)
            print("Product updated.")

        case "delete":
            if catalogue_ops.find(products, args.code) is None:
                print(f"Product code {args.code!r} not found.")
                return
            if not args.yes and not _confirm("Are you sure you want to delete this product?"):
                print("Nothing changed.")
                return
            store.save(catalogue_ops.delete(products, args.code))
            print("Product deleted.")

        case "search":
            hits = catalogue_ops.search(products, args.query)
            if not hits:
                print("No matching products.")
                return
            _print_products(hits)


def _print_cart(session: ScanSession) -> None:
    if not session.cart:
        print("Cart is empty.")
        return
    total = sum(item.quantity for item in session.cart)
    print(f"Cart: {len(session.cart)} lines, {total} units")
    for item in session.cart:
        print(f"  {item.code:<14} x{item.quantity:<5} {item.description}")


def _prompt_quantity(session: ScanSession) -> None:
    """Ask for the pending item's quantity until it is valid or cancelled."""
    pending = session.pending
    mode = "set" if pending.edit_mode else "add"
    print(f"{pending.code}  {pending.description}")
    while session.pending is not None:
        try:
            answer = input(f"Quantity to {mode} [{pending.quantity}]: ").strip()
        except EOFError:
            session.cancel()
            return
        if answer.lower() in ("c", "cancel"):
            session.cancel()
            print("Cancelled.")
            return
        try:
            session.confirm(answer or None)
        except InvalidQuantityError as e:
            print(str(e))


def _cmd_scan(config: AppConfig, backend: StorageBackend, args) -> None:
    products = CatalogueStore(backend).load()
    session = ScanSession(products, OrderHistoryStore(backend))
    output_dir = args.output_dir or config.export.output_dir

    print(_SCAN_HELP)
    while True:
        try:
            line = input("scan> ").strip()
        except EOFError:
            line = "/quit"
        if not line:
            continue

        command, _, rest = line.partition(" ")
        rest = rest.strip()

        match command:
            case "/help":
                print(_SCAN_HELP)
            case "/list":
                _print_cart(session)
            case "/find":
                hits = catalogue_ops.search(products, rest)
                if hits:
                    _print_products(hits)
                else:
                    print("No matching products.")
            case "/pick":
                product = catalogue_ops.find(products, rest)
                if product is None:
                    print(f"Product code {rest!r} not in the catalogue.")
                    continue
                session.select(product)
                _prompt_quantity(session)
            case "/edit":
                try:
                    session.edit(canonical_code(rest))
                except KeyError:
                    print(f"{rest!r} is not in the cart.")
                    continue
                _prompt_quantity(session)
            case "/rm":
                session.remove(canonical_code(rest))
            case "/clear":
                if session.cart and not _confirm("Clear entire order?"):
                    continue
                session.clear()
            case "/done":
                try:
                    order, path = session.finalize(output_dir)
                except SupplyScanError as e:
                    print(str(e))
                    continue
                print(f"Order file written to {path} and saved to history ({order.id}).")
            case "/quit":
                if session.cart:
                    print(f"Discarded {len(session.cart)} unsaved cart lines.")
                return
            case _ if command.startswith("/"):
                print(f"Unknown command {command!r}; type /help.")
            case _:
                try:
                    session.scan(line)
                except SupplyScanError as e:
                    print(str(e))
                    continue
                _prompt_quantity(session)


def _cmd_history(config: AppConfig, backend: StorageBackend, args) -> None:
    orders = OrderHistoryStore(backend).load()
    products = CatalogueStore(backend).load()

    if args.all_dates:
        start, end = "", ""
    else:
        default_start, default_end = default_range(days=config.tracking.default_days)
        start = args.start or default_start.isoformat()
        end = args.end or default_end.isoformat()

    try:
        rows = aggregate(orders, start, end, args.filter, products)
    except ValueError as e:
        print(f"Invalid date: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps([r.to_dict() for r in rows], ensure_ascii=False, indent=2))
    elif not rows:
        print("No orders found for this period or filter.")
    else:
        period = f"{start} to {end}" if start and end else "all dates"
        print(f"Order totals ({period}):")
        for r in rows:
            print(f"  {r.code:<14} {r.quantity:>6}  {r.description}")

    if args.pdf:
        from .pdf import generate_report_pdf

        try:
            path = generate_report_pdf(
                rows, Path(args.pdf), start_date=start, end_date=end, text_filter=args.filter
            )
        except ImportError as e:
            print(f"PDF error: {e}", file=sys.stderr)
            sys.exit(1)
        print(f"PDF saved: {path}")


def _cmd_last_order(backend: StorageBackend, args) -> None:
    order = OrderHistoryStore(backend).last()

    if args.json:
        print(json.dumps(order.to_dict(), ensure_ascii=False, indent=2))
    else:
        placed = parse_timestamp(order.date).astimezone()
        print(f"Order {order.id}")
        print(f"  Date: {placed:%d/%m/%Y}  Time: {placed:%H:%M:%S}")
        for item in order.items:
            print(f"  {item.code:<14} x{item.quantity:<5} {item.description}")

    if args.pdf:
        from .pdf import generate_order_pdf

        try:
            path = generate_order_pdf(order, Path(args.pdf))
        except ImportError as e:
            print(f"PDF error: {e}", file=sys.stderr)
            sys.exit(1)
        print(f"PDF saved: {path}")
