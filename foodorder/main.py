"""Command-line front end for the food order planner.

Usage examples:
    foodorder food list
    foodorder food add "Veggie Wrap" 6.50
    foodorder plan create --budget 15 --date 2025-11-25 1 16
    foodorder plan show 2025-11-25 --pdf plan.pdf
    foodorder summary
"""
import argparse
import logging
import sqlite3
import sys
from pathlib import Path
from typing import Callable, List, Optional

from foodorder.domain.Errors import FoodOrderError
from foodorder.events.Event_Bus import EventBus, log_listener
from foodorder.events.event_helpers import subscribe_all
from foodorder.infra.Database import Database
from foodorder.infra.Storage_Gateway import StorageGateway
from foodorder.infra.paths import DB_FILE
from foodorder.infra.pdf_utils import generate_pdf_for_plan
from foodorder.logic.catalog.manager import FoodCatalogManager
from foodorder.logic.ordering.builder import OrderPlanBuilder
from foodorder.logic.reporting.plans import OrderPlanReporter
from foodorder.utilities.config import LOG_LEVEL, SEED_ON_CREATE
from foodorder.utilities.export_import import DataExporter, DataImporter

logger = logging.getLogger("foodorder")

Prompt = Callable[[str], str]


def _confirm(prompt: Prompt, question: str, assume_yes: bool) -> bool:
    if assume_yes:
        return True
    answer = prompt(f"{question} [y/N] ")
    return answer.strip().lower() in ("y", "yes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="foodorder", description="Plan food orders against a budget")
    parser.add_argument("--db", default=str(DB_FILE), help="SQLite database file")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Logging level (DEBUG, INFO, ...)")
    sub = parser.add_subparsers(dest="command", required=True)

    food = sub.add_parser("food", help="Manage the food catalog").add_subparsers(dest="action", required=True)
    food.add_parser("list", help="List all food items")
    add = food.add_parser("add", help="Add a food item")
    add.add_argument("name")
    add.add_argument("cost")
    upd = food.add_parser("update", help="Rename or re-price a food item")
    upd.add_argument("id", type=int)
    upd.add_argument("name")
    upd.add_argument("cost")
    dele = food.add_parser("delete", help="Delete a food item and its order entries")
    dele.add_argument("id", type=int)
    dele.add_argument("--yes", action="store_true", help="Do not ask for confirmation")
    search = food.add_parser("search", help="Search food items by name")
    search.add_argument("term")

    plan = sub.add_parser("plan", help="Create and inspect order plans").add_subparsers(dest="action", required=True)
    create = plan.add_parser("create", help="Create (or replace) the plan for a date")
    create.add_argument("--budget", required=True, help="Target budget for the plan")
    create.add_argument("--date", help="Plan date YYYY-MM-DD (default: today)")
    create.add_argument("--yes", action="store_true", help="Replace an existing plan without asking")
    create.add_argument("items", nargs="+", type=int, help="Food item ids to select, in order")
    show = plan.add_parser("show", help="Show the plan for a date")
    show.add_argument("date")
    show.add_argument("--pdf", help="Also write the plan as a PDF file")
    pdel = plan.add_parser("delete", help="Delete the plan for a date")
    pdel.add_argument("date")
    pdel.add_argument("--yes", action="store_true", help="Do not ask for confirmation")
    plan.add_parser("dates", help="List dates that have a plan")

    sub.add_parser("summary", help="Count food items and planned dates")

    export = sub.add_parser("export", help="Export data")
    export.add_argument("type", choices=["catalog", "plans"])
    export.add_argument("--format", choices=["json", "csv"], default="json")
    export.add_argument("--file", help="Output file path")

    imp = sub.add_parser("import", help="Import data")
    imp.add_argument("type", choices=["catalog"])
    imp.add_argument("file")
    imp.add_argument("--no-merge", action="store_true", help="Add every row, even names already present")
    return parser


def _print_items(items, out) -> None:
    if not items:
        print("No food items found.", file=out)
    for item in items:
        print(f"{item.id:>4}  {item.name:<30} ${item.cost:.2f}", file=out)


def _print_plan(plan, out) -> None:
    print(f"Order plan for {plan.date}", file=out)
    for entry in plan.entries:
        print(f"  - {entry.food_item_name:<30} ${(entry.food_item_cost or 0.0):.2f}", file=out)
    print(f"Target Budget: ${plan.target_cost:.2f}", file=out)
    print(f"Actual Cost:   ${plan.actual_cost:.2f}", file=out)
    print(f"Remaining:     ${plan.remaining:.2f}", file=out)


def _run_food(args, catalog: FoodCatalogManager, prompt: Prompt, out) -> int:
    if args.action == "list":
        _print_items(catalog.list_all(), out)
    elif args.action == "search":
        _print_items(catalog.search(args.term), out)
    elif args.action == "add":
        item = catalog.add(args.name, args.cost)
        print(f'Added "{item.name}" successfully! (id {item.id})', file=out)
    elif args.action == "update":
        if not catalog.update(args.id, args.name, args.cost):
            print(f"No food item with id {args.id}.", file=out)
            return 1
        print(f'Updated "{args.name.strip()}" successfully!', file=out)
    elif args.action == "delete":
        item = catalog.get(args.id)
        if item is None:
            print(f"No food item with id {args.id}.", file=out)
            return 1
        if not _confirm(prompt, f'Delete "{item.name}" and remove it from every order plan?', args.yes):
            print("Cancelled.", file=out)
            return 0
        catalog.delete(args.id)
        print(f'Deleted "{item.name}".', file=out)
    return 0


def _run_plan(args, gateway: StorageGateway, reporter: OrderPlanReporter, bus: EventBus,
              prompt: Prompt, out) -> int:
    if args.action == "create":
        builder = OrderPlanBuilder(gateway, event_bus=bus)
        if args.date and args.date != builder.date:
            question = f"An order plan already exists for {args.date}. Replace it?"
            if not builder.set_date(args.date, lambda d: _confirm(prompt, question, args.yes)):
                print("Cancelled; the existing plan was kept.", file=out)
                return 0
        elif gateway.has_entries_for_date(builder.date):
            if not _confirm(prompt, f"An order plan already exists for {builder.date}. Replace it?", args.yes):
                print("Cancelled; the existing plan was kept.", file=out)
                return 0
        builder.set_budget(args.budget)
        by_id = {item.id: item for item in builder.catalog}
        for item_id in args.items:
            item = by_id.get(item_id)
            if item is None:
                print(f"Skipped unknown food item id {item_id}.", file=out)
                continue
            result = builder.select(item)
            if result.refusal is not None:
                print(f'Skipped "{item.name}": {result.refusal.message} '
                      f'(${result.refusal.attempted_total:.2f} > ${builder.target_cost:.2f}).', file=out)
        outcome = builder.commit()
        print(outcome.message, file=out)
        if not outcome.saved:
            return 1
        _print_plan(reporter.search(builder.date), out)
    elif args.action == "show":
        plan = reporter.search(args.date)
        if plan is None:
            print(f"No order plan found for {args.date}.", file=out)
            return 1
        _print_plan(plan, out)
        if args.pdf:
            Path(args.pdf).write_bytes(generate_pdf_for_plan(plan))
            print(f"PDF written to {args.pdf}", file=out)
    elif args.action == "delete":
        if not _confirm(prompt, f"Delete the order plan for {args.date}?", args.yes):
            print("Cancelled.", file=out)
            return 0
        deleted = reporter.delete_plan(args.date)
        print(f"Deleted {deleted} entries for {args.date}.", file=out)
    elif args.action == "dates":
        dates = reporter.list_dates()
        if not dates:
            print("No order plans yet.", file=out)
        for d in dates:
            print(f"{d}  ${reporter.total_cost_for_date(d):.2f}", file=out)
    return 0


def main(argv: Optional[List[str]] = None, prompt: Prompt = input, out=None) -> int:
    out = out or sys.stdout
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    bus = EventBus()
    subscribe_all(log_listener, bus)
    database = Database(args.db, seed_items=None if SEED_ON_CREATE else ())
    try:
        gateway = StorageGateway(database)
        catalog = FoodCatalogManager(gateway, event_bus=bus)
        reporter = OrderPlanReporter(gateway, event_bus=bus)

        if args.command == "food":
            return _run_food(args, catalog, prompt, out)
        if args.command == "plan":
            return _run_plan(args, gateway, reporter, bus, prompt, out)
        if args.command == "summary":
            stats = reporter.summary()
            print(f"Food items: {stats['food_items']}", file=out)
            print(f"Order dates: {stats['order_dates']}", file=out)
            return 0
        if args.command == "export":
            exporter = DataExporter(catalog, reporter)
            path = Path(args.file) if args.file else None
            if args.type == "plans" and args.format == "csv":
                print("Order plans can only be exported as JSON.", file=out)
                return 1
            if args.type == "catalog" and args.format == "csv":
                result = exporter.export_catalog_csv(path)
            elif args.type == "catalog":
                result = exporter.export_catalog(path)
            else:
                result = exporter.export_plans(path)
            print(f"Exported to: {result}", file=out)
            return 0
        if args.command == "import":
            added = DataImporter(catalog).import_catalog(Path(args.file), merge=not args.no_merge)
            print(f"Imported {added} food items from {args.file}", file=out)
            return 0
    except FoodOrderError as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=out)
        return 1
    except (OSError, sqlite3.Error, ValueError) as e:
        logger.exception(f"{args.command} failed")
        print(f"Error: {e}", file=out)
        return 1
    finally:
        database.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
