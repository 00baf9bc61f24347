"""CLI entry point for the pantry tracker."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import date

from dotenv import load_dotenv

from .config import load_config
from .db import InventoryDB
from .errors import PantryError
from .expiry import classify, days_until_text, group_by_location, summarize
from .models import StorageLocation
from .reminders import create_backend
from .service import PantryService
from .sweep import ReminderSweeper


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="pantrypal",
        description="Kitchen inventory with expiration reminders",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to the config file (TOML)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log at INFO level"
    )

    sub = parser.add_subparsers(dest="command")

    # add
    add_parser = sub.add_parser("add", help="Add an item to the inventory")
    add_parser.add_argument("name")
    add_parser.add_argument("quantity", help='e.g. "250g", "500ml", "1"')
    add_parser.add_argument(
        "expires", type=date.fromisoformat, help="Expiration date (YYYY-MM-DD)"
    )
    add_parser.add_argument(
        "--location", "-l", type=str, default="Pantry",
        help="Pantry / Fridge / Freezer",
    )

    # list
    list_parser = sub.add_parser("list", help="Show the inventory by location")
    list_parser.add_argument("--location", "-l", type=str, default=None)
    list_parser.add_argument("--json", action="store_true", help="Output JSON")

    # delete
    del_parser = sub.add_parser("delete", help="Delete an item and its reminder")
    del_parser.add_argument("item_id")

    # summary
    sum_parser = sub.add_parser("summary", help="Show expiration counts")
    sum_parser.add_argument("--json", action="store_true", help="Output JSON")

    # sweep
    sweep_parser = sub.add_parser("sweep", help="Reconcile reminders now")
    sweep_parser.add_argument(
        "--date", type=date.fromisoformat, default=None,
        help="Pretend today is this date (YYYY-MM-DD)",
    )

    # reminders
    rem_parser = sub.add_parser("reminders", help="Show pending reminders")
    rem_parser.add_argument(
        "--clear", action="store_true", help="Cancel all pending reminders"
    )

    # serve
    sub.add_parser("serve", help="Run the daily sweep and deliver reminders")

    # lookup
    lookup_parser = sub.add_parser("lookup", help="Look up a product by barcode")
    lookup_parser.add_argument("barcode")

    # recipes
    recipe_parser = sub.add_parser(
        "recipes", help="Find recipes using ingredients you have"
    )
    recipe_parser.add_argument(
        "ingredients", nargs="*",
        help="Ingredient names (default: everything in the inventory)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.INFO if args.verbose or args.command == "serve" else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    load_dotenv()

    config = load_config(args.config)

    try:
        match args.command:
            case "add":
                asyncio.run(_cmd_add(config, args))
            case "list":
                _cmd_list(config, args)
            case "delete":
                asyncio.run(_cmd_delete(config, args))
            case "summary":
                _cmd_summary(config, args)
            case "sweep":
                asyncio.run(_cmd_sweep(config, args))
            case "reminders":
                asyncio.run(_cmd_reminders(config, args))
            case "serve":
                asyncio.run(_cmd_serve(config))
            case "lookup":
                asyncio.run(_cmd_lookup(config, args))
            case "recipes":
                asyncio.run(_cmd_recipes(config, args))
    except PantryError as e:
        print(e.message, file=sys.stderr)
        sys.exit(1)


def _open(config):
    store = InventoryDB(config.database.path)
    backend = create_backend(config)
    sweeper = ReminderSweeper.from_config(config, store, backend)
    return store, backend, sweeper


def _close(store, backend) -> None:
    store.close()
    close = getattr(backend, "close", None)
    if close is not None:
        close()


async def _cmd_add(config, args) -> None:
    store, backend, sweeper = _open(config)
    try:
        service = PantryService(store, sweeper)
        item, report = await service.add_item(
            args.name,
            args.quantity,
            args.expires,
            StorageLocation.parse(args.location),
        )
        print(f"Added {item.name} ({item.quantity}) to {item.storage_location.value}")
        print(f"  id: {item.id}")
        if report.scheduled:
            print(f"  {len(report.scheduled)} reminder(s) scheduled")
    finally:
        _close(store, backend)


def _cmd_list(config, args) -> None:
    location = StorageLocation.parse(args.location) if args.location else None
    store = InventoryDB(config.database.path)
    try:
        items = store.list_items(location)
    finally:
        store.close()

    today = date.today()
    exp = config.expiry

    if args.json:
        data = [
            {
                "id": i.id,
                "name": i.name,
                "quantity": i.quantity,
                "expiration_date": i.expiration_date.isoformat(),
                "storage_location": i.storage_location.value,
                "urgency": classify(
                    i.expiration_date,
                    today,
                    critical_days=exp.critical_days,
                    warning_days=exp.warning_days,
                    caution_days=exp.caution_days,
                ).value,
            }
            for i in items
        ]
        print(json.dumps(data, ensure_ascii=False, indent=2))
        return

    if not items:
        print("No items yet.")
        return

    for loc, group in group_by_location(items).items():
        if location is not None and loc is not location:
            continue
        count = len(group)
        print(f"{loc.value} ({count} item{'' if count == 1 else 's'})")
        for i in group:
            when = days_until_text(i.expiration_date, today)
            print(
                f"  {i.name:<20} {i.quantity:<10} "
                f"{i.expiration_date.isoformat()}  {when:<10} {i.id}"
            )


async def _cmd_delete(config, args) -> None:
    store, backend, sweeper = _open(config)
    try:
        service = PantryService(store, sweeper)
        await service.delete_item(args.item_id)
        print(f"Deleted {args.item_id}")
    finally:
        _close(store, backend)


def _cmd_summary(config, args) -> None:
    store = InventoryDB(config.database.path)
    try:
        items = store.list_items()
    finally:
        store.close()

    exp = config.expiry
    summary = summarize(
        items,
        date.today(),
        critical_days=exp.critical_days,
        warning_days=exp.warning_days,
        caution_days=exp.caution_days,
        soon_days=exp.soon_days,
    )

    if args.json:
        print(json.dumps(summary.to_dict(), ensure_ascii=False, indent=2))
        return

    print(f"Total items:    {summary.total}")
    print(f"Expiring soon:  {summary.expiring_soon}")
    for urgency, n in summary.by_urgency.items():
        print(f"  {urgency.value:<10} {n}")
    for loc, n in summary.by_location.items():
        print(f"  {loc.value:<10} {n}")


async def _cmd_sweep(config, args) -> None:
    store, backend, sweeper = _open(config)
    try:
        report = await sweeper.run_sweep(args.date)
    finally:
        _close(store, backend)

    if not report.permitted:
        print("Reminders are disabled; nothing scheduled.")
        return
    print(
        f"Scheduled {len(report.scheduled)}, cancelled {len(report.cancelled)}, "
        f"unchanged {len(report.plan.unchanged) if report.plan else 0}"
    )
    for rid, message in report.failures.items():
        print(f"  failed {rid}: {message}", file=sys.stderr)


async def _cmd_reminders(config, args) -> None:
    backend = create_backend(config)
    try:
        if args.clear:
            count = await backend.cancel_all()
            print(f"Cancelled {count} reminder(s)")
            return
        pending = await backend.list_pending()
    finally:
        close = getattr(backend, "close", None)
        if close is not None:
            close()

    if not pending:
        print("No pending reminders.")
        return
    print(f"Pending reminders: {len(pending)}")
    for r in pending:
        repeat = " (daily)" if r.repeats_daily else ""
        print(f"  {r.fire_at:%Y-%m-%d %H:%M}{repeat}  {r.title}: {r.body}")


async def _cmd_serve(config) -> None:
    from .scheduler import PantryScheduler

    store, backend, sweeper = _open(config)
    scheduler = PantryScheduler(config, sweeper, backend)
    try:
        # Catch up immediately rather than waiting for the first cron tick
        await sweeper.run_sweep()
        scheduler.start()
        for job in scheduler.get_jobs():
            print(f"  {job['id']}: next run {job['next_run']}")
        await asyncio.Event().wait()
    finally:
        scheduler.stop()
        _close(store, backend)


async def _cmd_lookup(config, args) -> None:
    from .lookup import ProductLookup

    client = ProductLookup(
        base_url=config.products.base_url,
        timeout=config.products.timeout,
    )
    info = await client.lookup(args.barcode)
    print(f"Name:     {info.display_name or '-'}")
    print(f"Quantity: {info.quantity or '-'}")


async def _cmd_recipes(config, args) -> None:
    from .lookup import RecipeCatalog

    names = args.ingredients
    if not names:
        store = InventoryDB(config.database.path)
        try:
            names = sorted({i.name for i in store.list_items()})
        finally:
            store.close()

    rc = config.recipes
    catalog = RecipeCatalog(
        api_key=rc.api_key,
        base_url=rc.base_url,
        number=rc.number,
        ranking=rc.ranking,
        ignore_pantry=rc.ignore_pantry,
        timeout=rc.timeout,
    )
    recipes = await catalog.find_by_ingredients(names)

    if not recipes:
        print("No recipes found. Try different ingredients.")
        return
    print(f"Recipes using {', '.join(names)}:")
    for r in recipes:
        print(f"  {r.title}  (uses {r.used_count}, missing {r.missed_count})")
        if r.missed_ingredients:
            print(f"    need: {', '.join(i.name for i in r.missed_ingredients)}")


if __name__ == "__main__":
    main()
