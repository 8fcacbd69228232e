"""Command-line interface for the item catalog.

Environment variables (see `itemdb.config`) supply defaults for every
storage option; command-line flags take precedence.
"""

import argparse
import json
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv
from tqdm import tqdm

from .catalog import ItemCatalog
from .config import build_catalog, load_settings
from .core.errors import CatalogError
from .core.models import Item
from .log import setup_logging


def print_item(item: Item) -> None:
    id_str = str(item.id) if item.id is not None else "-"
    print(f"Id:       {id_str}")
    print(f"Name:     {item.name}")
    print(f"Category: {item.category} (id {item.category_id})")
    print(f"Image:    {item.image_filename}")


def print_table(items: list[Item]) -> None:
    print(f"{'#':>4} {'Id':>6} {'Name':<24} {'Category':<18} {'Image':<20}")
    print("-" * 80)
    for position, item in enumerate(items):
        id_str = str(item.id) if item.id is not None else "-"
        print(f"{position:>4} {id_str:>6} {item.name[:24]:<24} {item.category[:18]:<18} {item.image_filename[:18]}..")
    print(f"\nTotal: {len(items)} item(s)")


def add(catalog: ItemCatalog, args):
    """Add one item."""
    item = catalog.add_item(args.name, args.category, args.image)
    print(f"Added: {item.name} ({item.image_filename})")
    print_item(item)


def list_items(catalog: ItemCatalog, args):
    """List all items in storage order."""
    items = catalog.list_all()
    if args.json:
        print(json.dumps({"items": [item.to_dict() for item in items]}, ensure_ascii=False, indent=2))
        return
    if not items:
        print("Catalog is empty")
        return
    print_table(items)


def show(catalog: ItemCatalog, args):
    """Show the item at a zero-based position."""
    print_item(catalog.get_by_position(args.position))


def search(catalog: ItemCatalog, args):
    """Search items by exact keyword."""
    items = catalog.search(args.keyword)
    if not items:
        print(f"No items found matching: {args.keyword}")
        return
    print_table(items)


def categories(catalog: ItemCatalog, args):
    """List categories and their ids."""
    found = catalog.categories()
    if not found:
        print("No categories yet")
        return
    for category in found:
        print(f"{category.id:>6}  {category.name}")


def load_import_file(path: Path) -> list[dict]:
    """Load item entries from a YAML file with an `items` list."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise CatalogError(f"Could not read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid YAML in {path}: {e}") from e
    entries = data.get("items") if isinstance(data, dict) else None
    if not entries:
        raise CatalogError(f"{path} must contain a non-empty 'items' list")
    return entries


def import_items(catalog: ItemCatalog, args):
    """Bulk-add items listed in a YAML file."""
    path = Path(args.file)
    entries = load_import_file(path)

    added = 0
    failed = 0
    for entry in tqdm(entries, desc="Importing", unit="item"):
        try:
            image = Path(entry["image"])
            if not image.is_absolute():
                image = path.parent / image
            catalog.add_item(str(entry.get("name") or ""), str(entry.get("category") or ""), image)
            added += 1
        except (CatalogError, KeyError, TypeError) as e:
            tqdm.write(f"Warning: Could not import {entry!r}: {e}")
            failed += 1

    print(f"\nImported {added} item(s), {failed} failure(s). Total in catalog: {catalog.count()}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Item Catalog - Store items with categories and content-addressed images"
    )
    parser.add_argument("--config", "-c", help="YAML config file (default: $ITEMDB_CONFIG)")
    parser.add_argument("--backend", "-b", choices=["sqlite", "json"], help="Storage backend")
    parser.add_argument("--database", "-d", help="Path to SQLite database")
    parser.add_argument("--document", help="Path to JSON document")
    parser.add_argument("--images", "-i", help="Image directory")

    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser("add", help="Add an item")
    add_parser.add_argument("name", help="Item name")
    add_parser.add_argument("category", help="Category name")
    add_parser.add_argument("image", help="Image file")
    add_parser.set_defaults(func=add)

    list_parser = subparsers.add_parser("list", help="List all items")
    list_parser.add_argument("--json", action="store_true", help="Print as JSON")
    list_parser.set_defaults(func=list_items)

    show_parser = subparsers.add_parser("show", help="Show the item at a position")
    show_parser.add_argument("position", help="Zero-based position")
    show_parser.set_defaults(func=show)

    search_parser = subparsers.add_parser("search", help="Find items by exact keyword")
    search_parser.add_argument("keyword", help="Name, category, image filename or id")
    search_parser.set_defaults(func=search)

    categories_parser = subparsers.add_parser("categories", help="List categories")
    categories_parser.set_defaults(func=categories)

    import_parser = subparsers.add_parser("import", help="Add items listed in a YAML file")
    import_parser.add_argument("file", help="YAML file with an 'items' list")
    import_parser.set_defaults(func=import_items)

    return parser


def main(argv=None):
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(
            args.config,
            backend=args.backend,
            database_path=args.database,
            document_path=args.document,
            image_dir=args.images,
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    setup_logging(settings.log_level)

    try:
        catalog = build_catalog(settings)
    except CatalogError as e:
        print(f"Error: {e}")
        sys.exit(1)

    try:
        args.func(catalog, args)
    except CatalogError as e:
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        catalog.close()


if __name__ == "__main__":
    main()
