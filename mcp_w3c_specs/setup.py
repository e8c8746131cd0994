"""Setup script to refresh the bundled web-standards data from webref."""

from __future__ import annotations

import argparse
import json
import shutil
import sys
from pathlib import Path

from .config import DEFAULT_DATA_DIR
from .constants import CSS_FILE, ELEMENTS_DIR, IDL_DIR, SPECS_FILE
from .loader import read_specifications
from .source_extractor import CHECKOUT_DIR, WEBREF_CONFIG


def download_and_build(checkout_dir: Path, data_dir: Path, force: bool = False) -> bool:
    """Clone or pull webref and rewrite the bundled data files."""
    print("📥 Fetching w3c/webref and extracting data...")
    from .source_extractor import main as extractor_main

    repo_path = checkout_dir / WEBREF_CONFIG.name
    if force and repo_path.exists():
        shutil.rmtree(repo_path)

    stats = extractor_main(checkout_dir, data_dir)
    if stats is None:
        print("  ❌ Extraction failed")
        return False
    print(
        f"  ✅ {stats.specifications} specs, {stats.idl_files} IDL files, "
        f"{stats.css_definitions} CSS definitions, {stats.element_specs} element specs"
    )
    return True


def clean_cache(checkout_dir: Path, force: bool = False) -> None:
    """Remove the webref checkout. The bundled data itself is kept."""
    if not force:
        response = input("⚠️  This will delete the local webref checkout. Continue? (y/N): ")
        if response.lower() != "y":
            print("Cancelled.")
            return

    print("🗑️  Cleaning cache...")
    if checkout_dir.exists():
        shutil.rmtree(checkout_dir)
        print(f"  ✅ Removed {checkout_dir}")
    else:
        print("  Nothing to remove.")


def check_status(checkout_dir: Path, data_dir: Path) -> None:
    """Print what is on disk: checkout and bundled collections."""
    print("📊 Data Status:")
    print(f"  Data dir: {data_dir}")
    print()

    repo_path = checkout_dir / WEBREF_CONFIG.name
    print("  Source Repository:")
    if (repo_path / ".git").exists():
        print(f"    ✅ webref ({WEBREF_CONFIG.branch}): {repo_path}")
    else:
        print("    ❌ webref: not cloned")

    print()
    print("  Bundled Data:")
    specs_file = data_dir / SPECS_FILE
    if specs_file.exists():
        try:
            count = len(read_specifications(data_dir))
        except ValueError as e:
            print(f"    ❌ {SPECS_FILE}: invalid ({e.__class__.__name__})")
        else:
            print(f"    ✅ {SPECS_FILE}: {count} records")
    else:
        print(f"    ❌ {SPECS_FILE}: not found")

    idl_files = list((data_dir / IDL_DIR).glob("*.idl"))
    print(f"    {'✅' if idl_files else '❌'} {IDL_DIR}/: {len(idl_files)} files")

    css_file = data_dir / CSS_FILE
    if css_file.exists():
        css = json.loads(css_file.read_text(encoding="utf-8"))
        total = sum(len(v) for v in css.values() if isinstance(v, list))
        print(f"    ✅ {CSS_FILE}: {total} definitions")
    else:
        print(f"    ❌ {CSS_FILE}: not found")

    element_files = list((data_dir / ELEMENTS_DIR).glob("*.json"))
    print(f"    {'✅' if element_files else '❌'} {ELEMENTS_DIR}/: {len(element_files)} specs")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for setup script."""
    parser = argparse.ArgumentParser(
        description="Refresh the bundled web-standards data for the W3C specs MCP server"
    )
    parser.add_argument(
        "--download",
        action="store_true",
        help="Clone/update w3c/webref and rebuild the bundled data",
    )
    parser.add_argument(
        "--clean",
        action="store_true",
        help="Remove the local webref checkout",
    )
    parser.add_argument(
        "--status",
        action="store_true",
        help="Show the state of the checkout and bundled data",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Re-clone from scratch / skip confirmation prompts",
    )
    parser.add_argument("--data-dir", type=Path, default=DEFAULT_DATA_DIR, help=argparse.SUPPRESS)
    parser.add_argument("--checkout-dir", type=Path, default=CHECKOUT_DIR, help=argparse.SUPPRESS)

    args = parser.parse_args(argv)

    if args.status:
        check_status(args.checkout_dir, args.data_dir)
        return 0

    if args.clean:
        clean_cache(args.checkout_dir, force=args.force)
        return 0

    if not args.download:
        parser.print_help()
        return 1

    if download_and_build(args.checkout_dir, args.data_dir, force=args.force):
        print("\n✅ Data refreshed. Restart the MCP server to pick it up.")
        return 0
    print("\n❌ Setup failed. See errors above.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
