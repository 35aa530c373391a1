"""CLI entry point for the gastips catalog."""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import cast

from gastips import __version__
from gastips.catalog.config import CONFIG_FILENAME, load_catalog_config
from gastips.catalog.index import Catalog
from gastips.catalog.loader import load_catalog_file, load_configured_catalog
from gastips.catalog.markdown import render_markdown
from gastips.catalog.models import RuleRecord, ValidationError


def _load(args: argparse.Namespace) -> Catalog:
    config = load_catalog_config(Path.cwd() / CONFIG_FILENAME)
    source = cast(Path | None, args.catalog)
    if source is not None:
        config.source = str(source)
    try:
        return load_configured_catalog(config)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _print_rule(rule: RuleRecord) -> None:
    print(rule.title)
    print(f"id: {rule.id}")
    print()
    print(rule.rationale)
    if rule.inefficient_example:
        print("\nLess efficient:")
        print(rule.inefficient_example)
    if rule.efficient_example:
        print("\nMore efficient:")
        print(rule.efficient_example)


def _cmd_list(args: argparse.Namespace) -> None:
    catalog = _load(args)
    if args.json:
        print(json.dumps([r.model_dump() for r in catalog], indent=2))
        return
    for number, rule in enumerate(catalog, 1):
        print(f"{number:>3}. {rule.id}  {rule.title}")


def _cmd_show(args: argparse.Namespace) -> None:
    catalog = _load(args)
    rule_id = cast(str, args.id)
    rule = catalog.get(rule_id)
    if rule is None:
        print(f"Error: unknown tip id: {rule_id}", file=sys.stderr)
        sys.exit(1)
    if args.json:
        print(json.dumps(rule.model_dump(), indent=2))
    else:
        _print_rule(rule)


def _cmd_search(args: argparse.Namespace) -> None:
    catalog = _load(args)
    matches = catalog.search(cast(str, args.query))
    if not matches:
        print("No matching tips.")
        return
    for rule in matches:
        print(f"{rule.id}  {rule.title}")


def _cmd_render(args: argparse.Namespace) -> None:
    catalog = _load(args)
    text = render_markdown(catalog, title=cast(str, args.title))
    output = cast(Path | None, args.output)
    if output is None:
        sys.stdout.write(text)
    else:
        output.write_text(text, encoding="utf-8")
        print(f"Wrote {len(catalog)} tips to {output}")


def _cmd_validate(args: argparse.Namespace) -> None:
    path = cast(Path, args.path)
    if not path.exists():
        print(f"Error: file not found: {path}", file=sys.stderr)
        sys.exit(1)
    try:
        catalog = load_catalog_file(path)
    except ValidationError as e:
        print(f"Invalid catalog: {path}", file=sys.stderr)
        for issue in e.issues:
            where = "source" if issue.index < 0 else f"rule #{issue.index} {issue.field}"
            print(f"  - {where}: {issue.message}", file=sys.stderr)
        sys.exit(1)
    snap = catalog.snapshot()
    print(f"OK: {len(catalog)} tips")
    print(f"Snapshot: {snap.snapshot_hash}")


def _cmd_serve(args: argparse.Namespace) -> None:
    from gastips.server.runner import run_server

    _ = _load(args)
    source = cast(Path | None, args.catalog)
    if source is not None:
        # The uvicorn app factory reads its source from the environment
        os.environ["GASTIPS_CATALOG"] = str(source.resolve())
    run_server()


async def _fetch_health(base_url: str) -> dict:
    from gastips.mcp_server.client import CatalogClient

    client = CatalogClient(base_url=base_url)
    try:
        return await client.health()
    finally:
        await client.close()


def _cmd_status(_args: argparse.Namespace) -> None:
    import anyio
    import httpx

    from gastips.server.runner import read_port_lock

    lock = read_port_lock()
    port = lock.get("port")
    if port is None:
        print("Server: not running")
        return

    try:
        health = anyio.run(_fetch_health, f"http://127.0.0.1:{port}")
    except httpx.HTTPError as e:
        print(f"Error: server on port {port} unreachable: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Server: running on port {port} (pid {lock.get('pid', '?')})")
    print(f"Tips:   {health.get('rules', 0)}")


def _cmd_mcp_serve(_args: argparse.Namespace) -> None:
    from gastips.mcp_server.server import main as mcp_main

    mcp_main()


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="gastips",
        description="Browse and validate the Solidity gas-optimization tip catalog",
    )
    _ = parser.add_argument("-V", "--version", action="version", version=f"gastips {__version__}")
    _ = parser.add_argument(
        "--catalog",
        type=Path,
        default=None,
        help="Catalog file (.json or .md); defaults to .gastips.json or the bundled tips",
    )
    subparsers = parser.add_subparsers(dest="command")

    list_p = subparsers.add_parser("list", help="List tips in catalog order")
    _ = list_p.add_argument("--json", action="store_true", help="Print records as JSON")

    show_p = subparsers.add_parser("show", help="Show one tip")
    _ = show_p.add_argument("id", help="Tip id")
    _ = show_p.add_argument("--json", action="store_true", help="Print the record as JSON")

    search_p = subparsers.add_parser("search", help="Search titles and rationales")
    _ = search_p.add_argument("query")

    render_p = subparsers.add_parser("render", help="Render the catalog as markdown")
    _ = render_p.add_argument("-o", "--output", type=Path, default=None, help="Output file")
    _ = render_p.add_argument(
        "--title", default="Solidity Gas Optimization Tips", help="Document heading"
    )

    validate_p = subparsers.add_parser("validate", help="Validate a catalog file")
    _ = validate_p.add_argument("path", type=Path, help="Path to .json or .md catalog")

    _ = subparsers.add_parser("serve", help="Start the HTTP API server")
    _ = subparsers.add_parser("mcp-serve", help="Start the MCP stdio server")
    _ = subparsers.add_parser("status", help="Show whether the HTTP API server is running")

    args = parser.parse_args(sys.argv[1:])
    dispatch = {
        "list": _cmd_list,
        "show": _cmd_show,
        "search": _cmd_search,
        "render": _cmd_render,
        "validate": _cmd_validate,
        "serve": _cmd_serve,
        "mcp-serve": _cmd_mcp_serve,
        "status": _cmd_status,
    }
    command = cast(str | None, args.command)
    handler = dispatch.get(command) if command is not None else None
    if handler:
        handler(args)
    else:
        parser.print_help()
        sys.exit(1)
