"""Command-line helper for poking at an Odoo database.

This module serves as a CLI wrapper around odoo_await.core.odoo services.
Connection defaults come from ODOO_* environment variables.
"""
from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path

SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from odoo_await.config import load_settings
from odoo_await.core.odoo import OdooAwait, OdooError


def _json_arg(raw: str):
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise argparse.ArgumentTypeError(f"invalid JSON: {exc}") from exc


def _ids_arg(raw: str) -> list[int]:
    try:
        return [int(part) for part in raw.split(",") if part.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected comma-separated integers, got '{raw}'") from exc


def _fields_arg(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def build_parser() -> argparse.ArgumentParser:
    settings = load_settings()

    parser = argparse.ArgumentParser(description="Odoo XML-RPC helper")
    parser.add_argument("--url", default=settings.base_url)
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument("--db", default=settings.db)
    parser.add_argument("--user", default=settings.username)
    parser.add_argument("--password", default=settings.password)
    parser.add_argument("--timeout", type=float, default=settings.timeout)
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every RPC call")

    sub = parser.add_subparsers(dest="cmd")

    sub.add_parser("connect", help="Authenticate and print the user ID")

    ss = sub.add_parser("search", help="Search records")
    ss.add_argument("model")
    ss.add_argument("--domain", type=_json_arg, default=None,
                    help='JSON domain, e.g. \'{"name": "john"}\' or \'[["id", ">", 5]]\'')
    ss.add_argument("--fields", type=_fields_arg, default=None,
                    help="Comma-separated fields; prints records instead of IDs")
    ss.add_argument("--limit", type=int, default=0)
    ss.add_argument("--offset", type=int, default=0)
    ss.add_argument("--order", default="")

    sr = sub.add_parser("read", help="Read records by ID")
    sr.add_argument("model")
    sr.add_argument("ids", type=_ids_arg)
    sr.add_argument("--fields", type=_fields_arg, default=None)

    sf = sub.add_parser("fields", help="Describe model fields")
    sf.add_argument("model")
    sf.add_argument("--attributes", type=_fields_arg, default=["string", "type", "required"])

    sc = sub.add_parser("create", help="Create a record")
    sc.add_argument("model")
    sc.add_argument("values", type=_json_arg)
    sc.add_argument("--external-id")
    sc.add_argument("--module")

    sd = sub.add_parser("delete", help="Delete records by ID")
    sd.add_argument("model")
    sd.add_argument("ids", type=_ids_arg)

    sx = sub.add_parser("read-xid", help="Read a record by external ID")
    sx.add_argument("external_id")
    sx.add_argument("--fields", type=_fields_arg, default=None)
    sx.add_argument("--module")

    return parser


def run(args: argparse.Namespace) -> object:
    """Execute the parsed command and return its result."""
    odoo = OdooAwait(
        base_url=args.url,
        port=args.port,
        db=args.db,
        username=args.user,
        password=args.password,
        timeout=args.timeout,
    )
    uid = odoo.connect()

    if args.cmd == "connect":
        return uid
    if args.cmd == "search":
        if args.fields is not None:
            return odoo.search_read(args.model, args.domain, args.fields,
                                    offset=args.offset, limit=args.limit, order=args.order)
        return odoo.search(args.model, args.domain)
    if args.cmd == "read":
        return odoo.read(args.model, args.ids, args.fields)
    if args.cmd == "fields":
        return odoo.get_fields(args.model, args.attributes)
    if args.cmd == "create":
        return odoo.create(args.model, args.values, args.external_id, args.module)
    if args.cmd == "delete":
        return odoo.delete(args.model, args.ids)
    if args.cmd == "read-xid":
        return odoo.read_by_external_id(args.external_id, args.fields, args.module)
    raise ValueError(f"Unknown command '{args.cmd}'")


def main(argv: list[str] | None = None) -> None:
    """Command-line entry point."""
    try:
        parser = build_parser()
    except RuntimeError as e:
        print(f"[config] Error: {e}", file=sys.stderr)
        sys.exit(1)
    args = parser.parse_args(argv)

    if not args.cmd:
        parser.print_help()
        return

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(name)s] %(levelname)s %(message)s",
    )

    try:
        result = run(args)
    except (OdooError, ValueError, RuntimeError) as e:
        print(f"[{args.cmd}] Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(result, indent=2, default=str))


if __name__ == "__main__":
    main()
