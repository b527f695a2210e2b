"""Omyra HRM command line — headless access to the dashboard operations.

Usage:
    python -m hrm login --email admin@company.com
    python -m hrm whoami
    python -m hrm stats
    python -m hrm employees list --department Engineering
    python -m hrm employees export --output employees.csv
    python -m hrm employees import employees.csv
    python -m hrm --json records list meetings
    python -m hrm seed
    python -m hrm logout

Exit codes:
    0 = success
    1 = API or validation error
    2 = not authenticated (login first)
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import httpx

from hrm.client.api import ApiClient
from hrm.client.session import AuthSession
from hrm.common.exceptions import AppException, ErrorKind, UnauthenticatedError, is_auth_error
from hrm.config import get_settings
from hrm.dashboard.service import DashboardService
from hrm.records.service import RecordStores, seed_sample_data
from hrm.storage import create_storage
from hrm.storage.base import StorageService
from hrm.views.employees import EmployeeManagementView

logger = logging.getLogger("hrm.cli")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_AUTH = 2

RECORD_KINDS = ("employees", "attendance", "payroll", "documents", "meetings")


# ══════════════════════════════════════════════════════════════════════
# Parser
# ══════════════════════════════════════════════════════════════════════


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="omyra-hrm",
        description="Omyra HRM dashboard client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--base-url", type=str, default=None,
                        help="REST backend base URL (default: API_BASE_URL)")
    parser.add_argument("--log-level", type=str, default=None,
                        help="Logging level (default: LOG_LEVEL)")
    parser.add_argument("--json", dest="output_json", action="store_true",
                        help="Output results as JSON")
    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login", help="Authenticate and store the token")
    login.add_argument("--email", required=True)
    login.add_argument("--password", default=None, help="Prompted for when omitted")

    commands.add_parser("logout", help="Forget the stored token and user")
    commands.add_parser("whoami", help="Show the stored session")
    commands.add_parser("stats", help="Dashboard KPI figures")

    employees = commands.add_parser("employees", help="Remote employee directory")
    employee_actions = employees.add_subparsers(dest="action", required=True)
    listing = employee_actions.add_parser("list")
    listing.add_argument("--search", default="")
    listing.add_argument("--department", default="all")
    listing.add_argument("--status", default="all")
    export = employee_actions.add_parser("export")
    export.add_argument("--output", type=Path, default=None, help="File to write (default: stdout)")
    importing = employee_actions.add_parser("import")
    importing.add_argument("file", type=Path)

    records = commands.add_parser("records", help="Local record stores")
    record_actions = records.add_subparsers(dest="action", required=True)
    record_list = record_actions.add_parser("list")
    record_list.add_argument("kind", choices=RECORD_KINDS)

    commands.add_parser("seed", help="Insert sample data into empty local stores")
    return parser


# ══════════════════════════════════════════════════════════════════════
# Commands
# ══════════════════════════════════════════════════════════════════════


async def _run(
    args: argparse.Namespace,
    storage: StorageService,
    transport: Optional[httpx.AsyncBaseTransport],
) -> int:
    session = AuthSession(storage)

    if args.command == "logout":
        session.clear()
        print("👋 Logged out")
        return EXIT_OK

    if args.command == "whoami":
        status = session.status(log=True)
        _emit(args, status, lambda s: (
            f"👤 {s['user'].get('name')} <{s['user'].get('email')}> ({s['user'].get('role')})"
            if s["is_authenticated"] and s["user"] else "🔒 Not logged in"
        ))
        return EXIT_OK if status["is_authenticated"] else EXIT_AUTH

    if args.command == "records":
        stores = RecordStores.from_storage(storage)
        rows = [r.model_dump(mode="json") for r in getattr(stores, args.kind).get_all()]
        _emit(args, rows, lambda rs: "\n".join(_row_line(r) for r in rs) or f"No {args.kind} records")
        return EXIT_OK

    if args.command == "seed":
        added = seed_sample_data(RecordStores.from_storage(storage))
        _emit(args, added, lambda a: "🌱 Seeded " + ", ".join(f"{v} {k}" for k, v in a.items()))
        return EXIT_OK

    async with ApiClient(session, base_url=args.base_url, transport=transport) as client:
        if args.command == "login":
            password = args.password or getpass.getpass("Password: ")
            data = await client.login({"email": args.email, "password": password})
            user = client.current_user() or {}
            _emit(args, data, lambda _: f"✅ Logged in as {user.get('name') or args.email}")
            return EXIT_OK

        if args.command == "stats":
            stats = await DashboardService.get_dashboard_stats(client)
            _emit(args, stats.model_dump(), lambda s: "\n".join(
                f"  {k.replace('_', ' ').title():<20} {v:,}" for k, v in s.items()
            ))
            return EXIT_OK

        if args.command == "employees":
            return await _employees(args, client)

    raise AssertionError(f"unhandled command {args.command!r}")


async def _employees(args: argparse.Namespace, client: ApiClient) -> int:
    view = EmployeeManagementView(client)

    if args.action == "import":
        report = await view.import_csv(args.file.read_text(encoding="utf-8"))
        _emit(args, {"succeeded": report.succeeded, "failed": report.failed, "errors": report.errors},
              lambda _: "\n".join([f"📥 {report.summary()}", *(f"  ❌ {e}" for e in report.errors)]))
        return EXIT_ERROR if report.failed and not report.succeeded else EXIT_OK

    if not await view.load():
        print(f"❌ {view.error}", file=sys.stderr)
        return EXIT_AUTH if view.error_kind is ErrorKind.unauthenticated else EXIT_ERROR

    if args.action == "list":
        view.search_term = args.search
        view.set_filter("department", args.department)
        view.set_filter("status", args.status)
        rows = [e.model_dump(mode="json") for e in view.filtered]
        _emit(args, rows, lambda rs: "\n".join(_row_line(r) for r in rs) or "No employees found")
        return EXIT_OK

    text = view.export_csv()
    if args.output:
        args.output.write_text(text, encoding="utf-8")
        print(f"📤 Exported {len(view.filtered)} employees to {args.output}")
    else:
        sys.stdout.write(text)
    return EXIT_OK


# ── Output helpers ──────────────────────────────────────────────────


def _emit(args: argparse.Namespace, payload: Any, render) -> None:
    if args.output_json:
        print(json.dumps(payload, indent=2, default=str))
    else:
        print(render(payload))


def _row_line(row: dict[str, Any]) -> str:
    name = row.get("name") or row.get("title") or row.get("employee_name") or ""
    extra = row.get("email") or row.get("date") or row.get("pay_period") or row.get("category") or ""
    status = row.get("status") or ""
    return f"  {row.get('id', ''):<32} {name:<28} {extra:<28} {status}"


# ══════════════════════════════════════════════════════════════════════
# Entry point
# ══════════════════════════════════════════════════════════════════════


def main(
    argv: Optional[list[str]] = None,
    *,
    storage: Optional[StorageService] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> int:
    args = build_parser().parse_args(argv)
    config = get_settings()

    logging.basicConfig(
        level=getattr(logging, (args.log_level or config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    owns_storage = storage is None
    storage = storage or create_storage(config)
    try:
        return asyncio.run(_run(args, storage, transport))
    except UnauthenticatedError as e:
        print(f"🔒 {e.message}", file=sys.stderr)
        return EXIT_AUTH
    except AppException as e:
        print(f"❌ {e.message}", file=sys.stderr)
        return EXIT_AUTH if is_auth_error(e) else EXIT_ERROR
    except OSError as e:
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_ERROR
    finally:
        if owns_storage:
            storage.close()


if __name__ == "__main__":
    sys.exit(main())
