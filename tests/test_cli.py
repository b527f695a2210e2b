"""CLI tests — each command runs ``main`` end-to-end against the mock backend.

``main`` owns its event loop (``asyncio.run``), so these tests are plain
synchronous functions.
"""

from __future__ import annotations

import json

import pytest

from hrm.cli import EXIT_AUTH, EXIT_ERROR, EXIT_OK, build_parser, main
from hrm.common.constants import TOKEN_KEY
from tests.conftest import TEST_BASE_URL
from tests.mock_backend import ADMIN


def _run(storage, transport, *args: str) -> int:
    return main(["--base-url", TEST_BASE_URL, *args], storage=storage, transport=transport)


def _login(storage, transport) -> None:
    assert _run(storage, transport, "login", "--email", ADMIN["email"], "--password", ADMIN["password"]) == EXIT_OK


# ═════════════════════════════════════════════════════════════════════
# SESSION
# ═════════════════════════════════════════════════════════════════════


class TestSessionCommands:
    def test_login_and_whoami(self, storage, transport, capsys):
        _login(storage, transport)
        assert storage.get(TOKEN_KEY)

        assert _run(storage, transport, "whoami") == EXIT_OK
        out = capsys.readouterr().out
        assert "Logged in as Admin User" in out
        assert "admin@company.com" in out

    def test_bad_password(self, storage, transport, capsys):
        code = _run(storage, transport, "login", "--email", ADMIN["email"], "--password", "nope")

        assert code == EXIT_AUTH
        assert "Invalid credentials" in capsys.readouterr().err
        assert storage.get(TOKEN_KEY) is None

    def test_whoami_logged_out(self, storage, transport, capsys):
        assert _run(storage, transport, "whoami") == EXIT_AUTH
        assert "Not logged in" in capsys.readouterr().out

    def test_logout(self, storage, transport):
        _login(storage, transport)
        assert _run(storage, transport, "logout") == EXIT_OK
        assert storage.get(TOKEN_KEY) is None


# ═════════════════════════════════════════════════════════════════════
# REMOTE DATA
# ═════════════════════════════════════════════════════════════════════


class TestRemoteCommands:
    def test_stats_requires_login(self, storage, transport, capsys):
        assert _run(storage, transport, "stats") == EXIT_AUTH
        assert "Authentication required" in capsys.readouterr().err

    def test_stats_json(self, storage, transport, capsys):
        _login(storage, transport)
        capsys.readouterr()

        assert _run(storage, transport, "--json", "stats") == EXIT_OK
        stats = json.loads(capsys.readouterr().out)
        assert stats["employee_count"] == 4
        assert stats["total_profits"] == 125000

    def test_employees_list_filtered(self, storage, transport, capsys):
        _login(storage, transport)
        capsys.readouterr()

        assert _run(storage, transport, "--json", "employees", "list", "--department", "Engineering") == EXIT_OK
        rows = json.loads(capsys.readouterr().out)
        assert [r["name"] for r in rows] == ["John Doe", "Mike Johnson"]

    def test_employees_list_requires_login(self, storage, transport, capsys):
        assert _run(storage, transport, "employees", "list") == EXIT_AUTH
        assert "Authentication required" in capsys.readouterr().err

    def test_employees_export_to_file(self, storage, transport, tmp_path):
        _login(storage, transport)
        target = tmp_path / "employees.csv"

        assert _run(storage, transport, "employees", "export", "--output", str(target)) == EXIT_OK
        lines = target.read_text(encoding="utf-8").splitlines()
        assert lines[0].startswith('"Name","Email"')
        assert len(lines) == 5

    def test_employees_import(self, storage, transport, tmp_path, capsys):
        _login(storage, transport)
        source = tmp_path / "new.csv"
        source.write_text("name,email\nAmy Adams,amy@company.com\n", encoding="utf-8")
        capsys.readouterr()

        assert _run(storage, transport, "employees", "import", str(source)) == EXIT_OK
        assert "Imported 1 employees successfully" in capsys.readouterr().out

    def test_import_all_rows_failing(self, storage, transport, tmp_path):
        _login(storage, transport)
        source = tmp_path / "dup.csv"
        source.write_text("name,email\nJohn,john.doe@company.com\n", encoding="utf-8")

        assert _run(storage, transport, "employees", "import", str(source)) == EXIT_ERROR

    def test_import_missing_file(self, storage, transport, tmp_path):
        _login(storage, transport)
        assert _run(storage, transport, "employees", "import", str(tmp_path / "absent.csv")) == EXIT_ERROR


# ═════════════════════════════════════════════════════════════════════
# LOCAL RECORDS
# ═════════════════════════════════════════════════════════════════════


class TestLocalCommands:
    def test_seed_then_list(self, storage, transport, capsys):
        assert _run(storage, transport, "seed") == EXIT_OK
        assert "3 employees" in capsys.readouterr().out

        assert _run(storage, transport, "--json", "records", "list", "meetings") == EXIT_OK
        meetings = json.loads(capsys.readouterr().out)
        assert [m["title"] for m in meetings] == ["Team Standup"]

    def test_empty_collection(self, storage, transport, capsys):
        assert _run(storage, transport, "records", "list", "documents") == EXIT_OK
        assert "No documents records" in capsys.readouterr().out


def test_parser_rejects_unknown_kind():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["records", "list", "projects"])
