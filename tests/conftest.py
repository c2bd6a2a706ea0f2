from __future__ import annotations

from datetime import datetime

import pytest

from odoo_attendance.core.exceptions import NetworkError, RemoteError
from odoo_attendance.rpc.client import OdooRpcClient
from odoo_attendance.session.store import InMemorySessionStore


def _matches(row: dict, condition) -> bool:
    field, op, value = condition
    current = row.get(field, False)
    if isinstance(current, (list, tuple)) and current:
        current = current[0]
    if op == "=":
        return current == value
    if current is False or current is None:
        return False
    if op == ">=":
        return current >= value
    if op == "<=":
        return current <= value
    raise AssertionError(f"operator not supported by fake: {op}")


class FakeOdoo:
    """In-memory stand-in for the server, implementing the transport contract."""

    def __init__(self):
        self.logins: dict[str, tuple[str, int]] = {}
        self.tables: dict[str, list[dict]] = {"hr.attendance": [], "hr.employee": [], "res.users": []}
        self.calls: list[tuple[str, dict]] = []
        self.fail_with: Exception | None = None
        self.fail_when = None
        self._next_id = 100

    # seeding helpers
    def add_user(self, uid: int, login: str, password: str, name: str) -> None:
        self.logins[login] = (password, uid)
        self.tables["res.users"].append({"id": uid, "name": name, "login": login})

    def add_employee(self, employee_id: int, user_id: int, name: str) -> None:
        self.tables["hr.employee"].append({
            "id": employee_id,
            "name": name,
            "user_id": [user_id, name],
            "department_id": [7, "Sales"],
            "job_id": False,
        })

    def add_attendance(self, employee_id: int, check_in: str, check_out=False, worked_hours: float = 0.0) -> int:
        self._next_id += 1
        self.tables["hr.attendance"].append({
            "id": self._next_id,
            "employee_id": [employee_id, "E"],
            "check_in": check_in,
            "check_out": check_out,
            "worked_hours": worked_hours,
        })
        return self._next_id

    def open_records(self, employee_id: int) -> list[dict]:
        return [
            r for r in self.tables["hr.attendance"]
            if r["employee_id"][0] == employee_id and r["check_out"] is False
        ]

    def object_calls(self, method: str) -> list[list]:
        return [p["args"] for _, p in self.calls if p["service"] == "object" and p["args"][4] == method]

    # transport contract
    def call(self, endpoint: str, params: dict):
        self.calls.append((endpoint, params))
        if self.fail_with is not None and (self.fail_when is None or self.fail_when(params)):
            raise self.fail_with

        if params["service"] == "common":
            _db, login, password, _ctx = params["args"]
            entry = self.logins.get(login)
            return entry[1] if entry and entry[0] == password else False

        db, uid, password, model, method, args, kwargs = params["args"]
        if not any(p == password and u == uid for p, u in self.logins.values()):
            raise RemoteError("Access Denied", data={"message": "Access Denied"})
        return getattr(self, f"_{method}")(model, args, kwargs)

    def _search_read(self, model, args, kwargs):
        rows = [r for r in self.tables[model] if all(_matches(r, c) for c in args[0])]
        order = kwargs.get("order")
        if order:
            field, direction = order.split()
            rows.sort(key=lambda r: r[field], reverse=direction == "desc")
        if kwargs.get("limit"):
            rows = rows[: kwargs["limit"]]
        fields = kwargs.get("fields") or None
        return [{k: v for k, v in r.items() if not fields or k in fields} for r in rows]

    def _read(self, model, args, kwargs):
        ids = set(args[0])
        return [dict(r) for r in self.tables[model] if r["id"] in ids]

    def _create(self, model, args, kwargs):
        values = dict(args[0])
        self._next_id += 1
        row = {"id": self._next_id, "check_out": False, "worked_hours": 0.0, **values}
        if model == "hr.attendance":
            row["employee_id"] = [values["employee_id"], "E"]
        self.tables[model].append(row)
        return self._next_id

    def _write(self, model, args, kwargs):
        ids, values = args
        for row in self.tables[model]:
            if row["id"] in ids:
                row.update(values)
                if model == "hr.attendance" and row.get("check_out"):
                    fmt = "%Y-%m-%d %H:%M:%S"
                    delta = datetime.strptime(row["check_out"], fmt) - datetime.strptime(row["check_in"], fmt)
                    row["worked_hours"] = delta.total_seconds() / 3600
        return True


class FixedClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def odoo() -> FakeOdoo:
    server = FakeOdoo()
    server.add_user(2, "ana@example.com", "secret", "Ana Torres")
    server.add_employee(5, 2, "Ana Torres")
    server.add_user(3, "bot@example.com", "pw", "Integration Bot")
    return server


@pytest.fixture
def rpc(odoo: FakeOdoo) -> OdooRpcClient:
    client = OdooRpcClient(odoo)
    client.configure("https://odoo.example.com/", "prod")
    client.authenticate("prod", "ana@example.com", "secret")
    odoo.calls.clear()
    return client


@pytest.fixture
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def clock() -> FixedClock:
    # Wednesday
    return FixedClock(datetime(2026, 2, 4, 9, 15, 30, 987654))


@pytest.fixture
def network_down():
    return NetworkError("Network error. Please check your internet connection and server URL.")
