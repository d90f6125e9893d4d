# FILE: medmemic/gateway/memory.py

import copy
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from medmemic.core.models import AuthUser
from medmemic.gateway.base import (
    FOREIGN_KEY_CODE, NO_ROWS_CODE, APIResponse, AuthClient, Bucket, Gateway,
    GatewayError, Storage, TableQuery, parse_embeds,
)

# child table -> (foreign key column, parent table)
REFERENCES = {
    "scenario_courses": [("scenario_id", "scenarios")],
    "scenario_sessions": [("scenario_id", "scenarios")],
}

EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


class MemoryGateway(Gateway):
    """
    In-process gateway with the same contract as the Supabase one.

    Rows live in plain lists of dicts. Every write stamps ``created_at`` from a
    strictly increasing clock so "newest first" ordering is deterministic.
    ``fail(table, method)`` makes the next matching calls raise, and
    ``on_write(table, func)`` lets a test emulate server-side normalisation.
    """

    def __init__(self, buckets=("avatars",)):
        self.tables = {}
        self.calls = []
        self._failures = {}
        self._normalizers = {}
        self._ids = {}
        self._tick = 0
        self.auth = MemoryAuth(self)
        self.storage = MemoryStorage(self, buckets)

    # --- test hooks ---

    def fail(self, table, method, message="Simulated failure", code=None, status_code=500):
        self._failures[(table, method)] = GatewayError(message, status_code=status_code, code=code)

    def heal(self, table=None, method=None):
        if table is None:
            self._failures.clear()
        else:
            self._failures.pop((table, method), None)

    def on_write(self, table, func):
        self._normalizers[table] = func

    def rows(self, table):
        return self.tables.setdefault(table, [])

    def seed(self, table, *rows):
        """Insert rows directly, bypassing failures; returns the stored copies."""
        return [self._store(table, dict(row)) for row in rows]

    # --- internals ---

    def _now(self):
        self._tick += 1
        return (EPOCH + timedelta(seconds=self._tick)).isoformat()

    def _next_id(self, table):
        self._ids[table] = self._ids.get(table, 0) + 1
        return self._ids[table]

    def _store(self, table, row):
        row.setdefault("id", self._next_id(table))
        if isinstance(row["id"], int):
            self._ids[table] = max(self._ids.get(table, 0), row["id"])
        row.setdefault("created_at", self._now())
        self.rows(table).append(row)
        return copy.deepcopy(row)

    def _record(self, kind, target, method):
        self.calls.append((kind, target, method))
        failure = self._failures.get((target, method))
        if failure is not None:
            raise failure

    def _normalize(self, table, row):
        func = self._normalizers.get(table)
        return func(dict(row)) if func else row

    def table(self, name):
        return MemoryQuery(table=name, gateway=self)


def _matches(row, filters):
    for f in filters:
        if f.op == "eq" and str(row.get(f.column)) != str(f.value):
            return False
        if f.op == "not_null" and row.get(f.column) is None:
            return False
    return True


def _sort_key(value):
    return (value is None, value if value is not None else "")


@dataclass
class MemoryQuery(TableQuery):
    gateway: MemoryGateway = None

    def _project(self, row):
        plain, embeds = parse_embeds(self.columns)
        if "*" in plain or not plain:
            result = copy.deepcopy(row)
        else:
            result = {c: copy.deepcopy(row.get(c)) for c in plain}
        for parent, parent_columns in embeds.items():
            fk = next((col for col, target in REFERENCES.get(self.table, []) if target == parent), None)
            match = None
            if fk is not None:
                match = next((p for p in self.gateway.rows(parent) if p.get("id") == row.get(fk)), None)
            if match is None:
                result[parent] = None
            elif "*" in parent_columns:
                result[parent] = copy.deepcopy(match)
            else:
                result[parent] = {c: match.get(c) for c in parent_columns}
        return result

    def _selected(self):
        rows = [r for r in self.gateway.rows(self.table) if _matches(r, self.filters)]
        for column, ascending in reversed(self.ordering):
            rows.sort(key=lambda r: _sort_key(r.get(column)), reverse=not ascending)
        return rows

    def _check_references(self, rows):
        ids = {r.get("id") for r in rows}
        for child, refs in REFERENCES.items():
            for fk, parent in refs:
                if parent == self.table and any(c.get(fk) in ids for c in self.gateway.rows(child)):
                    raise GatewayError(
                        f'update or delete on table "{self.table}" violates foreign key constraint on table "{child}"',
                        status_code=409,
                        code=FOREIGN_KEY_CODE,
                    )

    def _respond(self, rows, count=None):
        data = [self._project(r) for r in rows] if (self.method == "select" or self.returning) else []
        if self.single_row:
            if len(data) != 1:
                raise GatewayError(
                    "JSON object requested, multiple (or no) rows returned",
                    status_code=406,
                    code=NO_ROWS_CODE,
                )
            return APIResponse(data=data[0], count=count)
        return APIResponse(data=None if self.head else data, count=count)

    def execute(self):
        self.gateway._record("table", self.table, self.method)
        table = self.gateway.rows(self.table)

        if self.method == "select":
            rows = self._selected()
            count = len(rows) if self.count else None
            return self._respond(rows, count)

        if self.method == "insert":
            stored = [self.gateway._store(self.table, self.gateway._normalize(self.table, r)) for r in self.payload]
            return self._respond(stored)

        if self.method == "upsert":
            key = self.on_conflict or "id"
            affected = []
            for incoming in self.payload:
                incoming = self.gateway._normalize(self.table, incoming)
                existing = next((r for r in table if key in incoming and r.get(key) == incoming[key]), None)
                if existing is None:
                    affected.append(self.gateway._store(self.table, dict(incoming)))
                else:
                    existing.update(incoming)
                    affected.append(copy.deepcopy(existing))
            return self._respond(affected)

        if self.method == "update":
            affected = []
            for row in self._selected():
                row.update(self.gateway._normalize(self.table, self.payload))
                affected.append(row)
            return self._respond(affected)

        if self.method == "delete":
            doomed = self._selected()
            self._check_references(doomed)
            doomed_ids = {id(r) for r in doomed}
            table[:] = [r for r in table if id(r) not in doomed_ids]
            return self._respond(doomed)

        raise GatewayError(f"Unsupported method {self.method}")


class MemoryAuth(AuthClient):
    def __init__(self, gateway: MemoryGateway):
        self.gateway = gateway
        self.accounts = {}
        self.user = None

    def add_account(self, email, password, metadata=None, user_id=None):
        user = AuthUser(id=user_id or str(uuid.uuid4()), email=email, user_metadata=dict(metadata or {}))
        self.accounts[email.lower()] = {"password": password, "user": user}
        return user

    def sign_up(self, email, password, metadata=None):
        self.gateway._record("auth", "auth", "sign_up")
        if not email or "@" not in email:
            raise GatewayError("Unable to validate email address: invalid format", 400, "validation_failed")
        if len(password or "") < 6:
            raise GatewayError("Password should be at least 6 characters.", 422, "weak_password")
        if email.lower() in self.accounts:
            raise GatewayError("User already registered", 422, "user_already_exists")
        self.user = self.add_account(email, password, metadata)
        return self.user.model_copy(deep=True)

    def sign_in_with_password(self, email, password):
        self.gateway._record("auth", "auth", "sign_in")
        account = self.accounts.get((email or "").lower())
        if account is None or account["password"] != password:
            raise GatewayError("Invalid login credentials", 400, "invalid_credentials")
        self.user = account["user"]
        return self.user.model_copy(deep=True)

    def sign_out(self):
        self.gateway._record("auth", "auth", "sign_out")
        self.user = None

    def get_user(self):
        self.gateway._record("auth", "auth", "get_user")
        return self.user.model_copy(deep=True) if self.user else None

    def update_user(self, metadata):
        self.gateway._record("auth", "auth", "update_user")
        if self.user is None:
            raise GatewayError("Auth session missing!", 401, "session_not_found")
        self.user.user_metadata.update(metadata)
        return self.user.model_copy(deep=True)


class MemoryStorage(Storage):
    def __init__(self, gateway: MemoryGateway, buckets):
        self.gateway = gateway
        self.objects = {name: {} for name in buckets}

    def bucket(self, name):
        return MemoryBucket(self, name)


@dataclass
class MemoryBucket(Bucket):
    storage: MemoryStorage
    name: str

    def upload(self, path, data, content_type=None):
        self.storage.gateway._record("storage", self.name, "upload")
        if self.name not in self.storage.objects:
            raise GatewayError("Bucket not found", 404, "NoSuchBucket")
        objects = self.storage.objects[self.name]
        if path in objects:
            raise GatewayError("The resource already exists", 409, "Duplicate")
        objects[path] = (bytes(data), content_type)
        return path

    def get_public_url(self, path):
        self.storage.gateway._record("storage", self.name, "get_public_url")
        return f"memory://storage/{self.name}/{path}"
