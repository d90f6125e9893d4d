# FILE: medmemic/gateway/base.py

"""
Contract the application needs from its backend-as-a-service.

Reads and writes go through ``gateway.table(name)``, a small chainable
query builder; authentication through ``gateway.auth``; blobs through
``gateway.storage.bucket(name)``.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

NO_ROWS_CODE = "PGRST116"
FOREIGN_KEY_CODE = "23503"


class GatewayError(Exception):
    """Any failure reported by the gateway."""

    def __init__(self, message, status_code=None, code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code

    @property
    def is_not_found(self):
        return self.code == NO_ROWS_CODE

    @property
    def is_foreign_key_violation(self):
        return self.code == FOREIGN_KEY_CODE


@dataclass
class APIResponse:
    data: Any = None
    count: Optional[int] = None


@dataclass
class Filter:
    column: str
    op: str
    value: Any = None


@dataclass
class TableQuery:
    """Builder state shared by every gateway implementation; ``execute`` is theirs."""
    table: str
    method: str = "select"
    columns: str = "*"
    count: Optional[str] = None
    head: bool = False
    payload: Any = None
    on_conflict: Optional[str] = None
    returning: bool = False
    filters: List[Filter] = field(default_factory=list)
    ordering: List[tuple] = field(default_factory=list)
    single_row: bool = False

    def select(self, columns="*", count=None, head=False):
        if self.method == "select":
            self.count = count
            self.head = head
        else:
            # write followed by select(): return the affected rows
            self.returning = True
        self.columns = columns
        return self

    def insert(self, rows):
        self.method = "insert"
        self.payload = rows if isinstance(rows, list) else [rows]
        return self

    def update(self, fields):
        self.method = "update"
        self.payload = dict(fields)
        return self

    def upsert(self, row, on_conflict=None):
        self.method = "upsert"
        self.payload = row if isinstance(row, list) else [row]
        self.on_conflict = on_conflict
        return self

    def delete(self):
        self.method = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(Filter(column, "eq", value))
        return self

    def not_null(self, column):
        self.filters.append(Filter(column, "not_null"))
        return self

    def order(self, column, ascending=True):
        self.ordering.append((column, ascending))
        return self

    def single(self):
        self.single_row = True
        return self

    def execute(self) -> APIResponse:
        raise NotImplementedError


class AuthClient:
    def sign_up(self, email, password, metadata=None):
        raise NotImplementedError

    def sign_in_with_password(self, email, password):
        raise NotImplementedError

    def sign_out(self):
        raise NotImplementedError

    def get_user(self):
        raise NotImplementedError

    def update_user(self, metadata):
        raise NotImplementedError


class Bucket:
    def upload(self, path, data, content_type=None):
        raise NotImplementedError

    def get_public_url(self, path):
        raise NotImplementedError


class Storage:
    def bucket(self, name) -> Bucket:
        raise NotImplementedError


class Gateway:
    auth: AuthClient
    storage: Storage

    def table(self, name) -> TableQuery:
        raise NotImplementedError


def parse_embeds(columns):
    """Split ``"*, scenarios(title)"`` into (plain columns, {table: [columns]})."""
    plain, embeds = [], {}
    depth, token = 0, ""
    for char in columns + ",":
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        if char == "," and depth == 0:
            token = token.strip()
            if "(" in token:
                name, inner = token.split("(", 1)
                embeds[name.strip()] = [c.strip() for c in inner.rstrip(")").split(",") if c.strip()]
            elif token:
                plain.append(token)
            token = ""
        else:
            token += char
    return plain, embeds
