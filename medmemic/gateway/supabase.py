# FILE: medmemic/gateway/supabase.py

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

import httpx
from supabase import AuthError, PostgrestAPIError, StorageException, create_client
from supabase.client import ClientOptions

from medmemic.config import settings
from medmemic.core.models import AuthUser
from medmemic.gateway.base import (
    APIResponse, AuthClient, Bucket, Gateway, GatewayError, Storage, TableQuery,
)

logger = logging.getLogger(__name__)

CONNECTION_ERROR_MESSAGE = "Connection error: Unable to reach server"


def _status(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def to_gateway_error(error) -> GatewayError:
    """Translate a supabase SDK or transport exception into a GatewayError."""
    if isinstance(error, PostgrestAPIError):
        return GatewayError(error.message or str(error), code=error.code)
    if isinstance(error, AuthError):
        return GatewayError(
            error.message or str(error),
            status_code=_status(getattr(error, "status", None)),
            code=getattr(error, "code", None),
        )
    if isinstance(error, StorageException):
        detail = error.args[0] if error.args and isinstance(error.args[0], dict) else {}
        return GatewayError(
            detail.get("message") or str(error),
            status_code=_status(detail.get("statusCode")),
            code=detail.get("error"),
        )
    return GatewayError(CONNECTION_ERROR_MESSAGE)


@contextmanager
def sdk_errors(action):
    try:
        yield
    except (PostgrestAPIError, AuthError, StorageException, httpx.HTTPError) as e:
        error = to_gateway_error(e)
        logger.debug("%s failed: %s", action, error.message)
        raise error from e


def _auth_user(user):
    if user is None:
        return None
    return AuthUser(id=user.id, email=user.email, user_metadata=dict(user.user_metadata or {}))


class SupabaseGateway(Gateway):
    """Gateway backed by a Supabase project through the supabase client."""

    def __init__(self, url=None, anon_key=None, timeout=None, client=None):
        self.url = (url or settings.SUPABASE_URL).rstrip("/")
        if client is None:
            timeout = timeout or settings.REQUEST_TIMEOUT
            client = create_client(
                self.url,
                anon_key or settings.SUPABASE_ANON_KEY,
                options=ClientOptions(
                    postgrest_client_timeout=timeout,
                    storage_client_timeout=int(timeout),
                ),
            )
        self.client = client
        self.auth = SupabaseAuth(client)
        self.storage = SupabaseStorage(client)

    def table(self, name):
        return SupabaseQuery(table=name, client=self.client)


class SupabaseAuth(AuthClient):
    # The client keeps the session and refreshes its token on its own
    def __init__(self, client):
        self.client = client

    def sign_up(self, email, password, metadata=None):
        with sdk_errors("sign_up"):
            response = self.client.auth.sign_up({
                "email": email,
                "password": password,
                "options": {"data": metadata or {}},
            })
        user = _auth_user(response.user)
        if user is None:
            raise GatewayError("Erreur lors de la création du compte.")
        return user

    def sign_in_with_password(self, email, password):
        with sdk_errors("sign_in"):
            response = self.client.auth.sign_in_with_password({"email": email, "password": password})
        user = _auth_user(response.user)
        if user is None:
            raise GatewayError("Erreur utilisateur non trouvé.")
        return user

    def sign_out(self):
        with sdk_errors("sign_out"):
            self.client.auth.sign_out()

    def get_user(self):
        with sdk_errors("get_user"):
            response = self.client.auth.get_user()
        return _auth_user(response.user) if response else None

    def update_user(self, metadata):
        with sdk_errors("update_user"):
            response = self.client.auth.update_user({"data": metadata})
        return _auth_user(response.user) if response else None


@dataclass
class SupabaseQuery(TableQuery):
    client: Any = None

    def _builder(self):
        table = self.client.table(self.table)
        if self.method == "select":
            return table.select(self.columns, count=self.count, head=self.head)
        if self.method == "insert":
            return table.insert(self.payload)
        if self.method == "upsert":
            return table.upsert(self.payload, on_conflict=self.on_conflict or "")
        if self.method == "update":
            return table.update(self.payload)
        if self.method == "delete":
            return table.delete()
        raise GatewayError(f"Unsupported method {self.method}")

    def execute(self):
        query = self._builder()
        for f in self.filters:
            if f.op == "eq":
                query = query.eq(f.column, f.value)
            elif f.op == "not_null":
                query = query.not_.is_(f.column, "null")
        for column, ascending in self.ordering:
            query = query.order(column, desc=not ascending)
        if self.single_row:
            query = query.single()

        with sdk_errors(f"{self.method} {self.table}"):
            response = query.execute()

        data = response.data if (self.method == "select" or self.returning) else []
        if data is None and not self.single_row:
            data = []
        return APIResponse(data=data, count=response.count)


class SupabaseStorage(Storage):
    def __init__(self, client):
        self.client = client

    def bucket(self, name):
        return SupabaseBucket(self.client, name)


@dataclass
class SupabaseBucket(Bucket):
    client: Any
    name: str

    def upload(self, path, data, content_type=None):
        with sdk_errors(f"upload {self.name}/{path}"):
            self.client.storage.from_(self.name).upload(
                path, data, {"content-type": content_type or "application/octet-stream"}
            )
        return path

    def get_public_url(self, path):
        with sdk_errors(f"public url {self.name}/{path}"):
            return self.client.storage.from_(self.name).get_public_url(path)
