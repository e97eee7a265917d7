# tests/conftest.py
"""
Fixtures partagées : client Supabase en mémoire et client HTTP de test.
Les variables d'environnement doivent exister avant d'importer `app`.
"""
import os

os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("PROPERTY_API_KEY", "test-api-key")
os.environ.setdefault("CODE_CHECK_BACKOFF_SECONDS", "0")

import copy
import itertools
import re
import uuid
from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from app.models import (
    AgentRef, ContactDetails, ProjectRef, Property, Requirement
)

ADMIN_ID = "admin-1"
AGENT_ID = "agent-1"
OTHER_AGENT_ID = "agent-2"
PROJECT_ID = "project-1"

TOKENS = {
    "admin-token": ADMIN_ID,
    "agent-token": AGENT_ID,
    "other-agent-token": OTHER_AGENT_ID,
}

# Jointures simulées : (alias, colonne, table, champs)
JOINS = {
    "properties": (
        ("agent", "agent_id", "profiles", ("name", "email")),
        ("project", "project_id", "projects", ("name", "location")),
    ),
    "property_requirements": (
        ("assigned_agent", "assigned_agent_id", "profiles", ("name", "email")),
    ),
}

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


def _like_to_regex(pattern: str) -> str:
    parts = []
    chars = iter(pattern)
    for char in chars:
        if char == "\\":
            parts.append(re.escape(next(chars, "\\")))
        elif char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return "".join(parts)


class FakeQuery:
    """Sous-ensemble du query builder postgrest utilisé par les CRUD"""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self.operation = "select"
        self.columns = "*"
        self.payload = None
        self.filters = []
        self.ordering = None
        self.max_rows = None

    def select(self, columns: str = "*"):
        self.operation = "select"
        self.columns = columns
        return self

    def insert(self, data):
        self.operation = "insert"
        self.payload = data
        return self

    def upsert(self, data):
        self.operation = "upsert"
        self.payload = data
        return self

    def update(self, data):
        self.operation = "update"
        self.payload = data
        return self

    def delete(self):
        self.operation = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def ilike(self, column, pattern):
        regex = re.compile(_like_to_regex(pattern), re.IGNORECASE)
        self.filters.append(lambda row: row.get(column) is not None and bool(regex.fullmatch(str(row[column]))))
        return self

    def order(self, column, desc=False):
        self.ordering = (column, desc)
        return self

    def limit(self, count):
        self.max_rows = count
        return self

    def _matching(self):
        rows = self.db.tables.setdefault(self.table_name, [])
        return [row for row in rows if all(f(row) for f in self.filters)]

    def execute(self):
        error = self.db.errors.get(self.table_name)
        if error is not None:
            raise error
        return SimpleNamespace(data=getattr(self, f"_{self.operation}")())

    def _select(self):
        rows = [copy.deepcopy(row) for row in self._matching()]
        if self.ordering:
            column, desc = self.ordering
            rows.sort(key=lambda row: (row.get(column) is None, row.get(column) or ""), reverse=desc)
        if self.max_rows is not None:
            rows = rows[:self.max_rows]
        if ":" in self.columns:
            rows = [self.db.with_joins(self.table_name, row) for row in rows]
        return rows

    def _insert(self):
        items = self.payload if isinstance(self.payload, list) else [self.payload]
        return [copy.deepcopy(self.db.add_row(self.table_name, item)) for item in items]

    def _upsert(self):
        rows = self.db.tables.setdefault(self.table_name, [])
        existing = next((row for row in rows if row.get("id") == self.payload.get("id")), None)
        if existing is None:
            return self._insert()
        existing.update(copy.deepcopy(self.payload))
        return [copy.deepcopy(existing)]

    def _update(self):
        updated = []
        for row in self._matching():
            row.update(copy.deepcopy(self.payload))
            row["updated_at"] = self.db.next_timestamp()
            updated.append(copy.deepcopy(row))
        return updated

    def _delete(self):
        removed = self._matching()
        self.db.tables[self.table_name] = [
            row for row in self.db.tables.get(self.table_name, []) if row not in removed
        ]
        return [copy.deepcopy(row) for row in removed]


class FakeRpc:
    def __init__(self, db: "FakeSupabase", name: str, params: dict):
        self.db = db
        self.name = name
        self.params = params

    def execute(self):
        self.db.rpc_calls.append((self.name, self.params))
        result = self.db.rpc_results.get(self.name)
        if isinstance(result, Exception):
            raise result
        if callable(result):
            result = result(**self.params)
        return SimpleNamespace(data=result)


class FakeAdminAuth:
    def __init__(self, auth: "FakeAuth"):
        self.auth = auth

    def create_user(self, attributes: dict):
        if attributes["email"] in self.auth.passwords:
            raise Exception("User already registered")
        user_id = f"user-{uuid.uuid4().hex[:8]}"
        self.auth.passwords[attributes["email"]] = (attributes["password"], user_id)
        return SimpleNamespace(user=SimpleNamespace(id=user_id, email=attributes["email"]))


class FakeAuth:
    def __init__(self):
        self.tokens = dict(TOKENS)
        self.passwords = {}
        self.reset_emails = []
        self.sign_ins = []
        self.admin = FakeAdminAuth(self)

    def get_user(self, token: str):
        if token not in self.tokens:
            raise Exception("invalid JWT")
        return SimpleNamespace(user=SimpleNamespace(id=self.tokens[token]))

    def sign_in_with_password(self, credentials: dict):
        self.sign_ins.append(credentials["email"])
        stored = self.passwords.get(credentials["email"])
        if not stored or stored[0] != credentials["password"]:
            raise Exception("Invalid login credentials")
        user_id = stored[1]
        token = f"jwt-{user_id}"
        self.tokens[token] = user_id
        return SimpleNamespace(
            user=SimpleNamespace(id=user_id),
            session=SimpleNamespace(access_token=token, refresh_token=f"refresh-{user_id}"),
        )

    def reset_password_for_email(self, email: str, options: dict = None):
        self.reset_emails.append(email)


class FakeBucket:
    def __init__(self, storage: "FakeStorage", bucket: str):
        self.storage = storage
        self.bucket = bucket

    def upload(self, path, file, file_options=None):
        self.storage.files[(self.bucket, path)] = file
        return SimpleNamespace(path=path)

    def get_public_url(self, path):
        return f"https://test.supabase.co/storage/v1/object/public/{self.bucket}/{path}"


class FakeStorage:
    def __init__(self):
        self.files = {}

    def from_(self, bucket: str) -> FakeBucket:
        return FakeBucket(self, bucket)


class FakeSupabase:
    """Client Supabase en mémoire (tables, rpc, auth, storage)"""

    def __init__(self):
        self.tables = {}
        self.errors = {}
        self.rpc_results = {}
        self.rpc_calls = []
        self.auth = FakeAuth()
        self.storage = FakeStorage()
        self._clock = itertools.count(1)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: dict) -> FakeRpc:
        return FakeRpc(self, name, params)

    def next_timestamp(self) -> str:
        return (BASE_TIME + timedelta(minutes=next(self._clock))).isoformat()

    def add_row(self, table: str, data: dict) -> dict:
        row = copy.deepcopy(data)
        row.setdefault("id", f"{table}-{uuid.uuid4().hex[:8]}")
        row.setdefault("created_at", self.next_timestamp())
        self.tables.setdefault(table, []).append(row)
        return row

    def with_joins(self, table: str, row: dict) -> dict:
        for alias, column, target, fields in JOINS.get(table, ()):
            ref = next(
                (r for r in self.tables.get(target, []) if r.get("id") == row.get(column)),
                None
            )
            row[alias] = {f: ref.get(f) for f in fields} if ref else None
        return row


@pytest.fixture
def fake_db():
    """Base en mémoire avec un admin, deux agents et un projet"""
    db = FakeSupabase()
    db.add_row("profiles", {"id": ADMIN_ID, "name": "Asha Admin", "email": "admin@magixland.in", "role": "admin"})
    db.add_row("profiles", {"id": AGENT_ID, "name": "Ravi Kumar", "email": "ravi@magixland.in", "role": "agent"})
    db.add_row("profiles", {"id": OTHER_AGENT_ID, "name": "Priya Shah", "email": "priya@magixland.in", "role": "agent"})
    db.add_row("projects", {"id": PROJECT_ID, "name": "Skyline Towers", "location": "Pune", "created_by": ADMIN_ID})
    return db


@pytest.fixture
def client(fake_db):
    """TestClient avec le client Supabase remplacé par fake_db"""
    from fastapi.testclient import TestClient
    from app.db import get_supabase, get_supabase_admin, get_supabase_session
    from main import app

    app.dependency_overrides[get_supabase] = lambda: fake_db
    app.dependency_overrides[get_supabase_admin] = lambda: fake_db
    app.dependency_overrides[get_supabase_session] = lambda: fake_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    return auth_headers("admin-token")


@pytest.fixture
def agent_headers():
    return auth_headers("agent-token")


def make_property(**overrides) -> Property:
    """Propriété complète avec jointures, surchargeable champ par champ"""
    data = {
        "id": "prop-1",
        "title": "Sea View Apartment",
        "type": "Apartment",
        "price": 7500000.0,
        "bedrooms": 3,
        "bathrooms": 2,
        "area": 1250.0,
        "address": "12 Marine Drive, Mumbai",
        "status": "available",
        "property_code": "NA007",
        "property_code_type": "New Apartment",
        "source_type": "Inhouse",
        "agent_id": AGENT_ID,
        "project_id": PROJECT_ID,
        "agent": AgentRef(name="Ravi Kumar", email="ravi@magixland.in"),
        "project": ProjectRef(name="Skyline Towers", location="Pune"),
    }
    data.update(overrides)
    return Property(**data)


def make_requirement(**overrides) -> Requirement:
    data = {
        "id": "req-1",
        "title": "2BHK near metro",
        "customer_name": "Meera Iyer",
        "customer_phone": "9876543210",
        "customer_email": "meera@example.com",
        "property_type": "Apartment",
        "price": 6000000.0,
        "bedrooms": 2,
        "preferred_locations": ["Baner", "Aundh"],
        "priority": "high",
        "status": "active",
        "created_by": AGENT_ID,
        "assigned_agent_id": AGENT_ID,
    }
    data.update(overrides)
    return Requirement(**data)


def contact(name=None, phone=None) -> ContactDetails:
    return ContactDetails(name=name, phone=phone)
