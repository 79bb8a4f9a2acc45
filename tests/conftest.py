"""Shared fixtures: an in-memory stand-in for the Supabase client.

``FakeClient`` implements the slice of the postgrest query builder and the
auth API that the app uses, so tests never reach the network.
"""

import copy
import itertools
from types import SimpleNamespace

import pytest
import streamlit as st


class FakeAuthError(Exception):
    """Mimics the SDK's auth errors, which carry a ``message`` attribute."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class FakeResult:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    def __init__(self, client, table):
        self.client = client
        self.table = table
        self.action = "select"
        self.payload = None
        self.on_conflict = None
        self.count = None
        self.embed = False
        self.filters = []
        self.ordering = []
        self.row_limit = None
        self.row_range = None

    # Builder methods

    def select(self, columns="*", count=None):
        self.action = "select"
        self.count = count
        self.embed = "profiles(" in columns
        return self

    def insert(self, data):
        self.action, self.payload = "insert", data
        return self

    def upsert(self, data, on_conflict=None):
        self.action, self.payload, self.on_conflict = "upsert", data, on_conflict
        return self

    def update(self, data):
        self.action, self.payload = "update", data
        return self

    def delete(self):
        self.action = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def gte(self, column, value):
        self.filters.append(lambda row: row.get(column) is not None and row.get(column) >= value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column, desc=False):
        self.ordering.append((column, desc))
        return self

    def limit(self, size):
        self.row_limit = size
        return self

    def range(self, start, end):
        self.row_range = (start, end)
        return self

    # Execution

    def _rows(self):
        return self.client.tables.setdefault(self.table, [])

    def _matching(self):
        return [row for row in self._rows() if all(f(row) for f in self.filters)]

    def _with_profile(self, row):
        row = copy.deepcopy(row)
        if self.embed:
            profiles = {p["id"]: p for p in self.client.tables.get("profiles", [])}
            row["profiles"] = copy.deepcopy(profiles.get(row.get("player_id")))
        return row

    def _insert_row(self, row):
        row = dict(row)
        row.setdefault("id", f"{self.table}-{next(self.client.ids)}")
        self._rows().append(row)
        return copy.deepcopy(row)

    def execute(self):
        self.client.executed.append((self.table, self.action))
        if self.client.fail_tables and self.table in self.client.fail_tables:
            raise RuntimeError(f"relation {self.table} unavailable")

        if self.action == "select":
            rows = self._matching()
            for column, desc in reversed(self.ordering):
                rows = sorted(rows, key=lambda r: (r.get(column) is None, r.get(column)), reverse=desc)
            total = len(rows)
            if self.row_range is not None:
                start, end = self.row_range
                rows = rows[start:end + 1]
            if self.row_limit is not None:
                rows = rows[:self.row_limit]
            # The server caps every response like PostgREST max-rows
            rows = rows[:self.client.max_rows]
            return FakeResult([self._with_profile(r) for r in rows],
                              count=total if self.count else None)

        if self.action == "insert":
            payload = self.payload if isinstance(self.payload, list) else [self.payload]
            return FakeResult([self._insert_row(r) for r in payload])

        if self.action == "upsert":
            keys = self.on_conflict.split(",") if self.on_conflict else ["id"]
            for row in self._rows():
                if all(row.get(k) == self.payload.get(k) for k in keys):
                    row.update(self.payload)
                    return FakeResult([copy.deepcopy(row)])
            return FakeResult([self._insert_row(self.payload)])

        if self.action == "update":
            rows = self._matching()
            for row in rows:
                row.update(self.payload)
            return FakeResult(copy.deepcopy(rows))

        if self.action == "delete":
            rows = self._matching()
            self.client.tables[self.table] = [r for r in self._rows() if r not in rows]
            return FakeResult(copy.deepcopy(rows))

        raise AssertionError(f"unknown action {self.action}")


class FakeAuth:
    def __init__(self):
        self.users = {}
        self.session = None
        self.listeners = []
        self.get_session_error = None
        self.sign_up_signs_in = False
        self._ids = itertools.count(1)

    def add_user(self, email, password, user_id=None):
        user = SimpleNamespace(id=user_id or f"user-{next(self._ids)}", email=email)
        self.users[email] = (password, user)
        return user

    def _emit(self, event):
        for callback in list(self.listeners):
            callback(event, self.session)

    def get_session(self):
        if self.get_session_error is not None:
            raise self.get_session_error
        return self.session

    def on_auth_state_change(self, callback):
        self.listeners.append(callback)
        return SimpleNamespace(unsubscribe=lambda: self.listeners.remove(callback))

    def sign_in_with_password(self, credentials):
        password, user = self.users.get(credentials["email"], (None, None))
        if user is None or password != credentials["password"]:
            raise FakeAuthError("Invalid login credentials")
        self.session = SimpleNamespace(user=user, access_token="token")
        self._emit("SIGNED_IN")
        return SimpleNamespace(user=user, session=self.session)

    def sign_up(self, credentials):
        if credentials["email"] in self.users:
            raise FakeAuthError("User already registered")
        user = self.add_user(credentials["email"], credentials["password"])
        if self.sign_up_signs_in:
            self.session = SimpleNamespace(user=user, access_token="token")
            self._emit("SIGNED_IN")
        return SimpleNamespace(user=user, session=self.session)

    def sign_out(self):
        self.session = None
        self._emit("SIGNED_OUT")


class FakeClient:
    def __init__(self, tables=None):
        self.tables = copy.deepcopy(tables or {})
        self.auth = FakeAuth()
        self.ids = itertools.count(1)
        self.executed = []
        self.fail_tables = set()
        self.max_rows = 1000

    def table(self, name):
        return FakeQuery(self, name)


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture(autouse=True)
def clear_streamlit_cache():
    st.cache_data.clear()
    yield
    st.cache_data.clear()


@pytest.fixture
def token(request):
    """A cache token unique to the running test."""
    return f"{request.node.nodeid}:1"


@pytest.fixture
def profiles():
    return [
        {"id": "p1", "username": "alex", "email": "alex@example.com", "full_name": "Alex Wong",
         "jersey_number": 9, "position": "Forward", "phone": None},
        {"id": "p2", "username": "ben", "email": "ben@example.com", "full_name": "Ben Lee",
         "jersey_number": 4, "position": "Defender", "phone": None},
        {"id": "p3", "username": "chris", "email": "chris@example.com", "full_name": "Chris Chan",
         "jersey_number": 1, "position": "Goalkeeper", "phone": None},
    ]


@pytest.fixture
def client(profiles):
    return FakeClient({"profiles": profiles})


@pytest.fixture
def clock():
    return FakeClock()
