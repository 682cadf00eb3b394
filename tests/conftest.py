import copy
from types import SimpleNamespace

import pytest


class FakeQuery:
    """Enough of the Supabase query builder for the persistence layer."""

    def __init__(self, store, table):
        self.store = store
        self.table = table
        self.filters = []
        self.action = "select"
        self.payload = None
        self.ordering = None
        self.row_limit = None

    def select(self, *columns, **kwargs):
        self.action = "select"
        return self

    def insert(self, payload):
        self.action, self.payload = "insert", payload
        return self

    def upsert(self, payload):
        self.action, self.payload = "upsert", payload
        return self

    def delete(self):
        self.action = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: str(row.get(column)) == str(value))
        return self

    def ilike(self, column, pattern):
        needle = pattern.strip("%").lower()
        self.filters.append(lambda row: needle in str(row.get(column, "")).lower())
        return self

    def order(self, column, desc=False):
        self.ordering = (column, desc)
        return self

    def limit(self, count):
        self.row_limit = count
        return self

    def execute(self):
        rows = self.store.setdefault(self.table, [])
        if self.action in ("insert", "upsert"):
            records = self.payload if isinstance(self.payload, list) else [self.payload]
            for record in records:
                if self.action == "upsert":
                    rows[:] = [row for row in rows if row.get("id") != record.get("id")]
                rows.append(copy.deepcopy(record))
            return SimpleNamespace(data=copy.deepcopy(records), count=None)

        matched = [row for row in rows if all(check(row) for check in self.filters)]
        if self.action == "delete":
            rows[:] = [row for row in rows if row not in matched]
            return SimpleNamespace(data=matched, count=None)

        if self.ordering:
            column, desc = self.ordering
            matched = sorted(matched, key=lambda row: row.get(column) or "", reverse=desc)
        if self.row_limit is not None:
            matched = matched[: self.row_limit]
        return SimpleNamespace(data=copy.deepcopy(matched), count=len(matched))


class FakeSupabase:
    def __init__(self):
        self.store = {}

    def table(self, name):
        return FakeQuery(self.store, name)


@pytest.fixture
def fake_supabase(monkeypatch):
    from tripweather.persistence import users

    client = FakeSupabase()
    monkeypatch.setattr(users, "get_supabase_client", lambda: client)
    return client
