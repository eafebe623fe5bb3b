"""Shared fixtures: an in-memory stand-in for the Supabase client."""

import copy

import pytest
from fastapi.testclient import TestClient

from queens_facts.core.config import Settings
from queens_facts.main import create_app


FACTS = [
    {"fact_id": 1, "fact_text": "The Museum of the Moving Image sits on the old Astoria Studios lot.",
     "neighborhood": "Astoria", "category": "Film", "zipcode": "11106"},
    {"fact_id": 2, "fact_text": "Astoria has one of the largest Greek communities outside Greece.",
     "neighborhood": "Astoria", "category": "Food", "zipcode": "11105"},
    {"fact_id": 3, "fact_text": "Bohemian Hall is the oldest beer garden in New York City.",
     "neighborhood": "Astoria", "category": "Food", "zipcode": "11105"},
    {"fact_id": 4, "fact_text": "The Pepsi-Cola sign has glowed over the East River since 1936.",
     "neighborhood": "Long Island City", "category": "History", "zipcode": "11101"},
    {"fact_id": 5, "fact_text": "Gantry Plaza's cranes once loaded rail cars onto barges.",
     "neighborhood": "Long Island City", "category": "Food", "zipcode": "11101"},
    {"fact_id": 6, "fact_text": "Main Street in Flushing has some of the best dumplings in the city.",
     "neighborhood": "Flushing", "category": "Food", "zipcode": "11354"},
    {"fact_id": 7, "fact_text": "Jackson Heights is a historic district of garden apartments.",
     "neighborhood": "Jackson Heights", "category": "History", "zipcode": "11372"},
    {"fact_id": 8, "fact_text": "MoMA PS1 occupies a former public school building.",
     "neighborhood": "Long Island City", "category": "Art", "zipcode": "11109"},
]


class FakeAPIError(Exception):
    """Shaped like postgrest's APIError: carries .message."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    def __init__(self, client, table):
        self.client = client
        self.table = table
        self.columns = "*"
        self.filters = []
        self.row_limit = None
        self.rows_to_insert = None

    def select(self, columns="*"):
        self.columns = columns
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def limit(self, n):
        self.row_limit = n
        return self

    def insert(self, rows):
        self.rows_to_insert = rows
        return self

    def execute(self):
        self.client.executed.append(self)
        if self.table in self.client.fail_tables:
            raise self.client.fail_tables[self.table]

        if self.rows_to_insert is not None:
            self.client.inserted.setdefault(self.table, []).extend(self.rows_to_insert)
            return FakeResponse(list(self.rows_to_insert))

        rows = [
            r for r in self.client.tables.get(self.table, [])
            if all(str(r.get(col)) == str(val) for col, val in self.filters)
        ]
        if self.row_limit:
            rows = rows[: self.row_limit]
        if self.columns != "*":
            cols = [c.strip() for c in self.columns.split(",")]
            rows = [{c: r.get(c) for c in cols} for r in rows]
        return FakeResponse(copy.deepcopy(rows))


class FakeRPC:
    def __init__(self, client, name, params):
        self.client = client
        self.name = name
        self.params = params

    def execute(self):
        self.client.rpc_calls.append((self.name, self.params))
        if self.client.rpc_error is not None:
            raise self.client.rpc_error
        n = self.params.get("n", 1)
        return FakeResponse(copy.deepcopy(self.client.tables.get("neighborhood_fun_facts", [])[:n]))


class FakeSupabase:
    def __init__(self, facts=None):
        self.tables = {"neighborhood_fun_facts": copy.deepcopy(FACTS if facts is None else facts)}
        self.inserted = {}
        self.executed = []
        self.rpc_calls = []
        self.fail_tables = {}
        self.rpc_error = None

    def table(self, name):
        return FakeQuery(self, name)

    def rpc(self, name, params=None):
        return FakeRPC(self, name, params or {})

    def facts_queries(self):
        return [q for q in self.executed if q.table == "neighborhood_fun_facts"]


def make_settings(**overrides):
    base = {
        "APP_ENV": "development",
        "RANDOM_STRATEGY": "in_process",
        "ENDPOINT_AUDIT_ENABLED": False,
        "RATE_LIMIT_ENABLED": False,
        "FUZZY_CUTOFF": 60,
    }
    base.update(overrides)
    return Settings(**base)


@pytest.fixture
def fake_sb():
    return FakeSupabase()


@pytest.fixture
def make_client(fake_sb):
    def _make(**overrides):
        app = create_app(sb=fake_sb, config=make_settings(**overrides))
        return TestClient(app)
    return _make


@pytest.fixture
def client(make_client):
    return make_client()
