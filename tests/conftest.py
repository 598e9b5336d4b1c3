"""
Pytest fixtures for the fact board tests.

Provides sample facts, an in-process fake store implementing the FactStore
operations, a temporary SQLite fact database, and a FastAPI TestClient wired
to it.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from board.errors import StoreError  # noqa: E402
from board.models import Fact  # noqa: E402


# ── Fake store ────────────────────────────────────────────────────────────────

class FakeStore:
    """In-memory FactStore.

    ``fail`` holds operation names ("fetch_facts", "insert_fact",
    "increment_vote") that should raise StoreError with ``fail_status``.
    Every call is recorded in ``calls``.
    """

    def __init__(self, facts=()):
        self.rows: dict[int, Fact] = {f.id: f for f in facts}
        self.calls: list[tuple] = []
        self.fail: set[str] = set()
        self.fail_status: int | None = 500
        self._next_id = max(self.rows, default=0) + 1

    def _maybe_fail(self, op: str) -> None:
        if op in self.fail:
            raise StoreError(f"{op} failed", status_code=self.fail_status)

    async def fetch_facts(self, category=None, limit=1000):
        self.calls.append(("fetch_facts", category, limit))
        self._maybe_fail("fetch_facts")
        facts = [f for f in self.rows.values()
                 if category is None or f.category == category]
        facts.sort(key=lambda f: f.votes_interesting, reverse=True)
        return facts[:limit]

    async def insert_fact(self, text, source, category):
        self.calls.append(("insert_fact", text, source, category))
        self._maybe_fail("insert_fact")
        fact = Fact(id=self._next_id, text=text, source=source, category=category)
        self.rows[fact.id] = fact
        self._next_id += 1
        return fact

    async def increment_vote(self, fact_id, column):
        self.calls.append(("increment_vote", fact_id, column))
        self._maybe_fail("increment_vote")
        if fact_id not in self.rows:
            raise StoreError(f"Fact {fact_id} not found", status_code=404)
        current = self.rows[fact_id]
        updated = current.with_votes(column, current.votes(column) + 1)
        self.rows[fact_id] = updated
        return updated


# ── Sample data ───────────────────────────────────────────────────────────────

def _sample_facts() -> list[Fact]:
    return [
        Fact(id=1, text="React is being developed by Meta (formerly facebook)",
             source="https://opensource.fb.com/", category="technology",
             votes_interesting=24, votes_mindblowing=9, votes_false=4),
        Fact(id=2, text="Lisbon is the capital of Portugal",
             source="https://en.wikipedia.org/wiki/Lisbon", category="society",
             votes_interesting=8, votes_mindblowing=3, votes_false=1),
        Fact(id=3, text="Bananas are berries, but strawberries are not",
             source="https://www.britannica.com/story/is-a-banana-a-berry",
             category="science", votes_interesting=2, votes_mindblowing=1,
             votes_false=6),
        Fact(id=4, text="Octopuses have three hearts",
             source="https://ocean.si.edu/ocean-life/invertebrates/octopus",
             category="science", votes_interesting=12, votes_mindblowing=5,
             votes_false=0),
    ]


@pytest.fixture
def sample_facts():
    """Four facts across three categories, deliberately not in vote order."""
    return _sample_facts()


@pytest.fixture
def fake_store(sample_facts):
    return FakeStore(sample_facts)


@pytest.fixture
def empty_store():
    return FakeStore()


# ── API fixtures ──────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def _reset_rate_limits():
    """Rate-limit counters are process-global; start every test with none."""
    import api.app as app_mod
    app_mod._rate_counters.clear()
    yield
    app_mod._rate_counters.clear()


@pytest.fixture
def fact_db(tmp_path, sample_facts):
    """Temporary fact database pre-loaded with the sample facts."""
    from api.database import _make_conn, init_db

    db = tmp_path / "facts.sqlite"
    init_db(db)
    conn = _make_conn(db)
    conn.executemany(
        "INSERT INTO facts (id, text, source, category, votesInteresting, "
        "votesMindblowing, votesFalse) VALUES (?, ?, ?, ?, ?, ?, ?)",
        [(f.id, f.text, f.source, f.category, f.votes_interesting,
          f.votes_mindblowing, f.votes_false) for f in sample_facts],
    )
    conn.commit()
    conn.close()
    return db


@pytest.fixture
def client(fact_db):
    """TestClient for the fact API backed by ``fact_db``."""
    from fastapi.testclient import TestClient

    from api.app import create_app

    app = create_app(db_path=fact_db)
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
