from datetime import datetime, timedelta, timezone

import pytest

from expense_app.repository import ExpenseStore


class FakeClock:
    """Controllable UTC clock handed to the store."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)

    def set(self, *args) -> None:
        self.now = datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 15, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(clock):
    s = ExpenseStore(":memory:", clock=clock)
    s.initialize()
    yield s
    s.close()


@pytest.fixture
def db_file(tmp_path):
    return tmp_path / "undiyal.db"


@pytest.fixture
def file_store(db_file, clock):
    s = ExpenseStore(db_file, clock=clock)
    s.initialize()
    yield s
    s.close()
