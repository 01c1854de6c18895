from __future__ import annotations

from datetime import datetime

import pytest

from restobar.persistence import MemoryCollectionStore, SqliteCollectionStore
from restobar.repository import RestobarRepository
from tests.helpers import NOW


@pytest.fixture
def repo() -> RestobarRepository:
    return RestobarRepository(MemoryCollectionStore())


@pytest.fixture
def sqlite_repo(tmp_path) -> RestobarRepository:
    return RestobarRepository(SqliteCollectionStore(tmp_path / "restobar.db"))


@pytest.fixture
def now() -> datetime:
    return NOW
