import matplotlib

matplotlib.use("Agg")

import pytest

from app_utils.storage import KeyValueStorage
from app_utils.store import HabitStore


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (database)")


class FailingStorage:
    """Backend whose every call blows up."""

    def __init__(self):
        self.set_calls = 0

    def get(self, key):
        raise OSError("storage unavailable")

    def set(self, key, value):
        self.set_calls += 1
        raise OSError("storage unavailable")


class DictStorage:
    """In-memory backend with the same get/set contract."""

    def __init__(self, data=None):
        self.data = dict(data or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value
        return True


@pytest.fixture
def storage(tmp_path):
    kv = KeyValueStorage(f"sqlite:///{tmp_path / 'habits.db'}")
    kv.init_db()
    yield kv
    kv.dispose()


@pytest.fixture
def memory_storage():
    return DictStorage()


@pytest.fixture
def failing_storage():
    return FailingStorage()


@pytest.fixture
def store(memory_storage):
    s = HabitStore(memory_storage).load()
    yield s
    s.close()
