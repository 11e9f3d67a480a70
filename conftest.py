import pytest

from resume_schema import default_document, default_order
from services.editor_session import EditorSession
from services.storage import LocalStore, ResumeStore

# Pytest puts the repo root on sys.path because this file is in the root.


class MemoryStore:
    """Dict-backed stand-in for LocalStore."""

    def __init__(self, data=None):
        self.data = dict(data or {})
        self.writes = 0

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.writes += 1
        self.data[key] = value

    def delete(self, key):
        self.data.pop(key, None)


@pytest.fixture
def memory_backend():
    return MemoryStore()


@pytest.fixture
def resume_store(memory_backend):
    return ResumeStore(memory_backend)


@pytest.fixture
def disk_store(tmp_path):
    """ResumeStore writing real files under a temporary directory"""
    return ResumeStore(LocalStore(str(tmp_path / "storage")))


@pytest.fixture
def session(resume_store):
    return EditorSession(default_document(), default_order(), resume_store)
