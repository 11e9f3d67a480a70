import json
import os
from typing import List, Optional, Tuple

from resume_schema import ResumeDocument, default_document, default_order
from services.migration import migrate_document, migrate_order
from utils.console_logger import log

DEFAULT_STORAGE_DIR = "storage"
DOCUMENT_KEY = "resume-data"
ORDER_KEY = "resume-sections"


class LocalStore:
    """Durable key/value store: one `<key>.json` file per key inside `directory`."""

    def __init__(self, directory=DEFAULT_STORAGE_DIR):
        self.directory = directory

    def _path(self, key: str) -> str:
        return os.path.join(self.directory, f"{key}.json")

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def set(self, key: str, value: str) -> None:
        if self.directory and not os.path.exists(self.directory):
            os.makedirs(self.directory)
        path = self._path(key)
        # A failed write leaves the previous file intact
        tmp_path = f"{path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(value)
        os.replace(tmp_path, path)

    def delete(self, key: str) -> None:
        path = self._path(key)
        if os.path.exists(path):
            os.remove(path)


class ResumeStore:
    """
    Saves and loads the resume document and the section order under two
    independent keys. Never raises for bad stored data: each half falls back
    to its own default, so a corrupt order cannot block a good document.
    """

    def __init__(self, backend, status_callback=None):
        self.backend = backend
        self.status_callback = status_callback

    def _read(self, key: str, migrate, fallback):
        try:
            text = self.backend.get(key)
            if text is None:
                return fallback()
            return migrate(json.loads(text))
        except (OSError, ValueError, RecursionError) as e:
            # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors;
            # absurdly deep nesting raises RecursionError
            log(f"   ❌ Failed to load '{key}', using defaults: {e}", self.status_callback)
            return fallback()

    def load(self) -> Tuple[ResumeDocument, List[str]]:
        document = self._read(DOCUMENT_KEY, migrate_document, default_document)
        order = self._read(ORDER_KEY, migrate_order, default_order)
        return document, order

    def _write(self, key: str, payload) -> bool:
        try:
            self.backend.set(key, json.dumps(payload, indent=4))
            return True
        except (OSError, TypeError, ValueError) as e:
            log(f"   ❌ Failed to save '{key}': {e}", self.status_callback)
            return False

    def save(self, document: ResumeDocument, order: List[str]) -> bool:
        document_saved = self._write(DOCUMENT_KEY, document.model_dump(mode="json"))
        order_saved = self._write(ORDER_KEY, list(order))
        return document_saved and order_saved

    def clear(self) -> None:
        self.backend.delete(DOCUMENT_KEY)
        self.backend.delete(ORDER_KEY)
