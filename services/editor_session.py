"""
Live editing state and the reset/undo snapshot around it.

One `EditorSession` owns the document and section order being edited. UI code
receives it explicitly and routes every change through it, so each mutation
is followed by a save.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from resume_schema import (
    LIST_FIELDS,
    Entry,
    ResumeDocument,
    ValidationResult,
    default_document,
    default_order,
    validate_document,
)
from services.ordering import reorder, reorder_entries

_PATH_RE = re.compile(r"^(?P<field>\w+)(?:\[(?P<index>\d+)\])?(?:\.(?P<attr>\w+))?$")


def _parse_path(path: str):
    match = _PATH_RE.match(path)
    if not match:
        raise KeyError(f"Malformed field path: {path!r}")
    index = match.group("index")
    return match.group("field"), int(index) if index is not None else None, match.group("attr")


class EditorSession:
    def __init__(self, document: ResumeDocument, order: List[str], store=None):
        self.document = document
        self.order = list(order)
        self.store = store

    @classmethod
    def open(cls, store) -> "EditorSession":
        document, order = store.load()
        return cls(document, order, store)

    def save(self) -> bool:
        if self.store is None:
            return False
        return self.store.save(self.document, self.order)

    # --- Field access ---
    def _resolve(self, path: str) -> Tuple[object, str]:
        """Returns (owner object, attribute name) for a field path."""
        field, index, attr = _parse_path(path)
        if field not in ResumeDocument.model_fields:
            raise KeyError(f"Unknown field: {field!r}")

        if index is not None:
            if field not in LIST_FIELDS:
                raise KeyError(f"{field!r} is not a list section")
            entries = getattr(self.document, field)
            if index >= len(entries):
                raise KeyError(f"No entry at {field}[{index}]")
            owner = entries[index]
        elif field in LIST_FIELDS:
            raise KeyError(f"{path!r} needs an entry index")
        elif attr is not None:
            owner = getattr(self.document, field)
        else:
            return self.document, field

        if attr is None or attr == "id" or attr not in getattr(type(owner), "model_fields", {}):
            raise KeyError(f"Unknown field path: {path!r}")
        return owner, attr

    def get_field(self, path: str):
        owner, attr = self._resolve(path)
        return getattr(owner, attr)

    def set_field(self, path: str, value: Optional[str]) -> None:
        """Sets a text field such as `summary`, `personal.name` or `projects[0].description`."""
        owner, attr = self._resolve(path)
        if owner is self.document and attr != "summary":
            raise KeyError(f"{path!r} is not a text field")
        setattr(owner, attr, value)
        self.save()

    # --- Entries ---
    def _entries(self, list_name: str) -> List[Entry]:
        if list_name not in LIST_FIELDS:
            raise KeyError(f"Unknown list section: {list_name!r}")
        return getattr(self.document, list_name)

    def find_entry(self, list_name: str, entry_id: str) -> Entry:
        for entry in self._entries(list_name):
            if entry.id == entry_id:
                return entry
        raise KeyError(f"No entry {entry_id!r} in {list_name}")

    def set_entry_field(self, list_name: str, entry_id: str, attr: str, value: Optional[str]) -> None:
        entry = self.find_entry(list_name, entry_id)
        if attr == "id" or attr not in type(entry).model_fields:
            raise KeyError(f"Unknown field {attr!r} for {list_name}")
        setattr(entry, attr, value)
        self.save()

    def add_entry(self, list_name: str) -> Entry:
        entries = self._entries(list_name)
        entry = LIST_FIELDS[list_name]()
        entries.append(entry)
        self.save()
        return entry

    def remove_entry(self, list_name: str, entry_id: str) -> None:
        entries = self._entries(list_name)
        remaining = [entry for entry in entries if entry.id != entry_id]
        if len(remaining) == len(entries):
            raise KeyError(f"No entry {entry_id!r} in {list_name}")
        setattr(self.document, list_name, remaining)
        self.save()

    def move_entry(self, list_name: str, moving_id: str, target_id: str) -> None:
        entries = self._entries(list_name)
        setattr(self.document, list_name, reorder_entries(entries, moving_id, target_id))
        self.save()

    # --- Sections ---
    def move_section(self, moving_id: str, target_id: str) -> None:
        self.order = reorder(self.order, moving_id, target_id)
        self.save()

    def replace(self, document: ResumeDocument, order: List[str]) -> None:
        self.document = document
        self.order = list(order)
        self.save()

    def validate(self) -> ValidationResult:
        return validate_document(self.document)


# --- Reset / Undo ---
@dataclass(frozen=True)
class Snapshot:
    document: ResumeDocument
    order: Tuple[str, ...]


def take_snapshot(session: EditorSession) -> Snapshot:
    return Snapshot(
        document=session.document.model_copy(deep=True),
        order=tuple(session.order),
    )


def reset_session(session: EditorSession) -> Snapshot:
    """Replaces live state with defaults. Returns the snapshot that undoes it."""
    snapshot = take_snapshot(session)
    session.replace(default_document(), default_order())
    return snapshot


def restore_session(session: EditorSession, snapshot: Snapshot) -> None:
    """Full overwrite from `snapshot`; later edits are discarded, not merged."""
    session.replace(snapshot.document.model_copy(deep=True), list(snapshot.order))
