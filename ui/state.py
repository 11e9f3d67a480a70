from dataclasses import dataclass, field
from typing import Optional

import streamlit as st

from services.editor_session import EditorSession, Snapshot
from services.storage import LocalStore, ResumeStore
from services.suggestions import SuggestionBoard


@dataclass
class SidebarInputs:
    model_api_key: str
    model_provider: str
    model_name: str
    enable_suggestions: bool
    storage_dir: str


@dataclass
class SidebarState:
    config: dict
    current_profile_path: Optional[str]
    inputs: SidebarInputs
    llm_settings: dict = field(default_factory=dict)


@dataclass
class EditorState:
    """Everything the page keeps between Streamlit reruns for one browser session."""

    session: EditorSession
    board: SuggestionBoard
    undo_snapshot: Optional[Snapshot] = None
    # Bumped whenever live state is replaced, so widgets re-read their values
    generation: int = 0

    def refresh_widgets(self) -> None:
        self.generation += 1


def get_editor_state(storage_dir: str) -> EditorState:
    state = st.session_state.get("editor_state")
    if state is None or state.session.store.backend.directory != storage_dir:
        store = ResumeStore(LocalStore(storage_dir))
        state = EditorState(session=EditorSession.open(store), board=SuggestionBoard())
        st.session_state["editor_state"] = state
    return state
