import streamlit as st

from ui.sidebar import render_sidebar
from ui.state import get_editor_state
from ui.tabs.editor import render_editor_tab
from ui.tabs.guide import render_guide_tab
from ui.tabs.preview import render_preview_tab

st.set_page_config(page_title="ResumeForge", page_icon="📝", layout="wide")

# --- SIDEBAR: SETTINGS + RESET/UNDO ---
sidebar_state = render_sidebar(get_editor_state)
editor_state = get_editor_state(sidebar_state.config.get("storage_dir", "storage"))

# --- MAIN LAYOUT: FORM | LIVE PREVIEW ---
tab_edit, tab_guide = st.tabs(["📝 Editor", "📖 Guide"])

with tab_edit:
    form_col, preview_col = st.columns([1, 1])
    with form_col:
        render_editor_tab(editor_state, sidebar_state)
    with preview_col:
        st.header("👀 Live Preview")
        render_preview_tab(editor_state)

with tab_guide:
    render_guide_tab()
