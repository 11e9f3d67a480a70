import streamlit as st
import streamlit.components.v1 as components

from agents.layout_agent import render_resume_html
from utils.file_utils import get_clean_filename


def render_preview_tab(editor_state):
    session = editor_state.session
    html = render_resume_html(session.document, session.order)

    c1, c2 = st.columns([3, 1])
    with c1:
        st.caption("Use **Download PDF** inside the preview to print or save it as a PDF.")
    with c2:
        st.download_button(
            label="⬇️ HTML",
            data=html,
            file_name=get_clean_filename(session.document.personal.name),
            mime="text/html",
            width="stretch",
        )

    components.html(html, height=1100, scrolling=True)
