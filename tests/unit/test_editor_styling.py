from streamlit.testing.v1 import AppTest


def _styling_page():
    import streamlit as st

    from resume_schema import default_document, default_order
    from services.editor_session import EditorSession
    from services.suggestions import SuggestionBoard
    from ui.state import EditorState
    from ui.tabs.editor import _render_styling

    if "editor_state" not in st.session_state:
        document = default_document()
        document.styling.fontFamily = "Comic Sans MS"
        document.styling.textAlign = "start"
        st.session_state["editor_state"] = EditorState(
            session=EditorSession(document, default_order()),
            board=SuggestionBoard(),
        )
    _render_styling(st.session_state["editor_state"])


def test_unlisted_styling_survives_first_render():
    """
    Scenario: the saved font and alignment are not among the offered choices.
    Expected: drawing the page leaves them as they are.
    """
    at = AppTest.from_function(_styling_page).run()

    assert not at.exception
    styling = at.session_state["editor_state"].session.document.styling
    assert styling.fontFamily == "Comic Sans MS"
    assert styling.textAlign == "start"
    assert styling.fontSize == "0.9rem"


def test_user_choice_is_stored():
    at = AppTest.from_function(_styling_page).run()

    at.selectbox[0].select("Lato").run()

    styling = at.session_state["editor_state"].session.document.styling
    assert styling.fontFamily == "Lato"
    assert styling.textAlign == "start"
