import streamlit as st

from agents.phrasing_agent import SectionType, build_information
from resume_schema import (
    FONT_FAMILIES,
    FONT_SIZE_RANGE,
    LINE_HEIGHT_RANGE,
    SECTION_FIELDS,
    SECTION_TITLES,
    TEXT_ALIGNMENTS,
)
from services.ordering import neighbour_id
from services.suggestions import site_key, start_suggestion

SUGGESTION_POLL_SECONDS = 1.0

# list field -> (singular label, [(attr, label, multiline)], suggest type, context attrs)
ENTRY_FORMS = {
    "projects": (
        "Project",
        [
            ("name", "Project Name", False),
            ("projectType", "Project Type", False),
            ("role", "Role", False),
            ("period", "Period", False),
            ("description", "Description", True),
            ("preview", "Preview Link", False),
        ],
        SectionType.PROJECT_DESCRIPTION,
        {"projectName": "name", "projectRole": "role"},
    ),
    "achievements": (
        "Achievement",
        [
            ("achievement", "Achievement", False),
            ("event", "Event", False),
            ("date", "Date", False),
            ("description", "Description", True),
        ],
        SectionType.ACHIEVEMENT,
        {"event": "achievement"},
    ),
    "leadershipAndVolunteering": (
        "Role",
        [
            ("organization", "Organization", False),
            ("role", "Role", False),
            ("date", "Date", False),
            ("description", "Description", True),
        ],
        SectionType.LEADERSHIP,
        {"organization": "organization", "role": "role"},
    ),
    "education": (
        "Education",
        [
            ("degree", "Degree", False),
            ("school", "School", False),
            ("location", "Location", False),
            ("graduationDate", "Graduation Date", False),
            ("cgpa", "CGPA", False),
        ],
        None,
        {},
    ),
    "certificates": (
        "Certificate",
        [
            ("name", "Certificate Name", False),
            ("issuingOrganization", "Issuing Organization", False),
            ("date", "Date", False),
        ],
        None,
        {},
    ),
    "references": (
        "Reference",
        [
            ("name", "Name", False),
            ("contact", "Contact", False),
            ("relation", "Relation", False),
        ],
        None,
        {},
    ),
}


def _key(state, *parts):
    return ":".join(str(p) for p in (state.generation,) + parts)


def _show_errors(validation, path):
    for message in validation.messages_for(path):
        st.caption(f":red[{message}]")


def _text_widget(state, label, value, key, multiline=False):
    if multiline:
        return st.text_area(label, value=value or "", key=key, height=110)
    return st.text_input(label, value=value or "", key=key)


def _render_suggester(state, sidebar_state, site, section_type, current_text, context, on_accept):
    """✨ popover: start a suggestion in the background, then Replace copies it into the field."""
    if not sidebar_state.config.get("enable_suggestions", True):
        return

    with st.popover("✨ Suggest"):
        st.markdown("**AI Suggestion**")
        st.caption("Use this suggestion to improve your resume.")

        if st.button("Generate", key=_key(state, "suggest", site), type="primary"):
            information = build_information(state.session.document, current_text, context)
            start_suggestion(state.board, site, section_type, information, sidebar_state.llm_settings)

        _render_suggestion_panel(state, site, on_accept)


def _render_suggestion_panel(state, site, on_accept):
    # Polls only while a request for this site is pending
    was_pending = state.board.get(site).pending

    @st.fragment(run_every=SUGGESTION_POLL_SECONDS if was_pending else None)
    def panel():
        site_state = state.board.get(site)
        if site_state.pending:
            st.caption("🧠 Thinking...")
            return
        if was_pending:
            # Answer arrived: a full rerun redraws the panel without polling
            st.rerun()

        result = site_state.result
        if result is None:
            return
        if not result.success:
            st.error(result.error, icon="❌")
            return

        st.text_area(
            "Suggestion",
            value=result.suggestion,
            disabled=True,
            height=130,
            key=_key(state, "suggestion", site, site_state.ticket),
        )
        if st.button("Replace", key=_key(state, "replace", site)):
            on_accept(result.suggestion)
            state.board.clear(site)
            state.refresh_widgets()
            st.toast("Content replaced!", icon="✅")
            st.rerun()

    panel()


def _section_controls(state, section_id, up_col, down_col):
    order = state.session.order
    with up_col:
        up = neighbour_id(order, section_id, -1)
        if st.button("⬆️", key=_key(state, "section-up", section_id), disabled=up is None):
            state.session.move_section(section_id, up)
            st.rerun()
    with down_col:
        down = neighbour_id(order, section_id, 1)
        if st.button("⬇️", key=_key(state, "section-down", section_id), disabled=down is None):
            state.session.move_section(section_id, down)
            st.rerun()


def _render_summary(state, sidebar_state, validation):
    session = state.session
    value = _text_widget(state, "Summary", session.document.summary, _key(state, "summary"), multiline=True)
    if value != session.document.summary:
        session.set_field("summary", value)
    _show_errors(validation, "summary")
    _render_suggester(
        state,
        sidebar_state,
        site_key("summary"),
        SectionType.SUMMARY,
        session.document.summary,
        {},
        lambda text: session.set_field("summary", text),
    )


def _render_skills(state):
    session = state.session
    skills = session.document.skills
    for attr, label in [
        ("technicalSkills", "Technical Skills"),
        ("softSkills", "Soft Skills"),
        ("language", "Languages"),
    ]:
        current = getattr(skills, attr)
        value = st.text_area(
            f"{label} (one per line)",
            value=current or "",
            key=_key(state, "skills", attr),
            height=90,
        )
        if value != (current or ""):
            session.set_field(f"skills.{attr}", value)


def _render_entries(state, sidebar_state, validation, list_name):
    session = state.session
    singular, fields, suggest_type, context_attrs = ENTRY_FORMS[list_name]
    entries = list(getattr(session.document, list_name))
    ids = [entry.id for entry in entries]

    for index, entry in enumerate(entries):
        with st.container(border=True):
            head, up_col, down_col, remove_col = st.columns([6, 1, 1, 1])
            head.markdown(f"**{singular} {index + 1}**")

            up = neighbour_id(ids, entry.id, -1)
            if up_col.button("⬆️", key=_key(state, list_name, entry.id, "up"), disabled=up is None):
                session.move_entry(list_name, entry.id, up)
                st.rerun()
            down = neighbour_id(ids, entry.id, 1)
            if down_col.button("⬇️", key=_key(state, list_name, entry.id, "down"), disabled=down is None):
                session.move_entry(list_name, entry.id, down)
                st.rerun()
            if remove_col.button("🗑️", key=_key(state, list_name, entry.id, "remove")):
                session.remove_entry(list_name, entry.id)
                st.rerun()

            for attr, label, multiline in fields:
                current = getattr(entry, attr)
                value = _text_widget(
                    state, label, current, _key(state, list_name, entry.id, attr), multiline
                )
                if value != (current or ""):
                    session.set_entry_field(list_name, entry.id, attr, value)
                _show_errors(validation, f"{list_name}[{index}].{attr}")

                if suggest_type is not None and attr == "description":
                    context = {name: getattr(entry, source) or "" for name, source in context_attrs.items()}
                    _render_suggester(
                        state,
                        sidebar_state,
                        site_key(f"{list_name}.description", entry.id),
                        suggest_type,
                        entry.description,
                        context,
                        lambda text, entry_id=entry.id: session.set_entry_field(
                            list_name, entry_id, "description", text
                        ),
                    )

    if st.button(f"➕ Add {singular}", key=_key(state, list_name, "add")):
        session.add_entry(list_name)
        st.rerun()


def _render_personal(state):
    session = state.session
    personal = session.document.personal
    c1, c2 = st.columns(2)
    for i, (attr, label) in enumerate(
        [
            ("name", "Full Name"),
            ("email", "Email"),
            ("phone", "Phone"),
            ("linkedin", "LinkedIn"),
            ("location", "Location"),
        ]
    ):
        column = c1 if i % 2 == 0 else c2
        current = getattr(personal, attr)
        value = column.text_input(label, value=current or "", key=_key(state, "personal", attr))
        if value != (current or ""):
            session.set_field(f"personal.{attr}", value)


def _choice_index(options, value, fallback=0):
    return options.index(value) if value in options else fallback


def _store_styling(state, attr, key, fmt=str):
    # Runs only on a user change; drawing the page never writes
    state.session.set_field(f"styling.{attr}", fmt(st.session_state[key]))


def _render_styling(state):
    styling = state.session.document.styling
    c1, c2 = st.columns(2)
    with c1:
        key = _key(state, "styling", "fontFamily")
        st.selectbox(
            "Font Family",
            FONT_FAMILIES,
            index=_choice_index(FONT_FAMILIES, styling.fontFamily),
            key=key,
            on_change=_store_styling,
            args=(state, "fontFamily", key),
        )

        key = _key(state, "styling", "textAlign")
        st.selectbox(
            "Text Align",
            TEXT_ALIGNMENTS,
            index=_choice_index(TEXT_ALIGNMENTS, styling.textAlign),
            key=key,
            on_change=_store_styling,
            args=(state, "textAlign", key),
        )
    with c2:
        low, high, step = FONT_SIZE_RANGE
        try:
            current_size = float((styling.fontSize or "0.9rem").replace("rem", ""))
        except ValueError:
            current_size = 0.9
        key = _key(state, "styling", "fontSize")
        st.slider(
            "Font Size (rem)", low, high, min(max(current_size, low), high), step,
            key=key,
            on_change=_store_styling,
            args=(state, "fontSize", key, lambda size: f"{size:g}rem"),
        )

        low, high, step = LINE_HEIGHT_RANGE
        try:
            current_height = float(styling.lineHeight or "1.5")
        except ValueError:
            current_height = 1.5
        key = _key(state, "styling", "lineHeight")
        st.slider(
            "Line Height", low, high, min(max(current_height, low), high), step,
            key=key,
            on_change=_store_styling,
            args=(state, "lineHeight", key, lambda height: f"{height:g}"),
        )


def render_editor_tab(editor_state, sidebar_state):
    st.header("📝 Edit Resume")
    validation = editor_state.session.validate()
    if not validation.ok:
        st.warning(f"⚠️ {len(validation.errors)} required field(s) are empty.")

    with st.expander("👤 Personal Details", expanded=True):
        _render_personal(editor_state)

    with st.expander("🎨 Styling", expanded=False):
        _render_styling(editor_state)

    for section_id in list(editor_state.session.order):
        with st.container(border=True):
            title_col, up_col, down_col = st.columns([6, 1, 1])
            title_col.subheader(SECTION_TITLES[section_id])
            _section_controls(editor_state, section_id, up_col, down_col)

            field = SECTION_FIELDS[section_id]
            if field == "summary":
                _render_summary(editor_state, sidebar_state, validation)
            elif field == "skills":
                _render_skills(editor_state)
            else:
                _render_entries(editor_state, sidebar_state, validation, field)
