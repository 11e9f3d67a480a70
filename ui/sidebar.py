import streamlit as st

from config_manager import DEFAULT_PROFILE_PATH, get_effective_config, save_config
from services.editor_session import reset_session, restore_session
from services.llm_client import is_provider_available, settings_from_config
from services.model_registry import get_provider_label, get_provider_models, get_provider_names
from ui.state import SidebarInputs, SidebarState


def _build_updated_config(config, inputs):
    model_api_keys = config.get("model_api_keys", {}).copy()
    model_api_keys[inputs.model_provider] = inputs.model_api_key
    updated_config = config.copy()
    updated_config.update(
        {
            "model_provider": inputs.model_provider,
            "model_name": inputs.model_name,
            "model_api_keys": model_api_keys,
            "enable_suggestions": inputs.enable_suggestions,
            "storage_dir": inputs.storage_dir,
        }
    )
    return updated_config


def _render_reset_controls(editor_state):
    st.subheader("🗂️ Resume")
    c1, c2 = st.columns(2)
    with c1:
        if st.button("↩️ Reset", width="stretch", help="Replace the resume with the sample content."):
            editor_state.undo_snapshot = reset_session(editor_state.session)
            editor_state.refresh_widgets()
            st.toast("Your resume has been reset to the default state.", icon="🧹")
            st.rerun()
    with c2:
        snapshot = editor_state.undo_snapshot
        if st.button("⏪ Undo", width="stretch", disabled=snapshot is None):
            # Single-shot: the snapshot is consumed by the first undo
            editor_state.undo_snapshot = None
            restore_session(editor_state.session, snapshot)
            editor_state.refresh_widgets()
            st.toast("Your resume has been restored.", icon="✅")
            st.rerun()


def render_sidebar(editor_state_factory):
    config = get_effective_config(DEFAULT_PROFILE_PATH)

    with st.sidebar:
        st.title("📝 ResumeForge")
        st.caption("Edits are saved automatically.")

        editor_state = editor_state_factory(config.get("storage_dir", "storage"))
        _render_reset_controls(editor_state)

        st.markdown("---")

        with st.expander("🧠 AI Suggestions", expanded=False):
            providers = get_provider_names()
            current_provider = config.get("model_provider", "ollama")
            model_provider = st.selectbox(
                "Model Provider",
                providers,
                index=providers.index(current_provider) if current_provider in providers else 0,
                format_func=get_provider_label,
            )

            models = get_provider_models(model_provider)
            current_model = config.get("model_name", "")
            model_name = st.selectbox(
                "Model",
                models,
                index=models.index(current_model) if current_model in models else 0,
            )

            model_api_key = st.text_input(
                "API Key",
                value=config.get("model_api_keys", {}).get(model_provider, ""),
                type="password",
                help="Only needed for hosted providers.",
            )
            enable_suggestions = st.checkbox(
                "Enable ✨ Suggest buttons",
                value=config.get("enable_suggestions", True),
            )

            if st.button("🔌 Check Connection", width="stretch"):
                if is_provider_available(model_provider, model_api_key):
                    st.success(f"✅ {get_provider_label(model_provider)} is reachable.")
                else:
                    st.error(f"❌ {get_provider_label(model_provider)} is not reachable.")

        with st.expander("⚙️ Storage", expanded=False):
            storage_dir = st.text_input(
                "Storage Folder",
                value=config.get("storage_dir", "storage"),
                help="Where the resume and section order are saved.",
            )

        inputs = SidebarInputs(
            model_api_key=model_api_key,
            model_provider=model_provider,
            model_name=model_name,
            enable_suggestions=enable_suggestions,
            storage_dir=storage_dir,
        )

        st.markdown("---")
        if st.button("💾 Save Settings", type="primary", width="stretch"):
            save_config(_build_updated_config(config, inputs), DEFAULT_PROFILE_PATH)
            config = get_effective_config(DEFAULT_PROFILE_PATH)
            st.toast("Settings saved!", icon="✅")

    return SidebarState(
        config=config,
        current_profile_path=DEFAULT_PROFILE_PATH,
        inputs=inputs,
        llm_settings=settings_from_config(config),
    )
