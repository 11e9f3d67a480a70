import os

import streamlit as st


def render_guide_tab(readme_path="README.md"):
    if os.path.exists(readme_path):
        try:
            with open(readme_path, "r", encoding="utf-8") as f:
                readme_lines = f.readlines()

            # The page already shows the app title
            filtered_content = [
                line for line in readme_lines if not line.strip().startswith("# 📝 ResumeForge")
            ]
            st.markdown("".join(filtered_content))
        except OSError as e:
            st.error(f"Error loading README: {e}")
    else:
        st.warning("README.md not found.")
