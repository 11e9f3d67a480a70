# --- HELPER FUNCTION ---
def get_clean_filename(name, extension="html"):
    name_clean = "".join(c for c in str(name or "") if c.isalnum())[:30]
    return f"Resume_{name_clean or 'Untitled'}.{extension}"
