import argparse
import os
import sys

from agents.layout_agent import export_resume_html
from config_manager import load_config
from services.editor_session import EditorSession
from services.storage import LocalStore, ResumeStore
from utils.console_logger import file_logger
from utils.file_utils import get_clean_filename

# --- SIMPLE FILE LOGGER ---
headless_logger = file_logger("headless_run.log")


def run(argv=None, logger=headless_logger):
    # 1. Parse Command Line Arguments
    parser = argparse.ArgumentParser(description="Work with the saved resume without the UI.")
    parser.add_argument("--config", type=str, default=None, help="Path to specific config file")
    parser.add_argument("--validate", action="store_true", help="Report missing required fields")
    parser.add_argument("--export-html", type=str, nargs="?", const="", default=None,
                        help="Write the printable preview to this path")
    parser.add_argument("--reset", action="store_true", help="Delete the saved resume and section order")
    args = parser.parse_args(argv)

    # 2. Load the specific profile
    config = load_config(args.config)
    storage_dir = config.get("storage_dir", "storage")
    logger(f"📂 Storage: {os.path.abspath(storage_dir)}")

    store = ResumeStore(LocalStore(storage_dir), status_callback=logger)

    if args.reset:
        store.clear()
        logger("🧹 Saved resume cleared. Defaults will load next time.")
        return 0

    # 3. Load through migration
    session = EditorSession.open(store)
    exit_code = 0

    if args.validate:
        result = session.validate()
        if result.ok:
            logger("✅ Resume is complete.")
        else:
            for error in result.errors:
                logger(f"   ❌ {error.path}: {error.message}")
            exit_code = 1

    if args.export_html is not None:
        output_path = args.export_html or get_clean_filename(session.document.personal.name)
        export_resume_html(session.document, session.order, output_path)
        logger(f"📁 SAVED: {output_path} (open it and use Download PDF to print)")

    return exit_code


if __name__ == "__main__":
    sys.exit(run())
