import os

from jinja2 import Environment, FileSystemLoader, select_autoescape

from resume_schema import SECTION_TITLES, ResumeDocument

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "templates")

DEFAULT_STYLE = {
    "fontFamily": "Inter",
    "fontSize": "0.9rem",
    "lineHeight": "1.5",
    "textAlign": "left",
}


def split_lines(text):
    """Skills are stored as newline-delimited blobs; one non-empty line per item."""
    if not text:
        return []
    return [line.strip() for line in text.split("\n") if line.strip()]


def build_style(document: ResumeDocument) -> dict:
    styling = document.styling.model_dump()
    return {key: styling.get(key) or fallback for key, fallback in DEFAULT_STYLE.items()}


def _environment():
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=select_autoescape(["html"]),
    )
    env.filters["lines"] = split_lines
    return env


def render_resume_html(document: ResumeDocument, order, printable=True, title=None) -> str:
    """
    Renders the resume preview as a standalone HTML page, sections in `order`.
    With `printable`, the page carries a "Download PDF" button that hands the
    page to the browser's own print dialog.
    """
    sections = [
        {"id": section_id, "title": SECTION_TITLES[section_id]}
        for section_id in order
        if section_id in SECTION_TITLES
    ]
    template = _environment().get_template("resume.html")
    return template.render(
        resume=document.model_dump(),
        sections=sections,
        style=build_style(document),
        printable=printable,
        title=title or (document.personal.name or "Resume"),
    )


def export_resume_html(document: ResumeDocument, order, output_path: str) -> str:
    folder = os.path.dirname(output_path)
    if folder and not os.path.exists(folder):
        os.makedirs(folder)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(render_resume_html(document, order))
    return output_path
