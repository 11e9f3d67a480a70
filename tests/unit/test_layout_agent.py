from agents.layout_agent import build_style, export_resume_html, render_resume_html, split_lines
from resume_schema import DEFAULT_SECTION_ORDER, Styling, default_document
from services.ordering import reorder


def test_sections_render_in_order():
    doc = default_document()
    order = reorder(DEFAULT_SECTION_ORDER, "references", "summary")

    html = render_resume_html(doc, order)

    assert html.index("References") < html.index("Professional Summary")
    assert html.index("Professional Summary") < html.index("Certificate of Completion")


def test_styling_and_print_button():
    doc = default_document()
    doc.styling = Styling(fontFamily="Lato", fontSize="1.1rem", lineHeight="1.8", textAlign="justify")

    html = render_resume_html(doc, DEFAULT_SECTION_ORDER)

    assert "font-family: 'Lato'" in html
    assert "font-size: 1.1rem" in html
    assert "line-height: 1.8" in html
    assert "text-align: justify" in html
    assert "window.print()" in html
    assert "window.print()" not in render_resume_html(doc, DEFAULT_SECTION_ORDER, printable=False)


def test_missing_styling_uses_defaults():
    doc = default_document()
    doc.styling = Styling()
    assert build_style(doc) == {
        "fontFamily": "Inter",
        "fontSize": "0.9rem",
        "lineHeight": "1.5",
        "textAlign": "left",
    }


def test_user_text_is_escaped():
    doc = default_document()
    doc.summary = "<script>alert(1)</script>"

    html = render_resume_html(doc, DEFAULT_SECTION_ORDER)

    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;" in html


def test_skills_split_per_line():
    assert split_lines("Python\n\n  SQL \n") == ["Python", "SQL"]
    assert split_lines(None) == []

    doc = default_document()
    doc.skills.technicalSkills = "Python\nSQL"
    html = render_resume_html(doc, DEFAULT_SECTION_ORDER)
    assert "<li>Python</li>" in html
    assert "<li>SQL</li>" in html


def test_empty_sections_are_skipped():
    doc = default_document()
    doc.references = []
    html = render_resume_html(doc, DEFAULT_SECTION_ORDER)
    assert "<h2>References</h2>" not in html


def test_export_writes_file(tmp_path):
    path = tmp_path / "out" / "resume.html"
    export_resume_html(default_document(), DEFAULT_SECTION_ORDER, str(path))
    assert "Alex Doe" in path.read_text(encoding="utf-8")
