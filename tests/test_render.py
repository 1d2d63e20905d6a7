"""Tests for the text and HTML renderers."""

from tdreport.engine.report import ReportOptions, organize
from tdreport.models.display import DisplayLabel, DisplayProject, DisplayReport, DisplayTask
from tdreport.render import render_html, render_text


def _task(**overrides):
    base = {
        "id": "1",
        "project_id": "1",
        "project_name": "Work",
        "content": "Write report",
        "priority": 2,
        "priority_color": "#eb8909",
    }
    return DisplayTask(**{**base, **overrides})


def test_text_grouped(scenario_projects, scenario_labels, scenario_tasks):
    report = organize(scenario_projects, scenario_labels, scenario_tasks, ReportOptions())
    text = render_text(report)
    assert text.splitlines()[:3] == ["#Work", "  Ship release", "  P1"]
    assert "  P4 <Jun 1> @urgent" in text
    assert text.index("#Work") < text.index("#Home")


def test_text_tree_indents_children():
    child = DisplayProject(id="2", name="Reports", depth=1, tasks=[_task(id="2", project_id="2")])
    report = DisplayReport(
        tasks=[child.tasks[0]],
        sections=[DisplayProject(id="1", name="Work", children=[child])],
        tree=True,
    )
    lines = render_text(report).splitlines()
    assert lines[0] == "#Work"
    assert "  #Reports" in lines
    assert "    Write report" in lines


def test_text_ungrouped():
    report = DisplayReport(tasks=[_task(labels=[DisplayLabel(name="home")], due="today")], grouped=False)
    assert render_text(report).splitlines()[:2] == ["Write report", "P2 <today> @home"]


def test_html_escapes_user_text():
    report = DisplayReport(
        tasks=[],
        sections=[
            DisplayProject(
                id="1",
                name="R&D <team>",
                color="#4073ff",
                tasks=[_task(content="<script>alert(1)</script>", labels=[DisplayLabel(name="a&b", color="#db4035")])],
            )
        ],
    )
    html = render_html(report)
    assert html.startswith("<!DOCTYPE html>")
    assert "<h1 style=\"color: #4073ff\">R&amp;D &lt;team&gt;</h1>" in html
    assert "&lt;script&gt;" in html
    assert "<script>" not in html
    assert "@a&amp;b" in html
    assert "Priority 2" in html


def test_html_nests_subprojects():
    child = DisplayProject(id="2", name="Reports", depth=1, tasks=[_task()])
    report = DisplayReport(sections=[DisplayProject(id="1", name="Work", children=[child])], tree=True)
    html = render_html(report)
    assert "<h2>Reports</h2>" in html
    assert "class=\"subprojects\"" in html


def test_html_shows_description_and_due():
    report = DisplayReport(tasks=[_task(description="details", due="Jun 1")], grouped=False)
    html = render_html(report)
    assert "Due Jun 1" in html
    assert "<div class=\"description\">details</div>" in html
