"""Text and HTML renderers for tdreport reports."""

from html import escape
from typing import List

from tdreport.models.display import DisplayProject, DisplayReport, DisplayTask

INDENT = "  "


def _task_details(task: DisplayTask) -> str:
    parts = [f"P{task.priority}"]
    if task.due:
        parts.append(f"<{task.due}>")
    parts.extend(f"@{label.name}" for label in task.labels)
    return " ".join(parts)


def _text_task(task: DisplayTask, indent: str) -> List[str]:
    return [f"{indent}{task.content}", f"{indent}{_task_details(task)}"]


def _text_section(section: DisplayProject, lines: List[str]) -> None:
    indent = INDENT * section.depth
    lines.append(f"{indent}#{section.name}")
    for task in section.tasks:
        lines.extend(_text_task(task, indent + INDENT))
    lines.append("")
    for child in section.children:
        _text_section(child, lines)


def render_text(report: DisplayReport) -> str:
    """Render a report for the terminal."""
    lines: List[str] = []
    if report.grouped:
        for section in report.sections:
            _text_section(section, lines)
    else:
        for task in report.tasks:
            lines.extend(_text_task(task, ""))
            lines.append("")
    return "\n".join(lines)


def _color_style(color: str) -> str:
    return f' style="color: {escape(color)}"' if color else ""


def _html_task(task: DisplayTask) -> str:
    labels = " ".join(
        f"<span class=\"label\"{_color_style(label.color)}>@{escape(label.name)}</span>"
        for label in task.labels
    )
    due = f"Due {escape(task.due)}, " if task.due else ""
    description = f"<div class=\"description\">{escape(task.description)}</div>" if task.description else ""
    return (
        "<li>"
        f"{escape(task.content)} "
        f"<em>(<span class=\"priority\"{_color_style(task.priority_color)}>Priority {task.priority}</span>, "
        f"{due}{labels})</em>"
        f"{description}"
        "</li>"
    )


def _html_section(section: DisplayProject, parts: List[str]) -> None:
    level = min(section.depth + 1, 6)
    parts.append(f"<h{level}{_color_style(section.color)}>{escape(section.name)}</h{level}>")
    if section.tasks:
        parts.append("<ul>")
        parts.extend(_html_task(task) for task in section.tasks)
        parts.append("</ul>")
    if section.children:
        parts.append("<div class=\"subprojects\">")
        for child in section.children:
            _html_section(child, parts)
        parts.append("</div>")


def render_html(report: DisplayReport, title: str = "Todoist tasks") -> str:
    """Render a report as a standalone HTML page."""
    parts = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        "<meta charset=\"utf-8\">",
        f"<title>{escape(title)}</title>",
        "<style>",
        "body { font-family: Arial, sans-serif; max-width: 800px; margin: 50px auto; padding: 20px; }",
        ".subprojects { margin-left: 20px; }",
        ".description { color: #808080; font-size: smaller; }",
        "</style>",
        "</head>",
        "<body>",
    ]
    if report.grouped:
        for section in report.sections:
            _html_section(section, parts)
    else:
        parts.append("<ul>")
        parts.extend(_html_task(task) for task in report.tasks)
        parts.append("</ul>")
    parts.extend(["</body>", "</html>", ""])
    return "\n".join(parts)
