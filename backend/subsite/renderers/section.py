from markupsafe import escape

from .project import render_project


def render_section(section, projects) -> str:
    """
    Heading for the section, followed by its project list.

    Sections without projects render the heading alone, never an
    empty list.
    """
    html = f"<h2>{escape(section.title or '')}</h2>"

    if projects:
        items = "".join(render_project(p) for p in projects)
        html += f'<ul class="projects">{items}</ul>'

    return html
