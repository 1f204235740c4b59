from markupsafe import escape


def render_project(project) -> str:
    title = f"<span>{escape(project.title or '')}</span>"
    repo = (
        f'<a class="github" href="{escape(project.repo)}" target="_blank"></a>'
        if project.repo
        else ""
    )
    url = f'<a class="link" href="{escape(project.url)}"></a>' if project.url else ""

    return f'<li><div class="wrapper">{title}{repo}{url}</div></li>'
