import asyncio
import os

from flask import Response, abort, current_app, g

from subsite.application.homepage import compose_homepage
from subsite.store import get_content_store
from . import site_bp


def read_template(path: str) -> str:
    with open(path, encoding="utf-8") as f:
        return f.read()


@site_bp.route("/", methods=["GET"])
async def homepage():
    template_path = os.path.join(g.current_tenant.root, "index.html")
    if not os.path.isfile(template_path):
        abort(404)

    template = await asyncio.to_thread(read_template, template_path)
    html = await compose_homepage(
        get_content_store(),
        template,
        selector=current_app.config["SECTIONS_SELECTOR"],
        separator=current_app.config["SECTION_SEPARATOR"],
    )

    return Response(html, mimetype="text/html")
