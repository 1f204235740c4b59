import os

from flask import abort, g, redirect, request, send_from_directory
from werkzeug.security import safe_join

from . import site_bp


@site_bp.route("/<path:path>", methods=["GET"])
def static_file(path):
    root = g.current_tenant.root

    # Directories serve their index.html, and need a trailing slash for
    # relative links inside them to resolve
    if path.endswith("/"):
        path += "index.html"
    else:
        target = safe_join(root, path)
        if target is None:
            abort(404)
        if os.path.isdir(target):
            location = request.path + "/"
            if request.query_string:
                location += "?" + request.query_string.decode("latin-1")
            return redirect(location, code=301)

    # safe_join inside send_from_directory turns traversal into a 404
    return send_from_directory(root, path)
