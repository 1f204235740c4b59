import threading

from flask import Flask, redirect
from werkzeug.serving import make_server


def create_redirect_app(location: str) -> Flask:
    """App that answers every request with a permanent redirect to `location`."""
    app = Flask(__name__, static_folder=None)

    @app.route("/", defaults={"path": ""})
    @app.route("/<path:path>")
    def to_canonical(path):
        return redirect(location, code=301)

    return app


def serve(app: Flask, host: str = "0.0.0.0") -> None:
    """
    Serve `app` over HTTPS with an HTTP redirect listener when a TLS key
    and certificate are configured, otherwise over plain HTTP.
    """
    key = app.config.get("TLS_KEY")
    cert = app.config.get("TLS_CERT")

    if key and cert:
        redirect_server = make_server(
            host,
            app.config["REDIRECT_PORT"],
            create_redirect_app(app.config["CANONICAL_URL"]),
            threaded=True,
        )
        threading.Thread(
            target=redirect_server.serve_forever,
            name="redirect-listener",
            daemon=True,
        ).start()

        server = make_server(
            host,
            app.config["HTTPS_PORT"],
            app,
            threaded=True,
            ssl_context=(cert, key),
        )
        app.logger.info("Serving HTTPS on port %s", app.config["HTTPS_PORT"])
    else:
        server = make_server(host, app.config["HTTP_PORT"], app, threaded=True)
        app.logger.info("Serving HTTP on port %s", app.config["HTTP_PORT"])

    try:
        server.serve_forever()
    finally:
        app.extensions["analytics"].shutdown()
