from flask import current_app, request

from .tenant_middleware import request_hostname


def analytics_middleware(app):
    # Registered after tenant_middleware: unresolved hosts never get here
    @app.before_request
    def record_visit():
        recorder = current_app.extensions["analytics"]
        recorder.submit(request.remote_addr, request_hostname(), request.path)
