from urllib.parse import urlsplit

from flask import current_app, g, request

from subsite.domain.tenancy import resolve_tenant


def request_hostname() -> str:
    """Hostname of the current request, without port, lower-cased."""
    return urlsplit(request.host_url).hostname or ""


def tenant_middleware(app):
    @app.before_request
    def load_tenant():
        hostname = request_hostname()
        tenant = resolve_tenant(
            hostname,
            public_root=current_app.config["PUBLIC_ROOT"],
            apps_root=current_app.config["APPS_ROOT"],
            reserved=current_app.config["RESERVED_TENANTS"],
        )
        if tenant is None:
            current_app.logger.debug("No tenant for host %r", hostname)
            return "", 404

        # Attach tenant to global context
        g.current_tenant = tenant
