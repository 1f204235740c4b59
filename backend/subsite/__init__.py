import os

from flask import Flask

from .config import config_by_name, database_uri, settings
from .extensions import db
from .store import ContentStore, SqlContentStore
from .application.analytics import AnalyticsRecorder
from .middleware.tenant_middleware import tenant_middleware
from .middleware.analytics_middleware import analytics_middleware
from .web import site_bp
from .errors import register_error_handlers
from .cli import register_commands
from .utils.schema import provision_schema


def create_app(
    config_name: str = "development",
    store: ContentStore | None = None,
    overrides: dict | None = None,
) -> Flask:
    app = Flask(__name__, static_folder=None)
    app.config.from_object(config_by_name[config_name])
    if overrides:
        app.config.update(overrides)

    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        app.config["SQLALCHEMY_DATABASE_URI"] = database_uri(settings)

    app.config["PUBLIC_ROOT"] = os.path.abspath(app.config["PUBLIC_ROOT"])
    app.config["APPS_ROOT"] = os.path.abspath(app.config["APPS_ROOT"])
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)

    if app.config["AUTO_PROVISION"]:
        provision_schema(app)

    if store is None:
        with app.app_context():
            store = SqlContentStore(db.engine)

    app.extensions["content_store"] = store
    app.extensions["analytics"] = AnalyticsRecorder(
        store,
        self_addresses=app.config["SELF_ADDRESSES"],
        logger=app.logger,
        max_pending=app.config["ANALYTICS_MAX_PENDING"],
    )

    # -------------------------------------------------
    # Middleware (order matters: tenant first)
    # -------------------------------------------------
    tenant_middleware(app)
    analytics_middleware(app)

    # -------------------------------------------------
    # Site
    # -------------------------------------------------
    app.register_blueprint(site_bp)
    register_error_handlers(app)
    register_commands(app)

    return app
