from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError

from subsite.errors import ProvisioningError
from subsite.extensions import db
from subsite import models  # noqa: F401  registers tables with db.metadata


def ensure_database(uri: str) -> None:
    """Create the target database on the server if it does not exist."""
    url = make_url(uri)
    if url.get_backend_name() == "sqlite" or not url.database:
        return

    engine = create_engine(url.set(database=None))
    try:
        name = engine.dialect.identifier_preparer.quote(url.database)
        with engine.begin() as conn:
            conn.execute(text(f"CREATE DATABASE IF NOT EXISTS {name}"))
    except SQLAlchemyError as e:
        raise ProvisioningError(f"Failed to create database {url.database!r}") from e
    finally:
        engine.dispose()


def provision_schema(app) -> None:
    """Ensure the database and the sections, projects and analytics tables exist."""
    ensure_database(app.config["SQLALCHEMY_DATABASE_URI"])

    with app.app_context():
        try:
            db.create_all()
        except SQLAlchemyError as e:
            raise ProvisioningError("Failed to create tables") from e

    app.logger.info("Schema ready")
