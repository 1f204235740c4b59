import click

from .utils.schema import provision_schema


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create the database and tables if they do not exist."""
        provision_schema(app)
        click.echo("Database initialised.")
