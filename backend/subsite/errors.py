from flask import current_app


class ConfigurationError(Exception):
    """A mandatory setting is absent or has the wrong type."""

    def __init__(self, message):
        super().__init__(f"Invalid Environment: {message}")


class ProvisioningError(Exception):
    """The database or its tables could not be created."""


class StoreError(Exception):
    """A content store query failed."""


class CompositionError(Exception):
    """The homepage could not be composed for this request."""


class MissingContainerError(CompositionError):
    pass


def register_error_handlers(app):
    @app.errorhandler(CompositionError)
    def handle_composition_error(error):
        current_app.logger.error("Homepage composition failed: %s", error, exc_info=error)
        return "", 500
