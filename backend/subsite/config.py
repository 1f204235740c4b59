import os
from dotenv import load_dotenv
from sqlalchemy.engine import URL

from .errors import ConfigurationError

load_dotenv()

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


class Settings:
    """
    Typed view over the process environment.

    Values may be JSON-quoted in .env files, so a surrounding pair of
    double quotes is stripped before coercion.
    """

    def __init__(self, environ=None):
        self._environ = os.environ if environ is None else environ

    def get(self, key: str, default=None):
        value = self._environ.get(key)
        if value is None:
            return default
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] == '"':
            value = value[1:-1]
        return value

    def require(self, key: str, type_: type):
        value = self.get(key)
        if value is None or value == "":
            raise ConfigurationError(f'Environment requires key "{key}" of type "{type_.__name__}"')

        try:
            if type_ is bool:
                lowered = value.lower()
                if lowered in _TRUE:
                    return True
                if lowered in _FALSE:
                    return False
                raise ValueError(value)
            return type_(value)
        except ValueError:
            raise ConfigurationError(f'Environment requires key "{key}" of type "{type_.__name__}"') from None


settings = Settings()


class BaseConfig:
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")
    AUTO_PROVISION = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Content roots
    PUBLIC_ROOT = os.getenv("PUBLIC_ROOT", "public")
    APPS_ROOT = os.getenv("APPS_ROOT", "apps")
    RESERVED_TENANTS = ("jessesolomon", "localhost")

    # Homepage composition
    SECTIONS_SELECTOR = "#sections"
    SECTION_SEPARATOR = "<br/>"

    # Analytics (loopback visitors are always skipped)
    SELF_ADDRESSES = ()
    ANALYTICS_MAX_PENDING = 1000

    # Transport
    TLS_KEY = os.getenv("TLS_KEY")
    TLS_CERT = os.getenv("TLS_CERT")
    CANONICAL_URL = os.getenv("CANONICAL_URL", "https://jessesolomon.dev")
    HTTP_PORT = 8080
    HTTPS_PORT = 443
    REDIRECT_PORT = 80


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class ProductionConfig(BaseConfig):
    DEBUG = False


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    TLS_KEY = None
    TLS_CERT = None


config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def database_uri(source: Settings) -> str:
    """Build the MySQL URI from the mandatory database settings."""
    return URL.create(
        "mysql+pymysql",
        username=source.get("DATABASE_USER", "root"),
        password=source.require("DATABASE_PASSWORD", str),
        host=source.get("DATABASE_HOST", "localhost"),
        database=source.require("DATABASE_NAME", str),
    ).render_as_string(hide_password=False)
