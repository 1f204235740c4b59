from flask import current_app

from .base import ContentStore
from .sql import SqlContentStore


def get_content_store() -> ContentStore:
    return current_app.extensions["content_store"]


__all__ = ["ContentStore", "SqlContentStore", "get_content_store"]
