import os

from . import create_app
from .serving import serve

if __name__ == "__main__":
    serve(create_app(os.getenv("SUBSITE_CONFIG", "production")))
