"""Web Server Gateway Interface entry-point."""

import os

from admin_api.factory import create_app

__flask_app__ = None


def application(environ, start_response):
    """WSGI application factory."""
    global __flask_app__
    if __flask_app__ is None:
        for key, value in environ.items():
            if isinstance(value, str):
                os.environ[key] = value
        __flask_app__ = create_app()
    return __flask_app__(environ, start_response)
