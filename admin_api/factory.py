"""Provides an app factory for the admin API."""

import time
import traceback
import uuid
from http import HTTPStatus as status
from typing import Any, Mapping, Optional

import click
from flask import Flask, Response, current_app, g, jsonify, make_response, \
    request
from werkzeug.exceptions import HTTPException

from . import domain, routes
from .auth.credentials import ConfigCredentials, CredentialVerifier, \
    hash_password
from .auth.middleware import AccessGate
from .logging import RequestLogger, getLogger
from .services import datastore
from .services.images import ImageStore

logger = getLogger(__name__)

CORS_METHODS = 'GET, POST, PUT, DELETE, OPTIONS'
CORS_HEADERS = 'Content-Type, Authorization'


def jsonify_exception(error: HTTPException) -> Response:
    """Render an HTTP exception as ``{"error": <description>}``."""
    exc_resp = error.get_response()
    response: Response = jsonify(error=error.description)
    response.status_code = exc_resp.status_code
    return response


def handle_unexpected(error: Exception) -> Response:
    """Log an unhandled exception and respond with a bare 500."""
    logger.error('Unhandled exception: %s', error)
    logger.error(traceback.format_exc())
    response: Response = jsonify(error='Internal server error')
    response.status_code = status.INTERNAL_SERVER_ERROR
    return response


def start_request() -> Optional[Response]:
    """Assign a correlation id and a request logger; answer preflights."""
    g.started = time.time()
    g.request_id = f'req_{uuid.uuid4()}'
    g.logger = RequestLogger(
        logger,
        environment=current_app.config.get('ENVIRONMENT', 'development'),
        correlation_id=g.request_id,
        method=request.method,
        path=request.path
    )
    g.logger.debug('Processing request')
    if request.method == 'OPTIONS':
        return make_response('', status.NO_CONTENT)
    return None


def finish_request(response: Response) -> Response:
    """Add CORS headers and log the outcome of the request."""
    origins = current_app.config.get('ALLOWED_ORIGINS', '*')
    response.headers['Access-Control-Allow-Origin'] = origins
    response.headers['Access-Control-Allow-Methods'] = CORS_METHODS
    response.headers['Access-Control-Allow-Headers'] = CORS_HEADERS
    request_logger = g.get('logger', logger)
    started = g.get('started')
    duration = int((time.time() - started) * 1000) if started else None
    request_logger.info('Request completed', extra={
        'status': response.status_code,
        'duration': duration
    })
    return response


def create_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    """
    Initialize an instance of the admin API.

    Parameters
    ----------
    config : mapping
        Overrides for the settings in :mod:`admin_api.config`, applied
        before anything is initialized. The resulting auth settings are
        frozen for the life of the app.

    """
    app = Flask('admin_api')
    app.config.from_pyfile('config.py')
    if config:
        app.config.update(config)

    datastore.init_app(app)
    store = datastore.Datastore()

    auth_config = domain.AuthConfig.from_mapping(app.config)
    if app.config.get('CREDENTIAL_SOURCE') == 'datastore':
        source = datastore.DatastoreCredentials(store)
    else:
        source = ConfigCredentials(auth_config)

    app.extensions['admin_api'] = domain.Environment(
        config=app.config,
        auth=auth_config,
        credentials=CredentialVerifier(source, auth_config.password_salt),
        datastore=store,
        images=ImageStore(app.config['IMAGE_STORAGE_PATH'],
                          app.config['CDN_DOMAIN'])
    )

    # Order matters: the request logger exists before the gate runs.
    app.before_request(start_request)
    AccessGate(auth_config).init_app(app)
    app.after_request(finish_request)

    app.register_blueprint(routes.blueprint)
    app.register_error_handler(HTTPException, jsonify_exception)
    app.register_error_handler(Exception, handle_unexpected)

    @app.cli.command('init-db')
    def init_db() -> None:
        """Create the database tables."""
        datastore.create_all()

    @app.cli.command('set-admin')
    @click.argument('username')
    @click.password_option('--password', prompt='Admin password')
    def set_admin(username: str, password: str) -> None:
        """Store the administrator account, for CREDENTIAL_SOURCE=datastore."""
        store.set_admin(username,
                        hash_password(password, auth_config.password_salt))
        click.echo(f'Administrator is now {username}')

    return app
