"""
Access gate that enforces bearer tokens ahead of routing.

Every path requires a valid token unless it is listed in
:data:`PUBLIC_ENDPOINTS`; new routes are protected without anyone having to
remember to protect them. ``/session`` is deliberately *not* public, since
its whole purpose is to tell the caller whether their token is good.

Before the request is dispatched, the ``Authorization`` header is parsed for
a ``Bearer`` token. If the token validates, its :class:`.domain.Claims` are
attached to the request as ``flask.request.auth``. Otherwise an
:class:`.Unauthorized` exception is raised and the request goes no further.

Intended for use in the application factory:

.. code-block:: python

   gate = AccessGate(auth_config)
   gate.init_app(app)

"""

from typing import FrozenSet, Iterable, Mapping, Optional

from flask import Flask, request
from werkzeug.exceptions import Unauthorized

from .. import domain
from ..logging import getLogger
from ..routing import split_path
from . import tokens
from .exceptions import TokenError

logger = getLogger(__name__)

PUBLIC_ENDPOINTS: FrozenSet[str] = frozenset({'/login'})

MISSING_HEADER = 'Missing or invalid authorization header'
INVALID_TOKEN = 'Invalid or expired token'

SCHEME = 'Bearer'


def get_bearer_token(headers: Mapping[str, str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    auth_header = headers.get('Authorization')
    if not auth_header:
        return None
    scheme, _, token = auth_header.partition(' ')
    token = token.strip()
    if scheme != SCHEME or not token:
        return None
    return token


class AccessGate(object):
    """Decides whether a request needs a token, and checks it if so."""

    def __init__(self, config: domain.AuthConfig,
                 public: Iterable[str] = PUBLIC_ENDPOINTS,
                 app: Optional[Flask] = None) -> None:
        self._secret = config.secret
        self.public = frozenset(public)
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """Run :meth:`.load_identity` before each request to ``app``."""
        app.before_request(self.load_identity)

    def requires_token(self, path: str) -> bool:
        """Anything that is not explicitly public is protected."""
        return '/' + '/'.join(split_path(path)) not in self.public

    def authenticate(self, headers: Mapping[str, str]) -> domain.Claims:
        """
        Validate the bearer token in ``headers``.

        Raises
        ------
        :class:`.Unauthorized`
            Raised if the header is absent or malformed, or if the token
            fails validation. The reason for a token failure is logged but
            not revealed.

        """
        token = get_bearer_token(headers)
        if token is None:
            logger.info('No bearer token on request')
            raise Unauthorized(MISSING_HEADER)
        try:
            return tokens.validate(token, self._secret)
        except TokenError as e:
            logger.info('Auth token rejected',
                        extra={'reason': type(e).__name__})
            raise Unauthorized(INVALID_TOKEN) from e

    def load_identity(self) -> None:
        """Attach the caller identity (or ``None``) to the current request."""
        request.auth = None
        if request.method == 'OPTIONS':     # CORS preflight carries no auth.
            return
        if not self.requires_token(request.path):
            return
        request.auth = self.authenticate(request.headers)
