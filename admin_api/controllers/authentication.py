"""
Login and session check.

Logging in exchanges the administrator's username and password for a signed
token. The token is stateless: it is valid until it expires, and is never
stored. Callers present it as ``Authorization: Bearer <token>``, and may use
``GET /session`` to check whether it is still good.
"""

from datetime import datetime
from http import HTTPStatus as status
from typing import Optional

from flask import Request
from pytz import UTC
from werkzeug.exceptions import BadRequest, Unauthorized

from .. import domain, validation
from ..auth import tokens
from ..auth.exceptions import InvalidCredentialsError
from . import ResponseData


def login(request: Request, env: domain.Environment,
          ctx: domain.ExecutionContext, params: dict,
          caller: Optional[domain.Claims]) -> ResponseData:
    """
    Authenticate the administrator and issue a token.

    Returns
    -------
    dict
        ``token`` and ``expiresIn`` (seconds).
    int
        200 (OK).
    dict
        No extra headers.

    Raises
    ------
    :class:`.BadRequest`
        Raised if the username or password is missing.
    :class:`.Unauthorized`
        Raised if the credentials are wrong. The same response is given for
        an unknown username and a wrong password.

    """
    body = request.get_json(silent=True)
    try:
        credentials = validation.validate_login(body)
    except BadRequest as e:
        ctx.logger.warning('Login validation failed',
                           extra={'error': e.description})
        raise
    try:
        subject = env.credentials.verify(credentials['username'],
                                         credentials['password'])
    except InvalidCredentialsError as e:
        ctx.logger.warning('Invalid credentials attempted')
        raise Unauthorized('Invalid credentials') from e

    lifetime = env.auth.lifetime
    token = tokens.issue(subject, lifetime, env.auth.secret)
    ctx.logger.info('Login successful', extra={'subjectId': subject})
    return {'token': token, 'expiresIn': lifetime}, status.OK, {}


def session(request: Request, env: domain.Environment,
            ctx: domain.ExecutionContext, params: dict,
            caller: Optional[domain.Claims]) -> ResponseData:
    """Report on the token that the access gate already validated."""
    if caller is None:
        ctx.logger.warning('Session validation failed - no caller')
        raise Unauthorized('Invalid or missing token')
    expires_at = datetime.fromtimestamp(caller.expires_at, tz=UTC)
    ctx.logger.debug('Session validated',
                     extra={'subjectId': caller.subject})
    return {
        'valid': True,
        'subjectId': caller.subject,
        'expiresAt': expires_at.isoformat()
    }, status.OK, {}
