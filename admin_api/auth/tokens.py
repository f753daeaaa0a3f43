"""
Issue and validate stateless auth tokens.

Tokens are HS256-signed JWTs in compact form (see :mod:`.codec`), encoded
and decoded with PyJWT. Nothing about a token is stored on the server; a
token is honored for as long as its signature checks out and its ``exp``
claim has not passed. The payload is signed, not encrypted, so it must never
carry anything secret.
"""

import time
from typing import Optional

import jwt

from .. import domain
from . import codec, signing
from .exceptions import MalformedTokenError, InvalidSignatureError, \
    ExpiredTokenError

REQUIRED_CLAIMS = ['sub', 'iat', 'exp']

# Expiry is checked here against an explicit time, not by PyJWT.
DECODE_OPTIONS = {
    'require': REQUIRED_CLAIMS,
    'verify_exp': False,
    'verify_iat': False,
    'verify_nbf': False,
}


def now() -> int:
    """Get the current epoch/unix time."""
    return int(time.time())


def issue(subject: str, lifetime: Optional[int], secret: signing.Key,
          issued_at: Optional[int] = None) -> str:
    """
    Create a signed token for ``subject``.

    Parameters
    ----------
    subject : str
        Identity to embed in the ``sub`` claim.
    lifetime : int
        Seconds until the token expires. Missing or non-positive values are
        replaced with :const:`domain.DEFAULT_LIFETIME`.
    secret : bytes or str
        Signing key.
    issued_at : int
        Override the issue time (epoch seconds); defaults to :func:`now`.

    Returns
    -------
    str

    """
    if isinstance(lifetime, bool) or not isinstance(lifetime, int) \
            or lifetime <= 0:
        lifetime = domain.DEFAULT_LIFETIME
    if issued_at is None:
        issued_at = now()
    claims = domain.Claims(subject, issued_at, issued_at + lifetime)
    return jwt.encode(claims.to_dict(), secret, algorithm=signing.ALGORITHM)


def validate(token: str, secret: signing.Key,
             at: Optional[int] = None) -> domain.Claims:
    """
    Check a token end to end and return its claims.

    Raises
    ------
    :class:`MalformedTokenError`
        Raised if the token is not three decodable segments with a supported
        header and well-formed claims.
    :class:`InvalidSignatureError`
        Raised if the signature was not produced with ``secret``.
    :class:`ExpiredTokenError`
        Raised if the ``exp`` claim is in the past.

    """
    codec.split(token)
    try:
        data = jwt.decode(token, secret, algorithms=[signing.ALGORITHM],
                          options=DECODE_OPTIONS)
    except jwt.exceptions.InvalidSignatureError as e:
        raise InvalidSignatureError('Signature does not match') from e
    except jwt.exceptions.InvalidTokenError as e:
        raise MalformedTokenError('Token contents are not readable') from e

    try:
        claims = domain.Claims.from_dict(data)
    except ValueError as e:
        raise MalformedTokenError('Token claims are not well-formed') from e

    if at is None:
        at = now()
    if claims.expires_at < at:
        raise ExpiredTokenError('Token expired')
    return claims
