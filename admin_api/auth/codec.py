"""
Provides the URL-safe text encoding used for auth tokens.

A token is three segments separated with ``.``:

1. the encoded header, a JSON object naming the signing algorithm
2. the encoded payload, a JSON object holding the claims
3. the encoded signature, a MAC over ``<header>.<payload>``

Each segment uses the base64 alphabet with ``+`` replaced by ``-``, ``/``
replaced by ``_``, and the trailing ``=`` padding removed. This is the
layout of a compact JWS; the segments are produced and read by PyJWT.
"""

import binascii
import re
from typing import Tuple, Union

from jwt.utils import base64url_decode, base64url_encode

from .exceptions import DecodeError, MalformedTokenError

SEPARATOR = '.'

_ALPHABET = re.compile(r'^[A-Za-z0-9_-]*$')


def encode(data: Union[bytes, str]) -> str:
    """Encode bytes (or UTF-8 text) with the URL-safe alphabet, unpadded."""
    if isinstance(data, str):
        data = data.encode('utf-8')
    return base64url_encode(data).decode('ascii')


def decode(text: str) -> bytes:
    """
    Decode URL-safe, unpadded base64 text.

    Parameters
    ----------
    text : str
        Output of :func:`encode`.

    Returns
    -------
    bytes

    Raises
    ------
    :class:`DecodeError`
        Raised if ``text`` contains characters outside of the URL-safe
        alphabet, or if its length cannot be the length of encoded data.

    """
    if not isinstance(text, str) or not _ALPHABET.match(text):
        raise DecodeError('Not URL-safe base64')
    try:
        return base64url_decode(text)
    except (binascii.Error, ValueError) as e:
        raise DecodeError('Not URL-safe base64') from e


def join(header: str, payload: str, signature: str) -> str:
    """Assemble a token from its three encoded segments."""
    return SEPARATOR.join([header, payload, signature])


def split(token: str) -> Tuple[str, str, str]:
    """
    Split a token into its encoded header, payload, and signature.

    Raises
    ------
    :class:`MalformedTokenError`
        Raised if there are not exactly three non-empty segments.

    """
    if not isinstance(token, str):
        raise MalformedTokenError('Token is not a string')
    parts = token.split(SEPARATOR)
    if len(parts) != 3 or not all(parts):
        raise MalformedTokenError('Token must have three non-empty parts')
    header, payload, signature = parts
    return header, payload, signature
