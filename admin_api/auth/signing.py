"""HMAC-SHA256 signatures over the ``<header>.<payload>`` signing input."""

from typing import Union

from jwt.algorithms import HMACAlgorithm

ALGORITHM = 'HS256'
"""JOSE name of the MAC used for every token."""

Key = Union[bytes, str]

_hmac = HMACAlgorithm(HMACAlgorithm.SHA256)


def _as_bytes(value: Key) -> bytes:
    if isinstance(value, str):
        return value.encode('utf-8')
    return bytes(value)


def sign(message: Key, secret: Key) -> bytes:
    """Compute the MAC of ``message`` keyed with ``secret``."""
    return _hmac.sign(_as_bytes(message), _hmac.prepare_key(secret))


def verify(message: Key, mac: bytes, secret: Key) -> bool:
    """
    Check ``mac`` against the MAC of ``message``.

    The comparison runs in constant time. A ``mac`` of the wrong length or
    type is simply a mismatch.
    """
    if not isinstance(mac, (bytes, bytearray)):
        return False
    return _hmac.verify(_as_bytes(message), _hmac.prepare_key(secret),
                        bytes(mac))
