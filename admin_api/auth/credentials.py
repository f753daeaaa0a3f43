"""
Check login credentials against the single administrator account.

Passwords are never compared in plaintext. The expected value is the hex
SHA-256 digest of ``password + salt``, produced ahead of time with
``admin-api generate-secrets``.

Where the expected username and hash come from is up to a credential source.
:class:`ConfigCredentials` (the default) reads them from configuration;
:class:`~admin_api.services.datastore.DatastoreCredentials` reads them from
the admin user table. Either way the salt is configuration, and a match
always yields :const:`~admin_api.domain.ADMIN_SUBJECT`.
"""

import hashlib
import hmac
from typing import NamedTuple, Optional

from .. import domain
from .exceptions import InvalidCredentialsError


class ExpectedCredentials(NamedTuple):
    """The stored identity that a login attempt is compared against."""

    username: str
    password_hash: str


def hash_password(password: str, salt: str) -> str:
    """Generate the salted digest stored for a password."""
    return hashlib.sha256((password + salt).encode('utf-8')).hexdigest()


def verify(username: str, password: str, expected_username: str,
           expected_hash: str, salt: str) -> str:
    """
    Authenticate a username/password pair.

    Both comparisons are always made, in constant time, so that a wrong
    username cannot be told apart from a wrong password.

    Returns
    -------
    str
        :const:`domain.ADMIN_SUBJECT`.

    Raises
    ------
    :class:`InvalidCredentialsError`

    """
    username_ok = hmac.compare_digest(username.encode('utf-8'),
                                      expected_username.encode('utf-8'))
    password_ok = hmac.compare_digest(
        hash_password(password, salt).encode('utf-8'),
        expected_hash.lower().encode('utf-8')
    )
    if not (username_ok & password_ok) or not expected_hash:
        raise InvalidCredentialsError('Invalid credentials')
    return domain.ADMIN_SUBJECT


class ConfigCredentials(object):
    """Credential source backed by :class:`domain.AuthConfig`."""

    def __init__(self, config: domain.AuthConfig) -> None:
        self._expected = ExpectedCredentials(config.admin_username,
                                             config.password_hash)

    def lookup(self, username: str) -> Optional[ExpectedCredentials]:
        """Get the configured administrator, whatever the username."""
        return self._expected


class CredentialVerifier(object):
    """Authenticate logins against a credential source."""

    def __init__(self, source, salt: str) -> None:
        """
        Parameters
        ----------
        source
            Anything with ``lookup(username) -> Optional[ExpectedCredentials]``.
        salt : str
            Salt appended to passwords before hashing.

        """
        self.source = source
        self._salt = salt

    def verify(self, username: str, password: str) -> str:
        """Get the administrator identity, or raise on bad credentials."""
        expected = self.source.lookup(username)
        if expected is None:
            # Compare against a stand-in so an unknown user costs the same.
            expected = ExpectedCredentials('', '')
        return verify(username, password, expected.username,
                      expected.password_hash, self._salt)
