"""Core concepts shared by the auth components and the request handlers."""

from typing import Any, Mapping, NamedTuple, Optional

DEFAULT_LIFETIME = 7200
"""Token lifetime, in seconds, used when none (or a bad one) is configured."""

ADMIN_SUBJECT = '1'
"""Identity of the single administrator account."""


class Claims(NamedTuple):
    """Claims carried in the payload of an auth token."""

    subject: str
    """The authenticated identity; always :const:`ADMIN_SUBJECT`."""

    issued_at: int
    """Seconds since the epoch at which the token was issued."""

    expires_at: int
    """Seconds since the epoch after which the token is no longer honored."""

    def to_dict(self) -> dict:
        """Render as registered JWT claim names."""
        return {'sub': self.subject, 'iat': self.issued_at,
                'exp': self.expires_at}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Claims':
        """
        Load claims from a decoded payload.

        Raises
        ------
        :class:`ValueError`
            Raised if a claim is missing or has the wrong type.

        """
        try:
            subject = data['sub']
            issued_at = data['iat']
            expires_at = data['exp']
        except (KeyError, TypeError) as e:
            raise ValueError('Missing claim') from e
        if not isinstance(subject, str):
            raise ValueError('Subject must be a string')
        for value in (issued_at, expires_at):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError('Timestamps must be integers')
        return cls(subject, issued_at, expires_at)


def parse_lifetime(value: Any) -> int:
    """Coerce a configured lifetime, falling back to the default."""
    try:
        lifetime = int(value)
    except (TypeError, ValueError):
        return DEFAULT_LIFETIME
    return lifetime if lifetime > 0 else DEFAULT_LIFETIME


class AuthConfig(NamedTuple):
    """Process-wide auth settings, frozen when the app is created."""

    secret: bytes
    lifetime: int
    admin_username: str
    password_hash: str
    password_salt: str

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> 'AuthConfig':
        """Build from a Flask-style config mapping."""
        secret = config.get('JWT_SECRET') or ''
        if isinstance(secret, str):
            secret = secret.encode('utf-8')
        return cls(
            secret=secret,
            lifetime=parse_lifetime(config.get('JWT_EXPIRY')),
            admin_username=config.get('ADMIN_USERNAME') or '',
            password_hash=config.get('ADMIN_PASSWORD') or '',
            password_salt=config.get('PASSWORD_SALT') or ''
        )


class ExecutionContext(NamedTuple):
    """Per-request values handed to a handler alongside the request."""

    request_id: str
    logger: Any
    started: Optional[float] = None


class Environment(NamedTuple):
    """Process-wide bindings handed to every request handler."""

    config: Mapping[str, Any]
    """Flask application config."""

    auth: AuthConfig

    credentials: Any
    """A :class:`.credentials.CredentialVerifier`."""

    datastore: Any
    """A :class:`.services.Datastore`."""

    images: Any
    """A :class:`.services.ImageStore`."""
