"""Exceptions raised while issuing, decoding, and checking credentials."""


class DecodeError(ValueError):
    """Text is not valid URL-safe base64."""


class TokenError(RuntimeError):
    """Base class for tokens that must not be honored."""


class MalformedTokenError(TokenError):
    """Token is not three non-empty, decodable segments."""


class InvalidSignatureError(TokenError):
    """Token signature does not match its header and payload."""


class ExpiredTokenError(TokenError):
    """Token was valid, but its expiry has passed."""


class InvalidCredentialsError(RuntimeError):
    """Username and password do not identify the administrator."""
