"""Stateless token authentication for the admin API."""

from . import codec, credentials, exceptions, middleware, signing, tokens
from .middleware import AccessGate

__all__ = ['AccessGate', 'codec', 'credentials', 'exceptions', 'middleware',
           'signing', 'tokens']
