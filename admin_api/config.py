"""Flask configuration for the admin API."""

import os
import tempfile

ENVIRONMENT = os.environ.get('ENVIRONMENT', 'development')
"""Deployment environment; debug logging is off in ``production``."""

JWT_SECRET = os.environ.get('JWT_SECRET', 'foosecret')
"""Key used to sign auth tokens. Use ``admin-api generate-secrets``."""

JWT_EXPIRY = os.environ.get('JWT_EXPIRY', '7200')
"""Token lifetime in seconds."""

ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME', 'admin')

ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD', '')
"""Hex SHA-256 of the administrator password + ``PASSWORD_SALT``."""

PASSWORD_SALT = os.environ.get('PASSWORD_SALT', '')

CREDENTIAL_SOURCE = os.environ.get('CREDENTIAL_SOURCE', 'config')
"""
Where the expected administrator credentials come from.

``config`` uses ``ADMIN_USERNAME`` and ``ADMIN_PASSWORD``; ``datastore``
looks them up in the ``admin_users`` table.
"""

SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI',
                                         'sqlite:///admin_api.db')
SQLALCHEMY_TRACK_MODIFICATIONS = False

IMAGE_STORAGE_PATH = os.environ.get(
    'IMAGE_STORAGE_PATH',
    os.path.join(tempfile.gettempdir(), 'admin_api_images')
)
CDN_DOMAIN = os.environ.get('CDN_DOMAIN', 'cdn.example.com')

ALLOWED_ORIGINS = os.environ.get('ALLOWED_ORIGINS', '*')

MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH',
                                        10 * 1024 * 1024))
"""Upper bound on request bodies; images are limited further on upload."""
