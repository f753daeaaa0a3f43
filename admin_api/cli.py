"""
Command-line helpers for operating the admin API.

Generate the secrets for a new deployment, then put the printed values in
the environment of the service:

.. code-block:: bash

   $ admin-api generate-secrets
   Admin password:
   Repeat for confirmation:
   JWT_SECRET=...
   PASSWORD_SALT=...
   ADMIN_USERNAME=admin
   ADMIN_PASSWORD=...

For development, a token can be minted without going through ``/login``:

.. code-block:: bash

   $ JWT_SECRET=foosecret admin-api issue-token --lifetime 600

"""

import base64
import secrets

import click

from . import domain
from .auth import credentials, tokens

MIN_PASSWORD_LENGTH = 8
RECOMMENDED_PASSWORD_LENGTH = 12


def generate_jwt_secret() -> str:
    """Generate a random 256-bit signing secret, base64-encoded."""
    return base64.b64encode(secrets.token_bytes(32)).decode('ascii')


def generate_password_salt() -> str:
    """Generate a random 128-bit salt, hex-encoded."""
    return secrets.token_hex(16)


@click.group()
def main() -> None:
    """Admin API utilities."""


@main.command('generate-secrets')
@click.option('--username', default='admin', show_default=True,
              help='Administrator username.')
@click.password_option('--password', prompt='Admin password',
                       help='Administrator password.')
def generate_secrets(username: str, password: str) -> None:
    """Generate the signing secret, salt, and password hash."""
    if len(password) < MIN_PASSWORD_LENGTH:
        raise click.BadParameter(
            f'must be at least {MIN_PASSWORD_LENGTH} characters',
            param_hint='password'
        )
    if len(password) < RECOMMENDED_PASSWORD_LENGTH:
        click.echo(f'Warning: passwords of at least '
                   f'{RECOMMENDED_PASSWORD_LENGTH} characters are '
                   f'recommended.', err=True)
    salt = generate_password_salt()
    click.echo(f'JWT_SECRET={generate_jwt_secret()}')
    click.echo(f'PASSWORD_SALT={salt}')
    click.echo(f'ADMIN_USERNAME={username}')
    click.echo(f'ADMIN_PASSWORD={credentials.hash_password(password, salt)}')


@main.command('issue-token')
@click.option('--secret', envvar='JWT_SECRET', required=True,
              help='Signing secret; defaults to $JWT_SECRET.')
@click.option('--lifetime', type=int, default=domain.DEFAULT_LIFETIME,
              show_default=True, help='Seconds until the token expires.')
def issue_token(secret: str, lifetime: int) -> None:
    """Print a token for the administrator (development only)."""
    click.echo(tokens.issue(domain.ADMIN_SUBJECT, lifetime, secret))


if __name__ == '__main__':
    main()
