import tempfile

import pytest

from admin_api.auth.credentials import hash_password
from admin_api.factory import create_app


@pytest.fixture()
def app():
    with tempfile.TemporaryDirectory() as images:
        app = create_app({
            'JWT_SECRET': 'foosecret',
            'ADMIN_USERNAME': 'admin',
            'ADMIN_PASSWORD': hash_password('foopassword', 'foosalt'),
            'PASSWORD_SALT': 'foosalt',
            'SQLALCHEMY_DATABASE_URI': 'sqlite://',
            'IMAGE_STORAGE_PATH': images,
        })
        yield app
