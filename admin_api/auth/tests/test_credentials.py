"""Tests for :mod:`admin_api.auth.credentials`."""

import hashlib
import string
from unittest import TestCase, mock

from hypothesis import given, settings
from hypothesis import strategies as st

from admin_api import domain
from admin_api.auth import credentials
from admin_api.auth.exceptions import InvalidCredentialsError

SALT = '0f1e2d3c4b5a69788796a5b4c3d2e1f0'


class TestHashPassword(TestCase):
    """Tests for :func:`credentials.hash_password`."""

    def test_salted_sha256(self):
        """The stored value is the hex SHA-256 of password + salt."""
        expected = hashlib.sha256(b'hunter2' + SALT.encode()).hexdigest()
        self.assertEqual(credentials.hash_password('hunter2', SALT), expected)

    def test_salt_matters(self):
        """The same password hashes differently under another salt."""
        self.assertNotEqual(credentials.hash_password('hunter2', 'a'),
                            credentials.hash_password('hunter2', 'b'))


class TestVerify(TestCase):
    """Tests for :func:`credentials.verify`."""

    def setUp(self):
        self.expected_hash = credentials.hash_password('correct horse', SALT)

    def test_match(self):
        """Correct username and password yield the administrator."""
        subject = credentials.verify('admin', 'correct horse', 'admin',
                                     self.expected_hash, SALT)
        self.assertEqual(subject, domain.ADMIN_SUBJECT)

    def test_uppercase_hash(self):
        """Hex digests are compared case-insensitively."""
        subject = credentials.verify('admin', 'correct horse', 'admin',
                                     self.expected_hash.upper(), SALT)
        self.assertEqual(subject, domain.ADMIN_SUBJECT)

    def test_wrong_password(self):
        """A wrong password is rejected."""
        with self.assertRaises(InvalidCredentialsError) as caught:
            credentials.verify('admin', 'wrong', 'admin', self.expected_hash,
                               SALT)
        self.assertEqual(str(caught.exception), 'Invalid credentials')

    def test_wrong_username(self):
        """An unknown username gets exactly the same error."""
        with self.assertRaises(InvalidCredentialsError) as caught:
            credentials.verify('root', 'correct horse', 'admin',
                               self.expected_hash, SALT)
        self.assertEqual(str(caught.exception), 'Invalid credentials')

    @mock.patch(f'{credentials.__name__}.hash_password')
    def test_password_hashed_for_unknown_user(self, mock_hash):
        """The password is hashed even when the username is wrong."""
        mock_hash.return_value = 'x' * 64
        with self.assertRaises(InvalidCredentialsError):
            credentials.verify('root', 'pw', 'admin', self.expected_hash, SALT)
        mock_hash.assert_called_once_with('pw', SALT)

    def test_no_configured_hash(self):
        """Nobody can log in if no password hash is configured."""
        with self.assertRaises(InvalidCredentialsError):
            credentials.verify('', '', '', '', '')

    @given(st.text(alphabet=string.printable), st.text())
    @settings(max_examples=200)
    def test_only_the_password_matches(self, password, attempt):
        """Any attempt other than the password itself is rejected."""
        expected = credentials.hash_password(password, SALT)
        if attempt == password:
            self.assertEqual(
                credentials.verify('admin', attempt, 'admin', expected, SALT),
                domain.ADMIN_SUBJECT
            )
        else:
            with self.assertRaises(InvalidCredentialsError):
                credentials.verify('admin', attempt, 'admin', expected, SALT)


class TestCredentialVerifier(TestCase):
    """Tests for :class:`credentials.CredentialVerifier`."""

    def setUp(self):
        self.config = domain.AuthConfig(
            secret=b'foosecret',
            lifetime=7200,
            admin_username='admin',
            password_hash=credentials.hash_password('correct horse', SALT),
            password_salt=SALT
        )

    def test_config_source(self):
        """Credentials can come from configuration."""
        verifier = credentials.CredentialVerifier(
            credentials.ConfigCredentials(self.config), SALT
        )
        self.assertEqual(verifier.verify('admin', 'correct horse'),
                         domain.ADMIN_SUBJECT)
        with self.assertRaises(InvalidCredentialsError):
            verifier.verify('admin', 'nope')

    def test_source_has_no_such_user(self):
        """A source that does not know the username still gets a rejection."""
        source = mock.MagicMock(lookup=mock.MagicMock(return_value=None))
        verifier = credentials.CredentialVerifier(source, SALT)
        with self.assertRaises(InvalidCredentialsError):
            verifier.verify('', '')
        source.lookup.assert_called_once_with('')
