"""Tests for :mod:`admin_api.services.images`."""

import os
import re
import tempfile
from datetime import datetime
from io import BytesIO
from unittest import TestCase

from pytz import UTC

from admin_api.services import images
from admin_api.services.exceptions import StorageFailed

KEY = re.compile(r'^images/\d{4}/\d{2}/[0-9a-f-]{36}\.(jpg|png|gif|webp)$')


class TestMakeKey(TestCase):
    """Tests for :func:`images.make_key`."""

    def test_layout(self):
        """Keys are grouped by year and month, with a unique name."""
        now = datetime(2026, 3, 9, tzinfo=UTC)
        key = images.make_key('image/png', now)
        self.assertTrue(key.startswith('images/2026/03/'))
        self.assertTrue(key.endswith('.png'))
        self.assertRegex(key, KEY)
        self.assertNotEqual(key, images.make_key('image/png', now))

    def test_extensions(self):
        """Each accepted type gets its own extension."""
        for content_type, extension in [('image/jpeg', 'jpg'),
                                        ('image/gif', 'gif'),
                                        ('image/webp', 'webp')]:
            self.assertTrue(images.make_key(content_type)
                            .endswith(f'.{extension}'))


class TestImageStore(TestCase):
    """Tests for :class:`images.ImageStore`."""

    def setUp(self):
        self.root = tempfile.TemporaryDirectory()
        self.store = images.ImageStore(self.root.name, 'cdn.example.com')

    def tearDown(self):
        self.root.cleanup()

    def test_put(self):
        """The content is written below the root and served from the CDN."""
        result = self.store.put(BytesIO(b'GIF89a...'), 'image/gif')
        self.assertRegex(result['key'], KEY)
        self.assertEqual(result['url'],
                         f'https://cdn.example.com/{result["key"]}')
        with open(self.store.path_for(result['key']), 'rb') as f:
            self.assertEqual(f.read(), b'GIF89a...')

    def test_storage_failure(self):
        """Errors writing the object are raised as :class:`StorageFailed`."""
        blocker = os.path.join(self.root.name, 'blocker')
        with open(blocker, 'w') as f:
            f.write('not a directory')
        store = images.ImageStore(blocker, 'cdn.example.com')
        with self.assertRaises(StorageFailed):
            store.put(BytesIO(b'data'), 'image/png')
