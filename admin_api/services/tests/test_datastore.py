"""Tests for :mod:`admin_api.services.datastore`."""

import uuid
from unittest import TestCase

from flask import Flask

from admin_api.services import datastore
from admin_api.services.exceptions import NoSuchRecord, SlugConflict


class DatastoreTestCase(TestCase):
    """Gives each test a fresh in-memory database."""

    def setUp(self):
        self.app = Flask(__name__)
        self.app.config['SQLALCHEMY_DATABASE_URI'] = 'sqlite://'
        datastore.init_app(self.app)
        self.context = self.app.app_context()
        self.context.push()
        datastore.create_all()
        self.store = datastore.Datastore()

    def tearDown(self):
        datastore.current_session().remove()
        datastore.drop_all()
        self.context.pop()

    def _post(self, **data):
        body = {'title': 'Hello, World!', 'content': 'Body',
                'summary': None, 'tags': [], 'state': 'draft', 'slug': None}
        body.update(data)
        return self.store.create_post(body)


class TestSlugify(TestCase):
    """Tests for :func:`datastore.slugify`."""

    def test_slugify(self):
        """Runs of other characters collapse to single hyphens."""
        self.assertEqual(datastore.slugify('Hello, World!'), 'hello-world')
        self.assertEqual(datastore.slugify('  A  B--C  '), 'a-b-c')
        self.assertEqual(datastore.slugify('Ünïcode 2'), 'n-code-2')


class TestCreatePost(DatastoreTestCase):
    """Tests for :meth:`datastore.Datastore.create_post`."""

    def test_create(self):
        """The created post is returned in full."""
        post = self._post(tags=['python', 'flask'], summary='Short')
        self.assertIsInstance(post['id'], int)
        self.assertEqual(post['slug'], 'hello-world')
        self.assertEqual(post['summary'], 'Short')
        self.assertEqual(sorted(post['tags']), ['flask', 'python'])
        self.assertEqual(post['views'], 0)
        self.assertEqual(post['createdAt'], post['updatedAt'])
        self.assertEqual(self.store.get_post(post['id']), post)

    def test_explicit_slug(self):
        """A provided slug is used as-is."""
        self.assertEqual(self._post(slug='custom')['slug'], 'custom')

    def test_slug_conflict(self):
        """Slugs are unique."""
        self._post()
        with self.assertRaises(SlugConflict):
            self._post()
        with self.assertRaises(SlugConflict):
            self._post(title='Other', slug='hello-world')

    def test_tags_are_shared(self):
        """A tag name is stored once, however many posts use it."""
        first = self._post(tags=['python'])
        second = self._post(title='Second', tags=['python', 'python'])
        self.assertEqual(first['tags'], ['python'])
        self.assertEqual(second['tags'], ['python'])


class TestUpdatePost(DatastoreTestCase):
    """Tests for :meth:`datastore.Datastore.update_post`."""

    def setUp(self):
        super(TestUpdatePost, self).setUp()
        self.post = self._post(tags=['old'])

    def _data(self, **data):
        body = {'title': 'New title', 'content': 'New body',
                'summary': 'New', 'tags': ['new'], 'state': 'published',
                'slug': None}
        body.update(data)
        return body

    def test_update(self):
        """Fields and tags are replaced; the slug is kept if not given."""
        post = self.store.update_post(self.post['id'], self._data())
        self.assertEqual(post['title'], 'New title')
        self.assertEqual(post['state'], 'published')
        self.assertEqual(post['tags'], ['new'])
        self.assertEqual(post['slug'], 'hello-world')
        self.assertEqual(post['createdAt'], self.post['createdAt'])

    def test_new_slug(self):
        """A provided slug replaces the old one."""
        post = self.store.update_post(self.post['id'],
                                      self._data(slug='renamed'))
        self.assertEqual(post['slug'], 'renamed')

    def test_own_slug(self):
        """Re-sending the current slug is not a conflict."""
        post = self.store.update_post(self.post['id'],
                                      self._data(slug='hello-world'))
        self.assertEqual(post['slug'], 'hello-world')

    def test_slug_conflict(self):
        """The slug of another post cannot be taken."""
        self._post(title='Other')
        with self.assertRaises(SlugConflict):
            self.store.update_post(self.post['id'], self._data(slug='other'))
        self.assertEqual(self.store.get_post(self.post['id'])['title'],
                         'Hello, World!')

    def test_no_such_post(self):
        """Updating a post that does not exist fails."""
        with self.assertRaises(NoSuchRecord):
            self.store.update_post(self.post['id'] + 1, self._data())


class TestDeletePost(DatastoreTestCase):
    """Tests for :meth:`datastore.Datastore.delete_post`."""

    def test_delete(self):
        """The post is gone, along with its comments."""
        post = self._post()
        comment_id = str(uuid.uuid4())
        self.store.add_comment(post['id'], comment_id, 'reader', 'Nice')

        self.assertEqual(self.store.delete_post(post['id']),
                         {'deleted': True, 'id': post['id']})
        with self.assertRaises(NoSuchRecord):
            self.store.get_post(post['id'])
        with self.assertRaises(NoSuchRecord):
            self.store.delete_comment(comment_id)

    def test_no_such_post(self):
        """Deleting a post that does not exist fails."""
        with self.assertRaises(NoSuchRecord):
            self.store.delete_post(1)


class TestComments(DatastoreTestCase):
    """Tests for comment storage."""

    def test_delete(self):
        """A stored comment can be deleted once."""
        post = self._post()
        comment_id = str(uuid.uuid4())
        self.store.add_comment(post['id'], comment_id, 'reader', 'Nice')
        self.assertEqual(self.store.delete_comment(comment_id),
                         {'deleted': True, 'id': comment_id})
        with self.assertRaises(NoSuchRecord):
            self.store.delete_comment(comment_id)

    def test_comment_needs_post(self):
        """Comments can only be added to posts that exist."""
        with self.assertRaises(NoSuchRecord):
            self.store.add_comment(99, str(uuid.uuid4()), 'reader', 'Nice')


class TestAdminAccount(DatastoreTestCase):
    """Tests for the stored administrator account."""

    def test_set_and_get(self):
        """There is only ever one administrator."""
        self.assertIsNone(self.store.get_admin('admin'))
        self.store.set_admin('admin', 'a' * 64)
        self.store.set_admin('root', 'b' * 64)
        self.assertIsNone(self.store.get_admin('admin'))

        expected = datastore.DatastoreCredentials(self.store).lookup('root')
        self.assertEqual(expected.username, 'root')
        self.assertEqual(expected.password_hash, 'b' * 64)
