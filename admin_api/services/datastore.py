"""
Relational storage for posts, tags, comments, and the admin account.

The schema lives in :mod:`.models`. Callers go through :class:`Datastore`,
which returns plain dicts shaped for API responses; SQLAlchemy objects do
not leave this module.
"""

import re
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Generator, Iterable, List, Optional

from flask import Flask
from pytz import UTC
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ..auth.credentials import ExpectedCredentials
from ..logging import getLogger
from .exceptions import NoSuchRecord, SlugConflict
from .models import db, DBAdminUser, DBComment, DBPost, DBTag

logger = getLogger(__name__)

_NOT_SLUG = re.compile(r'[^a-z0-9]+')


def init_app(app: Flask) -> None:
    """Set configuration defaults and attach the database to ``app``."""
    app.config.setdefault('SQLALCHEMY_TRACK_MODIFICATIONS', False)
    db.init_app(app)


def current_session() -> Session:
    """Get/create database session for this context."""
    return db.session


def create_all() -> None:
    """Create all tables in the database."""
    db.create_all()


def drop_all() -> None:
    """Drop all tables in the database."""
    db.drop_all()


@contextmanager
def transaction() -> Generator[Session, None, None]:
    """Context manager for database transaction."""
    try:
        yield db.session
        if db.session.new or db.session.dirty or db.session.deleted:
            db.session.commit()
    except Exception as e:
        logger.error('Commit failed, rolling back: %s', str(e))
        db.session.rollback()
        raise


def timestamp() -> str:
    """Current time as an ISO-8601 string in UTC."""
    return datetime.now(tz=UTC).isoformat()


def slugify(title: str) -> str:
    """Generate a URL-safe slug from a post title."""
    return _NOT_SLUG.sub('-', title.lower()).strip('-')


def _post_to_dict(post: DBPost) -> Dict[str, Any]:
    return {
        'id': post.id,
        'slug': post.slug,
        'title': post.title,
        'content': post.content,
        'summary': post.summary,
        'tags': [tag.name for tag in post.tags],
        'state': post.state,
        'createdAt': post.created_at,
        'updatedAt': post.updated_at,
        'views': post.views
    }


class Datastore(object):
    """Post, comment, and admin account operations."""

    def _get_post(self, post_id: int) -> DBPost:
        post = db.session.get(DBPost, post_id)
        if post is None:
            raise NoSuchRecord('Post not found')
        return post

    def _slug_taken(self, slug: str, exclude: Optional[int] = None) -> bool:
        query = select(DBPost.id).where(DBPost.slug == slug)
        if exclude is not None:
            query = query.where(DBPost.id != exclude)
        return db.session.execute(query).first() is not None

    def _get_tags(self, names: Iterable[str], now: str) -> List[DBTag]:
        tags = []
        for name in dict.fromkeys(names):     # Drop duplicates, keep order.
            tag = db.session.execute(
                select(DBTag).where(DBTag.name == name)
            ).scalar_one_or_none()
            if tag is None:
                tag = DBTag(name=name, created_at=now, post_count=0)
                db.session.add(tag)
            tags.append(tag)
        return tags

    def get_post(self, post_id: int) -> Dict[str, Any]:
        """
        Load a post with its tags.

        No route reads single posts; this is for inspecting stored data from
        tests and the shell.
        """
        return _post_to_dict(self._get_post(post_id))

    def create_post(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a post.

        The slug is generated from the title if not provided.

        Raises
        ------
        :class:`SlugConflict`

        """
        slug = data.get('slug') or slugify(data['title'])
        if self._slug_taken(slug):
            raise SlugConflict('Slug already exists')
        with transaction() as session:
            now = timestamp()
            post = DBPost(
                slug=slug,
                title=data['title'],
                content=data['content'],
                summary=data.get('summary'),
                state=data['state'],
                created_at=now,
                updated_at=now,
                views=0
            )
            post.tags = self._get_tags(data.get('tags') or [], now)
            session.add(post)
            session.commit()
        logger.info('Post created', extra={'postId': post.id, 'slug': slug})
        return _post_to_dict(post)

    def update_post(self, post_id: int, data: Dict[str, Any]) \
            -> Dict[str, Any]:
        """
        Replace the content and tags of a post.

        The slug is only changed if a new one is provided.

        Raises
        ------
        :class:`NoSuchRecord`
        :class:`SlugConflict`

        """
        with transaction() as session:
            post = self._get_post(post_id)
            slug = data.get('slug')
            if slug and self._slug_taken(slug, exclude=post_id):
                raise SlugConflict('Slug already exists')
            now = timestamp()
            post.title = data['title']
            post.content = data['content']
            post.summary = data.get('summary')
            post.state = data['state']
            if slug:
                post.slug = slug
            post.updated_at = now
            post.tags = self._get_tags(data.get('tags') or [], now)
            session.commit()
        logger.info('Post updated', extra={'postId': post_id})
        return _post_to_dict(post)

    def delete_post(self, post_id: int) -> Dict[str, Any]:
        """Delete a post along with its comments and tag links."""
        with transaction() as session:
            session.delete(self._get_post(post_id))
        logger.info('Post deleted', extra={'postId': post_id})
        return {'deleted': True, 'id': post_id}

    def add_comment(self, post_id: int, comment_id: str, author: str,
                    content: str) -> None:
        """
        Store a comment on a post.

        Comments are written by the public site, not by this API. This is for
        seeding data in tests and the shell.
        """
        with transaction() as session:
            self._get_post(post_id)
            session.add(DBComment(id=comment_id, post_id=post_id,
                                  author=author, content=content,
                                  created_at=timestamp()))

    def delete_comment(self, comment_id: str) -> Dict[str, Any]:
        """
        Delete a comment.

        Raises
        ------
        :class:`NoSuchRecord`

        """
        with transaction() as session:
            comment = session.get(DBComment, comment_id)
            if comment is None:
                raise NoSuchRecord('Comment not found')
            session.delete(comment)
        logger.info('Comment deleted', extra={'commentId': comment_id})
        return {'deleted': True, 'id': comment_id}

    def get_admin(self, username: str) -> Optional[ExpectedCredentials]:
        """Get the stored credentials for ``username``, if any."""
        user = db.session.execute(
            select(DBAdminUser).where(DBAdminUser.username == username)
        ).scalar_one_or_none()
        if user is None:
            return None
        return ExpectedCredentials(user.username, user.password)

    def set_admin(self, username: str, password_hash: str) -> None:
        """Create or replace the administrator account."""
        with transaction() as session:
            session.execute(delete(DBAdminUser))
            session.add(DBAdminUser(username=username,
                                    password=password_hash))


class DatastoreCredentials(object):
    """Credential source backed by the ``admin_users`` table."""

    def __init__(self, datastore: Datastore) -> None:
        self.datastore = datastore

    def lookup(self, username: str) -> Optional[ExpectedCredentials]:
        """Get the stored administrator, if ``username`` is theirs."""
        return self.datastore.get_admin(username)
