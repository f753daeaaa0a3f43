"""Database models for blog content and the administrator account."""

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import Column, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import relationship

db: SQLAlchemy = SQLAlchemy()


post_tags = Table(
    'post_tags', db.metadata,
    Column('post_id', ForeignKey('posts.id', ondelete='CASCADE'),
           primary_key=True),
    Column('tag_id', ForeignKey('tags.id', ondelete='CASCADE'),
           primary_key=True)
)


class DBAdminUser(db.Model):  # type: ignore
    """
    Administrator account, used when credentials come from the datastore.

    ``password`` holds the hex SHA-256 digest of password + salt.
    """

    __tablename__ = 'admin_users'

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True)
    password = Column(String(64), nullable=False)


class DBTag(db.Model):  # type: ignore
    """A tag that may be attached to any number of posts."""

    __tablename__ = 'tags'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    created_at = Column(String(40), nullable=False)
    post_count = Column(Integer, nullable=False, default=0)


class DBPost(db.Model):  # type: ignore
    """A blog post."""

    __tablename__ = 'posts'

    id = Column(Integer, primary_key=True, autoincrement=True)
    slug = Column(String(255), nullable=False, unique=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    summary = Column(Text)
    state = Column(String(16), nullable=False)
    created_at = Column(String(40), nullable=False)
    updated_at = Column(String(40), nullable=False)
    views = Column(Integer, nullable=False, default=0)

    tags = relationship('DBTag', secondary=post_tags, order_by='DBTag.name')
    comments = relationship('DBComment', back_populates='post',
                            cascade='all, delete-orphan')


class DBComment(db.Model):  # type: ignore
    """A reader comment on a post. IDs are UUIDs."""

    __tablename__ = 'comments'

    id = Column(String(36), primary_key=True)
    post_id = Column(ForeignKey('posts.id', ondelete='CASCADE'),
                     nullable=False, index=True)
    author = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(String(40), nullable=False)

    post = relationship('DBPost', back_populates='comments')
