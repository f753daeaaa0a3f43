"""Create, update, and delete blog posts."""

from http import HTTPStatus as status
from typing import Optional

from flask import Request
from werkzeug.exceptions import BadRequest, NotFound

from .. import domain, validation
from ..services.exceptions import NoSuchRecord, SlugConflict
from . import ResponseData


def _post_id(params: dict) -> int:
    try:
        return int(params['postId'])
    except (KeyError, ValueError) as e:
        raise BadRequest('Invalid post ID') from e


def create_post(request: Request, env: domain.Environment,
                ctx: domain.ExecutionContext, params: dict,
                caller: Optional[domain.Claims]) -> ResponseData:
    """Create a post; the slug is derived from the title if omitted."""
    data = validation.validate_post(request.get_json(silent=True))
    try:
        post = env.datastore.create_post(data)
    except SlugConflict as e:
        raise BadRequest('Slug already exists') from e
    ctx.logger.info('Post created', extra={'postId': post['id']})
    return post, status.OK, {}


def update_post(request: Request, env: domain.Environment,
                ctx: domain.ExecutionContext, params: dict,
                caller: Optional[domain.Claims]) -> ResponseData:
    """Replace a post, including its tags."""
    post_id = _post_id(params)
    data = validation.validate_post(request.get_json(silent=True))
    try:
        post = env.datastore.update_post(post_id, data)
    except NoSuchRecord as e:
        raise NotFound('Post not found') from e
    except SlugConflict as e:
        raise BadRequest('Slug already exists') from e
    ctx.logger.info('Post updated', extra={'postId': post_id})
    return post, status.OK, {}


def delete_post(request: Request, env: domain.Environment,
                ctx: domain.ExecutionContext, params: dict,
                caller: Optional[domain.Claims]) -> ResponseData:
    """Delete a post."""
    post_id = _post_id(params)
    try:
        result = env.datastore.delete_post(post_id)
    except NoSuchRecord as e:
        raise NotFound('Post not found') from e
    ctx.logger.info('Post deleted', extra={'postId': post_id})
    return result, status.OK, {}
