"""Comment moderation."""

from http import HTTPStatus as status
from typing import Optional

from flask import Request
from werkzeug.exceptions import BadRequest, NotFound

from .. import domain
from ..services.exceptions import NoSuchRecord
from . import ResponseData

COMMENT_ID_LENGTH = 36
"""Comment IDs are UUIDs in canonical form."""


def delete_comment(request: Request, env: domain.Environment,
                   ctx: domain.ExecutionContext, params: dict,
                   caller: Optional[domain.Claims]) -> ResponseData:
    """Delete a comment by ID."""
    comment_id = params.get('commentId') or ''
    if len(comment_id) < COMMENT_ID_LENGTH:
        raise BadRequest('Invalid comment ID format')
    try:
        result = env.datastore.delete_comment(comment_id)
    except NoSuchRecord as e:
        raise NotFound('Comment not found') from e
    ctx.logger.info('Comment deleted', extra={'commentId': comment_id})
    return result, status.OK, {}
