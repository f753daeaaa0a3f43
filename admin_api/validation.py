"""Shape checks for request bodies. Failures raise :class:`.BadRequest`."""

import re
from typing import Any, Dict

from werkzeug.exceptions import BadRequest

POST_STATES = ('draft', 'published')

SLUG = re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)*$')


def _non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def validate_login(body: Any) -> Dict[str, str]:
    """Require ``username`` and ``password`` strings."""
    if not isinstance(body, dict):
        raise BadRequest('Request body must be a JSON object')
    username = body.get('username')
    password = body.get('password')
    if not _non_empty_string(username) or not _non_empty_string(password):
        raise BadRequest('Username and password are required')
    return {'username': username, 'password': password}


def validate_post(body: Any) -> Dict[str, Any]:
    """Check the fields of a post to be created or updated."""
    if not isinstance(body, dict):
        raise BadRequest('Request body must be a JSON object')
    if not _non_empty_string(body.get('title')):
        raise BadRequest('Title is required')
    if not _non_empty_string(body.get('content')):
        raise BadRequest('Content is required')
    if body.get('state') not in POST_STATES:
        raise BadRequest(f'State must be one of: {", ".join(POST_STATES)}')

    summary = body.get('summary')
    if summary is not None and not isinstance(summary, str):
        raise BadRequest('Summary must be a string')

    tags = body.get('tags', [])
    if tags is None:
        tags = []
    if not isinstance(tags, list) or not all(map(_non_empty_string, tags)):
        raise BadRequest('Tags must be a list of non-empty strings')

    slug = body.get('slug')
    if slug is not None and slug != '' \
            and (not isinstance(slug, str) or not SLUG.match(slug)):
        raise BadRequest('Slug may only contain a-z, 0-9 and hyphens')

    return {
        'title': body['title'],
        'content': body['content'],
        'summary': summary,
        'tags': [tag.strip() for tag in tags],
        'state': body['state'],
        'slug': slug or None
    }
