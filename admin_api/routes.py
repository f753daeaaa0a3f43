"""
Route table for the admin API, and its binding to Flask.

Flask's own URL map only provides a catch-all rule; matching and path
parameter extraction are done by :class:`.routing.Router` over
:data:`ROUTES`, in order.
"""

import time
from urllib.parse import quote

from flask import Blueprint, Response, current_app, g, jsonify, request

from . import domain
from .controllers import authentication, comments, images, posts
from .routing import Router

ROUTES = [
    # Login is the only public route; everything else needs a token.
    ('POST', '/login', authentication.login),
    ('GET', '/session', authentication.session),

    ('POST', '/admin/posts', posts.create_post),
    ('PUT', '/admin/posts/:postId', posts.update_post),
    ('DELETE', '/admin/posts/:postId', posts.delete_post),
    ('POST', '/admin/images', images.upload_image),
    ('DELETE', '/admin/comments/:commentId', comments.delete_comment),
]

router = Router(ROUTES)

METHODS = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE']

# Path characters that are left as-is when re-encoding the request path.
_PATH_SAFE = "/:@!$&'()*+,;=-._~"

blueprint = Blueprint('admin', __name__, url_prefix='')


def get_environment() -> domain.Environment:
    """Get the bindings created by the application factory."""
    env: domain.Environment = current_app.extensions['admin_api']
    return env


def _encoded_path() -> str:
    # PATH_INFO is already percent-decoded, so an escaped "/" is a separator
    # by now. Re-encoding only keeps a literal "%" intact through the
    # router's own decoding of captured segments.
    return quote(request.path, safe=_PATH_SAFE)


@blueprint.route('/', defaults={'path': ''}, methods=METHODS)
@blueprint.route('/<path:path>', methods=METHODS)
def dispatch(path: str) -> Response:
    """Hand the request to the matching handler."""
    ctx = domain.ExecutionContext(
        request_id=g.request_id,
        logger=g.logger,
        started=g.get('started', time.time())
    )
    data, code, headers = router.dispatch(request, get_environment(), ctx,
                                          request.method, _encoded_path(),
                                          getattr(request, 'auth', None))
    response: Response = jsonify(data)
    response.status_code = code
    response.headers.extend(headers)
    return response
