"""Image uploads for use in posts."""

import os
from http import HTTPStatus as status
from typing import Optional

from flask import Request
from werkzeug.exceptions import BadRequest

from .. import domain
from ..services.images import EXTENSIONS, MAX_FILE_SIZE
from . import ResponseData


def _size(stream) -> int:
    position = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(position)
    return size


def upload_image(request: Request, env: domain.Environment,
                 ctx: domain.ExecutionContext, params: dict,
                 caller: Optional[domain.Claims]) -> ResponseData:
    """
    Store an image sent as the ``file`` field of a multipart form.

    Returns
    -------
    dict
        ``url`` on the CDN, and the storage ``key``.
    int
        200 (OK).
    dict
        No extra headers.

    Raises
    ------
    :class:`.BadRequest`
        Raised if no file was sent, if its type is not an accepted image
        type, or if it is larger than :const:`.MAX_FILE_SIZE`.

    """
    upload = request.files.get('file')
    if upload is None:
        raise BadRequest('No file provided')
    if upload.mimetype not in EXTENSIONS:
        ctx.logger.warning('Image upload validation failed',
                           extra={'type': upload.mimetype})
        raise BadRequest(f'Invalid file type. Allowed: {", ".join(EXTENSIONS)}')
    size = _size(upload.stream)
    if size > MAX_FILE_SIZE:
        ctx.logger.warning('Image upload validation failed',
                           extra={'size': size})
        raise BadRequest(
            f'File too large. Maximum size: {MAX_FILE_SIZE // 1024 // 1024}MB'
        )
    result = env.images.put(upload.stream, upload.mimetype)
    ctx.logger.info('Image stored', extra={'key': result['key'],
                                           'size': size})
    return result, status.OK, {}
