"""
Blob storage for uploaded images.

Images are written below a root directory using the object key as the
relative path, and are served from a CDN at ``https://<cdn_domain>/<key>``.
"""

import os
import shutil
import uuid
from datetime import datetime
from typing import BinaryIO, Dict

from pytz import UTC

from ..logging import getLogger
from .exceptions import StorageFailed

logger = getLogger(__name__)

EXTENSIONS = {
    'image/jpeg': 'jpg',
    'image/png': 'png',
    'image/gif': 'gif',
    'image/webp': 'webp',
}
"""Accepted content types, and the file extension used for each."""

MAX_FILE_SIZE = 5 * 1024 * 1024


def make_key(content_type: str, now: datetime = None) -> str:
    """Generate a unique key of the form ``images/YYYY/MM/<uuid>.<ext>``."""
    if now is None:
        now = datetime.now(tz=UTC)
    extension = EXTENSIONS.get(content_type, 'jpg')
    return f'images/{now.year}/{now.month:02d}/{uuid.uuid4()}.{extension}'


class ImageStore(object):
    """Filesystem-backed object store."""

    def __init__(self, root: str, cdn_domain: str) -> None:
        self.root = root
        self.cdn_domain = cdn_domain

    def path_for(self, key: str) -> str:
        """Local path at which the object ``key`` is stored."""
        return os.path.join(self.root, *key.split('/'))

    def url_for(self, key: str) -> str:
        """Public URL of the object ``key``."""
        return f'https://{self.cdn_domain}/{key}'

    def put(self, stream: BinaryIO, content_type: str) -> Dict[str, str]:
        """
        Store an image and return its ``url`` and ``key``.

        Raises
        ------
        :class:`StorageFailed`

        """
        key = make_key(content_type)
        path = self.path_for(key)
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, 'wb') as f:
                shutil.copyfileobj(stream, f)
        except OSError as e:
            raise StorageFailed(f'Could not store {key}') from e
        url = self.url_for(key)
        logger.info('Image uploaded', extra={'key': key, 'url': url,
                                             'type': content_type})
        return {'url': url, 'key': key}
