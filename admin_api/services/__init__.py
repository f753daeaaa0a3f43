"""Storage services used by the admin request handlers."""

from .datastore import Datastore, DatastoreCredentials
from .images import ImageStore

__all__ = ['Datastore', 'DatastoreCredentials', 'ImageStore']
