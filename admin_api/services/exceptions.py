"""Exceptions raised by the storage services."""


class NoSuchRecord(RuntimeError):
    """The requested post or comment does not exist."""


class SlugConflict(RuntimeError):
    """Another post already uses the requested slug."""


class StorageFailed(RuntimeError):
    """The blob store could not persist an object."""
