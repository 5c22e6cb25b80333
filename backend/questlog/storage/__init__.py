"""Record storage. Pick a backing with `create_storage`."""

from questlog.config import Settings
from questlog.storage.base import Storage
from questlog.storage.memory import MemoryStorage
from questlog.storage.sqlite import SqliteStorage


def create_storage(settings: Settings) -> Storage:
    """
    Build the storage backend named by `STORAGE_BACKEND`.

    :param settings: Application settings
    :type settings: Settings
    :return: Uninitialized storage instance
    :rtype: Storage
    """
    if settings.STORAGE_BACKEND == "sqlite":
        return SqliteStorage(db_path=settings.DATABASE_PATH)
    return MemoryStorage()


__all__ = ["Storage", "MemoryStorage", "SqliteStorage", "create_storage"]
