# services/__init__.py
"""
Сервисы вокруг ядра: файловое хранилище и автосохранение
"""

from .storage import (
    JsonFileStore,
    StorageError,
    StorageReadError,
    StorageWriteError,
    load_repository,
    reset_store,
    save_all,
)
from .autosave import AutoSaver

__all__ = [
    'JsonFileStore',
    'StorageError',
    'StorageReadError',
    'StorageWriteError',
    'load_repository',
    'reset_store',
    'save_all',
    'AutoSaver',
]
