#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habitally - Storage
Файловое key-value хранилище и загрузка репозитория

Каждый ключ (habits, goals, routines, reflections, meditationSessions,
hasCompletedOnboarding) хранится в отдельном JSON-файле в data_dir.
Повреждённые данные не восстанавливаются частично: файл переносится
в backup_dir, коллекция стартует со стартовых данных или пустой.
"""

import os
import shutil
import logging
import threading
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Any, Callable, List, Optional

from habitally.config import config
from habitally.core import catalog
from habitally.core.repository import Repository
from habitally.core.serialization import (
    COLLECTION_KEYS,
    GOALS,
    HABITS,
    MEDITATION_SESSIONS,
    ONBOARDING,
    REFLECTIONS,
    ROUTINES,
    SerializationError,
    decode_collection,
    decode_flag,
    encode_collection,
    encode_flag,
)

logger = logging.getLogger(__name__)

ALL_KEYS = COLLECTION_KEYS + (ONBOARDING,)

# ===== EXCEPTIONS =====

class StorageError(Exception):
    """Базовое исключение для ошибок хранилища"""
    pass


class StorageReadError(StorageError):
    """Ошибка чтения"""
    pass


class StorageWriteError(StorageError):
    """Ошибка записи"""
    pass

# ===== FILE STORE =====

class JsonFileStore:
    """Key-value хранилище: один файл <key>.json на ключ"""

    def __init__(self, data_dir: Optional[Path] = None, backup_dir: Optional[Path] = None):
        self.data_dir = Path(data_dir or config.storage.data_dir)
        if backup_dir is None:
            backup_dir = config.storage.backup_dir if data_dir is None else self.data_dir / "corrupted"
        self.backup_dir = Path(backup_dir)
        self.file_lock = threading.RLock()

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def exists(self, key: str) -> bool:
        return self._path(key).exists()

    def load(self, key: str) -> Optional[bytes]:
        """Сырые байты ключа или None, если ключ не сохранён"""
        path = self._path(key)
        with self.file_lock:
            if not path.exists():
                return None
            try:
                return path.read_bytes()
            except OSError as e:
                raise StorageReadError(f"Failed to read {path}: {e}")

    def save(self, key: str, raw: bytes) -> None:
        """Атомарное сохранение через временный файл"""
        path = self._path(key)
        temp_file = path.with_suffix('.tmp')

        with self.file_lock:
            try:
                self.data_dir.mkdir(parents=True, exist_ok=True)
                temp_file.write_bytes(raw)
                os.replace(temp_file, path)
            except OSError as e:
                if temp_file.exists():
                    temp_file.unlink()
                raise StorageWriteError(f"Failed to write {path}: {e}")

        logger.debug(f"Saved '{key}' ({len(raw)} bytes)")

    def remove(self, key: str) -> None:
        path = self._path(key)
        with self.file_lock:
            try:
                if path.exists():
                    path.unlink()
            except OSError as e:
                raise StorageWriteError(f"Failed to remove {path}: {e}")

    def quarantine(self, key: str) -> Optional[Path]:
        """Перенести повреждённый файл в backup_dir"""
        path = self._path(key)
        with self.file_lock:
            if not path.exists():
                return None
            try:
                self.backup_dir.mkdir(parents=True, exist_ok=True)
                backup_name = f"{key}_corrupted_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}.json"
                backup_path = self.backup_dir / backup_name
                shutil.move(str(path), str(backup_path))
            except OSError as e:
                logger.error(f"Failed to quarantine '{key}': {e}")
                return None

        logger.warning(f"Corrupted '{key}' moved to {backup_path}")
        return backup_path

# ===== REPOSITORY BOOTSTRAP =====

def _load_collection(store: JsonFileStore, key: str,
                     fallback: Callable[[], List[Any]]) -> List[Any]:
    """Загрузить коллекцию; отсутствие или ошибка -> fallback() и запись его в хранилище"""
    try:
        raw = store.load(key)
    except StorageReadError as e:
        logger.error(f"Failed to load '{key}': {e}")
        raw = None

    if raw is not None:
        try:
            entities = decode_collection(key, raw)
            logger.info(f"Loaded {len(entities)} {key}")
            return entities
        except SerializationError as e:
            logger.warning(f"Stored '{key}' is unreadable, falling back: {e}")
            store.quarantine(key)

    entities = fallback()
    if entities:
        logger.info(f"Seeding '{key}' with {len(entities)} sample entries")
        try:
            store.save(key, encode_collection(key, entities))
        except StorageWriteError as e:
            logger.error(f"Failed to save seeded '{key}': {e}")
    return entities


def _load_onboarding_flag(store: JsonFileStore) -> bool:
    try:
        raw = store.load(ONBOARDING)
        return decode_flag(raw) if raw is not None else False
    except (StorageReadError, SerializationError) as e:
        logger.warning(f"Onboarding flag unreadable, assuming not completed: {e}")
        return False


def load_repository(store: JsonFileStore,
                    now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> Repository:
    """
    Собрать Repository из хранилища.

    habits и goals при отсутствии данных заполняются стартовым набором,
    остальные коллекции начинаются пустыми.
    """
    collections = {}
    for key in COLLECTION_KEYS:
        if key == HABITS:
            fallback = lambda: catalog.sample_habits(now=now)
        elif key == GOALS:
            fallback = lambda: catalog.sample_goals(now=now, tz=tz)
        else:
            fallback = list
        collections[key] = _load_collection(store, key, fallback)

    repository = Repository(
        habits=collections[HABITS],
        goals=collections[GOALS],
        routines=collections[ROUTINES],
        reflections=collections[REFLECTIONS],
        meditation_sessions=collections[MEDITATION_SESSIONS],
        has_completed_onboarding=_load_onboarding_flag(store),
    )
    logger.info(f"Repository loaded: {repository.summary()}")
    return repository


def save_all(repository: Repository, store: JsonFileStore) -> None:
    """Синхронно записать все коллекции и флаг онбординга"""
    for key in COLLECTION_KEYS:
        store.save(key, encode_collection(key, repository.collection(key)))
    store.save(ONBOARDING, encode_flag(repository.has_completed_onboarding))
    logger.info("All collections saved")


def reset_store(store: JsonFileStore) -> None:
    """Удалить все ключи из хранилища"""
    for key in ALL_KEYS:
        store.remove(key)
    logger.info("Store cleared")
