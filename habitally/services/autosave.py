# services/autosave.py
"""
Отложенное автосохранение.

Подписывается на изменения Repository. Снимок коллекции кодируется сразу
при изменении, а запись в хранилище откладывается одноразовой задачей
APScheduler; повторное изменение того же ключа в пределах задержки
заменяет задачу (replace_existing), так что серия мутаций даёт одну запись.
"""

import logging
import threading
from datetime import datetime, timedelta
from typing import Dict, Optional

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.date import DateTrigger

from habitally.config import config
from habitally.core.repository import Repository
from habitally.core.serialization import ONBOARDING, encode_collection, encode_flag
from habitally.services.storage import JsonFileStore, StorageWriteError
from habitally.utils.datetime_utils import UTC

logger = logging.getLogger(__name__)


class AutoSaver:
    """Debounce-подписчик: изменения -> отложенная запись по ключу"""

    JOB_PREFIX = "autosave_"

    def __init__(self, repository: Repository, store: JsonFileStore,
                 delay_ms: Optional[int] = None, scheduler: Optional[BackgroundScheduler] = None):
        self.repository = repository
        self.store = store
        if delay_ms is None:
            delay_ms = config.storage.autosave_delay_ms
        self.delay = timedelta(milliseconds=delay_ms)
        self.scheduler = scheduler or BackgroundScheduler(timezone=UTC)

        self._pending: Dict[str, bytes] = {}
        self._lock = threading.RLock()
        self.save_count = 0
        self.error_count = 0
        self.is_running = False

    # ===== LIFECYCLE =====

    def start(self) -> None:
        if self.is_running:
            return
        self.repository.add_change_callback(self.on_change)
        if not self.scheduler.running:
            self.scheduler.start()
        self.is_running = True
        logger.info(f"Autosave started (delay {int(self.delay.total_seconds() * 1000)} ms)")

    def shutdown(self) -> None:
        """Дописать всё ожидающее и остановить планировщик"""
        if not self.is_running:
            return
        self.repository.remove_change_callback(self.on_change)
        self.flush()
        if self.scheduler.running:
            self.scheduler.shutdown(wait=True)
        self.is_running = False
        logger.info(f"Autosave stopped: {self.save_count} writes, {self.error_count} errors")

    # ===== EVENTS =====

    def _encode(self, key: str) -> bytes:
        if key == ONBOARDING:
            return encode_flag(self.repository.has_completed_onboarding)
        return encode_collection(key, self.repository.collection(key))

    def on_change(self, key: str) -> None:
        with self._lock:
            self._pending[key] = self._encode(key)

        run_date = datetime.now(UTC) + self.delay
        self.scheduler.add_job(
            self._write,
            DateTrigger(run_date=run_date),
            args=[key],
            id=f"{self.JOB_PREFIX}{key}",
            replace_existing=True,
        )
        logger.debug(f"Autosave scheduled for '{key}' at {run_date.isoformat()}")

    @property
    def pending_keys(self):
        with self._lock:
            return sorted(self._pending)

    # ===== WRITES =====

    def _write(self, key: str) -> bool:
        with self._lock:
            raw = self._pending.pop(key, None)
        if raw is None:
            return True

        try:
            self.store.save(key, raw)
            self.save_count += 1
            return True
        except StorageWriteError as e:
            self.error_count += 1
            logger.error(f"Autosave of '{key}' failed: {e}")
            with self._lock:
                # новый снимок, если он появился, важнее старого
                self._pending.setdefault(key, raw)
            return False

    def flush(self) -> bool:
        """Синхронно записать все ожидающие ключи"""
        ok = True
        for key in self.pending_keys:
            try:
                self.scheduler.remove_job(f"{self.JOB_PREFIX}{key}")
            except JobLookupError:
                pass
            ok = self._write(key) and ok
        return ok
