#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habitally - Configuration
Централизованная конфигурация с валидацией

Версия: 1.0.0
"""

import os
import sys
from datetime import tzinfo
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass
from enum import Enum

import pytz

from habitally.utils.datetime_utils import get_timezone


class Environment(Enum):
    """Среды выполнения"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class LogLevel(Enum):
    """Уровни логирования"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class StorageConfig:
    """Конфигурация хранилища"""
    data_dir: Path
    backup_dir: Path
    autosave_delay_ms: int = 500
    autosave_enabled: bool = True


@dataclass
class CalendarConfig:
    """Календарные настройки: часовой пояс и начало недели"""
    timezone: Optional[str] = None
    first_weekday: int = 6  # воскресенье
    short_term_months: int = 3


class AppConfig:
    """Главный класс конфигурации"""

    def __init__(self):
        self.environment = Environment(os.getenv('HABITALLY_ENV', 'development'))
        self._load_config()
        self._validate_config()

    def _load_config(self):
        """Загрузка конфигурации из переменных окружения"""
        data_dir = Path(os.getenv('HABITALLY_DATA_DIR', 'data'))

        self.storage = StorageConfig(
            data_dir=data_dir,
            backup_dir=Path(os.getenv('HABITALLY_BACKUP_DIR', str(data_dir / 'corrupted'))),
            autosave_delay_ms=int(os.getenv('HABITALLY_AUTOSAVE_DELAY_MS', 500)),
            autosave_enabled=os.getenv('HABITALLY_AUTOSAVE', 'true').lower() == 'true'
        )

        self.calendar = CalendarConfig(
            timezone=os.getenv('HABITALLY_TIMEZONE') or None,
            first_weekday=int(os.getenv('HABITALLY_FIRST_WEEKDAY', 6)),
            short_term_months=int(os.getenv('HABITALLY_SHORT_TERM_MONTHS', 3))
        )

        # Логирование
        self.log_level = LogLevel(os.getenv('HABITALLY_LOG_LEVEL', 'INFO').upper())
        self.log_to_file = os.getenv('HABITALLY_LOG_TO_FILE', 'false').lower() == 'true'
        self.log_dir = Path(os.getenv('HABITALLY_LOG_DIR', 'logs'))
        self.log_format = os.getenv(
            'HABITALLY_LOG_FORMAT',
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        )

    def _validate_config(self):
        """Валидация конфигурации"""
        errors = []

        if not 0 <= self.calendar.first_weekday <= 6:
            errors.append(f"HABITALLY_FIRST_WEEKDAY={self.calendar.first_weekday} вне диапазона 0-6")

        if self.calendar.short_term_months < 1:
            errors.append("HABITALLY_SHORT_TERM_MONTHS должен быть положительным числом")

        if self.storage.autosave_delay_ms <= 0:
            errors.append("HABITALLY_AUTOSAVE_DELAY_MS должен быть положительным числом")

        if self.calendar.timezone:
            try:
                pytz.timezone(self.calendar.timezone)
            except pytz.UnknownTimeZoneError:
                errors.append(f"Неизвестный часовой пояс: {self.calendar.timezone}")

        if errors:
            raise ValueError("Ошибки конфигурации:\n" + "\n".join(f"• {error}" for error in errors))

    @property
    def tz(self) -> tzinfo:
        """Часовой пояс для всех сравнений "сегодня" """
        return get_timezone(self.calendar.timezone)

    def ensure_directories(self):
        """Создание необходимых директорий"""
        directories = [self.storage.data_dir]
        if self.log_to_file:
            directories.append(self.log_dir)

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    @property
    def log_file(self) -> Path:
        return self.log_dir / f"habitally_{self.environment.value}.log"

    def get_logging_config(self) -> Dict[str, Any]:
        """
        dictConfig для пакета habitally.

        Корневой логгер не трогаем: библиотека настраивает только свои
        логгеры и apscheduler (планировщик автосохранения).
        """
        level = self.log_level.value
        handlers: Dict[str, Dict[str, Any]] = {
            'console': {
                'class': 'logging.StreamHandler',
                'level': level,
                'formatter': 'brief',
                'stream': sys.stdout,
            },
        }
        if self.log_to_file:
            handlers['file'] = {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': level,
                'formatter': 'detailed',
                'filename': str(self.log_file),
                'maxBytes': 10 * 1024 * 1024,
                'backupCount': 5,
                'encoding': 'utf-8',
            }
        targets = list(handlers)

        return {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'brief': {'format': self.log_format, 'datefmt': '%H:%M:%S'},
                'detailed': {
                    'format': '%(asctime)s [%(levelname)s] %(name)s (%(threadName)s): %(message)s',
                    'datefmt': '%Y-%m-%d %H:%M:%S',
                },
            },
            'handlers': handlers,
            'loggers': {
                'habitally': {'level': level, 'handlers': targets, 'propagate': False},
                # задачи автосохранения пишут INFO на каждый запуск
                'apscheduler': {'level': 'WARNING', 'handlers': targets, 'propagate': False},
            },
        }

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация конфигурации в словарь"""
        return {
            'environment': self.environment.value,
            'storage': {
                'data_dir': str(self.storage.data_dir),
                'backup_dir': str(self.storage.backup_dir),
                'autosave_delay_ms': self.storage.autosave_delay_ms,
                'autosave_enabled': self.storage.autosave_enabled
            },
            'calendar': {
                'timezone': self.calendar.timezone or 'local',
                'first_weekday': self.calendar.first_weekday,
                'short_term_months': self.calendar.short_term_months
            },
            'log_level': self.log_level.value,
            'log_to_file': self.log_to_file
        }


# Глобальный экземпляр конфигурации
config = AppConfig()

__all__ = [
    'config',
    'AppConfig',
    'Environment',
    'LogLevel',
    'StorageConfig',
    'CalendarConfig'
]
