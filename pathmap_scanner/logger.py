"""
Модуль для настройки и управления логированием приложения.

Обеспечивает централизованную настройку логирования с ротацией файлов,
цветным выводом в консоль и методами для типовых событий сканирования.
"""

import copy
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

from .config_loader import Config, LoggingConfig


LOGGER_NAME = 'pathmap_scanner'
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Форматтер с цветным выводом для консоли."""

    # Цветовые коды ANSI
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def format(self, record):
        """Форматирует запись лога с цветом."""
        if record.levelname in self.COLORS:
            # Копия, чтобы не испортить запись для других обработчиков
            record = copy.copy(record)
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.COLORS['RESET']}"

        return super().format(record)


class PathmapLogger:
    """Класс для управления логированием приложения Pathmap Scanner."""

    def __init__(self, config: LoggingConfig):
        """
        Инициализация логгера.

        Args:
            config: Конфигурация логирования
        """
        self.config = config
        self.logger: Optional[logging.Logger] = None
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Настраивает логгер с файловым и консольным выводом."""
        level = getattr(logging, self.config.level.upper())

        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(level)

        for handler in self.logger.handlers[:]:
            handler.close()
            self.logger.removeHandler(handler)

        if self.config.log_file is not None:
            log_file_path = Path(self.config.log_file)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_file_path,
                maxBytes=self.config.max_log_size * 1024 * 1024,  # MB -> байты
                backupCount=self.config.backup_count,
                encoding='utf-8'
            )
            file_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
            file_handler.setLevel(level)
            self.logger.addHandler(file_handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(ColoredFormatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        console_handler.setLevel(level)
        self.logger.addHandler(console_handler)

        # Предотвращаем дублирование сообщений
        self.logger.propagate = False

    def log_scan_params(self, config: Config) -> None:
        """
        Логирует параметры текущего запуска.

        Args:
            config: Конфигурация приложения
        """
        self.logger.info(f"📂 Рабочий каталог миграции: {config.scan.work_dir}")
        self.logger.info(f"🗄️ Базовый каталог хранилища артефактов: {config.scan.base_dir}")
        self.logger.info(f"📦 Размер батча путей: {config.scan.batch_size}")

    def log_package_found(self, package: str) -> None:
        self.logger.info(f"✅ Пакет {package} найден и будет просканирован")

    def log_package_start(self, package: str) -> None:
        self.logger.info(f"🔍 Сканирование пакета {package}")

    def log_package_end(self, package: str, file_count: int) -> None:
        self.logger.info(f"✅ Пакет {package} просканирован: найдено файлов {file_count}")

    def log_batch_start(self, batch_index: int, file_name: str) -> None:
        """
        Логирует начало записи батча.

        Args:
            batch_index: Номер батча
            file_name: Имя файла батча
        """
        self.logger.info(f"📝 Запись путей батча #{batch_index} в файл {file_name}")

    def log_batch_end(self, batch_index: int, file_name: str, path_count: int) -> None:
        self.logger.info(f"✅ Батч #{batch_index} записан в {file_name}: путей {path_count}")

    def log_write_error(self, file_path: Path, error: Exception) -> None:
        """
        Логирует ошибку записи файла (батча или статуса).

        Args:
            file_path: Путь к файлу
            error: Исключение
        """
        self.logger.error(f"❌ Ошибка записи в файл {file_path}: {error}")

    def log_walk_error(self, path: str, error: Exception) -> None:
        """Логирует пропущенный при обходе элемент."""
        self.logger.debug(f"⏭️ Пропущен элемент {path}: {error}")

    def log_directory_cleaned(self, path: Path) -> None:
        self.logger.info(f"🧹 Каталог {path} не пуст, будет очищен")

    def log_scan_end(self, total: int, duration: float) -> None:
        """
        Логирует завершение сканирования.

        Args:
            total: Общее количество найденных файлов
            duration: Продолжительность в секундах
        """
        self.logger.info(f"✅ Сканирование завершено, файлов для миграции: {total}")
        self.logger.info(f"⏰ Затрачено времени: {duration:.6f} сек")

    def log_total_stored(self, status_path: Path) -> None:
        self.logger.info(f"💾 Итоговое количество сохранено в {status_path}")

    def log_system_info(self, info: str) -> None:
        """
        Логирует системную информацию.

        Args:
            info: Информационное сообщение
        """
        self.logger.info(f"ℹ️ {info}")

    def log_warning(self, message: str) -> None:
        """
        Логирует предупреждение.

        Args:
            message: Сообщение предупреждения
        """
        self.logger.warning(f"⚠️ {message}")

    def log_critical_error(self, message: str, error: Exception = None) -> None:
        """
        Логирует критическую ошибку.

        Args:
            message: Сообщение об ошибке
            error: Исключение (опционально)
        """
        if error:
            self.logger.critical(f"💥 {message}: {error}")
        else:
            self.logger.critical(f"💥 {message}")
