"""
Модуль управления сканированием хранилища.

Объединяет проверку базового каталога, подготовку рабочего каталога,
сканирование пакетов и сохранение итогового количества файлов.
"""

import time
from pathlib import Path
from typing import List, Optional

from .config_loader import Config
from .file_ops import BatchWriter, WorkDir
from .logger import PathmapLogger
from .scanner import PackageScanner, ScanResult
from .validator import BaseDirValidationError, validate_base_dir


KNOWN_PACKAGES = ("generic-http", "maven", "npm")


class ScanStats:
    """Класс для хранения статистики сканирования."""

    def __init__(self):
        self.results: List[ScanResult] = []
        self.total_files = 0
        self.total_stored = False
        self.duration: Optional[float] = None

    def add_result(self, result: ScanResult) -> None:
        """Добавляет результат сканирования пакета."""
        self.results.append(result)
        self.total_files += result.file_count

    @property
    def packages(self) -> List[str]:
        return [result.package for result in self.results]

    @property
    def lost_paths(self) -> int:
        return sum(result.lost_paths for result in self.results)

    @property
    def walk_error_count(self) -> int:
        return sum(len(result.walk_errors) for result in self.results)

    def get_duration(self) -> Optional[float]:
        """Возвращает продолжительность сканирования в секундах."""
        return self.duration


class Orchestrator:
    """Основной класс для сканирования хранилища артефактов."""

    def __init__(self, config: Config, logger: PathmapLogger):
        """
        Инициализация.

        Args:
            config: Конфигурация приложения
            logger: Логгер для записи операций
        """
        self.config = config
        self.logger = logger
        self.work_dir = WorkDir(config.scan.work_dir, config.scan.base_dir, logger)
        self.writer = BatchWriter(self.work_dir.todo_path, logger)
        self.scanner = PackageScanner(config.scan, self.writer, logger)
        self.stats = ScanStats()

    def find_packages(self) -> List[str]:
        """
        Возвращает известные пакеты, существующие в базовом каталоге.

        Returns:
            List[str]: Имена пакетов в фиксированном порядке
        """
        base_dir = Path(self.config.scan.base_dir)
        packages = []
        for package in KNOWN_PACKAGES:
            if (base_dir / package).is_dir():
                self.logger.log_package_found(package)
                packages.append(package)
        return packages

    def run(self) -> ScanStats:
        """
        Выполняет полный цикл сканирования.

        Returns:
            ScanStats: Статистика сканирования

        Raises:
            BaseDirValidationError: Если базовый каталог не прошел проверку
            WorkDirError: Если не удалось подготовить рабочий каталог
        """
        self.logger.log_scan_params(self.config)

        try:
            validate_base_dir(self.config.scan.base_dir)
        except BaseDirValidationError as e:
            self.logger.log_critical_error("Проверка базового каталога не пройдена", e)
            raise

        self.work_dir.prepare()

        started = time.monotonic()

        for package in self.find_packages():
            self.stats.add_result(self.scanner.scan(package))

        self.stats.duration = time.monotonic() - started
        self.logger.log_scan_end(self.stats.total_files, self.stats.duration)

        if self.stats.lost_paths:
            self.logger.log_warning(f"Не удалось записать путей: {self.stats.lost_paths}")

        self.stats.total_stored = self.work_dir.store_total(self.stats.total_files)

        return self.stats


def create_orchestrator(config: Config, logger: PathmapLogger) -> Orchestrator:
    """
    Удобная функция для создания объекта сканирования.

    Args:
        config: Конфигурация приложения
        logger: Логгер

    Returns:
        Orchestrator: Объект сканирования
    """
    return Orchestrator(config, logger)
