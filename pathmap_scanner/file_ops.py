"""
Модуль для операций с файловой системой.

Обеспечивает подготовку рабочего каталога, запись батчей путей
в файлы и сохранение итогового количества файлов в файл статуса.
"""

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from .logger import PathmapLogger
from .validator import ScanError


TODO_FILES_DIR = "todo"
PROCESSED_FILES_DIR = "processed"
STATUS_FILE_NAME = "scan_status"


class WorkDirError(ScanError):
    """Исключение для ошибок подготовки рабочего каталога."""
    pass


@dataclass
class BatchWriteResult:
    """Результат записи одного батча."""
    file_path: Path
    batch_index: int
    path_count: int
    persisted: bool
    error: Optional[Exception] = None


def batch_file_name(prefix: str, batch_index: int) -> str:
    """
    Формирует имя файла батча.

    Args:
        prefix: Префикс (имя пакета)
        batch_index: Номер батча

    Returns:
        str: Имя вида <prefix>-batch-<index>.txt
    """
    return f"{prefix}-batch-{batch_index}.txt"


class WorkDir:
    """Класс для работы с рабочим каталогом и файлом статуса."""

    def __init__(self, work_dir: Path, base_dir: Path, logger: PathmapLogger):
        """
        Args:
            work_dir: Рабочий каталог для генерируемых файлов
            base_dir: Базовый каталог хранилища (для файла статуса)
            logger: Логгер для записи операций
        """
        self.work_dir = Path(work_dir)
        self.base_dir = Path(base_dir)
        self.logger = logger

    @property
    def todo_path(self) -> Path:
        return self.work_dir / TODO_FILES_DIR

    @property
    def processed_path(self) -> Path:
        return self.work_dir / PROCESSED_FILES_DIR

    @property
    def status_path(self) -> Path:
        return self.base_dir / STATUS_FILE_NAME

    def prepare(self) -> None:
        """
        Пересоздает каталоги todo и processed, удаляя их прежнее содержимое.

        Raises:
            WorkDirError: Если каталог не удалось создать
        """
        for path in (self.todo_path, self.processed_path):
            self._recreate_directory(path)

    def _recreate_directory(self, path: Path) -> None:
        if path.is_dir():
            self.logger.log_directory_cleaned(path)
            try:
                shutil.rmtree(path)
            except OSError as e:
                self.logger.log_warning(f"Не удалось очистить каталог {path}: {e}")

        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.logger.log_critical_error(f"Не удалось создать каталог {path}", e)
            raise WorkDirError(f"Ошибка создания каталога {path}: {e}")

    def store_total(self, total: int) -> bool:
        """
        Дописывает строку Total:<N> в файл статуса базового каталога.

        Args:
            total: Общее количество найденных файлов

        Returns:
            bool: True если запись успешна
        """
        try:
            with open(self.status_path, 'a', encoding='utf-8') as f:
                f.write(f"Total:{total}\n")
        except OSError as e:
            self.logger.log_write_error(self.status_path, e)
            return False

        self.logger.log_total_stored(self.status_path)
        return True


class BatchWriter:
    """Класс для записи батчей путей в файлы каталога todo."""

    def __init__(self, todo_dir: Path, logger: PathmapLogger):
        """
        Args:
            todo_dir: Каталог для файлов батчей
            logger: Логгер для записи операций
        """
        self.todo_dir = Path(todo_dir)
        self.logger = logger

    def write_batch(self, paths: Iterable[str], prefix: str, batch_index: int) -> BatchWriteResult:
        """
        Дописывает пути в файл батча, по одному на строку.

        Файл создается при отсутствии и закрывается после каждой записи.
        Ошибка записи не выбрасывается, а логируется и возвращается в результате.

        Args:
            paths: Пути к файлам
            prefix: Префикс имени файла (имя пакета)
            batch_index: Номер батча

        Returns:
            BatchWriteResult: Результат записи
        """
        lines: List[str] = list(paths)
        file_name = batch_file_name(prefix, batch_index)
        file_path = self.todo_dir / file_name

        self.logger.log_batch_start(batch_index, file_name)

        try:
            with open(file_path, 'a', encoding='utf-8', errors='surrogateescape') as f:
                for line in lines:
                    f.write(line + "\n")
        except OSError as e:
            self.logger.log_write_error(file_path, e)
            return BatchWriteResult(file_path, batch_index, len(lines), persisted=False, error=e)

        self.logger.log_batch_end(batch_index, file_name, len(lines))
        return BatchWriteResult(file_path, batch_index, len(lines), persisted=True)
